from sunclock.i18n import season_labels, t


def test_translation_and_fallbacks():
    assert t("label_sunrise", "en") == "Sunrise"
    assert t("label_sunrise", "ko") == "일출"
    assert t("label_sunrise", "fr") == "Sunrise"
    assert t("no_such_key", "en") == "no_such_key"


def test_northern_season_labels():
    labels = {pos: (season, date) for pos, season, date in season_labels(False, "en")}
    assert labels["bottom"][0] == "Winter"
    assert labels["left"][0] == "Spring"
    assert labels["top"][0] == "Summer"
    assert labels["right"][0] == "Autumn"


def test_southern_labels_swap_seasons_but_not_dates():
    north = season_labels(False, "en")
    south = season_labels(True, "en")
    by_pos = {pos: season for pos, season, _ in south}
    assert by_pos["bottom"] == "Summer"
    assert by_pos["top"] == "Winter"
    assert [date for *_, date in north] == [date for *_, date in south]
