"""SunClock: Streamlit app showing the live day/night clock face."""

import html
from datetime import datetime

import streamlit as st
import streamlit.components.v1 as components
from dotenv import load_dotenv
from streamlit_js_eval import streamlit_js_eval

load_dotenv()

from sunclock.cities import CITIES, default_city  # noqa: E402
from sunclock.compute import compute_clock_state  # noqa: E402
from sunclock.config import load_settings  # noqa: E402
from sunclock.i18n import t  # noqa: E402
from sunclock.models import ClockState  # noqa: E402
from sunclock.renderers.svg_clock import render_clock_html  # noqa: E402
from sunclock.timeutil import format_hours  # noqa: E402

_settings = load_settings()

# --- Language detection (browser-first via streamlit-js-eval) ---
# navigator.language is read once and cached in session_state.
# On the first run the JS call returns None; the rerun triggered by
# streamlit_js_eval fills it in.
if "lang" not in st.session_state:
    _browser_lang: str | None = streamlit_js_eval(
        js_expressions="navigator.language", key="_lang_detect", height=0
    )
    if _browser_lang is not None:
        st.session_state.lang = "ko" if _browser_lang.lower().startswith("ko") else "en"

_lang: str = st.session_state.get("lang", _settings.lang)

st.set_page_config(
    page_title=t("page_title", _lang),
    page_icon="☀",
    layout="centered",
    initial_sidebar_state="collapsed",
)

st.markdown(
    """
    <style>
    /* Hide streamlit_js_eval invisible iframe */
    iframe[src*="streamlit_js_eval"] { display: none !important; }
    html, body, [data-testid="stAppViewContainer"], [data-testid="stMain"] {
        background-color: #0a0e1a !important;
    }
    [data-testid="stHeader"], [data-testid="stToolbar"] {
        display: none !important;
    }
    label, [data-testid="stWidgetLabel"] p {
        color: #aaaaaa !important;
        font-size: 0.85rem !important;
    }
    .clock-summary {
        color: #c8d2e8;
        font-size: 0.95rem;
        line-height: 1.7;
        text-align: center;
    }
    </style>
    """,
    unsafe_allow_html=True,
)

# --- City selection ---
_names = [c.name for c in CITIES]
if "city_name" not in st.session_state:
    st.session_state.city_name = default_city(_settings).name

st.selectbox(t("label_city", _lang), _names, key="city_name")


def _moon_text(state: ClockState) -> str:
    moon = state.moon
    if moon.moonrise is not None and moon.moonset is None:
        return t("moon_always_up", _lang)
    if moon.moonrise is None:
        return t("moon_never_up", _lang)
    return (
        f"↑ {format_hours(moon.moonrise)} {moon.moonrise_dir}"
        f" · ↓ {format_hours(moon.moonset)} {moon.moonset_dir}"
    )


@st.fragment(run_every=1)
def _clock() -> None:
    city = next(c for c in CITIES if c.name == st.session_state.city_name)
    state = compute_clock_state(datetime.now().astimezone(), city.coordinate, city.name)
    components.html(render_clock_html(state, lang=_lang), height=820, scrolling=False)

    day_h, day_m = divmod(round(state.solar.day_length * 60), 60)
    st.markdown(
        "<div class='clock-summary'>"
        f"{t('label_sunrise', _lang)} {format_hours(state.solar.sunrise)} · "
        f"{t('label_sunset', _lang)} {format_hours(state.solar.sunset)} · "
        f"{t('label_day_length', _lang)} {day_h}h {day_m:02d}m<br>"
        f"{t('label_phase', _lang)} {state.moon_phase * 100:.0f}% · "
        f"{t('label_moonrise', _lang)}/{t('label_moonset', _lang)} "
        f"{html.escape(_moon_text(state))}"
        "</div>",
        unsafe_allow_html=True,
    )


_clock()
