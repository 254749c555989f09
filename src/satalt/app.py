"""SatAlt: Streamlit form for a satellite's altitude over a local time window."""

import asyncio
import logging

import streamlit as st
from dotenv import load_dotenv

load_dotenv()

from satalt.client import HttpTransport  # noqa: E402
from satalt.config import load_settings  # noqa: E402
from satalt.controller import RequestLifecycleController  # noqa: E402
from satalt.models import Failed, Pending, Succeeded  # noqa: E402
from satalt.renderers.plotly_chart import CHART_CONFIG, render_altitude_chart  # noqa: E402
from satalt.stats import EmptySeries, compute_statistics  # noqa: E402
from satalt.timewindow import default_window  # noqa: E402

st.set_page_config(page_title="Satellite Altitude", page_icon="🛰️", layout="wide")

# --- Session state initialization ---
# Settings and the controller are created once per session; the controller
# owns the lifecycle state across reruns.

if "settings" not in st.session_state:
    st.session_state.settings = load_settings()
    logging.basicConfig(
        level=st.session_state.settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
if "controller" not in st.session_state:
    _settings = st.session_state.settings
    st.session_state.controller = RequestLifecycleController(
        HttpTransport(_settings.backend_url, timeout=_settings.request_timeout),
        tz_name=_settings.tz_name,
    )
if "default_window" not in st.session_state:
    st.session_state.default_window = default_window(
        tz_name=st.session_state.settings.tz_name
    )

controller: RequestLifecycleController = st.session_state.controller


async def _run_attempt(raw_id: str, raw_start: str, raw_end: str, raw_step: str) -> None:
    controller.submit(raw_id, raw_start, raw_end, raw_step)
    await controller.drain()


st.title("🛰️ Satellite Altitude")
st.caption(f"Backend: {st.session_state.settings.backend_url}")

# --- Input form ---
with st.form("altitude_query"):
    col1, col2 = st.columns(2)
    with col1:
        norad_id = st.text_input("NORAD ID", value="25544", help="e.g. 25544 = ISS")
        start_time = st.text_input(
            "Start (local time)",
            value=st.session_state.default_window[0],
            help="YYYY-MM-DDTHH:MM:SS",
        )
    with col2:
        step_seconds = st.text_input("Step (seconds)", value="60", help="1 to 3600")
        end_time = st.text_input(
            "End (local time)",
            value=st.session_state.default_window[1],
            help="YYYY-MM-DDTHH:MM:SS",
        )
    submitted = st.form_submit_button("Calculate", width="stretch")

# --- Form submission handler ---
if submitted:
    with st.spinner("Calculating..."):
        asyncio.run(_run_attempt(norad_id, start_time, end_time, step_seconds))

state = controller.state

# --- Error message ---
if isinstance(state, Failed):
    st.error(state.message, icon="⚠️")

elif isinstance(state, Pending):
    st.info("Waiting for the backend...")

# --- Results ---
elif isinstance(state, Succeeded):
    result = state.result

    st.subheader("Mission details")
    c1, c2, c3, c4 = st.columns(4)
    c1.metric("NORAD ID", result.catalog_id)
    c2.metric("Data points", len(result.samples))
    c3.metric("TLE epoch", result.metadata.epoch_timestamp)
    c4.metric("TLE source", result.metadata.source_label)

    st.subheader("Altitude over time")
    st.plotly_chart(
        render_altitude_chart(result), width="stretch", config=CHART_CONFIG
    )

    st.subheader("Statistics")
    try:
        stats = compute_statistics(result.samples)
    except EmptySeries:
        st.warning("The backend returned no samples for this window.")
    else:
        s1, s2, s3, s4 = st.columns(4)
        s1.metric("Min altitude", f"{stats.min:.2f} km")
        s2.metric("Max altitude", f"{stats.max:.2f} km")
        s3.metric("Average altitude", f"{stats.mean:.2f} km")
        s4.metric("Range", f"{stats.range:.2f} km")
