"""
HR dashboard: Streamlit UI entry point.
"""

import streamlit as st

# Load .env first so HR_API_URL and friends are visible to every accessor
from hr_dashboard.utils.config import load_config, log_file, log_level
load_config()

from hr_dashboard.services.context import build_context
from hr_dashboard.services.navigation import DASHBOARD_ROUTE, LOGIN_ROUTE
from hr_dashboard.ui.pages import StreamlitNavigator, render_route
from hr_dashboard.utils.logger import setup_logger, get_logger

setup_logger("hr_dashboard", level=log_level(), log_file=log_file())
log = get_logger()

st.set_page_config(page_title="HR Dashboard", layout="wide")
st.title("HR Dashboard")

# One context per browser session; bootstrap runs once when it is created
if "ctx" not in st.session_state:
    ctx = build_context(navigator=StreamlitNavigator())
    if ctx.open() and ctx.navigator.current_route == LOGIN_ROUTE:
        ctx.navigator.navigate(DASHBOARD_ROUTE)
    st.session_state.ctx = ctx
    log.info("Dashboard session started (authenticated=%s)", ctx.session.is_authenticated)

ctx = st.session_state.ctx
if not ctx.session.is_ready:
    st.info("Loading…")
    st.stop()

render_route(ctx)
