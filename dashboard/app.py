"""
Analytics Dashboard - Streamlit Application

Shows the analytics summary (unique users, total visits) fetched from the
analytics service.
"""

import asyncio
import sys
from pathlib import Path
from typing import Callable, Optional

import streamlit as st

# Add src and repository root to Python path so `config.*` and `dashboard.*` imports work
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))
sys.path.insert(0, str(Path(__file__).parent.parent))

from config.config import DASHBOARD_CONFIG_PATH
from config.models import DashboardConfig
from dashboard.components.analytics import AnalyticsView, render_panel
from service.analytics_client import make_fetcher
from utils.logging import get_logger, setup_logging

VIEW_KEY = "_analytics_view"

logger = get_logger("dashboard")


def _load_config() -> DashboardConfig:
    if "_dashboard_config" not in st.session_state:
        config = DashboardConfig.from_yaml(DASHBOARD_CONFIG_PATH)
        setup_logging(config.log_level, config.log_file)
        st.session_state["_dashboard_config"] = config
    return st.session_state["_dashboard_config"]


async def _run_until_settled(start: Callable[[], Optional[asyncio.Task]]) -> None:
    """Start a fetch (mount or refresh) on this loop and wait for it."""
    task = start()
    if task is not None:
        await task


def main():
    """Main dashboard application."""

    # Page configuration
    st.set_page_config(
        page_title="Analytics Dashboard",
        page_icon="📊",
        layout="wide",
        initial_sidebar_state="expanded"
    )

    config = _load_config()

    st.title("📊 Analytics")

    # Sidebar navigation
    st.sidebar.title("🧭 Navigation")
    panel_option = st.sidebar.selectbox(
        "Select Panel:",
        options=["📊 Analytics", "📋 About"],
        index=0
    )

    if panel_option == "📊 Analytics":
        render_analytics_panel(config)
    else:
        unmount_analytics_panel()
        render_about_panel(config)


def render_analytics_panel(config: DashboardConfig):
    """Mount the analytics view once per session and render its state."""
    view = st.session_state.get(VIEW_KEY)
    first_mount = view is None
    if first_mount:
        view = AnalyticsView(make_fetcher(config.api_url, config.timeout_s, config.endpoint))
        st.session_state[VIEW_KEY] = view

    refresh_clicked = st.sidebar.button("🔄 Refresh Now", disabled=view.in_flight)

    separator = config.thousands_separator
    placeholder = st.empty()
    unsubscribe = view.subscribe(lambda state: render_panel(state, placeholder, separator))
    try:
        panel_result = render_panel(view.state, placeholder, separator)
        if first_mount:
            asyncio.run(_run_until_settled(view.mount))
        elif refresh_clicked:
            asyncio.run(_run_until_settled(view.refresh))
        panel_result = render_panel(view.state, placeholder, separator) if first_mount or refresh_clicked else panel_result
    except Exception as e:
        st.error(f"❌ Error rendering Analytics panel: {e}")
        st.sidebar.error("❌ Panel Error")
        logger.exception("Analytics panel failed")
        return
    finally:
        unsubscribe()

    st.sidebar.subheader("📊 Panel Status")
    state = view.state
    if state.snapshot is not None and state.error_message:
        st.sidebar.warning(f"⚠️ Showing last loaded data ({state.error_message})")
    elif state.snapshot is not None:
        st.sidebar.success("✅ Data loaded")
    elif state.error_message:
        st.sidebar.error("❌ Load failed")
    else:
        st.sidebar.info(f"ℹ️ Status: {panel_result.get('status', 'unknown')}")


def unmount_analytics_panel():
    """Drop the analytics view; returning to the panel fetches again."""
    view = st.session_state.pop(VIEW_KEY, None)
    if view is not None:
        view.unmount()


def render_about_panel(config: DashboardConfig):
    """Render the about/information panel."""
    st.header("📋 About Analytics Dashboard")

    st.markdown("""
    ### 🎯 Purpose
    Shows the site analytics summary reported by the analytics service.

    ### 📊 Analytics Panel
    - **Unique Users**: Distinct sessions seen by the service
    - **Total Visits**: Page views recorded by the service
    - Data is loaded once when the panel opens; use **Refresh Now** to reload
    - If a reload fails, the last loaded numbers stay on screen
    """)

    st.subheader("⚙️ Current Configuration")
    st.code(f"""
API URL: {config.api_url}{config.endpoint}
Timeout: {config.timeout_s}s
Log Level: {config.log_level}
    """)


if __name__ == "__main__":
    main()
