import streamlit as st
from ..config import APP_TITLE, APP_SUBTITLE, LOGO_PATH
from ..apify_client import is_configured

STATUS_BADGES = {
    "completed": "✅ Completed",
    "running": "⏳ Running",
    "pending": "🕐 Pending",
    "failed": "❌ Failed",
}


def status_badge(display_status: str) -> str:
    return STATUS_BADGES.get(display_status, STATUS_BADGES["pending"])


def render_sidebar():
    """Render the global sidebar with logo, navigation and API status."""
    if LOGO_PATH.exists():
        st.sidebar.image(str(LOGO_PATH), width=120)

    if "page" not in st.session_state:
        st.session_state.page = "scrape"

    sb = st.sidebar
    sb.markdown(f"### 🗺️ {APP_TITLE}")
    sb.caption(APP_SUBTITLE)

    if sb.button("Scrape", icon=":material/search:"):
        st.session_state.page = "scrape"

    if sb.button("Datasets", icon=":material/dataset:"):
        st.session_state.page = "datasets"

    sb.divider()
    sb.caption("API Status")
    if is_configured():
        sb.markdown("✅ **Connected**")
    else:
        sb.markdown("⚠️ **No token** (set `APIFY_TOKEN`)")


def render_header():
    if LOGO_PATH.exists():
        col1, col2 = st.columns([0.9, 8])
        with col1:
            st.image(str(LOGO_PATH), width=96)
        with col2:
            st.markdown(f"# {APP_TITLE}")
    else:
        st.title(APP_TITLE)
