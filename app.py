import logging

import streamlit as st
from src.mapscraper.config import APP_TITLE, PAGE_ICON
from src.mapscraper.ui.layout import render_sidebar
from custom_pages import scrape, datasets

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

st.set_page_config(page_title=APP_TITLE, page_icon=PAGE_ICON, layout="wide")

render_sidebar()

page = st.session_state.get("page", "scrape")

if page == "scrape":
    scrape.render()
elif page == "datasets":
    datasets.render()
else:
    st.error("Unknown page")
