EXAMPLE_QUERIES = [
    ("🍕", "Restaurants in New York"),
    ("☕", "Coffee shops in San Francisco"),
    ("🏨", "Hotels in Miami Beach"),
    ("💪", "Gyms in Los Angeles"),
]


def count_queries(text: str) -> int:
    return len([q for q in (text or "").splitlines() if q.strip()])


def submit_queries(state, limit: int):
    """Start a run for ``state["queries"]``; the queries are cleared only on success.

    Returns a ``(kind, message)`` notice, kind being "success" or "error".
    """
    from src.mapscraper.apify_client import run_actor
    from src.mapscraper.errors import ApifyError

    try:
        run = run_actor(state["queries"], limit)
    except ApifyError as e:
        return "error", str(e)
    state["queries"] = ""
    return "success", f"Run {run.id} started."


def render():
    import logging

    import streamlit as st

    from src.mapscraper.ui.layout import render_header
    from src.mapscraper.config import DEFAULT_MAX_RESULTS
    from src.mapscraper.apify_client import get_last_run
    from src.mapscraper.errors import ApifyError
    from src.mapscraper.schemas import RunStatus

    log = logging.getLogger(__name__)

    render_header()

    st.header("🗺️ Scrape Google Maps")
    st.caption("Enter your search queries to extract business data from Google Maps")

    if "queries" not in st.session_state:
        st.session_state.queries = ""

    # ----------------------------
    # Is a run still going?
    # ----------------------------
    busy = False
    try:
        last = get_last_run()
        if last is not None and last.status == RunStatus.RUNNING:
            busy = True
            st.info("A scrape job is currently running.")
    except ApifyError as e:
        log.error("Failed to check last run status: %s", e)

    # ----------------------------
    # Query input
    # ----------------------------
    st.subheader("✨ Search Queries")
    colA, colB = st.columns([2, 1])
    with colB:
        max_results = st.number_input("Max results", min_value=1, max_value=500, value=DEFAULT_MAX_RESULTS)

    queries = st.text_area(
        "Search queries, one per line",
        key="queries",
        height=200,
        placeholder="Restaurants in New York\nCoffee shops in San Francisco\nHotels near Times Square",
    )
    n = count_queries(queries)
    with colA:
        st.caption(f"{n} {'query' if n == 1 else 'queries'}")

    st.caption("ℹ️ Separate multiple queries with new lines")

    def _start_scrape(limit: int) -> None:
        # runs before the rerun, so clearing the box also disables the button
        kind, msg = submit_queries(st.session_state, limit)
        if kind == "error":
            log.error("Scrape failed: %s", msg)
            st.toast("Failed to start scrape job. Please try again.", icon="❌")
        else:
            st.toast(f"Started scrape for {limit} results!", icon="✅")
        st.session_state.scrape_notice = (kind, msg)

    st.button(
        "▶ Start Scrape",
        disabled=(n == 0 or busy),
        type="primary",
        on_click=_start_scrape,
        args=(int(max_results),),
    )

    notice = st.session_state.pop("scrape_notice", None)
    if notice:
        kind, msg = notice
        (st.success if kind == "success" else st.error)(msg)

    # ----------------------------
    # Quick add
    # ----------------------------
    def _add_example(text: str) -> None:
        prev = st.session_state.queries
        st.session_state.queries = f"{prev}\n{text}" if prev else text

    st.subheader("⚡ Quick Add Examples")
    cols = st.columns(len(EXAMPLE_QUERIES))
    for col, (emoji, text) in zip(cols, EXAMPLE_QUERIES):
        with col:
            st.button(f"{emoji} {text}", key=f"ex_{text}", on_click=_add_example, args=(text,))

    st.divider()
    c1, c2, c3 = st.columns(3)
    c1.markdown("**📍 Location Data**  \nExtract addresses, coordinates, and geographic information")
    c2.markdown("**🏢 Business Info**  \nGet names, phone numbers, websites, and hours")
    c3.markdown("**⭐ Reviews & Ratings**  \nCollect ratings, review counts, and categories")
