def render():
    import logging

    import pandas as pd
    import streamlit as st

    from src.mapscraper.ui.layout import render_header, status_badge
    from src.mapscraper.ui.table import build_preview_table, table_to_html
    from src.mapscraper.config import EXPORT_FORMATS, PREVIEW_LIMIT
    from src.mapscraper.apify_client import list_runs, fetch_preview, get_dataset_export_url
    from src.mapscraper.errors import ApifyError

    log = logging.getLogger(__name__)

    render_header()

    colA, colB = st.columns([4, 1])
    with colA:
        st.header("📊 History & Datasets")
        st.caption("View your scraping history and download results")
    with colB:
        if st.button("Refresh", icon=":material/refresh:"):
            st.rerun()

    # ----------------------------
    # Run history
    # ----------------------------
    try:
        runs = list_runs()
    except ApifyError as e:
        log.error("Failed to fetch runs: %s", e)
        st.toast("Failed to load runs.", icon="❌")
        runs = []

    if not runs:
        st.info("No history found. Start a scrape!")
        st.stop()

    st.caption(f"{len(runs)} runs")
    dfr = pd.DataFrame(
        [
            {
                "name": r.display_name,
                "status": status_badge(r.display_status),
                "date": r.started_at.strftime("%b %d, %Y %H:%M") if r.started_at else "",
                "dataset": r.default_dataset_id,
            }
            for r in runs
        ]
    )
    st.dataframe(dfr, width="stretch", hide_index=True)

    runs_by_id = {r.id: r for r in runs}
    run_id = st.selectbox(
        "Preview run",
        list(runs_by_id.keys()),
        format_func=lambda x: f"📊 {runs_by_id[x].display_name} — {status_badge(runs_by_id[x].display_status)}",
    )
    run = runs_by_id[run_id]
    if not run.default_dataset_id:
        st.info("This run has no dataset.")
        st.stop()

    dataset_id = run.default_dataset_id

    # ----------------------------
    # Export
    # ----------------------------
    st.markdown(f"### 📊 {run.display_name}")
    cols = st.columns(len(EXPORT_FORMATS))
    for col, fmt in zip(cols, EXPORT_FORMATS):
        with col:
            st.link_button(
                f"Export {fmt.upper()}",
                get_dataset_export_url(dataset_id, fmt),
                help=f"Download the whole dataset as {fmt.upper()}",
                width="stretch",
            )

    # ----------------------------
    # Preview
    # ----------------------------
    with st.spinner("Loading preview..."):
        try:
            items, metadata = fetch_preview(dataset_id, PREVIEW_LIMIT)
        except ApifyError as e:
            log.error("Failed to fetch dataset items or info: %s", e)
            st.toast("Failed to load preview data.", icon="❌")
            items, metadata = [], None

    if not items:
        st.info("No preview data available.")
        return

    schema = metadata.display_schema if metadata is not None else None
    table = build_preview_table(items, schema)
    st.markdown(table_to_html(table), unsafe_allow_html=True)

    total = f" of {metadata.item_count}" if metadata is not None and metadata.item_count else ""
    st.caption(f"👆 Showing first {len(items)}{total} records. Download to see all.")
