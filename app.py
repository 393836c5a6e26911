import logging
from contextlib import contextmanager
from typing import Dict, List, Tuple

import altair as alt
import streamlit as st

from statboard.charts import section_bar_chart
from statboard.classify import ClassifiedRow, classify_rows
from statboard.data import CsvLoadError, export_csv_bytes, load_rows_from_csv, section_rows_frame
from statboard.filters import normalize_filters
from statboard.parsing import format_fraction_pct
from statboard.sections import Section, get_sections
from statboard.stats import compute_section_stats, compute_totals, stats_frame
from statboard.view import SectionView, build_view

alt.data_transformers.disable_max_rows()
logger = logging.getLogger(__name__)

RESULT_COLORS = {
    "GOOD": "background-color: #103d2b; color: #6dffb6; font-weight: 800",
    "LOW": "background-color: #3c3410; color: #ffd76d; font-weight: 800",
    "HIGH": "background-color: #3d1010; color: #ff6d6d; font-weight: 800",
}
FILTER_LABELS = {"ALL": "All", "GOOD": "Good", "BAD": "Bad"}
ROW_FILTER_OPTIONS = ["ALL", "GOOD", "BAD"]

# survives runs where a section (and so its radio) is hidden by scope or search
SECTION_FILTERS_KEY = "section_filters"


def remember_section_filter(section_key: str):
    st.session_state[SECTION_FILTERS_KEY][section_key] = st.session_state[f"filter_{section_key}"]


# ---------- UI / layout helpers ----------
def inject_base_styles():
    if st.session_state.get("_base_css_injected"):
        return
    st.markdown(
        """
        <style>
        .card {border: 1px solid #e5e7eb;border-radius: 12px;padding: 16px;background: #ffffff;
               box-shadow: 0 1px 2px rgba(0,0,0,0.04); margin-bottom: 12px;}
        .card-title {font-weight: 600;font-size: 1.0rem;color: #111827;margin-bottom: 8px;}
        .chip-row {display: flex;flex-wrap: wrap;gap: 6px;margin-top: 6px;}
        .chip {background: #f3f4f6;border: 1px solid #e5e7eb;border-radius: 14px;padding: 4px 10px;font-size: 0.85rem;color: #374151;}
        </style>
        """,
        unsafe_allow_html=True,
    )
    st.session_state["_base_css_injected"] = True


@contextmanager
def card(title: str):
    container = st.container()
    container.markdown(f"<div class='card'><div class='card-title'>{title}</div>", unsafe_allow_html=True)
    body = container.container()
    with body:
        yield body
    container.markdown("</div>", unsafe_allow_html=True)


def format_filter_summary(global_filter: str, scope: str, query: str, sort_mode: str) -> str:
    chips = [
        f"Rows: {FILTER_LABELS.get(global_filter, global_filter)}",
        {"ALL": "Sections: All", "WITH_BAD": "Sections: with bad", "WITH_DATA": "Sections: with data"}.get(scope, scope),
        f"Search: {query}" if query else "Search: none",
        "Sort: most bad" if sort_mode == "MOST_BAD" else "Sort: A-Z",
    ]
    return "".join([f"<span class='chip'>{txt}</span>" for txt in chips])


def result_table(rows: List[ClassifiedRow]):
    df = section_rows_frame(rows)
    df["Value"] = df["Value"].map(lambda v: f"{float(v):.2f}%")
    return df.style.map(lambda v: RESULT_COLORS.get(v, ""), subset=["Result"])


# ---------- data ----------
@st.cache_data(show_spinner=False)
def load_and_classify(file_bytes: bytes, _sections: tuple) -> Tuple[int, Dict[str, List[ClassifiedRow]]]:
    # keyed on the uploaded bytes; the catalog is fixed for the process
    rows = load_rows_from_csv(file_bytes)
    return len(rows), classify_rows(rows, _sections)


def render_section(view: SectionView, open_all: bool, has_rows: bool):
    section: Section = view.stats.section
    stats = view.stats
    label = (
        f"{section.title} · {format_fraction_pct(stats.fraction_good)} good · "
        f"Good {stats.good} · Bad {stats.bad} · Rows {stats.total}"
    )
    with st.expander(("🔴 " if stats.bad > 0 else "") + label, expanded=open_all):
        st.caption(section.column)
        counts = {"ALL": stats.total, "GOOD": stats.good, "BAD": stats.bad}
        c1, c2, c3 = st.columns([4, 3, 2])
        with c1:
            current = st.session_state[SECTION_FILTERS_KEY].get(section.key, "ALL")
            st.radio(
                "Rows",
                options=ROW_FILTER_OPTIONS,
                index=ROW_FILTER_OPTIONS.index(current),
                format_func=lambda v: f"{FILTER_LABELS[v]}({counts[v]})",
                key=f"filter_{section.key}",
                on_change=remember_section_filter,
                args=(section.key,),
                horizontal=True,
                label_visibility="collapsed",
            )
        with c2:
            st.markdown(f"**Showing:** {len(view.rows)} · {format_fraction_pct(view.shown_fraction_good)} good")
        with c3:
            st.download_button(
                "Export CSV",
                data=export_csv_bytes(section_rows_frame(list(view.rows))),
                file_name=f"{section.key}.csv",
                mime="text/csv",
                key=f"export_{section.key}",
                disabled=not view.rows,
            )
        if not view.rows:
            st.info("Load a CSV to see results." if not has_rows else "No rows for this filter.")
        else:
            st.dataframe(result_table(list(view.rows)), use_container_width=True, hide_index=True)


# ---------- UI setup ----------
st.set_page_config(page_title="CSV Stat Dashboard", layout="wide")
inject_base_styles()
st.title("CSV Stat Dashboard")
if SECTION_FILTERS_KEY not in st.session_state:
    st.session_state[SECTION_FILTERS_KEY] = {}

sections = get_sections()

with st.sidebar:
    st.markdown("### Data")
    upload = st.file_uploader("CSV export", type=["csv"])

    st.markdown("---")
    st.markdown("### View")
    global_filter = st.radio(
        "Rows in every section",
        options=["ALL", "GOOD", "BAD"],
        format_func=FILTER_LABELS.get,
        horizontal=True,
        help="Anything other than All overrides each section's own filter.",
    )
    scope = st.selectbox(
        "Sections",
        options=["ALL", "WITH_BAD", "WITH_DATA"],
        format_func={"ALL": "All sections", "WITH_BAD": "Only with bad rows", "WITH_DATA": "Only with data"}.get,
    )
    query = st.text_input("Search sections", "", key="query")
    sort_mode = st.radio(
        "Sort",
        options=["MOST_BAD", "A_Z"],
        format_func={"MOST_BAD": "Most bad first", "A_Z": "A-Z"}.get,
        horizontal=True,
    )

computed: Dict[str, List[ClassifiedRow]] = {}
row_count = 0
if upload is None:
    st.caption("Upload your CSV export to begin.")
else:
    try:
        row_count, computed = load_and_classify(upload.getvalue(), sections)
    except CsvLoadError as exc:
        logger.error("CSV upload %s rejected: %s", upload.name, exc)
        st.error("Failed to parse CSV. Check that the file is a comma-separated export with a header row.")
        st.stop()
    st.caption(f"Loaded: **{upload.name}** · {row_count} rows")

section_stats = compute_section_stats(computed, sections)
totals = compute_totals(section_stats)

filters = normalize_filters(
    {
        "global_filter": global_filter,
        "scope": scope,
        "query": query,
        "sort_mode": sort_mode,
        "section_filters": dict(st.session_state[SECTION_FILTERS_KEY]),
    },
    section_keys=[s.key for s in sections],
)
view = build_view(section_stats, filters)

with card("Overall"):
    cols = st.columns(5)
    cols[0].metric("Good (stats)", format_fraction_pct(totals.fraction_good))
    cols[1].metric("Good stats", f"{totals.total_good}")
    cols[2].metric("Bad stats", f"{totals.total_bad}")
    cols[3].metric("Total", f"{totals.total_rows}")
    cols[4].metric("Sections with bad", f"{totals.sections_with_bad} / {totals.sections_with_data}")
    st.markdown(
        f"<div class='chip-row'>{format_filter_summary(filters.global_filter, filters.scope, filters.query, filters.sort_mode)}</div>",
        unsafe_allow_html=True,
    )
    chart = section_bar_chart(section_stats)
    if chart is not None:
        with st.expander("Results by section", expanded=False):
            st.altair_chart(chart, use_container_width=True)
            st.dataframe(stats_frame(section_stats), use_container_width=True, hide_index=True)

btn_cols = st.columns([1, 1, 6])
if btn_cols[0].button("Expand all", disabled=not row_count):
    st.session_state["open_all"] = True
if btn_cols[1].button("Collapse all", disabled=not row_count):
    st.session_state["open_all"] = False
open_all = bool(st.session_state.get("open_all", False))

if not view:
    st.info("No sections match the current search and scope.")
for section_view in view:
    render_section(section_view, open_all, has_rows=row_count > 0)
