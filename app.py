"""
Call Analysis Explorer (Streamlit)
- Loads the call export, drops `cancelled` rows, groups dispositions into categories
- Click a disposition to see its notes (first 100) and top keywords
Run:
    pip install -e .
    streamlit run app.py
"""
import io
import logging

import streamlit as st

from call_explorer.config import configure_logging, data_path
from call_explorer.data_prep import CallDataError, drop_cancelled, load_calls
from call_explorer.metrics import breakdown_table, disposition_total, keyword_frequency, notes_for, summarize
from call_explorer.taxonomy import category_of
from call_explorer.view_state import Overview, is_detail, navigate
from call_explorer.viz import plot_category_breakdown, plot_keywords

configure_logging()
logger = logging.getLogger("call_explorer.app")

st.set_page_config(page_title="Call Analysis Explorer", layout="wide")


@st.cache_data(show_spinner=False)
def load_working_set(source_key: str, payload=None):
    # payload: uploaded bytes; otherwise source_key is a path
    src = io.BytesIO(payload) if payload is not None else source_key
    return drop_cancelled(load_calls(src))


def _go(disposition=None):
    st.session_state.view = navigate(st.session_state.view, disposition)


def render_overview(table):
    st.subheader("Disposition Breakdown by Category")
    for category, sub in table.groupby("category", sort=False):
        first = sub.iloc[0]
        with st.container(border=True):
            left, right = st.columns([3, 1])
            left.markdown(f"**{category}**")
            right.markdown(f"{int(first['category_total']):,} calls ({first['category_pct']:.1f}%)")
            for _, r in sub.iterrows():
                c1, c2 = st.columns([3, 1])
                c1.button(str(r["disposition"]), key=f"disp::{r['disposition']}",
                          on_click=_go, args=(r["disposition"],))
                c2.write(f"{int(r['count']):,} ({r['pct']:.1f}%)")


def render_detail(calls, breakdown, disposition, show_chart=False):
    st.button("← Back to Categories", key="back", on_click=_go)
    st.subheader(disposition)
    n = disposition_total(breakdown, disposition)
    st.caption(f"{category_of(disposition) or 'Unmapped'} · {n or 0:,} calls")

    notes = notes_for(calls, disposition)
    kw = keyword_frequency(notes)
    st.markdown("#### Common Keywords")
    if kw.empty:
        st.write("-")
    else:
        st.markdown(" ".join(f"`{w} ({c})`" for w, c in zip(kw["word"], kw["count"])))
        if show_chart:
            fig, _, _ = plot_keywords(kw, title=f"Common Keywords: {disposition}")
            st.pyplot(fig)

    st.markdown(f"#### Call Notes ({len(notes)})")
    if not notes:
        st.info("No notes available for this disposition.")
    for note in notes:
        with st.container(border=True):
            st.text(note)


st.title("Call Analysis Explorer")

if "view" not in st.session_state:
    st.session_state.view = Overview()

with st.sidebar:
    upload = st.file_uploader("Call export (CSV)", type=["csv"])
    show_chart = st.checkbox("Show charts", value=False)

try:
    with st.spinner("Loading call data..."):
        if upload is not None:
            calls = load_working_set(upload.name, upload.getvalue())
        else:
            calls = load_working_set(data_path())
except CallDataError as e:
    logger.error("load failed: %s", e)
    st.error(f"Error: {e}")
    st.stop()

breakdown = summarize(calls)
table = breakdown_table(breakdown, len(calls))

if is_detail(st.session_state.view):
    render_detail(calls, breakdown, st.session_state.view.disposition, show_chart)
else:
    if show_chart:
        fig, _, _ = plot_category_breakdown(table)
        st.pyplot(fig)
    render_overview(table)
