import logging
from contextlib import contextmanager
from typing import Dict, List, Optional

import pandas as pd
import streamlit as st

from core.aggregate import aggregate
from core.charts import doughnut_chart, stacked_bar_chart
from core.client import fetch_datasets
from core.cross_tab import cross_tab_frame, project_cross_tab
from core.data import DATASETS, DatasetSpec
from core.logging_config import configure_logging
from core.proportional import project_proportional
from core.records import InvalidCategorySelector, MalformedRow
from core.settings import get_settings
from core.stacked_series import project_stacked_series

settings = get_settings()
configure_logging(settings.log_level)
logger = logging.getLogger(__name__)


# ---------- UI / layout helpers ----------
def inject_base_styles():
    if st.session_state.get("_base_css_injected"):
        return
    st.markdown(
        """
        <style>
        .card {border: 1px solid #e5e7eb;border-radius: 12px;padding: 16px;background: #ffffff;
               box-shadow: 0 1px 2px rgba(0,0,0,0.04); margin-bottom: 12px;}
        .card-header {display: flex;justify-content: center;align-items: center;margin-bottom: 8px;}
        .card-title {font-weight: 600;font-size: 1.1rem;color: #111827;}
        </style>
        """,
        unsafe_allow_html=True,
    )
    st.session_state["_base_css_injected"] = True


@contextmanager
def card(title: str):
    container = st.container()
    container.markdown(
        f"""
        <div class="card">
          <div class="card-header"><div class="card-title">{title}</div></div>
        """,
        unsafe_allow_html=True,
    )
    body = container.container()
    with body:
        yield body
    container.markdown("</div>", unsafe_allow_html=True)


@st.cache_data(ttl=60, show_spinner="Loading datasets…")
def load_all(backend_url: str):
    return fetch_datasets(backend_url)


def select_card(name: Optional[str]):
    st.session_state["selected_card"] = name


# ----- Page renderers -----
def render_small_cards(available: List[DatasetSpec]):
    if not available:
        st.info("No datasets available yet.")
        return
    cols = st.columns(len(available))
    for col, spec in zip(cols, available):
        with col:
            with card(spec.title):
                st.button("Open", key=f"open-{spec.name}", on_click=select_card, args=(spec.name,), use_container_width=True)


def render_data_card(spec: DatasetSpec, rows: List[Dict]):
    st.button("Back", type="primary", on_click=select_card, args=(None,))
    try:
        aggregation = aggregate(rows, spec.kind)
    except InvalidCategorySelector as exc:
        logger.exception("rendering %s failed", spec.name)
        st.error(f"Dataset {spec.name} does not match its category field: {exc}")
        return
    except MalformedRow as exc:
        logger.warning("dataset %s has a malformed row: %s", spec.name, exc)
        st.error(f"Dataset {spec.name} has a row without a fiscal quarter.")
        return

    with card(spec.title):
        chart_cols = st.columns([3, 2])
        bar = stacked_bar_chart(project_stacked_series(aggregation))
        doughnut = doughnut_chart(project_proportional(aggregation))
        with chart_cols[0]:
            if bar is None:
                st.info("No data for the stacked bar chart.")
            else:
                st.altair_chart(bar, use_container_width=True)
        with chart_cols[1]:
            if doughnut is None:
                st.info("No ACV to split.")
            else:
                st.altair_chart(doughnut)

        table: pd.DataFrame = cross_tab_frame(project_cross_tab(aggregation, spec.category_label))
        st.dataframe(table, use_container_width=True, hide_index=True)


# ---------- UI setup ----------
st.set_page_config(page_title="Won ACV Mix Dashboard", layout="wide")
inject_base_styles()
st.title("Won ACV Mix Dashboard")

datasets, errors = load_all(settings.backend_url)
for name, message in errors.items():
    st.warning(f"{DATASETS[name].title}: {message}")

with st.sidebar:
    st.markdown("### Data")
    st.caption(f"Backend: {settings.backend_url}")
    if st.button("Refresh"):
        load_all.clear()
        st.rerun()

available = [spec for name, spec in DATASETS.items() if datasets.get(name)]
selected = st.session_state.get("selected_card")

if selected and datasets.get(selected):
    render_data_card(DATASETS[selected], datasets[selected])
else:
    render_small_cards(available)
