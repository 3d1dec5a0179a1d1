"""
eval-radar-core Viewer

Streamlit dashboard for uploading evaluation batches, browsing them as a table,
and comparing per-model quality metrics on a normalized radar chart.

Usage:
    pip install -e ".[viewer]"
    streamlit run src/eval_radar_core/viewer.py
    streamlit run src/eval_radar_core/viewer.py -- --preload runs/batch_a.json runs/batch_b.json

Requires the package to be installed (e.g. via ``pip install -e .``).
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

import pandas as pd
import streamlit as st
from dotenv import load_dotenv

from eval_radar_core.charts import build_radar_figure
from eval_radar_core.dataset_store import (
    DatasetStore,
    clear_selection,
    current_dataset,
    dataset_labels,
    remove_dataset,
    rename_current,
    select_dataset,
)
from eval_radar_core.use_cases.aggregation import (
    aggregate_model_metrics,
    count_scored_records,
    metrics_summary_frame,
    records_to_frame,
)
from eval_radar_core.use_cases.radar import build_radar_chart
from eval_radar_core.use_cases.upload import ingest_upload_bytes
from eval_radar_core.viewer_config import ViewerConfig, load_config

logger = logging.getLogger(__name__)

_STORE_KEY = "dataset_store"
_ERROR_KEY = "upload_error"
_CONFIRM_DELETE_KEY = "confirm_delete"
_PRELOADED_KEY = "preloaded"


def _get_store() -> DatasetStore:
    return st.session_state[_STORE_KEY]


def _set_store(store: DatasetStore) -> None:
    st.session_state[_STORE_KEY] = store


def _init_session_state() -> None:
    st.session_state.setdefault(_STORE_KEY, DatasetStore())
    st.session_state.setdefault(_ERROR_KEY, None)
    st.session_state.setdefault(_CONFIRM_DELETE_KEY, False)
    st.session_state.setdefault(_PRELOADED_KEY, False)


def _preload(paths: list[str]) -> None:
    """Load batches given on the command line (once per session)"""
    if st.session_state[_PRELOADED_KEY]:
        return
    st.session_state[_PRELOADED_KEY] = True

    store = _get_store()
    for raw_path in paths:
        path = Path(raw_path)
        if not path.exists():
            logger.warning("Preload file not found: %s", path)
            st.session_state[_ERROR_KEY] = f"File not found: `{path}`"
            continue
        outcome = ingest_upload_bytes(store, path.name, path.read_bytes())
        if not outcome.ok:
            st.session_state[_ERROR_KEY] = f"{path.name}: {outcome.error}"
        store = outcome.store
    _set_store(store)


# -- Callbacks --

def _on_select(dataset_id: str) -> None:
    _set_store(select_dataset(_get_store(), dataset_id))
    st.session_state[_CONFIRM_DELETE_KEY] = False


def _on_add_new() -> None:
    _set_store(clear_selection(_get_store()))
    st.session_state[_CONFIRM_DELETE_KEY] = False


def _on_rename(widget_key: str) -> None:
    _set_store(rename_current(_get_store(), st.session_state.get(widget_key, "")))


def _on_confirm_delete(dataset_id: str) -> None:
    _set_store(remove_dataset(_get_store(), dataset_id))
    st.session_state[_CONFIRM_DELETE_KEY] = False


def _on_dismiss_error() -> None:
    st.session_state[_ERROR_KEY] = None


# -- Rendering --

def _render_sidebar(store: DatasetStore) -> None:
    st.sidebar.header("Datasets")
    summaries = dataset_labels(store)
    if not summaries:
        st.sidebar.caption("No datasets loaded.")
    for summary in summaries:
        label = f"**{summary.label}**" if summary.is_current else summary.label
        st.sidebar.button(
            f"{label} ({summary.record_count})",
            key=f"select_{summary.id}",
            on_click=_on_select,
            args=(summary.id,),
            use_container_width=True,
        )
    st.sidebar.markdown("---")
    st.sidebar.button("Add dataset +", on_click=_on_add_new, use_container_width=True)


def _render_error_banner() -> None:
    error = st.session_state[_ERROR_KEY]
    if not error:
        return
    st.error(f"Upload failed:\n```\n{error}\n```")
    st.button("Dismiss", on_click=_on_dismiss_error)


def _render_upload() -> None:
    st.header("Upload evaluation results")
    uploaded = st.file_uploader(
        "Drag and drop a file here, or click to select",
        type=["json"],
        accept_multiple_files=False,
    )
    if uploaded is None:
        return

    if st.button(f"Upload {uploaded.name}", type="primary"):
        outcome = ingest_upload_bytes(_get_store(), uploaded.name, uploaded.getvalue())
        if outcome.ok:
            st.session_state[_ERROR_KEY] = None
            _set_store(outcome.store)
        else:
            st.session_state[_ERROR_KEY] = outcome.error
        st.rerun()


def _render_title(store: DatasetStore) -> None:
    dataset = current_dataset(store)
    st.title(dataset.label)

    col_rename, col_delete = st.columns([4, 1])
    widget_key = f"rename_{dataset.id}"
    with col_rename:
        st.text_input(
            "Label",
            value=dataset.label,
            key=widget_key,
            on_change=_on_rename,
            args=(widget_key,),
        )
    with col_delete:
        st.write("")
        if st.button("Delete", key=f"delete_{dataset.id}"):
            st.session_state[_CONFIRM_DELETE_KEY] = True

    if st.session_state[_CONFIRM_DELETE_KEY]:
        st.warning(f"Are you sure you want to delete {dataset.label}?")
        col_confirm, col_cancel, _ = st.columns([1, 1, 6])
        col_confirm.button(
            "Confirm",
            type="primary",
            on_click=_on_confirm_delete,
            args=(dataset.id,),
        )
        if col_cancel.button("Cancel"):
            st.session_state[_CONFIRM_DELETE_KEY] = False
            st.rerun()


def _render_radar(records: list, config: ViewerConfig) -> None:
    st.header("Model Performance Comparison")
    chart = build_radar_chart(
        records,
        preferred_models=config.display.preferred_models,
        include_other_models=config.display.include_other_models,
        normalization=config.normalization,
    )
    if chart.is_empty:
        st.info(chart.empty_message)
        return

    fig = build_radar_figure(chart, title="")
    st.plotly_chart(fig, use_container_width=True)
    st.caption(chart.scale_caption)
    if not chart.stats.observed:
        st.caption("No evaluation metrics found; using the default display scale.")
    st.caption(chart.items_caption)

    aggregates = aggregate_model_metrics(records)
    summary_df = metrics_summary_frame(
        aggregates,
        counts=count_scored_records(records),
        models=chart.models,
    )
    st.dataframe(summary_df, use_container_width=True, hide_index=True)


def _render_table(records: list, config: ViewerConfig) -> None:
    st.header("Data Table")
    df = records_to_frame(records)
    display_df: pd.DataFrame = df.astype(object).where(df.notna(), "-")
    st.dataframe(
        display_df.astype(str),
        use_container_width=True,
        hide_index=True,
        height=config.display.table_height,
    )


def main() -> None:
    # Parse --preload from Streamlit args (after --)
    parser = argparse.ArgumentParser()
    parser.add_argument("--preload", nargs="*", default=[])
    args, _ = parser.parse_known_args()

    load_dotenv()
    config = load_config()
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    st.set_page_config(page_title="eval-radar-core", layout="wide")
    _init_session_state()
    _preload(args.preload)

    store = _get_store()
    _render_sidebar(store)
    _render_error_banner()

    dataset = current_dataset(store)
    if dataset is None:
        _render_upload()
        return

    _render_title(store)
    _render_radar(dataset.records, config)
    _render_table(dataset.records, config)


if __name__ == "__main__":
    main()
