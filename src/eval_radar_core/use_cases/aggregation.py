"""
Per-model Metric Aggregation

Groups records by model and averages their evaluation metrics.
Records without a model or without evaluation_metrics (failed / unscored runs)
do not contribute.
"""

from __future__ import annotations

from typing import Iterable

import pandas as pd

from eval_radar_core.domain.constants import METRIC_KEYS, TABLE_COLUMNS
from eval_radar_core.schema import EvaluationMetrics, EvaluationRecord


def aggregate_model_metrics(records: Iterable[EvaluationRecord]) -> dict[str, EvaluationMetrics]:
    """
    Mean metrics per model

    Single pass keeping a running mean per model and metric, so large finite
    scores never overflow an intermediate sum. A model without contributing
    records is absent from the result.

    Args:
        records: Record sequence (any order)

    Returns:
        {model: mean EvaluationMetrics}. Order carries no meaning.
    """
    means: dict[str, list[float]] = {}
    counts: dict[str, int] = {}

    for record in records:
        metrics = record.evaluation_metrics
        if metrics is None or not record.model:
            continue
        acc = means.setdefault(record.model, [0.0] * len(METRIC_KEYS))
        n = counts[record.model] = counts.get(record.model, 0) + 1
        for i, value in enumerate(metrics.values()):
            # Both terms scaled by 1/n before subtracting: value - mean can overflow
            acc[i] += value / n - acc[i] / n

    return {
        model: EvaluationMetrics(**dict(zip(METRIC_KEYS, acc)))
        for model, acc in means.items()
    }


def count_scored_records(records: Iterable[EvaluationRecord]) -> dict[str, int]:
    """Number of contributing records per model"""
    counts: dict[str, int] = {}
    for record in records:
        if record.evaluation_metrics is not None and record.model:
            counts[record.model] = counts.get(record.model, 0) + 1
    return counts


def order_models(
    aggregates: dict[str, EvaluationMetrics],
    preferred: list[str],
    include_others: bool = False,
) -> list[str]:
    """
    Display order for aggregated models

    Preferred models come first in the given order; models missing from
    the aggregate are skipped. With include_others, remaining models follow
    alphabetically.
    """
    ordered = [m for m in dict.fromkeys(preferred) if m in aggregates]
    if include_others:
        ordered.extend(sorted(m for m in aggregates if m not in ordered))
    return ordered


def records_to_frame(records: Iterable[EvaluationRecord]) -> pd.DataFrame:
    """Table view of the records (absent values as None)"""
    rows = [
        {header: getattr(record, attr) for attr, header in TABLE_COLUMNS}
        for record in records
    ]
    return pd.DataFrame(rows, columns=[header for _, header in TABLE_COLUMNS])


def metrics_summary_frame(
    aggregates: dict[str, EvaluationMetrics],
    counts: dict[str, int] | None = None,
    models: list[str] | None = None,
) -> pd.DataFrame:
    """Per-model mean metrics as a DataFrame (one row per model)"""
    if models is None:
        models = sorted(aggregates)
    rows = []
    for model in models:
        if model not in aggregates:
            continue
        row = {"model": model, **aggregates[model].model_dump()}
        if counts is not None:
            row["records"] = counts.get(model, 0)
        rows.append(row)
    columns = ["model", *METRIC_KEYS] + (["records"] if counts is not None else [])
    return pd.DataFrame(rows, columns=columns)
