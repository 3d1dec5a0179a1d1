"""
Radar Comparison

Turns a record sequence into display-ready radar series:
aggregate per model, compute global bounds, normalize each model's means.
"""

from __future__ import annotations

from eval_radar_core.domain.constants import DEFAULT_MODELS, METRIC_KEYS, METRIC_LABELS
from eval_radar_core.domain.value_objects import ModelSeries, RadarChart
from eval_radar_core.schema import EvaluationRecord
from eval_radar_core.use_cases.aggregation import (
    aggregate_model_metrics,
    count_scored_records,
    order_models,
)
from eval_radar_core.use_cases.normalization import (
    axis_ticks,
    compute_stats,
    normalize_metrics,
)
from eval_radar_core.viewer_config import NormalizationConfig

NO_DATA_MESSAGE = "No data available to display."
NO_MODEL_DATA_MESSAGE = "No evaluation data available for the specified models."


def build_radar_chart(
    records: list[EvaluationRecord],
    preferred_models: list[str] | None = None,
    include_other_models: bool = False,
    normalization: NormalizationConfig | None = None,
) -> RadarChart:
    """
    Build the radar comparison for a record sequence

    Args:
        records: Records of one dataset
        preferred_models: Models to chart, in display order (default: DEFAULT_MODELS)
        include_other_models: Also chart models outside preferred_models
        normalization: Fallback scale and tick step

    Returns:
        RadarChart. When nothing can be charted, series is empty and
        empty_message explains why.
    """
    if preferred_models is None:
        preferred_models = DEFAULT_MODELS
    if normalization is None:
        normalization = NormalizationConfig()

    # Bounds come from every record, not only the charted models
    stats = compute_stats(records, fallback=normalization.fallback)
    ticks = axis_ticks(stats, step=normalization.tick_step)

    if not records:
        return RadarChart(series=[], stats=stats, ticks=ticks, empty_message=NO_DATA_MESSAGE)

    aggregates = aggregate_model_metrics(records)
    counts = count_scored_records(records)
    models = order_models(aggregates, preferred_models, include_others=include_other_models)

    if not models:
        return RadarChart(
            series=[],
            stats=stats,
            ticks=ticks,
            item_count=len(records),
            empty_message=NO_MODEL_DATA_MESSAGE,
        )

    series = [
        ModelSeries(
            model=model,
            raw=aggregates[model].model_dump(),
            normalized=normalize_metrics(aggregates[model], stats),
            record_count=counts.get(model, 0),
        )
        for model in models
    ]
    return RadarChart(series=series, stats=stats, ticks=ticks, item_count=len(records))


def hover_text(series: ModelSeries, metric_key: str) -> str:
    """Tooltip for one radar point: original mean plus normalized value"""
    return (
        f"{series.model}: {series.raw[metric_key]:.2f} "
        f"(normalized: {series.normalized[metric_key]:.2f})"
    )


def axis_labels() -> list[str]:
    return [METRIC_LABELS[key] for key in METRIC_KEYS]
