"""
Metric Normalization

Rescales raw metric values into [0, 1] using one min/max shared by all models,
and maps normalized positions back to the original scale for axis labels.
"""

from __future__ import annotations

from typing import Iterable

from eval_radar_core.domain.constants import (
    FALLBACK_SCALE_MAX,
    FALLBACK_SCALE_MIN,
    METRIC_KEYS,
)
from eval_radar_core.domain.value_objects import AxisTick, NormalizationStats
from eval_radar_core.schema import EvaluationMetrics, EvaluationRecord

# Normalized value of every score when all observed values are identical
DEGENERATE_SCORE = 0.5


def compute_stats(
    records: Iterable[EvaluationRecord],
    fallback: tuple[float, float] = (FALLBACK_SCALE_MIN, FALLBACK_SCALE_MAX),
) -> NormalizationStats:
    """
    Global min/max over every metric value of every scored record

    Args:
        records: Record sequence
        fallback: (min, max) display scale used when no record has metrics

    Returns:
        NormalizationStats. observed is False when the fallback scale was used.
    """
    lo = None
    hi = None
    for record in records:
        if record.evaluation_metrics is None:
            continue
        for value in record.evaluation_metrics.values():
            if lo is None or value < lo:
                lo = value
            if hi is None or value > hi:
                hi = value

    if lo is None:
        fb_min, fb_max = fallback
        return NormalizationStats(min=fb_min, max=fb_max, range=fb_max - fb_min, observed=False)
    return NormalizationStats(min=lo, max=hi, range=hi - lo)


def normalize_score(score: float, stats: NormalizationStats) -> float:
    """
    Map a raw score into [0, 1]

    Returns DEGENERATE_SCORE when the range is 0. Scores outside [min, max]
    are clamped.
    """
    if stats.range == 0:
        return DEGENERATE_SCORE
    return max(0.0, min(1.0, (score - stats.min) / stats.range))


def denormalize_score(normalized: float, stats: NormalizationStats) -> float:
    """Inverse of normalize_score for scores within [min, max]"""
    return stats.min + normalized * stats.range


def normalize_metrics(metrics: EvaluationMetrics, stats: NormalizationStats) -> dict[str, float]:
    """Normalized value per metric, in METRIC_KEYS order"""
    return {key: normalize_score(getattr(metrics, key), stats) for key in METRIC_KEYS}


def axis_ticks(stats: NormalizationStats, step: float = 0.2) -> list[AxisTick]:
    """
    Radial axis ticks from 0 to 1, labelled with original-scale values

    Args:
        stats: Normalization bounds
        step: Distance between ticks on the normalized axis

    Returns:
        list[AxisTick]
    """
    if step <= 0:
        raise ValueError(f"step must be positive: {step}")
    positions = [round(i * step, 10) for i in range(int(1 / step + 1e-9) + 1)]
    return [
        AxisTick(position=p, label=f"{denormalize_score(p, stats):.1f}")
        for p in positions
    ]
