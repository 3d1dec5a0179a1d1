"""
Use Cases Layer

Aggregation, normalization and upload logic called from the viewer.
"""

from eval_radar_core.use_cases.aggregation import (
    aggregate_model_metrics,
    count_scored_records,
    metrics_summary_frame,
    order_models,
    records_to_frame,
)
from eval_radar_core.use_cases.normalization import (
    DEGENERATE_SCORE,
    axis_ticks,
    compute_stats,
    denormalize_score,
    normalize_metrics,
    normalize_score,
)
from eval_radar_core.use_cases.radar import (
    NO_DATA_MESSAGE,
    NO_MODEL_DATA_MESSAGE,
    axis_labels,
    build_radar_chart,
    hover_text,
)
from eval_radar_core.use_cases.upload import (
    UploadOutcome,
    ingest_upload,
    ingest_upload_bytes,
)

__all__ = [
    # aggregation
    "aggregate_model_metrics",
    "count_scored_records",
    "metrics_summary_frame",
    "order_models",
    "records_to_frame",
    # normalization
    "DEGENERATE_SCORE",
    "axis_ticks",
    "compute_stats",
    "denormalize_score",
    "normalize_metrics",
    "normalize_score",
    # radar
    "NO_DATA_MESSAGE",
    "NO_MODEL_DATA_MESSAGE",
    "axis_labels",
    "build_radar_chart",
    "hover_text",
    # upload
    "UploadOutcome",
    "ingest_upload",
    "ingest_upload_bytes",
]
