"""
Domain Layer

Defines constants, entities, and value objects that form the core of the viewer.
Has no dependencies on external libraries.
"""

from eval_radar_core.domain.constants import (
    DEFAULT_MODELS,
    FALLBACK_COLORS,
    FALLBACK_SCALE_MAX,
    FALLBACK_SCALE_MIN,
    METRIC_KEYS,
    METRIC_LABELS,
    MODEL_COLORS,
    RECORD_STATUSES,
    TABLE_COLUMNS,
    RecordStatus,
)
from eval_radar_core.domain.entities import (
    Dataset,
    DatasetSummary,
)
from eval_radar_core.domain.value_objects import (
    AxisTick,
    ModelSeries,
    NormalizationStats,
    RadarChart,
)

__all__ = [
    # constants
    "DEFAULT_MODELS",
    "FALLBACK_COLORS",
    "FALLBACK_SCALE_MAX",
    "FALLBACK_SCALE_MIN",
    "METRIC_KEYS",
    "METRIC_LABELS",
    "MODEL_COLORS",
    "RECORD_STATUSES",
    "TABLE_COLUMNS",
    "RecordStatus",
    # entities
    "Dataset",
    "DatasetSummary",
    # value objects
    "AxisTick",
    "ModelSeries",
    "NormalizationStats",
    "RadarChart",
]
