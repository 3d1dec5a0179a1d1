"""
Domain Value Objects

Defines immutable data structures representing normalization bounds
and per-model display series.
"""

import math
from dataclasses import dataclass, field


@dataclass(frozen=True)
class NormalizationStats:
    """Global min/max over every observed metric value"""

    min: float
    max: float
    range: float
    observed: bool = True  # False when min/max come from the fallback scale

    def __post_init__(self):
        if self.max < self.min:
            raise ValueError("max must not be less than min")
        if not math.isclose(self.range, self.max - self.min, rel_tol=1e-9, abs_tol=1e-12):
            raise ValueError("range must equal max - min")

    @property
    def is_degenerate(self) -> bool:
        """True when every normalized score collapses to the midpoint"""
        return self.range == 0


@dataclass(frozen=True)
class ModelSeries:
    """One model's trace on the radar chart"""
    model: str
    raw: dict[str, float]
    normalized: dict[str, float]
    record_count: int = 0


@dataclass(frozen=True)
class AxisTick:
    """Radial axis tick (normalized position + original-scale label)"""
    position: float
    label: str


@dataclass(frozen=True)
class RadarChart:
    """Display-ready radar comparison for one record sequence"""
    series: list[ModelSeries]
    stats: NormalizationStats
    ticks: list[AxisTick] = field(default_factory=list)
    item_count: int = 0
    empty_message: str | None = None

    @property
    def is_empty(self) -> bool:
        return not self.series

    @property
    def models(self) -> list[str]:
        return [s.model for s in self.series]

    @property
    def scale_caption(self) -> str:
        return (
            f"Scores normalized from {self.stats.min:.1f}-{self.stats.max:.1f} "
            "to 0-1 scale"
        )

    @property
    def items_caption(self) -> str:
        return f"Showing {self.item_count} items for: {', '.join(self.models)}"
