"""
Domain Entities

Defines the primary data structures held by the dataset store.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from eval_radar_core.schema import EvaluationBatch, EvaluationRecord


@dataclass(frozen=True)
class Dataset:
    """A validated batch with a user-editable display label"""
    id: str
    label: str
    batch: EvaluationBatch

    @property
    def records(self) -> list[EvaluationRecord]:
        return self.batch.responses


@dataclass(frozen=True)
class DatasetSummary:
    """Entry of the dataset selector list"""
    id: str
    label: str
    record_count: int
    is_current: bool = False
