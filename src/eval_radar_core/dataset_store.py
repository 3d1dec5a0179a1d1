"""
Dataset Store

In-memory registry of named datasets with a "current" selection.

Every transition is a plain function that returns a new DatasetStore; the
previous value is never modified. Datasets that a transition does not touch
are shared between the old and new store.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, replace
from typing import Callable

from eval_radar_core.domain.entities import Dataset, DatasetSummary
from eval_radar_core.schema import EvaluationBatch

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DatasetStore:
    """Datasets in insertion order plus the id of the current one (None = add-new state)"""
    datasets: tuple[Dataset, ...] = ()
    current_id: str | None = None

    def __len__(self) -> int:
        return len(self.datasets)

    def __contains__(self, dataset_id: object) -> bool:
        return any(d.id == dataset_id for d in self.datasets)

    @property
    def ids(self) -> list[str]:
        return [d.id for d in self.datasets]


def new_dataset_id() -> str:
    return uuid.uuid4().hex


def get_dataset(store: DatasetStore, dataset_id: str | None) -> Dataset | None:
    """Dataset with the given id, or None for an unknown id"""
    if dataset_id is None:
        return None
    return next((d for d in store.datasets if d.id == dataset_id), None)


def current_dataset(store: DatasetStore) -> Dataset | None:
    return get_dataset(store, store.current_id)


def dataset_labels(store: DatasetStore) -> list[DatasetSummary]:
    """Selector entries in insertion order"""
    return [
        DatasetSummary(
            id=d.id,
            label=d.label,
            record_count=len(d.records),
            is_current=d.id == store.current_id,
        )
        for d in store.datasets
    ]


def add_dataset(
    store: DatasetStore,
    label: str,
    batch: EvaluationBatch,
    id_factory: Callable[[], str] = new_dataset_id,
) -> tuple[DatasetStore, str]:
    """
    Append a new dataset and make it current

    Args:
        store: Current store value
        label: Display label (usually the uploaded file name)
        batch: Validated batch
        id_factory: Generates candidate ids; called again on collision

    Returns:
        (new store, id of the added dataset)
    """
    dataset_id = id_factory()
    while dataset_id in store:
        logger.debug("Dataset id collision on '%s', regenerating", dataset_id)
        dataset_id = id_factory()

    dataset = Dataset(id=dataset_id, label=label, batch=batch)
    new_store = DatasetStore(
        datasets=store.datasets + (dataset,),
        current_id=dataset_id,
    )
    logger.info("Added dataset '%s' (%s, %d records)", label, dataset_id, len(batch.responses))
    return new_store, dataset_id


def select_dataset(store: DatasetStore, dataset_id: str) -> DatasetStore:
    """Make dataset_id current; stale or unknown ids leave the store unchanged"""
    if dataset_id not in store:
        logger.debug("Ignoring selection of unknown dataset id '%s'", dataset_id)
        return store
    if store.current_id == dataset_id:
        return store
    return replace(store, current_id=dataset_id)


def clear_selection(store: DatasetStore) -> DatasetStore:
    """Enter the add-new state without deleting anything"""
    if store.current_id is None:
        return store
    return replace(store, current_id=None)


def rename_current(store: DatasetStore, new_label: str) -> DatasetStore:
    """
    Replace the label of the current dataset

    No-op when nothing is current or the label is empty (after stripping).
    The dataset keeps its id and records.
    """
    label = (new_label or "").strip()
    current = current_dataset(store)
    if current is None or not label:
        return store
    if label == current.label:
        return store

    renamed = replace(current, label=label)
    datasets = tuple(renamed if d.id == current.id else d for d in store.datasets)
    logger.info("Renamed dataset %s: '%s' -> '%s'", current.id, current.label, label)
    return replace(store, datasets=datasets)


def remove_dataset(store: DatasetStore, dataset_id: str) -> DatasetStore:
    """
    Remove a dataset; removing the current one clears the selection

    Unknown ids are a no-op.
    """
    if dataset_id not in store:
        logger.debug("Ignoring removal of unknown dataset id '%s'", dataset_id)
        return store

    datasets = tuple(d for d in store.datasets if d.id != dataset_id)
    current_id = None if store.current_id == dataset_id else store.current_id
    logger.info("Removed dataset %s", dataset_id)
    return DatasetStore(datasets=datasets, current_id=current_id)
