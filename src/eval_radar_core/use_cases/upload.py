"""
Upload Ingestion

parse -> validate -> add to the store. Parse and validation failures are
returned as data; the store is left untouched and no partial dataset is created.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from eval_radar_core.dataset_store import DatasetStore, add_dataset, new_dataset_id
from eval_radar_core.schema import (
    BatchLoadError,
    BatchParseError,
    find_duplicate_ids,
    parse_batch_text,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UploadOutcome:
    """Result of one upload attempt"""
    store: DatasetStore
    dataset_id: str | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def ingest_upload(
    store: DatasetStore,
    file_name: str,
    text: str,
    id_factory: Callable[[], str] = new_dataset_id,
) -> UploadOutcome:
    """
    Validate an uploaded document and add it as the current dataset

    Args:
        store: Store before the upload
        file_name: Uploaded file name, used as the initial label
        text: Full document text

    Returns:
        UploadOutcome. On failure, store is the given store object and error
        holds the message to show the user.
    """
    try:
        batch = parse_batch_text(text)
    except BatchLoadError as e:
        logger.warning("Rejected upload '%s': %s", file_name, e)
        return UploadOutcome(store=store, error=str(e))

    duplicates = find_duplicate_ids(batch)
    if duplicates:
        logger.warning(
            "Upload '%s' contains %d duplicate record id(s): %s",
            file_name, len(duplicates), ", ".join(duplicates[:10]),
        )

    new_store, dataset_id = add_dataset(store, file_name, batch, id_factory=id_factory)
    return UploadOutcome(store=new_store, dataset_id=dataset_id)


def ingest_upload_bytes(
    store: DatasetStore,
    file_name: str,
    data: bytes,
    id_factory: Callable[[], str] = new_dataset_id,
) -> UploadOutcome:
    """Same as ingest_upload for raw file bytes (UTF-8, optional BOM)"""
    try:
        text = data.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        error = BatchParseError(f"file is not UTF-8 text ({e.reason} at byte {e.start})")
        logger.warning("Rejected upload '%s': %s", file_name, error)
        return UploadOutcome(store=store, error=str(error))
    return ingest_upload(store, file_name, text, id_factory=id_factory)
