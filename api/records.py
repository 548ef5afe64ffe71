# api/records.py
"""
Helpers shared by the asset and component managers: converting records to
column values and purging the stored files of deleted records.
"""
import logging
from dataclasses import dataclass, field

from core.entities import InventoryRecord, SlotType
from core.errors import DeletionError
from storage.base import BaseStorageDriver, StorageError

logger = logging.getLogger(__name__)

_SERVER_FIELDS = {"id", "created_at", "updated_at"}


@dataclass
class DeleteOutcome:
    root_id: str
    found: bool = True
    deleted_ids: list[str] = field(default_factory=list)
    file_failures: list[DeletionError] = field(default_factory=list)


def record_columns(record: InventoryRecord) -> dict:
    """
    Column values for a record, with slot lists normalised.

    Legacy single-path slots become one-element lists and the singular
    path is re-derived from the list.
    """
    normalised = record.model_copy(deep=True)
    for slot in SlotType:
        normalised.set_attachments(slot, normalised.attachments(slot))
    return normalised.model_dump(mode="json", exclude=_SERVER_FIELDS)


async def purge_files(
    storage: BaseStorageDriver,
    records: list[InventoryRecord],
) -> list[DeletionError]:
    """
    Best-effort removal of every file referenced by deleted records.

    Failures are logged and returned; they never undo the record deletion.
    """
    failures = []
    for record in records:
        for path in record.stored_paths():
            try:
                removed = await storage.delete_file(path)
            except StorageError as exc:
                logger.warning("Could not delete %s of %s: %s", path, record.id, exc)
                failures.append(DeletionError(path, str(exc)))
                continue
            if not removed:
                logger.debug("File %s of %s already gone", path, record.id)
    return failures
