# core/reconciliation.py
"""
Save-time reconciliation of staged attachment intent with persisted state.
"""
import asyncio
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Generic, TypeVar, Union

from .attachment_stager import AttachmentStager, FileRef
from .collaborator import StorageCollaborator, UploadResult
from .entities import (
    AttachmentInfo,
    ComponentRecord,
    InventoryRecord,
    SlotType,
    generate_id,
)
from .errors import DeletionError, UploadError
from .validation import validate_asset, validate_component

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R", bound=InventoryRecord)


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class Err:
    error: Exception


FileOpResult = Union[Ok[T], Err]


@dataclass
class SaveReport:
    """What happened to the files of one save."""

    uploaded: list[str] = field(default_factory=list)
    deleted: list[str] = field(default_factory=list)
    upload_failures: list[UploadError] = field(default_factory=list)
    deletion_failures: list[DeletionError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.upload_failures and not self.deletion_failures

    def merge(self, other: "SaveReport") -> None:
        self.uploaded.extend(other.uploaded)
        self.deleted.extend(other.deleted)
        self.upload_failures.extend(other.upload_failures)
        self.deletion_failures.extend(other.deletion_failures)

    def warnings(self) -> list[str]:
        """One line per failed operation, for a non-blocking UI warning."""
        return [str(e) for e in self.upload_failures] + [str(e) for e in self.deletion_failures]


@dataclass
class SaveResult(Generic[R]):
    record: R
    report: SaveReport


class ReconciliationEngine:
    """
    Turns the stagers of an edit session into final attachment lists.

    For each slot the persisted list loses the paths queued for deletion and
    gains the files that uploaded successfully, appended in staging order.
    Uploads and deletions run concurrently and are all awaited before the
    lists are written back.
    """

    def __init__(self, collaborator: StorageCollaborator):
        self.collaborator = collaborator

    async def reconcile(
        self,
        record: InventoryRecord,
        stagers: Mapping[SlotType, AttachmentStager],
    ) -> SaveReport:
        report = SaveReport()
        slot_reports = await asyncio.gather(
            *(self.reconcile_slot(record, SlotType(slot), stager)
              for slot, stager in stagers.items())
        )
        for slot_report in slot_reports:
            report.merge(slot_report)
        return report

    async def reconcile_slot(
        self,
        record: InventoryRecord,
        slot: SlotType,
        stager: AttachmentStager,
    ) -> SaveReport:
        report = SaveReport()
        pending = set(stager.pending_deletions)
        kept = [(path, info) for path, info in record.attachments(slot) if path not in pending]

        new_files = stager.get_new_files()
        results = await asyncio.gather(
            *(self._upload(file_ref, slot, record.id) for file_ref in new_files),
            *(self._delete(path) for path in stager.pending_deletions),
        )
        upload_results = results[:len(new_files)]
        delete_results = results[len(new_files):]

        uploaded: list[tuple[str, AttachmentInfo]] = []
        for result in upload_results:
            if isinstance(result, Ok):
                uploaded.append((result.value.path, result.value.file_info))
                report.uploaded.append(result.value.path)
            else:
                report.upload_failures.append(result.error)

        for path, result in zip(stager.pending_deletions, delete_results):
            if isinstance(result, Ok):
                report.deleted.append(path)
            else:
                # dropped from the record anyway; the stored file may be orphaned
                report.deletion_failures.append(result.error)

        record.set_attachments(slot, kept + uploaded)
        return report

    async def _upload(
        self,
        file_ref: FileRef,
        slot: SlotType,
        owner_id: str,
    ) -> FileOpResult[UploadResult]:
        try:
            result = await self.collaborator.upload_attachment(file_ref, slot, owner_id)
        except UploadError as exc:
            logger.warning("%s", exc)
            return Err(exc)
        except Exception as exc:
            # any other collaborator failure stays local to this file
            error = UploadError(file_ref.name, slot.value, str(exc) or type(exc).__name__)
            logger.warning("%s", error, exc_info=exc)
            return Err(error)
        return Ok(result)

    async def _delete(self, path: str) -> FileOpResult[str]:
        try:
            await self.collaborator.delete_attachment_file(path)
        except DeletionError as exc:
            logger.warning("%s", exc)
            return Err(exc)
        except Exception as exc:
            error = DeletionError(path, str(exc) or type(exc).__name__)
            logger.warning("%s", error, exc_info=exc)
            return Err(error)
        return Ok(path)


async def reconcile_and_save(
    record: R,
    stagers: Mapping[SlotType, AttachmentStager],
    collaborator: StorageCollaborator,
) -> SaveResult[R]:
    """
    Validate, reconcile every staged slot, then persist the record.

    The caller's record is not modified; the stored version is returned
    together with the report of partial failures.

    Raises:
        ValidationError: before any I/O, if required fields are missing
    """
    if isinstance(record, ComponentRecord):
        validate_component(record)
    else:
        validate_asset(record)

    draft = record.model_copy(deep=True)
    if not draft.id:
        draft.id = generate_id()

    report = await ReconciliationEngine(collaborator).reconcile(draft, stagers)

    now = datetime.now(timezone.utc)
    draft.created_at = draft.created_at or now
    draft.updated_at = now

    if isinstance(draft, ComponentRecord):
        saved = await collaborator.upsert_component(draft)
    else:
        saved = await collaborator.upsert_asset(draft)

    if not report.ok:
        logger.warning(
            "Saved %s with %d failed upload(s) and %d failed deletion(s)",
            saved.id, len(report.upload_failures), len(report.deletion_failures),
        )
    return SaveResult(record=saved, report=report)
