# core/edit_session.py
"""
One edit session over an asset or a component.

The session owns one AttachmentStager per slot. Opening it on a persisted
record registers that record's files as existing entries; cancelling it
drops every staged change without touching storage.
"""
import logging
from typing import Generic, TypeVar

from .attachment_stager import AttachmentStager, FileRef
from .collaborator import StorageCollaborator
from .entities import InventoryRecord, SlotType
from .reconciliation import SaveResult, reconcile_and_save

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=InventoryRecord)


class SessionClosedError(RuntimeError):
    """Raised when a cancelled or saved session is used again."""
    pass


class EditSession(Generic[R]):
    def __init__(self, original: R | None = None):
        self.original = original
        self.stagers: dict[SlotType, AttachmentStager] = {
            slot: AttachmentStager(slot) for slot in SlotType
        }
        self.closed = False
        if original is not None:
            for slot, stager in self.stagers.items():
                for path, info in original.attachments(slot):
                    stager.add_existing_file(FileRef.from_attachment(path, info))

    @property
    def is_edit(self) -> bool:
        return self.original is not None

    def stager(self, slot: SlotType) -> AttachmentStager:
        self._ensure_open()
        return self.stagers[SlotType(slot)]

    def add_file(self, slot: SlotType, file_ref: FileRef) -> bool:
        return self.stager(slot).add_file(file_ref)

    def remove_file(self, slot: SlotType, file_ref: FileRef) -> bool:
        return self.stager(slot).remove_file(file_ref)

    def cancel(self) -> None:
        for stager in self.stagers.values():
            stager.clear_all()
        self.closed = True

    def prepare(self, form: R) -> R:
        """
        Merge submitted form fields with what the form cannot carry.

        On edit the id, creation time and persisted attachment lists come
        from the original record.
        """
        draft = form.model_copy(deep=True)
        if self.original is not None:
            draft.id = self.original.id
            draft.created_at = self.original.created_at
            for slot in SlotType:
                draft.set_attachments(slot, self.original.attachments(slot))
        else:
            for slot in SlotType:
                draft.set_attachments(slot, [])
        return draft

    async def save(self, form: R, collaborator: StorageCollaborator) -> SaveResult[R]:
        self._ensure_open()
        result = await reconcile_and_save(self.prepare(form), self.stagers, collaborator)
        self.cancel()
        logger.debug("Session saved %s (%s)", result.record.id, "edit" if self.is_edit else "create")
        return result

    def _ensure_open(self) -> None:
        if self.closed:
            raise SessionClosedError("Edit session is closed")
