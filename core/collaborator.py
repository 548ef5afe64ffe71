# core/collaborator.py
"""Storage collaborator contract consumed by the inventory core."""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from .attachment_stager import FileRef
from .entities import AssetRecord, AttachmentInfo, ComponentRecord, SlotType


@dataclass(frozen=True)
class UploadResult:
    path: str
    file_info: AttachmentInfo


class StorageCollaborator(ABC):
    """Persisted storage for records and attachment files.

    Implementations may talk to the HTTP service or keep everything in
    memory. Deletes are idempotent: removing a missing id or path succeeds
    silently. Creates are not: every successful upload stores a new file.
    """

    @abstractmethod
    async def list_assets(self) -> list[AssetRecord]:
        pass

    @abstractmethod
    async def list_components(self) -> list[ComponentRecord]:
        pass

    @abstractmethod
    async def upsert_asset(self, asset: AssetRecord) -> AssetRecord:
        """Create or replace an asset and return the stored version."""
        pass

    @abstractmethod
    async def delete_asset(self, asset_id: str) -> None:
        """Delete an asset together with its first-level components."""
        pass

    @abstractmethod
    async def upsert_component(self, component: ComponentRecord) -> ComponentRecord:
        pass

    @abstractmethod
    async def delete_component(self, component_id: str) -> None:
        pass

    @abstractmethod
    async def upload_attachment(
        self,
        file_ref: FileRef,
        slot: SlotType,
        owner_id: str,
    ) -> UploadResult:
        """Store one file for a record's slot.

        Raises:
            UploadError: If the file could not be stored
        """
        pass

    @abstractmethod
    async def delete_attachment_file(self, path: str) -> None:
        """Remove a stored file.

        Raises:
            DeletionError: If the file exists but could not be removed
        """
        pass
