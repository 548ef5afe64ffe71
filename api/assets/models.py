# api/assets/models.py
from datetime import datetime

from pydantic import BaseModel

from core.entities import AssetRecord


class AssetUpsert(AssetRecord):
    """Asset payload. Omit ``id`` to create a new asset."""
    pass


class AssetRead(AssetRecord):
    id: str
    created_at: datetime
    updated_at: datetime


class DeleteResponse(BaseModel):
    root_id: str
    not_found: bool = False
    deleted_ids: list[str] = []
    file_failures: list[str] = []

    @classmethod
    def from_outcome(cls, outcome) -> "DeleteResponse":
        return cls(
            root_id=outcome.root_id,
            not_found=not outcome.found,
            deleted_ids=outcome.deleted_ids,
            file_failures=[str(e) for e in outcome.file_failures],
        )
