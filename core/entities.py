# core/entities.py
"""
Records exchanged between the inventory core, the storage collaborator and
the HTTP service.

Every record carries three attachment slots. A slot is stored as a list of
paths, a parallel list of AttachmentInfo and a legacy singular path that
mirrors the first element for older consumers.
"""
import posixpath
import secrets
from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SlotType(str, Enum):
    PHOTO = "photo"
    RECEIPT = "receipt"
    MANUAL = "manual"

    @property
    def folder(self) -> str:
        """Top-level storage folder for files of this slot."""
        return _SLOT_FOLDERS[self]

    @property
    def accepted_types(self) -> tuple[str, ...]:
        return _SLOT_TYPES[self]

    def accepts(self, mime_type: str | None) -> bool:
        if not mime_type:
            return False
        for accepted in self.accepted_types:
            if accepted.endswith("/*"):
                if mime_type.startswith(accepted[:-1]):
                    return True
            elif mime_type == accepted:
                return True
        return False


_SLOT_FOLDERS = {
    SlotType.PHOTO: "Images",
    SlotType.RECEIPT: "Receipts",
    SlotType.MANUAL: "Manuals",
}

_SLOT_TYPES = {
    SlotType.PHOTO: ("image/*",),
    SlotType.RECEIPT: ("image/*", "application/pdf"),
    SlotType.MANUAL: (
        "application/pdf",
        "application/msword",
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    ),
}


def generate_id() -> str:
    """Generate a 10-digit record id."""
    return str(1_000_000_000 + secrets.randbelow(9_000_000_000))


class AttachmentInfo(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    original_name: str
    size: int = 0
    file_name: str | None = None
    mime_type: str | None = None
    last_modified: int | None = None

    @classmethod
    def from_path(cls, path: str) -> "AttachmentInfo":
        """Placeholder info for legacy paths stored without metadata."""
        name = posixpath.basename(path)
        return cls(original_name=name, file_name=name)


class Warranty(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    scope: str = ""
    expiration_date: str | None = None
    is_lifetime: bool = False


class InventoryRecord(BaseModel):
    """Fields shared by assets and components."""

    model_config = ConfigDict(from_attributes=True)

    id: str | None = None
    name: str = ""
    manufacturer: str | None = None
    model_number: str | None = None
    serial_number: str | None = None
    purchase_date: str | None = None
    link: str | None = None
    tags: list[str] = Field(default_factory=list)
    warranty: Warranty | None = None
    maintenance_events: list[dict[str, Any]] = Field(default_factory=list)

    photo_path: str | None = None
    photo_paths: list[str] = Field(default_factory=list)
    photo_info: list[AttachmentInfo] = Field(default_factory=list)
    receipt_path: str | None = None
    receipt_paths: list[str] = Field(default_factory=list)
    receipt_info: list[AttachmentInfo] = Field(default_factory=list)
    manual_path: str | None = None
    manual_paths: list[str] = Field(default_factory=list)
    manual_info: list[AttachmentInfo] = Field(default_factory=list)

    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_validator("tags", "maintenance_events", "photo_paths", "photo_info",
                     "receipt_paths", "receipt_info", "manual_paths", "manual_info",
                     mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        return [] if value is None else value

    def attachments(self, slot: SlotType) -> list[tuple[str, AttachmentInfo]]:
        """
        Persisted (path, info) pairs of a slot, in stored order.

        A legacy record holding only the singular path is read as a
        one-element list; paths without a matching info get a placeholder.
        """
        slot = SlotType(slot)
        paths = list(getattr(self, f"{slot.value}_paths"))
        infos = list(getattr(self, f"{slot.value}_info"))
        legacy = getattr(self, f"{slot.value}_path")
        if not paths and legacy:
            paths = [legacy]

        pairs = []
        for index, path in enumerate(paths):
            info = infos[index] if index < len(infos) else AttachmentInfo.from_path(path)
            pairs.append((path, info))
        return pairs

    def set_attachments(
        self,
        slot: SlotType,
        pairs: list[tuple[str, AttachmentInfo]],
    ) -> None:
        """Replace a slot's lists and refresh the legacy singular path."""
        slot = SlotType(slot)
        paths = [path for path, _ in pairs]
        setattr(self, f"{slot.value}_paths", paths)
        setattr(self, f"{slot.value}_info", [info for _, info in pairs])
        setattr(self, f"{slot.value}_path", paths[0] if paths else None)

    def stored_paths(self) -> list[str]:
        """Every stored file referenced by this record, without duplicates."""
        seen: dict[str, None] = {}
        for slot in SlotType:
            legacy = getattr(self, f"{slot.value}_path")
            if legacy:
                seen.setdefault(legacy, None)
            for path in getattr(self, f"{slot.value}_paths"):
                if path:
                    seen.setdefault(path, None)
        return list(seen)


class AssetRecord(InventoryRecord):
    price: float | None = None
    description: str | None = None
    secondary_warranty: Warranty | None = None


class ComponentRecord(InventoryRecord):
    purchase_price: float | None = None
    notes: str | None = None
    parent_id: str | None = None
    parent_sub_id: str | None = None

    @field_validator("parent_id", "parent_sub_id", mode="before")
    @classmethod
    def _blank_as_none(cls, value):
        # HTML forms submit an empty string for "no parent component"
        if isinstance(value, str) and not value.strip():
            return None
        return value
