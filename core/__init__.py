# core/__init__.py
"""Asset/component tree and staged attachment lifecycle."""
from .attachment_stager import (
    AttachmentStager,
    DedupKey,
    FileRef,
    StagedFileEntry,
    StagedState,
    StagerState,
)
from .collaborator import StorageCollaborator, UploadResult
from .descendants import CascadePlan, DescendantResolver, first_level_components, resolve_descendants
from .edit_session import EditSession
from .entities import AssetRecord, AttachmentInfo, ComponentRecord, SlotType, Warranty
from .errors import DeletionError, InventoryError, NotFoundError, UploadError, ValidationError
from .inventory import DeleteReport, Inventory
from .reconciliation import Err, Ok, ReconciliationEngine, SaveReport, SaveResult, reconcile_and_save
from .tree_store import TreeStore

__all__ = [
    "AssetRecord",
    "AttachmentInfo",
    "AttachmentStager",
    "CascadePlan",
    "ComponentRecord",
    "DedupKey",
    "DeleteReport",
    "DeletionError",
    "DescendantResolver",
    "EditSession",
    "Err",
    "FileRef",
    "Inventory",
    "InventoryError",
    "NotFoundError",
    "Ok",
    "ReconciliationEngine",
    "SaveReport",
    "SaveResult",
    "SlotType",
    "StagedFileEntry",
    "StagedState",
    "StagerState",
    "StorageCollaborator",
    "TreeStore",
    "UploadError",
    "UploadResult",
    "ValidationError",
    "Warranty",
    "first_level_components",
    "reconcile_and_save",
    "resolve_descendants",
]
