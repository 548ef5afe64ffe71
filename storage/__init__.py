"""Attachment file storage drivers."""

from storage.base import BaseStorageDriver, StorageError
from storage.factory import get_storage, get_storage_driver
from storage.local_driver import LocalStorageDriver

__all__ = [
    "BaseStorageDriver",
    "LocalStorageDriver",
    "StorageError",
    "get_storage",
    "get_storage_driver",
]
