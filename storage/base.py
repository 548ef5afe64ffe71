"""Base storage driver interface."""

from abc import ABC, abstractmethod
from typing import Any, Dict


class BaseStorageDriver(ABC):
    """Base class for attachment storage drivers.

    Paths are the public attachment paths stored on records, e.g.
    ``/Images/3f2a...c1.jpg``. A leading slash is optional.
    """

    def __init__(self, config: Dict[str, Any]):
        """Initialize storage driver with configuration.

        Args:
            config: Driver-specific settings
        """
        self.config = config

    @abstractmethod
    async def upload_file(self, file_path: str, content: bytes) -> str:
        """Store file content and return its public path.

        Raises:
            StorageError: If the write fails
        """
        pass

    @abstractmethod
    async def delete_file(self, file_path: str) -> bool:
        """Remove a stored file.

        Returns:
            True if a file was removed, False if it did not exist

        Raises:
            StorageError: If the file exists but cannot be removed
        """
        pass

    @abstractmethod
    async def test_connection(self) -> bool:
        """Return True if the storage is reachable."""
        pass


class StorageError(Exception):
    """Base exception for storage operations."""

    pass
