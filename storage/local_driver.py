"""Local filesystem storage driver."""

import os
from pathlib import Path
from typing import Any, Dict

import aiofiles
import aiofiles.os

from storage.base import BaseStorageDriver, StorageError


class LocalStorageDriver(BaseStorageDriver):
    """Local filesystem storage driver.

    Configuration:
        base_path: Directory holding the Images/, Receipts/ and Manuals/ folders

    Example:
        >>> driver = LocalStorageDriver({"base_path": "/srv/inventory/data"})
        >>> await driver.upload_file("/Images/abc.jpg", b"...")
        '/Images/abc.jpg'
    """

    def __init__(self, config: Dict[str, Any]):
        super().__init__(config)
        self.base_path = Path(config["base_path"]).resolve()

    def _validate_path(self, file_path: str) -> Path:
        """Resolve a public path inside base_path (prevent directory traversal).

        Raises:
            StorageError: If path tries to escape base_path
        """
        relative = file_path.lstrip("/")
        if not relative:
            raise StorageError("Empty file path")
        full_path = (self.base_path / relative).resolve()

        try:
            full_path.relative_to(self.base_path)
        except ValueError:
            raise StorageError(
                f"Path {file_path} attempts to escape base directory"
            )

        return full_path

    def _public_path(self, full_path: Path) -> str:
        return "/" + full_path.relative_to(self.base_path).as_posix()

    async def upload_file(self, file_path: str, content: bytes) -> str:
        full_path = self._validate_path(file_path)

        try:
            full_path.parent.mkdir(parents=True, exist_ok=True)
            async with aiofiles.open(full_path, "wb") as f:
                await f.write(content)
        except OSError as exc:
            raise StorageError(f"Failed to write {file_path}: {exc}") from exc

        return self._public_path(full_path)

    async def delete_file(self, file_path: str) -> bool:
        full_path = self._validate_path(file_path)

        try:
            await aiofiles.os.remove(full_path)
        except FileNotFoundError:
            return False
        except OSError as exc:
            raise StorageError(f"Failed to delete {file_path}: {exc}") from exc
        return True

    async def test_connection(self) -> bool:
        try:
            self.base_path.mkdir(parents=True, exist_ok=True)
            return os.access(self.base_path, os.R_OK | os.W_OK)
        except OSError:
            return False
