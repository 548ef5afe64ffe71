# api/attachments/file_manager.py
"""
Storing and removing attachment files.
"""
import logging
import re
import uuid
from pathlib import PurePosixPath

from core.entities import AttachmentInfo, SlotType
from storage.base import BaseStorageDriver

logger = logging.getLogger(__name__)


class InvalidFileTypeError(Exception):
    """Raised when a file's type is not accepted by the slot."""
    pass


class FileTooLargeError(Exception):
    """Raised when an upload exceeds the configured size limit."""
    pass


def sanitize_file_name(file_name: str | None) -> str:
    """
    Strip a client-supplied name down to ``[A-Za-z0-9._-]``.

    Path separators are dropped, runs of dots collapse to one and leading or
    trailing dots are removed. An empty result becomes ``file``.
    """
    if not isinstance(file_name, str):
        return "file"
    sanitized = re.sub(r"[/\\]+", "", file_name)
    sanitized = re.sub(r"\.+", ".", sanitized)
    sanitized = re.sub(r"[^a-zA-Z0-9._-]", "_", sanitized)
    sanitized = sanitized.strip(".")
    return sanitized or "file"


def stored_name_for(original_name: str | None) -> str:
    """Random stored name keeping the original extension."""
    suffix = PurePosixPath(sanitize_file_name(original_name)).suffix.lower()
    return f"{uuid.uuid4().hex}{suffix}"


async def store_upload(
    storage: BaseStorageDriver,
    slot: SlotType,
    owner_id: str,
    *,
    original_name: str | None,
    content: bytes,
    mime_type: str | None,
    last_modified: int | None = None,
    max_bytes: int | None = None,
) -> tuple[str, AttachmentInfo]:
    """
    Store one uploaded file in the slot's folder.

    Returns:
        The public path and the file info to record on the owner

    Raises:
        InvalidFileTypeError: If the slot does not accept the file type
        FileTooLargeError: If the content exceeds ``max_bytes``
        StorageError: If the driver fails to write
    """
    if not slot.accepts(mime_type):
        raise InvalidFileTypeError(
            f"{mime_type or 'unknown type'} is not accepted for {slot.value}; "
            f"allowed: {', '.join(slot.accepted_types)}"
        )
    if max_bytes is not None and len(content) > max_bytes:
        raise FileTooLargeError(
            f"File is {len(content)} bytes; the limit is {max_bytes}"
        )

    file_name = stored_name_for(original_name)
    path = await storage.upload_file(f"/{slot.folder}/{file_name}", content)

    info = AttachmentInfo(
        original_name=original_name or file_name,
        size=len(content),
        file_name=file_name,
        mime_type=mime_type,
        last_modified=last_modified,
    )
    logger.debug("Stored %s %s for %s as %s", slot.value, info.original_name, owner_id, path)
    return path, info


async def delete_stored_file(storage: BaseStorageDriver, path: str) -> bool:
    """
    Remove a stored file. Returns False if it was already gone.

    Raises:
        StorageError: If the file exists but cannot be removed
    """
    removed = await storage.delete_file(path)
    if removed:
        logger.debug("Deleted file %s", path)
    else:
        logger.debug("File %s not found (already deleted?)", path)
    return removed
