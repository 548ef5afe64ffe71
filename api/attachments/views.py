# api/attachments/views.py
"""
Attachment upload and removal endpoints.
"""
import logging

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status

from config import settings
from core.entities import SlotType
from storage import BaseStorageDriver, StorageError, get_storage
from .models import FileDeleteRequest, FileDeleteResponse, UploadResponse
from . import file_manager

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/attachments", tags=["attachments"])


@router.post(
    "/delete",
    response_model=FileDeleteResponse,
    summary="Delete a stored attachment file",
)
async def delete_file_endpoint(
    payload: FileDeleteRequest,
    storage: BaseStorageDriver = Depends(get_storage),
) -> FileDeleteResponse:
    """
    Delete a stored file. A file that is already gone counts as deleted.
    """
    try:
        removed = await file_manager.delete_stored_file(storage, payload.path)
    except StorageError as exc:
        logger.error("Failed to delete file %s: %s", payload.path, exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to delete file: {exc}",
        ) from exc

    return FileDeleteResponse(path=payload.path, deleted=removed)


@router.post(
    "/{slot}",
    response_model=UploadResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Upload a photo, receipt or manual",
)
async def upload_attachment_endpoint(
    slot: SlotType,
    file: UploadFile = File(...),
    owner_id: str = Form(...),
    last_modified: int | None = Form(None),
    storage: BaseStorageDriver = Depends(get_storage),
) -> UploadResponse:
    """
    Store one file for the given slot of an asset or component.

    The owner record is not modified; the client writes the returned path
    into the record when it saves.
    """
    content = await file.read()
    try:
        path, info = await file_manager.store_upload(
            storage,
            slot,
            owner_id,
            original_name=file.filename,
            content=content,
            mime_type=file.content_type,
            last_modified=last_modified,
            max_bytes=settings.MAX_UPLOAD_BYTES,
        )
    except file_manager.InvalidFileTypeError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc
    except file_manager.FileTooLargeError as exc:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=str(exc),
        ) from exc
    except StorageError as exc:
        logger.error("Failed to store %s for %s: %s", slot.value, owner_id, exc)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Failed to store file: {exc}",
        ) from exc

    return UploadResponse(path=path, file_info=info)
