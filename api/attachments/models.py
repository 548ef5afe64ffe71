# api/attachments/models.py
from pydantic import BaseModel, Field

from core.entities import AttachmentInfo


class UploadResponse(BaseModel):
    path: str
    file_info: AttachmentInfo


class FileDeleteRequest(BaseModel):
    path: str = Field(..., min_length=1, description="Stored path, e.g. /Images/abc.jpg")


class FileDeleteResponse(BaseModel):
    path: str
    deleted: bool
