from __future__ import annotations

from pydantic_settings import BaseSettings


class InventorySettings(BaseSettings):
    """Settings shared by every environment."""

    APP_ENV: str = "local"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Attachment storage
    STORAGE_PROVIDER: str = "local"
    STORAGE_DIR: str = "data"
    MAX_UPLOAD_BYTES: int = 25 * 1024 * 1024
