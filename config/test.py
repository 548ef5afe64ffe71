from __future__ import annotations

from pydantic_settings import SettingsConfigDict

from .base import InventorySettings


class TestSettings(InventorySettings):
    DATABASE_URL: str = "sqlite+aiosqlite://"
    APP_ENV: str = "test"
    DEBUG: bool = False
    LOG_LEVEL: str = "WARNING"
    MAX_UPLOAD_BYTES: int = 1024 * 1024

    model_config = SettingsConfigDict(env_file=None)
