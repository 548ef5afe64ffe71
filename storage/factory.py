"""Storage driver factory."""

from config import settings
from storage.base import BaseStorageDriver, StorageError
from storage.local_driver import LocalStorageDriver


def get_storage_driver(provider: str, base_path: str) -> BaseStorageDriver:
    """Build a storage driver from explicit configuration.

    Args:
        provider: Storage provider name (only "local" is supported)
        base_path: Root directory for stored files

    Raises:
        StorageError: If the provider is not supported

    Example:
        >>> driver = get_storage_driver("local", "/tmp/inventory")
    """
    provider = provider.lower()

    if provider == "local":
        return LocalStorageDriver({"base_path": base_path})

    raise StorageError(f"Unsupported storage provider: {provider}")


_driver: BaseStorageDriver | None = None


def get_storage() -> BaseStorageDriver:
    """FastAPI dependency returning the configured driver."""
    global _driver
    if _driver is None:
        _driver = get_storage_driver(settings.STORAGE_PROVIDER, settings.STORAGE_DIR)
    return _driver
