# core/errors.py
"""
Error taxonomy shared by the inventory core and the service.
"""


class InventoryError(Exception):
    """Base class for inventory errors."""
    pass


class ValidationError(InventoryError):
    """Raised before any I/O when a record is missing required data."""
    pass


class NotFoundError(InventoryError):
    """Raised when a requested id does not exist."""
    pass


class UploadError(InventoryError):
    """A single attachment upload failed."""

    def __init__(self, file_name: str, slot: str, reason: str):
        super().__init__(f"Upload of '{file_name}' to {slot} failed: {reason}")
        self.file_name = file_name
        self.slot = slot
        self.reason = reason


class DeletionError(InventoryError):
    """A file or entity removal failed. The removal intent still proceeds."""

    def __init__(self, target: str, reason: str):
        super().__init__(f"Deletion of '{target}' failed: {reason}")
        self.target = target
        self.reason = reason
