# core/attachment_stager.py
"""
Staging of attachment changes for one slot during one edit session.

Nothing here performs I/O. The stager only records intent: which persisted
files are kept, which were removed and which new files should be uploaded
when the session is saved.
"""
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import NamedTuple, TypeVar

from .entities import AttachmentInfo, SlotType

logger = logging.getLogger(__name__)

T = TypeVar("T")


class DedupKey(NamedTuple):
    name: str
    size: int
    last_modified: int | None


@dataclass(frozen=True)
class FileRef:
    """
    A file as seen by the edit session.

    New files carry their bytes in ``content``. Files that are already
    persisted carry their stored ``path`` instead.
    """

    name: str
    size: int
    last_modified: int | None = None
    mime_type: str | None = None
    content: bytes | None = field(default=None, repr=False, compare=False)
    path: str | None = None

    @property
    def dedup_key(self) -> DedupKey:
        return DedupKey(self.name, self.size, self.last_modified)

    @classmethod
    def from_bytes(
        cls,
        name: str,
        content: bytes,
        mime_type: str | None = None,
        last_modified: int | None = None,
    ) -> "FileRef":
        return cls(
            name=name,
            size=len(content),
            last_modified=last_modified,
            mime_type=mime_type,
            content=content,
        )

    @classmethod
    def from_attachment(cls, path: str, info: AttachmentInfo) -> "FileRef":
        return cls(
            name=info.original_name,
            size=info.size,
            last_modified=info.last_modified,
            mime_type=info.mime_type,
            path=path,
        )


class StagedState(str, Enum):
    EXISTING = "existing"
    NEW = "new"
    DELETED_MARKER = "deleted"


@dataclass
class StagedFileEntry:
    file_ref: FileRef
    dedup_key: DedupKey
    state: StagedState


@dataclass(frozen=True)
class StagerState:
    """Read-only snapshot of a stager."""

    slot: SlotType
    entries: tuple[StagedFileEntry, ...]
    pending_deletions: tuple[str, ...]

    @property
    def existing_count(self) -> int:
        return sum(1 for e in self.entries if e.state is StagedState.EXISTING)

    @property
    def new_count(self) -> int:
        return sum(1 for e in self.entries if e.state is StagedState.NEW)

    @property
    def deleted_count(self) -> int:
        return len(self.pending_deletions)


class AttachmentStager:
    """
    Working set of files for one attachment slot.

    Entries are keyed by their dedup key ``(name, size, last_modified)`` so
    adding the same file twice, or removing it twice, leaves the state
    unchanged.
    """

    def __init__(self, slot: SlotType):
        self.slot = SlotType(slot)
        self._entries: dict[DedupKey, StagedFileEntry] = {}
        # path -> None, insertion ordered
        self._pending_deletions: dict[str, None] = {}

    def add_file(self, file_ref: FileRef) -> bool:
        """Stage a new file. Returns False when the key is already staged."""
        key = file_ref.dedup_key
        if key in self._entries:
            logger.debug("Ignoring duplicate %s file %s", self.slot.value, file_ref.name)
            return False
        self._entries[key] = StagedFileEntry(file_ref, key, StagedState.NEW)
        return True

    def add_existing_file(self, file_ref: FileRef) -> bool:
        """Register an already persisted file so it can be shown and removed."""
        if not file_ref.path:
            raise ValueError(f"Existing file {file_ref.name!r} has no stored path")
        key = file_ref.dedup_key
        if key in self._entries:
            logger.debug(
                "Not listing %s file %s: same name, size and timestamp as %s",
                self.slot.value, file_ref.path, self._entries[key].file_ref.path,
            )
            return False
        self._entries[key] = StagedFileEntry(file_ref, key, StagedState.EXISTING)
        return True

    def remove_file(self, file_ref: FileRef) -> bool:
        """
        Remove a staged file.

        A new file is forgotten outright. A persisted file is kept as a
        deleted marker and its stored path is queued for deletion on save.
        Returns False when nothing changed.
        """
        entry = self._entries.get(file_ref.dedup_key)
        if entry is None or entry.state is StagedState.DELETED_MARKER:
            return False

        if entry.state is StagedState.NEW:
            del self._entries[entry.dedup_key]
            return True

        entry.state = StagedState.DELETED_MARKER
        self._pending_deletions[entry.file_ref.path] = None
        return True

    def contains(self, key: DedupKey) -> bool:
        """True while the key is staged and not marked deleted."""
        entry = self._entries.get(key)
        return entry is not None and entry.state is not StagedState.DELETED_MARKER

    def get_all_files(self) -> list[FileRef]:
        """Files that will be attached after save: kept ones and new ones."""
        return [
            e.file_ref for e in self._entries.values()
            if e.state is not StagedState.DELETED_MARKER
        ]

    def get_new_files(self) -> list[FileRef]:
        return [e.file_ref for e in self._entries.values() if e.state is StagedState.NEW]

    @property
    def pending_deletions(self) -> list[str]:
        return list(self._pending_deletions)

    def get_state(self) -> StagerState:
        entries = tuple(
            StagedFileEntry(e.file_ref, e.dedup_key, e.state)
            for e in self._entries.values()
        )
        return StagerState(self.slot, entries, tuple(self._pending_deletions))

    def reset(self) -> None:
        self._entries.clear()
        self._pending_deletions.clear()

    clear_all = reset

    async def load_preview(
        self,
        file_ref: FileRef,
        reader: Callable[[FileRef], Awaitable[T]],
    ) -> T | None:
        """
        Run a preview read and keep its result only if the file is still staged.

        The read may finish after the user removed the file; the late result
        is dropped instead of being shown.
        """
        result = await reader(file_ref)
        if not self.contains(file_ref.dedup_key):
            logger.debug("Discarding preview for unstaged file %s", file_ref.name)
            return None
        return result
