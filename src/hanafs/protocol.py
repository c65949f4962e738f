"""
Provider protocol and the value types shared by every filesystem variant.
Created: 2026-03-02
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Protocol


class FileType(str, Enum):
    """Kind of a filesystem entry."""

    FILE = "file"
    DIRECTORY = "directory"


class FileChangeType(str, Enum):
    CREATED = "created"
    CHANGED = "changed"
    DELETED = "deleted"


@dataclass(frozen=True)
class FileStat:
    """Metadata reported by ``stat``. Times are milliseconds since the epoch."""

    type: FileType
    size: int = 0
    ctime: int = 0
    mtime: int = 0


@dataclass(frozen=True)
class FileChangeEvent:
    type: FileChangeType
    address: str


ChangeListener = Callable[[list[FileChangeEvent]], None]


class Disposable:
    """Handle returned by subscriptions; ``dispose()`` is idempotent."""

    def __init__(self, on_dispose: Callable[[], None] | None = None):
        self._on_dispose = on_dispose

    def dispose(self) -> None:
        if self._on_dispose is not None:
            callback, self._on_dispose = self._on_dispose, None
            callback()


class CredentialPrompt(Protocol):
    """Interactive collaborator used to collect credentials for a host."""

    async def prompt(self, message: str, *, password: bool = False) -> str | None:
        """Ask the user for a value. Returns None (or "") when cancelled."""
        ...


class FileSystemProvider(Protocol):
    """Operations every filesystem variant exposes."""

    async def stat(self, address: str) -> FileStat: ...

    async def read_directory(self, address: str) -> list[tuple[str, FileType]]: ...

    async def read_file(self, address: str) -> bytes: ...

    async def write_file(
        self, address: str, content: bytes, *, create: bool = True, overwrite: bool = True
    ) -> None: ...

    async def rename(self, old: str, new: str, *, overwrite: bool = False) -> None: ...

    async def delete(self, address: str) -> None: ...

    async def create_directory(self, address: str) -> None: ...

    def watch(self, address: str) -> Disposable: ...
