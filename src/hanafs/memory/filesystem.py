"""In-memory filesystem.

Created: 2026-03-06

A tree of ``File`` and ``Directory`` nodes with the same async interface as
``RemoteFileSystem``. Used for demos and as a reference for the semantics
editors expect from a provider (create/overwrite flags, change events).
Addresses may be full URIs (``memfs:/a/b``) or bare paths; only the path is
used.
"""

from __future__ import annotations

import logging
import posixpath
import time
from dataclasses import dataclass, field
from urllib.parse import urlsplit, urlunsplit

from hanafs.config import Settings, get_settings
from hanafs.errors import (
    FileExists,
    FileIsADirectory,
    FileNotADirectory,
    FileNotFound,
    NoPermissions,
)
from hanafs.memory.notifier import ChangeNotifier
from hanafs.protocol import (
    ChangeListener,
    Disposable,
    FileChangeEvent,
    FileChangeType,
    FileStat,
    FileType,
)

logger = logging.getLogger(__name__)


def _now_ms() -> int:
    return int(time.time() * 1000)


@dataclass
class File:
    name: str
    data: bytes = b""
    ctime: int = field(default_factory=_now_ms)
    mtime: int = field(default_factory=_now_ms)

    @property
    def size(self) -> int:
        return len(self.data)

    def stat(self) -> FileStat:
        return FileStat(FileType.FILE, self.size, self.ctime, self.mtime)


@dataclass
class Directory:
    name: str
    entries: dict[str, File | Directory] = field(default_factory=dict)  # insertion-ordered
    ctime: int = field(default_factory=_now_ms)
    mtime: int = field(default_factory=_now_ms)

    def stat(self) -> FileStat:
        return FileStat(FileType.DIRECTORY, len(self.entries), self.ctime, self.mtime)


Entry = File | Directory


def _path_of(address: str) -> str:
    return posixpath.normpath("/" + urlsplit(address).path.lstrip("/"))


def _with_path(address: str, path: str) -> str:
    """Return ``address`` with its path replaced (used for parent events)."""
    parts = urlsplit(address)
    if not parts.scheme:
        return path
    return urlunsplit(parts._replace(path=path))


class MemoryFileSystem:
    def __init__(self, settings: Settings | None = None):
        settings = settings or get_settings()
        self.root = Directory("")
        self._notifier = ChangeNotifier(delay=settings.debounce_ms / 1000)

    # -- lookup --

    def _lookup(self, address: str) -> Entry:
        entry: Entry = self.root
        for part in _path_of(address).split("/"):
            if not part:
                continue
            child = entry.entries.get(part) if isinstance(entry, Directory) else None
            if child is None:
                raise FileNotFound(address=address)
            entry = child
        return entry

    def _lookup_directory(self, address: str) -> Directory:
        entry = self._lookup(address)
        if not isinstance(entry, Directory):
            raise FileNotADirectory(address=address)
        return entry

    def _lookup_file(self, address: str) -> File:
        entry = self._lookup(address)
        if not isinstance(entry, File):
            raise FileIsADirectory(address=address)
        return entry

    def _lookup_parent(self, address: str) -> Directory:
        parent = posixpath.dirname(_path_of(address))
        return self._lookup_directory(_with_path(address, parent))

    def _parent_address(self, address: str) -> str:
        return _with_path(address, posixpath.dirname(_path_of(address)))

    # -- metadata --

    async def stat(self, address: str) -> FileStat:
        return self._lookup(address).stat()

    async def read_directory(self, address: str) -> list[tuple[str, FileType]]:
        directory = self._lookup_directory(address)
        return [
            (name, FileType.DIRECTORY if isinstance(child, Directory) else FileType.FILE)
            for name, child in directory.entries.items()
        ]

    # -- content --

    async def read_file(self, address: str) -> bytes:
        return self._lookup_file(address).data

    async def write_file(
        self,
        address: str,
        content: bytes,
        *,
        create: bool = True,
        overwrite: bool = True,
    ) -> None:
        basename = posixpath.basename(_path_of(address))
        if not basename:
            raise FileIsADirectory(address=address)
        parent = self._lookup_parent(address)
        entry = parent.entries.get(basename)

        if isinstance(entry, Directory):
            raise FileIsADirectory(address=address)
        if entry is None and not create:
            raise FileNotFound(address=address)
        if entry is not None and create and not overwrite:
            raise FileExists(address=address)

        if entry is None:
            entry = File(basename)
            parent.entries[basename] = entry
            self._notifier.fire_soon(FileChangeEvent(FileChangeType.CREATED, address))

        entry.mtime = _now_ms()
        entry.data = bytes(content)
        self._notifier.fire_soon(FileChangeEvent(FileChangeType.CHANGED, address))

    # -- files and folders --

    async def rename(self, old: str, new: str, *, overwrite: bool = False) -> None:
        old_path, new_path = _path_of(old), _path_of(new)
        if old_path == "/" or new_path == "/":
            raise NoPermissions("Cannot move the root directory", old)
        if new_path == old_path or new_path.startswith(old_path + "/"):
            raise NoPermissions(f"Cannot move {old_path} into itself", new)

        if not overwrite and self._exists(new):
            raise FileExists(address=new)

        entry = self._lookup(old)
        old_parent = self._lookup_parent(old)
        new_parent = self._lookup_parent(new)
        new_name = posixpath.basename(_path_of(new))

        del old_parent.entries[entry.name]
        entry.name = new_name
        new_parent.entries[new_name] = entry

        self._notifier.fire_soon(
            FileChangeEvent(FileChangeType.DELETED, old),
            FileChangeEvent(FileChangeType.CREATED, new),
        )

    async def delete(self, address: str) -> None:
        basename = posixpath.basename(_path_of(address))
        parent = self._lookup_parent(address)
        if basename not in parent.entries:
            raise FileNotFound(address=address)

        del parent.entries[basename]
        parent.mtime = _now_ms()
        self._notifier.fire_soon(
            FileChangeEvent(FileChangeType.CHANGED, self._parent_address(address)),
            FileChangeEvent(FileChangeType.DELETED, address),
        )

    async def create_directory(self, address: str) -> None:
        basename = posixpath.basename(_path_of(address))
        parent = self._lookup_parent(address)
        if not basename or basename in parent.entries:
            raise FileExists(address=address)

        parent.entries[basename] = Directory(basename)
        parent.mtime = _now_ms()
        self._notifier.fire_soon(
            FileChangeEvent(FileChangeType.CHANGED, self._parent_address(address)),
            FileChangeEvent(FileChangeType.CREATED, address),
        )

    def _exists(self, address: str) -> bool:
        try:
            self._lookup(address)
        except FileNotFound:
            return False
        return True

    # -- events --

    def watch(self, address: str) -> Disposable:
        # Every change is reported to every listener; nothing to register.
        return Disposable()

    def on_did_change_file(self, listener: ChangeListener) -> Disposable:
        return self._notifier.subscribe(listener)

    def flush_events(self) -> None:
        self._notifier.flush()
