"""hanafs - HANA repository exposed as a virtual filesystem."""

from hanafs.errors import (
    FileExists,
    FileIsADirectory,
    FileNotADirectory,
    FileNotFound,
    FileSystemError,
    InvalidAddress,
    NoPermissions,
    NotFound,
    Unavailable,
)
from hanafs.protocol import FileChangeEvent, FileChangeType, FileStat, FileType

__all__ = [
    "FileChangeEvent",
    "FileChangeType",
    "FileExists",
    "FileIsADirectory",
    "FileNotADirectory",
    "FileNotFound",
    "FileStat",
    "FileSystemError",
    "FileType",
    "InvalidAddress",
    "NoPermissions",
    "NotFound",
    "Unavailable",
]
