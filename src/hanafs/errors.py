# Filesystem error taxonomy shared by the remote and in-memory providers.
# Created: 2026-03-02

from __future__ import annotations


class FileSystemError(Exception):
    """Base class for every error an operation can surface.

    ``code`` is a stable identifier hosts can switch on; ``address`` is the
    address the operation was invoked with, when known.
    """

    code = "Unknown"

    def __init__(self, message: str = "", address: str | None = None):
        self.address = address
        if not message:
            message = f"{self.code}: {address}" if address else self.code
        super().__init__(message)


class InvalidAddress(FileSystemError):
    code = "InvalidAddress"


class Unavailable(FileSystemError):
    code = "Unavailable"


class FileNotFound(FileSystemError):
    code = "FileNotFound"


# Name used by the status mapping table.
NotFound = FileNotFound


class NoPermissions(FileSystemError):
    code = "NoPermissions"


class FileIsADirectory(FileSystemError):
    code = "FileIsADirectory"


class FileNotADirectory(FileSystemError):
    code = "FileNotADirectory"


class FileExists(FileSystemError):
    code = "FileExists"
