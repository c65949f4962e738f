# Address resolution - scheme://[user[:password]@]host/absolute/path.
# Created: 2026-03-02

from __future__ import annotations

import posixpath
from dataclasses import dataclass
from urllib.parse import unquote, urlsplit

from hanafs.errors import InvalidAddress


@dataclass(frozen=True)
class ResourceAddress:
    """Host and normalized remote path targeted by one operation."""

    host: str
    path: str

    @property
    def name(self) -> str:
        return posixpath.basename(self.path)

    @property
    def parent(self) -> ResourceAddress:
        return ResourceAddress(self.host, posixpath.dirname(self.path))

    @property
    def is_root(self) -> bool:
        return self.path == "/"


@dataclass(frozen=True)
class ResolvedAddress:
    """An address split into its resource and any embedded credentials."""

    host: str
    path: str
    username: str | None = None
    password: str | None = None

    @property
    def resource(self) -> ResourceAddress:
        return ResourceAddress(self.host, self.path)

    def __repr__(self) -> str:
        # Keep embedded passwords out of logs and tracebacks.
        secret = "***" if self.password else None
        return (
            f"ResolvedAddress(host={self.host!r}, path={self.path!r}, "
            f"username={self.username!r}, password={secret!r})"
        )


def normalize_path(path: str) -> str:
    """Percent-decode and normalize a remote path to ``/a/b`` form.

    Empty paths map to the repository root ``/``. ``..`` never climbs above
    the root.
    """
    segments: list[str] = []
    for segment in unquote(path).split("/"):
        if segment in ("", "."):
            continue
        if segment == "..":
            if segments:
                segments.pop()
            continue
        segments.append(segment)
    return "/" + "/".join(segments)


def resolve_address(address: str) -> ResolvedAddress:
    """Decompose an address into host, remote path and embedded credentials.

    Raises:
        InvalidAddress: if the address is not a network locator with a host.
    """
    try:
        parts = urlsplit(address)
        port = parts.port
    except ValueError as e:
        raise InvalidAddress(f"Cannot parse address: {e}", address) from e

    hostname = parts.hostname
    if not parts.scheme or not hostname:
        raise InvalidAddress(f"Address has no host: {address!r}", address)

    if ":" in hostname:
        hostname = f"[{hostname}]"
    host = f"{hostname}:{port}" if port is not None else hostname

    username = unquote(parts.username) if parts.username else None
    password = unquote(parts.password) if parts.password else None

    return ResolvedAddress(
        host=host,
        path=normalize_path(parts.path),
        username=username,
        password=password,
    )
