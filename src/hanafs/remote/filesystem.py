"""Remote filesystem - file operations over the repository file API.

Each operation resolves its address, sends one request through the
``RequestExecutor`` and maps failures with ``raise_for_status``. Nothing is
cached between calls: every stat, listing and read goes to the server.

Created: 2026-03-05
"""

from __future__ import annotations

import dataclasses
import logging
from typing import Any

import httpx

from hanafs.config import Settings, get_settings
from hanafs.errors import (
    FileExists,
    FileIsADirectory,
    FileNotADirectory,
    FileNotFound,
    NoPermissions,
    Unavailable,
)
from hanafs.protocol import (
    ChangeListener,
    CredentialPrompt,
    Disposable,
    FileStat,
    FileType,
)
from hanafs.remote.address import ResolvedAddress, resolve_address
from hanafs.remote.content_types import content_type_for
from hanafs.remote.credentials import CredentialStore
from hanafs.remote.errors import raise_for_status
from hanafs.remote.executor import RequestExecutor
from hanafs.remote.metadata import parse_entry, to_entries, to_stat

logger = logging.getLogger(__name__)

MOVE_OPTIONS = "move,no-overwrite"


class RemoteFileSystem:
    """Filesystem provider backed by a HANA repository.

    Credential and token state lives in the ``CredentialStore`` and the
    executor's token manager; both are shared by every operation on this
    instance, keyed by host.
    """

    def __init__(
        self,
        credentials: CredentialStore | None = None,
        settings: Settings | None = None,
        *,
        prompt: CredentialPrompt | None = None,
        executor: RequestExecutor | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.settings = settings or get_settings()
        self.credentials = credentials or CredentialStore(prompt)
        self.executor = executor or RequestExecutor(
            self.credentials, self.settings, transport=transport
        )

    # -- metadata --

    async def stat(self, address: str) -> FileStat:
        resolved = resolve_address(address)
        logger.debug("stat %s", resolved.resource)

        response = await self.executor.execute(resolved, "GET", params={"parts": "meta"})
        raise_for_status(response, address)

        entry = parse_entry(_json_body(response, address))
        return to_stat(entry, use_server_timestamps=self.settings.use_server_timestamps)

    async def read_directory(self, address: str) -> list[tuple[str, FileType]]:
        resolved = resolve_address(address)
        logger.debug("list %s", resolved.resource)

        response = await self.executor.execute(resolved, "GET", params={"depth": "1"})
        raise_for_status(response, address)

        try:
            payload = response.json()
        except ValueError as e:
            raise FileNotADirectory(address=address) from e
        if not isinstance(payload, dict):
            raise FileNotADirectory(address=address)
        entry = parse_entry(payload)
        if not entry.directory:
            raise FileNotADirectory(address=address)
        return to_entries(entry)

    # -- content --

    async def read_file(self, address: str) -> bytes:
        """Return the body of ``GET ?depth=1`` unchanged.

        The response does not say whether the resource is a file, so reading
        a directory returns its JSON listing as bytes rather than raising
        ``FileIsADirectory``. A stored JSON file with ``"Directory": true``
        would look the same. Call ``stat`` first when the type matters.
        """
        resolved = resolve_address(address)
        logger.debug("read %s", resolved.resource)

        response = await self.executor.execute(resolved, "GET", params={"depth": "1"})
        raise_for_status(response, address)
        return response.content

    async def write_file(
        self,
        address: str,
        content: bytes,
        *,
        create: bool = True,
        overwrite: bool = True,
    ) -> None:
        """Upload ``content`` with a PUT.

        The server decides whether the PUT creates or overwrites; ``create``
        and ``overwrite`` are only checked client-side when the
        ``check_write_flags`` setting is on.
        """
        resolved = resolve_address(address)
        if self.settings.check_write_flags:
            await self._check_write_flags(address, create=create, overwrite=overwrite)

        content_type = content_type_for(resolved.path)
        logger.debug("write %s (%d bytes, %s)", resolved.resource, len(content), content_type)

        response = await self.executor.execute(
            resolved,
            "PUT",
            headers={"Content-Type": content_type},
            content=content,
        )
        raise_for_status(response, address)

    async def _check_write_flags(self, address: str, *, create: bool, overwrite: bool) -> None:
        try:
            existing: FileStat | None = await self.stat(address)
        except FileNotFound:
            existing = None

        if existing is not None and existing.type == FileType.DIRECTORY:
            raise FileIsADirectory(address=address)
        if existing is None and not create:
            raise FileNotFound(address=address)
        if existing is not None and create and not overwrite:
            raise FileExists(address=address)

    # -- files and folders --

    async def rename(self, old: str, new: str, *, overwrite: bool = False) -> None:
        """Move ``old`` to ``new`` by POSTing to the new parent collection."""
        source = resolve_address(old)
        target = resolve_address(new)
        if source.host != target.host:
            raise NoPermissions(f"Cannot move between hosts {source.host} and {target.host}", new)
        if source.resource.is_root or target.resource.is_root:
            raise NoPermissions("Cannot move the repository root", old)

        logger.debug("rename %s -> %s", source.resource, target.resource)
        body: dict[str, Any] = {
            "Location": self.executor.location_for(source.resource),
            "Target": target.resource.name,
        }
        response = await self.executor.execute(
            _with_credentials(target, source),
            "POST",
            resource=target.resource.parent,
            headers={"X-Create-Options": "move" if overwrite else MOVE_OPTIONS},
            json=body,
        )
        raise_for_status(response, new)

    async def delete(self, address: str) -> None:
        resolved = resolve_address(address)
        logger.debug("delete %s", resolved.resource)

        response = await self.executor.execute(resolved, "DELETE")
        raise_for_status(response, address)

    async def create_directory(self, address: str) -> None:
        resolved = resolve_address(address)
        if resolved.resource.is_root:
            raise FileExists(address=address)
        logger.debug("mkdir %s", resolved.resource)

        response = await self.executor.execute(
            resolved,
            "POST",
            resource=resolved.resource.parent,
            json={"Name": resolved.resource.name, "Directory": True},
        )
        raise_for_status(response, address)

    # -- events --

    def watch(self, address: str) -> Disposable:
        # The file API has no change feed.
        return Disposable()

    def on_did_change_file(self, listener: ChangeListener) -> Disposable:
        return Disposable()

    # -- lifecycle --

    async def aclose(self) -> None:
        await self.executor.aclose()

    async def __aenter__(self) -> RemoteFileSystem:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.aclose()


def _json_body(response: httpx.Response, address: str) -> Any:
    try:
        return response.json()
    except ValueError as e:
        raise Unavailable("Server returned a non-JSON metadata response", address) from e


def _with_credentials(address: ResolvedAddress, fallback: ResolvedAddress) -> ResolvedAddress:
    """Use ``fallback``'s embedded credentials when ``address`` carries none."""
    if address.username and address.password:
        return address
    return dataclasses.replace(address, username=fallback.username, password=fallback.password)
