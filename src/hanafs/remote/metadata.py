"""Metadata Mapper - repository JSON descriptors to stat results and listings.

The metadata response of the file API does not reliably carry size or
creation/modification times, so ``to_stat`` reports zero for all three.
Servers that do send ``LocalTimeStamp`` can opt in to having it used via
``use_server_timestamps``.

Created: 2026-03-04
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from hanafs.errors import Unavailable
from hanafs.protocol import FileStat, FileType


class RemoteChild(BaseModel):
    """One entry of a directory's ``Children`` array."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str = Field(alias="Name")
    directory: bool = Field(default=False, alias="Directory")
    location: str | None = Field(default=None, alias="Location")

    @property
    def type(self) -> FileType:
        return FileType.DIRECTORY if self.directory else FileType.FILE


class RemoteEntry(BaseModel):
    """Descriptor returned by ``?parts=meta`` and by directory reads."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str = Field(default="", alias="Name")
    directory: bool = Field(default=False, alias="Directory")
    children: list[RemoteChild] | None = Field(default=None, alias="Children")
    location: str | None = Field(default=None, alias="Location")
    content_type: str | None = Field(default=None, alias="ContentType")
    local_timestamp: int | None = Field(default=None, alias="LocalTimeStamp")
    etag: str | None = Field(default=None, alias="ETag")

    @property
    def type(self) -> FileType:
        return FileType.DIRECTORY if self.directory else FileType.FILE


def parse_entry(payload: Any) -> RemoteEntry:
    """Validate a decoded JSON body as a descriptor."""
    try:
        return RemoteEntry.model_validate(payload)
    except ValidationError as e:
        raise Unavailable(f"Unexpected metadata from server: {e.error_count()} error(s)") from e


def to_stat(descriptor: RemoteEntry, *, use_server_timestamps: bool = False) -> FileStat:
    timestamp = 0
    if use_server_timestamps and descriptor.local_timestamp:
        timestamp = descriptor.local_timestamp
    return FileStat(type=descriptor.type, size=0, ctime=timestamp, mtime=timestamp)


def to_entries(descriptor: RemoteEntry) -> list[tuple[str, FileType]]:
    """List children as (name, kind) pairs, in the order the server sent them."""
    return [(child.name, child.type) for child in descriptor.children or []]
