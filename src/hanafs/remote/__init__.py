"""Client for the HANA repository file API."""

from hanafs.remote.address import ResolvedAddress, ResourceAddress, resolve_address
from hanafs.remote.credentials import Credential, CredentialStore
from hanafs.remote.csrf import CsrfTokenManager, TokenState
from hanafs.remote.executor import RequestExecutor
from hanafs.remote.filesystem import RemoteFileSystem

__all__ = [
    "Credential",
    "CredentialStore",
    "CsrfTokenManager",
    "RemoteFileSystem",
    "RequestExecutor",
    "ResolvedAddress",
    "ResourceAddress",
    "TokenState",
    "resolve_address",
]
