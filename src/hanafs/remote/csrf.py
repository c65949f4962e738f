# CSRF Token Manager - per-host anti-forgery token cache with reactive refresh.
# Created: 2026-03-03

from __future__ import annotations

import logging
from enum import Enum

import httpx

from hanafs.config import Settings, get_settings
from hanafs.errors import NoPermissions, Unavailable
from hanafs.remote.credentials import Credential
from hanafs.remote.errors import raise_for_status

logger = logging.getLogger(__name__)

CSRF_HEADER = "x-csrf-token"


class TokenState(str, Enum):
    """Token lifecycle for one host."""

    NO_TOKEN = "no_token"
    FETCHING = "fetching"
    VALID = "valid"
    REJECTED = "rejected"


class CsrfTokenManager:
    """Fetches and caches the CSRF token for each host.

    The server never advertises token expiry, so there is no TTL: a token
    stays in use until a request comes back with a token-required rejection,
    at which point the executor calls ``invalidate()`` and asks for a forced
    refresh. The token value itself lives on the ``Credential`` it was issued
    for; this class tracks the per-host state.
    """

    def __init__(self, client: httpx.AsyncClient, settings: Settings | None = None):
        self._client = client
        self._settings = settings or get_settings()
        self._states: dict[str, TokenState] = {}

    def state(self, host: str) -> TokenState:
        return self._states.get(host, TokenState.NO_TOKEN)

    def invalidate(self, host: str) -> None:
        """Mark the host's token as rejected so the next use refetches it."""
        self._states[host] = TokenState.REJECTED

    def needs_refresh(self, host: str, credential: Credential, force: bool = False) -> bool:
        if force:
            return True
        if self.state(host) in (TokenState.NO_TOKEN, TokenState.REJECTED):
            return True
        return not credential.has_real_token

    async def get_token(
        self, host: str, credential: Credential, force_refresh: bool = False
    ) -> str:
        """Return a usable token for ``host``, fetching one when required.

        Raises:
            FileSystemError: the mapped error when the server does not issue
                a token. No empty-token fallback is ever cached.
        """
        if not self.needs_refresh(host, credential, force_refresh):
            return credential.csrf_token  # type: ignore[return-value]
        return await self._fetch(host, credential)

    async def _fetch(self, host: str, credential: Credential) -> str:
        url = f"{self._settings.transport_scheme}://{host}{self._settings.repository_root}"
        self._states[host] = TokenState.FETCHING
        logger.debug("Fetching CSRF token from %s", host)

        try:
            response = await self._client.get(
                url,
                headers={
                    "Authorization": credential.authorization,
                    CSRF_HEADER: "fetch",
                },
                follow_redirects=False,
            )
        except httpx.TransportError as e:
            self._states[host] = TokenState.REJECTED
            raise Unavailable(f"Cannot reach {host}: {e}") from e

        token = response.headers.get(CSRF_HEADER)
        if not token:
            self._states[host] = TokenState.REJECTED
            credential.csrf_token = None
            raise_for_status(response, url)
            logger.warning("%s answered %d without a CSRF token", host, response.status_code)
            raise NoPermissions(f"Server did not issue a CSRF token for {host}")

        credential.csrf_token = token
        self._states[host] = TokenState.VALID
        logger.debug("CSRF token for %s refreshed", host)
        return token
