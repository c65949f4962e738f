"""Request Executor - authenticated calls against the repository file API.

Every request carries Basic auth and the host's current CSRF token. A 403
whose ``x-csrf-token`` response header says ``required`` means the cached
token went stale: the executor refreshes it and retries exactly once. All
other responses, including a second rejection, are returned untouched for the
caller to pass through the error mapper.

Created: 2026-03-04
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import httpx

from hanafs.config import Settings, get_settings
from hanafs.errors import Unavailable
from hanafs.remote.address import ResolvedAddress, ResourceAddress
from hanafs.remote.credentials import Credential, CredentialStore
from hanafs.remote.csrf import CSRF_HEADER, CsrfTokenManager

logger = logging.getLogger(__name__)


def is_token_rejection(response: httpx.Response) -> bool:
    """True for a 403 carrying ``x-csrf-token: required`` (any case)."""
    if response.status_code != 403:
        return False
    return response.headers.get(CSRF_HEADER, "").lower() == "required"


class RequestExecutor:
    """Issues authenticated HTTP requests with one CSRF-refresh retry.

    One ``httpx.AsyncClient`` is kept for the executor's lifetime so that the
    session cookies the server binds its tokens to are sent back on every
    call. Redirects are never followed.
    """

    def __init__(
        self,
        credentials: CredentialStore,
        settings: Settings | None = None,
        *,
        client: httpx.AsyncClient | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.settings = settings or get_settings()
        self.credentials = credentials
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=self.settings.request_timeout,
            verify=self.settings.verify_tls,
            follow_redirects=False,
            transport=transport,
        )
        self.tokens = CsrfTokenManager(self._client, self.settings)

    # -- addressing --

    def location_for(self, resource: ResourceAddress) -> str:
        """Host-local absolute server path of a resource."""
        root = self.settings.repository_root.rstrip("/")
        if resource.is_root:
            return root
        return root + quote(resource.path)

    def url_for(self, resource: ResourceAddress) -> str:
        return f"{self.settings.transport_scheme}://{resource.host}{self.location_for(resource)}"

    # -- requests --

    async def execute(
        self,
        address: ResolvedAddress,
        method: str,
        *,
        resource: ResourceAddress | None = None,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        content: bytes | None = None,
        json: Any = None,
    ) -> httpx.Response:
        """Send one request for ``address``, retrying once on token rejection.

        ``resource`` overrides the target when the request goes to a related
        path (the parent collection for rename and mkdir); credentials still
        come from ``address``.
        """
        target = resource or address.resource
        credential = await self.credentials.resolve_credential(
            address.host, address.username, address.password
        )
        url = self.url_for(target)
        request_kwargs: dict[str, Any] = {
            "params": params,
            "content": content,
            "json": json,
        }

        response = await self._send(method, url, target.host, credential, headers, request_kwargs)
        if is_token_rejection(response):
            logger.info("CSRF token rejected by %s, refreshing and retrying", target.host)
            self.tokens.invalidate(target.host)
            response = await self._send(
                method,
                url,
                target.host,
                credential,
                headers,
                request_kwargs,
                force_refresh=True,
            )
            if is_token_rejection(response):
                logger.warning("CSRF token rejected again by %s, giving up", target.host)
        return response

    async def _send(
        self,
        method: str,
        url: str,
        host: str,
        credential: Credential,
        extra_headers: dict[str, str] | None,
        request_kwargs: dict[str, Any],
        *,
        force_refresh: bool = False,
    ) -> httpx.Response:
        token = await self.tokens.get_token(host, credential, force_refresh=force_refresh)
        headers = {
            "Authorization": credential.authorization,
            CSRF_HEADER: token,
        }
        if extra_headers:
            headers.update(extra_headers)

        logger.debug("%s %s", method, url)
        try:
            return await self._client.request(method, url, headers=headers, **request_kwargs)
        except httpx.TransportError as e:
            raise Unavailable(f"{method} {url} failed: {e}") from e

    # -- lifecycle --

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> RequestExecutor:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.aclose()
