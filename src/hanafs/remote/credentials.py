# Credential Store - host-keyed credentials seeded from addresses or a prompt.
# Created: 2026-03-03

from __future__ import annotations

import base64
import logging
from dataclasses import dataclass, field

from hanafs.errors import Unavailable
from hanafs.protocol import CredentialPrompt

logger = logging.getLogger(__name__)

# Token value the server hands out before a real session token exists.
UNSAFE_TOKEN = "unsafe"


@dataclass
class Credential:
    """Basic-auth credential for one host plus its cached CSRF token."""

    username: str
    password: str = field(repr=False)
    csrf_token: str | None = field(default=None, repr=False)

    @property
    def authorization(self) -> str:
        """Value for the ``Authorization`` header."""
        raw = f"{self.username}:{self.password}".encode()
        return f"Basic {base64.b64encode(raw).decode('ascii')}"

    @property
    def has_real_token(self) -> bool:
        return bool(self.csrf_token) and self.csrf_token != UNSAFE_TOKEN


class CredentialStore:
    """Process-lifetime cache of credentials keyed by host.

    Credentials come from the address (``user:pass@host``) when both parts
    are embedded, otherwise from the prompt collaborator. At most one
    credential is kept per host; a later prompt overwrites the earlier one.
    """

    def __init__(self, prompt: CredentialPrompt | None = None):
        self._prompt = prompt
        self._credentials: dict[str, Credential] = {}

    def get(self, host: str) -> Credential | None:
        return self._credentials.get(host)

    def hosts(self) -> list[str]:
        return list(self._credentials)

    def forget(self, host: str) -> bool:
        """Drop the cached credential for a host. Returns True if one existed."""
        return self._credentials.pop(host, None) is not None

    async def resolve_credential(
        self,
        host: str,
        username: str | None = None,
        password: str | None = None,
    ) -> Credential:
        """Return the credential for ``host``, creating it on first access.

        Raises:
            Unavailable: if no credential is cached, none is embedded in the
                address, and the prompt yields nothing.
        """
        cached = self._credentials.get(host)
        if cached is not None:
            return cached

        if username and password:
            credential = Credential(username=username, password=password)
            logger.debug("Using credential embedded in address for %s", host)
        else:
            credential = await self._ask(host)

        self._credentials[host] = credential
        return credential

    async def _ask(self, host: str) -> Credential:
        if self._prompt is None:
            raise Unavailable("You must provide credential")

        user = await self._prompt.prompt(f"Username for {host}: ")
        password = await self._prompt.prompt(f"Password for {host}: ", password=True)
        if not user or not password:
            logger.warning("Credential prompt for %s was cancelled", host)
            raise Unavailable("You must provide credential")

        logger.info("Stored credential for %s (user %s)", host, user)
        return Credential(username=user, password=password)
