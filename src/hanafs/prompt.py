# Terminal credential prompt - CredentialPrompt backed by input()/getpass().
# Created: 2026-03-07

from __future__ import annotations

import asyncio
import getpass


class TerminalPrompt:
    """Asks for credentials on the controlling terminal.

    The blocking read runs in a worker thread so the event loop keeps
    serving other operations while the user types.
    """

    async def prompt(self, message: str, *, password: bool = False) -> str | None:
        reader = getpass.getpass if password else input
        try:
            answer = await asyncio.to_thread(reader, message)
        except EOFError:
            return None
        return answer.strip() or None
