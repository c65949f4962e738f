# Change Notifier - debounced batching of filesystem change events.
# Created: 2026-03-06

from __future__ import annotations

import asyncio
import logging

from hanafs.protocol import ChangeListener, Disposable, FileChangeEvent

logger = logging.getLogger(__name__)


class ChangeNotifier:
    """Coalesces events fired in quick succession into one batch.

    Every ``fire_soon()`` re-arms a short timer on the running event loop;
    when it expires, listeners receive everything buffered since the last
    batch as a single list. Without a running loop events are delivered
    immediately.
    """

    def __init__(self, delay: float = 0.005):
        self.delay = delay
        self._listeners: list[ChangeListener] = []
        self._buffer: list[FileChangeEvent] = []
        self._handle: asyncio.TimerHandle | None = None

    @property
    def pending(self) -> int:
        return len(self._buffer)

    def subscribe(self, listener: ChangeListener) -> Disposable:
        self._listeners.append(listener)

        def _remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return Disposable(_remove)

    def fire_soon(self, *events: FileChangeEvent) -> None:
        self._buffer.extend(events)

        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            self.flush()
            return
        self._handle = loop.call_later(self.delay, self.flush)

    def flush(self) -> None:
        """Deliver buffered events now."""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        if not self._buffer:
            return

        batch, self._buffer = self._buffer, []
        for listener in list(self._listeners):
            try:
                listener(list(batch))
            except Exception:
                logger.warning("Change listener %r failed", listener, exc_info=True)

    def close(self) -> None:
        """Cancel any pending batch and drop buffered events."""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        self._buffer.clear()
