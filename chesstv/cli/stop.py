"""
Ctrl+C handling for the viewer loop.

StopSignal turns SIGINT/SIGTERM into an asyncio.Event so the loop can ask
"was stop requested?" once per cycle instead of being torn down mid-render.
"""

from __future__ import annotations

import asyncio
import signal
from typing import Any, Callable

_Handler = Callable[[int, Any], Any] | int | None


class StopSignal:
    def __init__(self) -> None:
        self._event = asyncio.Event()
        self._loop: asyncio.AbstractEventLoop | None = None
        self._original: dict[int, _Handler] = {}

    def request(self) -> None:
        self._event.set()

    def install(self, signals: tuple[int, ...] = (signal.SIGINT, signal.SIGTERM)) -> StopSignal:
        """Route the given signals to request(). Must run inside the event loop."""
        self._loop = asyncio.get_running_loop()
        for sig in signals:
            self._original[sig] = signal.getsignal(sig)
            signal.signal(sig, self._on_signal)
        return self

    def close(self) -> None:
        """Restore the handlers that were active before install()."""
        for sig, handler in self._original.items():
            signal.signal(sig, handler)
        self._original.clear()

    def _on_signal(self, sig: int, frame: object) -> None:
        # Schedule the event set on the event loop thread (safe on Windows)
        if self._loop is not None:
            self._loop.call_soon_threadsafe(self._event.set)
        else:
            self._event.set()
        # Restore the original handler so a second Ctrl+C force-quits
        if sig in self._original:
            signal.signal(sig, self._original.pop(sig))

    async def poll(self, timeout: float) -> bool:
        """Wait up to timeout seconds; True if a stop has been requested."""
        if self._event.is_set():
            return True
        try:
            await asyncio.wait_for(self._event.wait(), timeout)
        except asyncio.TimeoutError:
            return False
        return True
