"""
Viewer loop — the core orchestrator.

Pulls chunks from the feed, parses them, applies them to the GameStore and
redraws. Between chunks it gives the stop signal a short, bounded wait.

    running ──chunk──▶ parse ─ok─▶ apply ▶ render ──▶ running
                         └─ParseError─▶ drop ────────▶ running
    running ──stop requested / feed ended──▶ stopped

Transport and screen errors are not caught here; they end the loop and
propagate to the caller, which owns teardown.
"""

from __future__ import annotations

import logging
from typing import AsyncIterator, Protocol

from chesstv.config import DisplayConfig
from chesstv.events import FeatureMessage, FeedMessage
from chesstv.feed import ParseError, parse_message
from chesstv.state import GameStore, GameView

logger = logging.getLogger(__name__)


class Renderer(Protocol):
    def render(self, view: GameView) -> object: ...


class StopPoller(Protocol):
    async def poll(self, timeout: float) -> bool: ...


def handle_chunk(store: GameStore, renderer: Renderer, chunk: bytes) -> FeedMessage | None:
    """
    Parse one chunk and, if it is a usable message, apply and draw it.

    Returns the applied message, or None when the chunk was dropped.
    """
    if not chunk:  # keep-alive
        return None
    try:
        message = parse_message(chunk)
    except ParseError as exc:
        logger.debug("Dropping %s chunk: %s", exc.kind, exc)
        return None

    if isinstance(message, FeatureMessage):
        logger.info(
            "Featured game %s: %s (white) vs %s (black)",
            message.id,
            message.white.identity.name,
            message.black.identity.name,
        )

    if not store.apply(message):
        return None
    if store.view is not None:
        renderer.render(store.view)
    return message


async def run_viewer(
    chunks: AsyncIterator[bytes],
    renderer: Renderer,
    stop: StopPoller,
    *,
    store: GameStore | None = None,
    poll_interval: float = DisplayConfig.poll_interval,
) -> GameStore:
    """
    Run until a stop is requested or the feed ends. Returns the final store.

    Messages are applied strictly in arrival order; each one is fully drawn
    before the next chunk is awaited.
    """
    store = store if store is not None else GameStore()

    async for chunk in chunks:
        handle_chunk(store, renderer, chunk)
        if await stop.poll(poll_interval):
            logger.info("Stop requested; leaving viewer loop")
            break
    else:
        logger.info("Feed ended; leaving viewer loop")

    return store
