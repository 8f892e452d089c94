"""
Lichess TV feed transport.

Opens one long-lived GET against the feed endpoint and yields its body as
newline-delimited byte chunks. The HTTP work is stdlib urllib run through
asyncio.to_thread, one blocking read at a time, so chunks arrive in order
and the event loop stays free between them.
"""

from __future__ import annotations

import asyncio
import http.client
import logging
import urllib.error
import urllib.request
from typing import IO, AsyncIterator

logger = logging.getLogger(__name__)

USER_AGENT = "chesstv/0.1"


class FeedConnectionError(Exception):
    """Raised when the feed cannot be opened or the connection drops."""

    def __init__(self, url: str, message: str) -> None:
        self.url = url
        super().__init__(f"{url}: {message}")


def _open(url: str, timeout: float | None) -> IO[bytes]:
    req = urllib.request.Request(
        url,
        headers={"Accept": "application/x-ndjson", "User-Agent": USER_AGENT},
        method="GET",
    )
    try:
        return urllib.request.urlopen(req, timeout=timeout)
    except urllib.error.HTTPError as exc:
        raise FeedConnectionError(url, f"HTTP {exc.code} {exc.reason}") from exc
    except (urllib.error.URLError, OSError) as exc:
        raise FeedConnectionError(url, f"connection failed: {exc}") from exc


def _readline(resp: IO[bytes], url: str) -> bytes:
    try:
        return resp.readline()
    except (OSError, http.client.HTTPException) as exc:
        raise FeedConnectionError(url, f"read failed: {exc}") from exc


async def stream_feed(url: str, *, timeout: float | None = None) -> AsyncIterator[bytes]:
    """
    Yield one chunk per line of the feed until the server closes it.

    Blank keep-alive lines come through as empty chunks so the consumer gets
    a turn to check for a stop request while the feed is quiet.

    Raises:
        FeedConnectionError: connect or read failure. Not retried.
    """
    resp = await asyncio.to_thread(_open, url, timeout)
    logger.info("Connected to %s", url)
    try:
        while True:
            line = await asyncio.to_thread(_readline, resp, url)
            if not line:
                logger.info("Feed %s closed by server", url)
                return
            yield line.strip()
    finally:
        resp.close()
