"""
chesstv — live Lichess TV in the terminal.

Wires together:  config → logging → feed transport → viewer loop → screen

Press Ctrl+C to quit (a second Ctrl+C force-quits).
"""

from __future__ import annotations

import asyncio
import logging
import logging.handlers
import sys
from contextlib import aclosing
from pathlib import Path

from chesstv.cli.display import Screen, console
from chesstv.cli.stop import StopSignal
from chesstv.config import Config, load_config
from chesstv.renderer import BoardRenderer
from chesstv.transport import FeedConnectionError, stream_feed
from chesstv.viewer import run_viewer

logger = logging.getLogger("chesstv")


def _setup_logging(config: Config) -> None:
    # File only: the alternate screen owns the terminal while the viewer runs.
    log_path = config.log_path
    log_path.parent.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        level=config.logging.level,
        format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
        handlers=[
            logging.handlers.RotatingFileHandler(
                log_path, maxBytes=2 * 1024 * 1024, backupCount=3,  # 2 MB × 3 files
                encoding="utf-8",
            ),
        ],
    )


async def _main(config: Config) -> None:
    stop = StopSignal().install()
    try:
        with Screen(config.display) as screen:
            renderer = BoardRenderer(screen, config.display)
            async with aclosing(stream_feed(config.feed.url, timeout=config.feed.timeout)) as chunks:
                await run_viewer(
                    chunks,
                    renderer,
                    stop,
                    poll_interval=config.display.poll_interval,
                )
    finally:
        stop.close()


def main() -> None:
    try:
        config = load_config(Path("config.yaml"))
    except ValueError as exc:
        console.print(f"[red]Config error:[/] {exc}")
        sys.exit(1)

    _setup_logging(config)

    try:
        asyncio.run(_main(config))
    except FeedConnectionError as exc:
        logger.error("Feed connection failed: %s", exc)
        console.print(f"[red]Feed error:[/] {exc}")
        sys.exit(1)
    except KeyboardInterrupt:
        # Second Ctrl+C: the screen has already been restored on the way out.
        logger.info("Force-quit by user")
        sys.exit(130)
    except Exception as exc:
        logger.exception("Viewer crashed")
        console.print(f"[red]Error:[/] {exc}")
        sys.exit(1)


if __name__ == "__main__":
    main()
