"""
Configuration loading from config.yaml.

Uses typed dataclasses throughout so the rest of the app gets IDE
completion and type-checker support without touching raw dicts.
The file is optional: without it every setting takes its default.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

import yaml
from rich.color import Color, ColorParseError

DEFAULT_FEED_URL = "https://lichess.org/api/tv/feed"


@dataclass
class FeedConfig:
    url: str = DEFAULT_FEED_URL
    timeout: float | None = None   # seconds for connect and each read; None waits forever


@dataclass
class DisplayConfig:
    poll_interval: float = 0.1   # seconds spent waiting for Ctrl+C per cycle
    row_height: int = 2          # terminal lines per rank
    column_width: int = 4        # terminal columns per file
    light_square: str = "rgb(238,211,172)"
    dark_square: str = "rgb(172,125,88)"
    white_piece: str = "white"
    black_piece: str = "rgb(0,0,1)"  # pure black is often remapped by terminals


@dataclass
class LoggingConfig:
    level: str = "INFO"
    file: str = "./logs/chesstv.log"


@dataclass
class Config:
    feed: FeedConfig = field(default_factory=FeedConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @property
    def log_path(self) -> Path:
        return Path(self.logging.file)


def load_config(path: str | Path = "config.yaml") -> Config:
    """
    Load and validate config.yaml.

    A missing file yields the default Config.

    Raises:
        ValueError: fields are malformed or out of range.
    """
    cfg_path = Path(path)
    if not cfg_path.exists():
        return Config()

    with cfg_path.open("r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    try:
        feed_raw = raw.get("feed") or {}
        display_raw = raw.get("display") or {}
        logging_raw = raw.get("logging") or {}

        defaults = DisplayConfig()
        config = Config(
            feed=FeedConfig(
                url=str(feed_raw.get("url", DEFAULT_FEED_URL)),
                timeout=_optional_float(feed_raw.get("timeout")),
            ),
            display=DisplayConfig(
                poll_interval=float(display_raw.get("poll_interval", defaults.poll_interval)),
                row_height=int(display_raw.get("row_height", defaults.row_height)),
                column_width=int(display_raw.get("column_width", defaults.column_width)),
                light_square=str(display_raw.get("light_square", defaults.light_square)),
                dark_square=str(display_raw.get("dark_square", defaults.dark_square)),
                white_piece=str(display_raw.get("white_piece", defaults.white_piece)),
                black_piece=str(display_raw.get("black_piece", defaults.black_piece)),
            ),
            logging=LoggingConfig(
                level=str(logging_raw.get("level", "INFO")).upper(),
                file=str(logging_raw.get("file", "./logs/chesstv.log")),
            ),
        )
    except (AttributeError, TypeError) as exc:
        raise ValueError(f"Invalid config.yaml structure: {exc}") from exc

    _validate(config)
    return config


def _validate(config: Config) -> None:
    if config.feed.timeout is not None and config.feed.timeout <= 0:
        raise ValueError("feed.timeout must be > 0")
    display = config.display
    if display.poll_interval <= 0:
        raise ValueError("display.poll_interval must be > 0")
    if display.row_height < 1:
        raise ValueError("display.row_height must be >= 1")
    if display.column_width < 3:
        raise ValueError("display.column_width must be >= 3")
    for name in ("light_square", "dark_square", "white_piece", "black_piece"):
        value = getattr(display, name)
        try:
            Color.parse(value)
        except ColorParseError as exc:
            raise ValueError(f"display.{name}: {exc}") from exc
    if not isinstance(logging.getLevelName(config.logging.level), int):
        raise ValueError(f"logging.level must be a logging level name, got '{config.logging.level}'")


def _optional_float(value: object) -> float | None:
    if value is None:
        return None
    return float(value)  # type: ignore[arg-type]
