"""
Typed feed messages — the shared language between the parser, the state store
and the viewer loop.

The parser (feed.py) produces these. The store (state.py) consumes them.
Player entries are already sorted into white/black slots by the time a
FeatureMessage exists, so nothing downstream looks at wire order.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

Color = Literal["white", "black"]
COLORS: tuple[Color, Color] = ("white", "black")


@dataclass(frozen=True)
class PlayerIdentity:
    name: str
    id: str
    title: str | None = None  # "GM", "FM", "BOT", … ; None when untitled


@dataclass
class PlayerState:
    identity: PlayerIdentity
    color: Color
    rating: int
    seconds: int   # remaining clock time; the only field that changes mid-game


@dataclass(frozen=True)
class FeatureMessage:
    """Full snapshot sent when a new game becomes the featured game."""
    id: str
    orientation: Color
    white: PlayerState
    black: PlayerState
    position: str


@dataclass(frozen=True)
class UpdateMessage:
    """Per-ply delta: new position, last move and both clocks."""
    position: str        # side-to-move suffix already stripped
    last_move: str       # UCI, e.g. "e2e4"
    white_seconds: int
    black_seconds: int


# Union type for type-safe pattern matching in consumers
FeedMessage = FeatureMessage | UpdateMessage
