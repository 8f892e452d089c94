"""
Feed message parsing.

Each chunk from the TV feed is one JSON object of the form

    {"t": "featured", "d": {...snapshot...}}
    {"t": "fen",      "d": {"fen": "... w", "lm": "e2e4", "wc": 37, "bc": 30}}

parse_message() turns a chunk into a FeatureMessage or UpdateMessage, or raises
ParseError. Callers treat every ParseError as a chunk to drop: chunk
boundaries can split an object, and the feed occasionally carries tags this
viewer does not display.
"""

from __future__ import annotations

import json
from typing import Any, Literal

from chesstv.board import MalformedPositionError, decode_position
from chesstv.events import (
    COLORS,
    Color,
    FeatureMessage,
    FeedMessage,
    PlayerIdentity,
    PlayerState,
    UpdateMessage,
)

ParseErrorKind = Literal["json", "domain"]

FEATURE_TAGS = frozenset({"featured", "Feature"})
UPDATE_TAGS = frozenset({"fen", "Fen"})

# Update positions end in " w" / " b" (side to move), which the board ignores.
SUFFIX_LENGTH = 2


class ParseError(Exception):
    """Raised when a chunk is not a message this viewer understands.

    kind is "json" for undecodable / partial chunks and "domain" for
    well-formed JSON that does not describe a valid feed message.
    """

    def __init__(self, kind: ParseErrorKind, message: str) -> None:
        self.kind = kind
        super().__init__(f"[{kind}] {message}")


def parse_message(raw: bytes | str) -> FeedMessage:
    """Parse one feed chunk into a typed message."""
    try:
        obj = json.loads(raw)
    except ValueError as exc:  # JSONDecodeError and UnicodeDecodeError
        raise ParseError("json", f"not a JSON document: {exc}") from exc

    if not isinstance(obj, dict):
        raise ParseError("domain", f"expected a JSON object, got {type(obj).__name__}")

    tag = obj.get("t")
    if not isinstance(tag, str) or tag not in FEATURE_TAGS | UPDATE_TAGS:
        raise ParseError("domain", f"unknown message tag {tag!r}")

    payload = _require(obj, "d", dict, "message")
    if tag in FEATURE_TAGS:
        return _parse_feature(payload)
    return _parse_update(payload)


# --------------------------------------------------------------------------- #
# Payloads                                                                     #
# --------------------------------------------------------------------------- #

def _parse_feature(d: dict[str, Any]) -> FeatureMessage:
    players_raw = _require(d, "players", list, "featured")
    if len(players_raw) != 2:
        raise ParseError("domain", f"expected 2 players, got {len(players_raw)}")

    by_color: dict[Color, PlayerState] = {}
    for entry in players_raw:
        if not isinstance(entry, dict):
            raise ParseError("domain", "player entry is not an object")
        player = _parse_player(entry)
        if player.color in by_color:
            raise ParseError("domain", f"both players declare color {player.color!r}")
        by_color[player.color] = player

    return FeatureMessage(
        id=_require(d, "id", str, "featured"),
        orientation=_color(d, "featured"),
        white=by_color["white"],
        black=by_color["black"],
        position=_position(_require(d, "fen", str, "featured")),
    )


def _parse_player(entry: dict[str, Any]) -> PlayerState:
    user = _require(entry, "user", dict, "player")
    title = user.get("title")
    if title is not None and not isinstance(title, str):
        raise ParseError("domain", f"user.title must be a string, got {title!r}")

    return PlayerState(
        identity=PlayerIdentity(
            name=_require(user, "name", str, "user"),
            id=_require(user, "id", str, "user"),
            title=title,
        ),
        color=_color(entry, "player", key="color"),
        rating=_integer(entry, "rating", "player"),
        seconds=_integer(entry, "seconds", "player"),
    )


def _parse_update(d: dict[str, Any]) -> UpdateMessage:
    fen = _require(d, "fen", str, "fen")
    if len(fen) < SUFFIX_LENGTH:
        raise ParseError("domain", f"position {fen!r} is shorter than its side-to-move suffix")

    return UpdateMessage(
        position=_position(fen[:-SUFFIX_LENGTH]),
        last_move=_require(d, "lm", str, "fen"),
        white_seconds=_integer(d, "wc", "fen"),
        black_seconds=_integer(d, "bc", "fen"),
    )


# --------------------------------------------------------------------------- #
# Field helpers                                                                #
# --------------------------------------------------------------------------- #

def _require(obj: dict[str, Any], key: str, expected: type, where: str) -> Any:
    if key not in obj:
        raise ParseError("domain", f"{where}: missing field {key!r}")
    value = obj[key]
    if not isinstance(value, expected):
        raise ParseError(
            "domain",
            f"{where}.{key} must be {expected.__name__}, got {type(value).__name__}",
        )
    return value


def _integer(obj: dict[str, Any], key: str, where: str) -> int:
    value = _require(obj, key, int, where)
    if isinstance(value, bool):
        raise ParseError("domain", f"{where}.{key} must be int, got bool")
    return value


def _color(obj: dict[str, Any], where: str, key: str = "orientation") -> Color:
    value = _require(obj, key, str, where)
    if value not in COLORS:
        raise ParseError("domain", f"{where}.{key} must be one of {COLORS}, got {value!r}")
    return value  # type: ignore[return-value]


def _position(position: str) -> str:
    """Reject positions the board cannot draw so they never reach the store."""
    try:
        decode_position(position)
    except MalformedPositionError as exc:
        raise ParseError("domain", str(exc)) from exc
    return position
