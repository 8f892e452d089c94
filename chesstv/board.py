"""
Position string decoding.

Turns the piece-placement field of a FEN ("rnbqkbnr/pppppppp/8/...") into an
8x8 grid of BoardCell values. Piece letters are resolved through python-chess
so the accepted alphabet is exactly the six standard piece kinds; no legality
checks are made.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

import chess

from chesstv.events import Color

BOARD_SIZE = 8
RANK_SEPARATOR = "/"


class MalformedPositionError(ValueError):
    """Raised when a position string cannot be decoded into an 8x8 grid."""


@dataclass(frozen=True)
class BoardCell:
    glyph: str                          # "" for an empty square
    piece_color: Color | None = None    # None for an empty square
    square_color: Color | None = None   # assigned by the renderer

    def on_square(self, square_color: Color) -> BoardCell:
        return replace(self, square_color=square_color)


EMPTY = BoardCell(glyph="")


def piece_cell(symbol: str) -> BoardCell:
    """Map one FEN piece letter to an occupied cell (uppercase = white)."""
    try:
        piece = chess.Piece.from_symbol(symbol)
    except ValueError as exc:
        raise MalformedPositionError(f"unrecognised piece letter {symbol!r}") from exc
    # Solid glyphs for both sides; the colour is drawn, not implied by the outline.
    glyph = chess.UNICODE_PIECE_SYMBOLS[piece.symbol().lower()]
    return BoardCell(glyph=glyph, piece_color="white" if piece.color == chess.WHITE else "black")


def decode_rank(segment: str) -> list[BoardCell]:
    row: list[BoardCell] = []
    for ch in segment:
        if len(row) >= BOARD_SIZE:
            break
        if ch.isascii() and ch.isdigit():
            row.extend([EMPTY] * min(int(ch), BOARD_SIZE - len(row)))
        else:
            row.append(piece_cell(ch))

    if len(row) < BOARD_SIZE:
        raise MalformedPositionError(
            f"rank {segment!r} covers {len(row)} files, expected {BOARD_SIZE}"
        )
    return row


def decode_position(position: str) -> list[list[BoardCell]]:
    """
    Decode a piece-placement string into 8 rows of 8 cells.

    Rows come back in input order, so the first rank segment is row 0.

    Raises:
        MalformedPositionError: wrong rank count, a short rank, or an
            unrecognised piece letter.
    """
    segments = position.strip().split(RANK_SEPARATOR)
    if len(segments) != BOARD_SIZE:
        raise MalformedPositionError(
            f"expected {BOARD_SIZE} ranks, got {len(segments)} in {position!r}"
        )
    return [decode_rank(segment) for segment in segments]
