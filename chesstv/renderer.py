"""
Frame building for the board view.

Everything here is pure: a GameView goes in, a Frame (panel texts plus an 8x8
grid of coloured cells) comes out. The terminal side (cli/display.py) only
turns a Frame into Rich renderables. BoardRenderer ties the two together.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from chesstv.board import BOARD_SIZE, BoardCell, decode_position
from chesstv.config import DisplayConfig
from chesstv.events import Color, PlayerState
from chesstv.state import GameView

FILE_LABELS = ("A", "B", "C", "D", "E", "F", "G", "H")
# First rank segment of a position is the 8th rank.
RANK_LABELS = tuple(str(BOARD_SIZE - i) for i in range(BOARD_SIZE))

PANEL_LINES = 1
HEADER_LINES = 2   # file letters plus a blank spacer line


@dataclass(frozen=True)
class Frame:
    top_name: str
    top_clock: str
    bottom_name: str
    bottom_clock: str
    cells: list[list[BoardCell]]
    rank_labels: tuple[str, ...] = RANK_LABELS
    file_labels: tuple[str, ...] = FILE_LABELS


@dataclass(frozen=True)
class ScreenLayout:
    left: int            # blank columns before the content column
    top: int             # blank lines above the top panel
    width: int           # content column width
    row_height: int
    column_width: int

    @property
    def board_height(self) -> int:
        return HEADER_LINES + BOARD_SIZE * self.row_height

    @property
    def height(self) -> int:
        return PANEL_LINES + self.board_height + PANEL_LINES


class Screen(Protocol):
    @property
    def size(self) -> tuple[int, int]: ...

    def draw(self, frame: Frame, layout: ScreenLayout) -> None: ...


def square_color(row: int, col: int) -> Color:
    """Checkerboard colour of a square; the top-left square is light."""
    # Row 0 is rank 8 and col 0 is file a, so (0, 0) is a8, a light square.
    return "white" if (row + col) % 2 == 0 else "black"


def identity_text(player: PlayerState) -> str:
    title = player.identity.title or ""
    return f"{title}:{player.identity.name} ({player.rating})"


def clock_text(player: PlayerState) -> str:
    return f"Time:{player.seconds}s"


def colour_board(cells: list[list[BoardCell]]) -> list[list[BoardCell]]:
    return [
        [cell.on_square(square_color(row, col)) for col, cell in enumerate(rank)]
        for row, rank in enumerate(cells)
    ]


def build_frame(view: GameView) -> Frame:
    """
    Build the frame for a view. Black sits on top, next to ranks 8 and 7.

    Raises:
        MalformedPositionError: never for views built from parsed messages,
            since the parser already rejects undrawable positions.
    """
    return Frame(
        top_name=identity_text(view.black),
        top_clock=clock_text(view.black),
        bottom_name=identity_text(view.white),
        bottom_clock=clock_text(view.white),
        cells=colour_board(decode_position(view.position)),
    )


def compute_layout(
    width: int,
    height: int,
    *,
    row_height: int = 2,
    column_width: int = 4,
) -> ScreenLayout:
    """Centre the fixed-size content column (rank labels + 8 files) in the terminal."""
    content_width = (BOARD_SIZE + 1) * column_width
    content_height = 2 * PANEL_LINES + HEADER_LINES + BOARD_SIZE * row_height
    return ScreenLayout(
        left=max(0, (width - content_width) // 2),
        top=max(0, (height - content_height) // 2),
        width=content_width,
        row_height=row_height,
        column_width=column_width,
    )


class BoardRenderer:
    """Draws GameViews onto a Screen using a layout fixed at construction."""

    def __init__(self, screen: Screen, display: DisplayConfig | None = None) -> None:
        display = display or DisplayConfig()
        self._screen = screen
        width, height = screen.size
        self.layout = compute_layout(
            width,
            height,
            row_height=display.row_height,
            column_width=display.column_width,
        )

    def render(self, view: GameView) -> Frame:
        """Draw one frame. Screen errors propagate to the caller."""
        frame = build_frame(view)
        self._screen.draw(frame, self.layout)
        return frame
