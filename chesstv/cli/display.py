"""
Rich-based terminal screen.

This is the ONLY place where terminal output happens while the viewer runs.
Screen owns a full-screen Rich Live display: entering the context switches to
the alternate screen and hides the cursor, leaving it restores both, whatever
the exit path. draw() translates a Frame into Rich tables.
"""

from __future__ import annotations

from types import TracebackType

from rich.console import Console, Group, RenderableType
from rich.constrain import Constrain
from rich.live import Live
from rich.padding import Padding
from rich.style import Style
from rich.table import Table
from rich.text import Text

from chesstv.board import BoardCell
from chesstv.config import DisplayConfig
from chesstv.renderer import Frame, ScreenLayout

console = Console(legacy_windows=False)


class Screen:
    """Full-screen terminal surface. Use as a context manager."""

    def __init__(self, display: DisplayConfig | None = None, *, output: Console | None = None) -> None:
        self._display = display or DisplayConfig()
        self.console = output or console
        self._live: Live | None = None

    # ------------------------------------------------------------------ #
    # Lifecycle                                                            #
    # ------------------------------------------------------------------ #

    def __enter__(self) -> Screen:
        self._live = Live(
            console=self.console,
            screen=True,
            auto_refresh=False,
            redirect_stdout=False,
            redirect_stderr=False,
        )
        self._live.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        if self._live is not None:
            live, self._live = self._live, None
            live.stop()

    # ------------------------------------------------------------------ #
    # Drawing                                                              #
    # ------------------------------------------------------------------ #

    @property
    def size(self) -> tuple[int, int]:
        width, height = self.console.size
        return width, height

    def draw(self, frame: Frame, layout: ScreenLayout) -> None:
        if self._live is None:
            raise RuntimeError("Screen.draw() called outside of an active screen")
        self._live.update(render_frame(frame, layout, self._display), refresh=True)


def render_frame(frame: Frame, layout: ScreenLayout, display: DisplayConfig) -> RenderableType:
    body = Group(
        _panel(frame.top_name, frame.top_clock),
        _board(frame, layout, display),
        _panel(frame.bottom_name, frame.bottom_clock),
    )
    return Padding(Constrain(body, width=layout.width), (layout.top, 0, 0, layout.left))


def _panel(name: str, clock: str) -> Table:
    grid = Table.grid(expand=True)
    grid.add_column(ratio=1, no_wrap=True, overflow="ellipsis")
    grid.add_column(justify="right", no_wrap=True)
    grid.add_row(name, clock)
    return grid


def _board(frame: Frame, layout: ScreenLayout, display: DisplayConfig) -> Table:
    width = layout.column_width
    table = Table(
        box=None,
        show_edge=False,
        pad_edge=False,
        padding=0,
        collapse_padding=True,
        header_style="bold",
    )
    table.add_column("", width=width, no_wrap=True, justify="center")
    for label in frame.file_labels:
        table.add_column(label, width=width, no_wrap=True, justify="center")

    table.add_row(*([""] * (len(frame.file_labels) + 1)))  # spacer under the header
    for label, rank in zip(frame.rank_labels, frame.cells):
        table.add_row(Text(label), *(_square(cell, layout, display) for cell in rank))
    return table


def _square(cell: BoardCell, layout: ScreenLayout, display: DisplayConfig) -> Text:
    width = layout.column_width
    background = display.light_square if cell.square_color == "white" else display.dark_square
    foreground = display.black_piece if cell.piece_color == "black" else display.white_piece

    lines = [f"{cell.glyph:^{width}}"] + [" " * width] * (layout.row_height - 1)
    return Text(
        "\n".join(lines),
        style=Style(color=foreground, bgcolor=background, bold=True),
        no_wrap=True,
    )
