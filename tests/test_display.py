import io
import unittest

from rich.console import Console

from chesstv.cli.display import Screen, render_frame
from chesstv.config import DisplayConfig
from chesstv.events import PlayerIdentity, PlayerState
from chesstv.renderer import build_frame, compute_layout
from chesstv.state import GameView


def _view() -> GameView:
    return GameView(
        game_id="g1",
        orientation="white",
        white=PlayerState(PlayerIdentity("Alice", "alice", "GM"), "white", 2800, 37),
        black=PlayerState(PlayerIdentity("Bob", "bob"), "black", 2750, 30),
        position="rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR",
    )


def _console(*, terminal: bool = False) -> tuple[Console, io.StringIO]:
    buf = io.StringIO()
    console = Console(
        file=buf,
        width=80,
        height=30,
        color_system=None,
        force_terminal=terminal,
        legacy_windows=False,
    )
    return console, buf


class RenderFrameTests(unittest.TestCase):
    def test_frame_text_reaches_the_console(self) -> None:
        console, buf = _console()
        layout = compute_layout(80, 30)
        console.print(render_frame(build_frame(_view()), layout, DisplayConfig()))
        out = buf.getvalue()

        self.assertIn(":Bob (2750)", out)
        self.assertIn("GM:Alice (2800)", out)
        self.assertIn("Time:37s", out)
        self.assertIn("Time:30s", out)
        self.assertEqual(out.count("♜"), 4)
        self.assertEqual(out.count("♟"), 16)
        for label in "ABCDEFGH":
            self.assertIn(label, out)

    def test_black_panel_is_drawn_above_white_panel(self) -> None:
        console, buf = _console()
        console.print(render_frame(build_frame(_view()), compute_layout(80, 30), DisplayConfig()))
        out = buf.getvalue()
        self.assertLess(out.index("Bob"), out.index("Alice"))


class ScreenTests(unittest.TestCase):
    def test_size_comes_from_console(self) -> None:
        console, _ = _console()
        self.assertEqual(Screen(output=console).size, (80, 30))

    def test_draw_outside_context_raises(self) -> None:
        console, _ = _console()
        screen = Screen(output=console)
        with self.assertRaises(RuntimeError):
            screen.draw(build_frame(_view()), compute_layout(80, 30))

    def test_context_draws_and_releases(self) -> None:
        console, buf = _console(terminal=True)
        with Screen(output=console) as screen:
            screen.draw(build_frame(_view()), compute_layout(*screen.size))
        out = buf.getvalue()
        self.assertIn("GM:Alice (2800)", out)
        self.assertIn("\x1b[?1049h", out)  # alternate screen entered
        self.assertIn("\x1b[?1049l", out)  # and left
        self.assertIn("\x1b[?25h", out)    # cursor shown again
        with self.assertRaises(RuntimeError):
            screen.draw(build_frame(_view()), compute_layout(80, 30))

    def test_screen_is_released_when_body_raises(self) -> None:
        console, _ = _console()
        screen = Screen(output=console)
        with self.assertRaises(OSError):
            with screen:
                raise OSError("feed dropped")
        self.assertIsNone(screen._live)
