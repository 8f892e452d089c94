import unittest
import uuid
from pathlib import Path

from chesstv.config import DEFAULT_FEED_URL, Config, load_config


class ConfigTests(unittest.TestCase):
    def _write(self, text: str) -> Path:
        path = Path(f".test_config_{uuid.uuid4().hex}.yaml")
        self.addCleanup(lambda: path.unlink(missing_ok=True))
        path.write_text(text, encoding="utf-8")
        return path

    def test_missing_file_gives_defaults(self) -> None:
        config = load_config(Path(f".missing_{uuid.uuid4().hex}.yaml"))
        self.assertEqual(config, Config())
        self.assertEqual(config.feed.url, DEFAULT_FEED_URL)
        self.assertIsNone(config.feed.timeout)
        self.assertEqual(config.display.row_height, 2)

    def test_empty_file_gives_defaults(self) -> None:
        self.assertEqual(load_config(self._write("")), Config())

    def test_overrides(self) -> None:
        path = self._write(
            "feed:\n"
            "  url: http://localhost:9000/feed\n"
            "  timeout: 12\n"
            "display:\n"
            "  row_height: 1\n"
            "  light_square: '#ffffff'\n"
            "logging:\n"
            "  level: debug\n"
        )
        config = load_config(path)
        self.assertEqual(config.feed.url, "http://localhost:9000/feed")
        self.assertEqual(config.feed.timeout, 12.0)
        self.assertEqual(config.display.row_height, 1)
        self.assertEqual(config.display.column_width, 4)
        self.assertEqual(config.display.light_square, "#ffffff")
        self.assertEqual(config.logging.level, "DEBUG")

    def test_bad_colour_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            load_config(self._write("display:\n  dark_square: not-a-colour\n"))

    def test_out_of_range_values_are_rejected(self) -> None:
        for text in (
            "display:\n  poll_interval: 0\n",
            "display:\n  row_height: 0\n",
            "display:\n  column_width: 2\n",
            "feed:\n  timeout: -1\n",
            "logging:\n  level: chatty\n",
        ):
            with self.subTest(text=text), self.assertRaises(ValueError):
                load_config(self._write(text))

    def test_wrong_structure_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            load_config(self._write("- just\n- a list\n"))
