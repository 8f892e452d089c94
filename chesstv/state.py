"""
The game currently on screen.

GameStore owns the single GameView. A FeatureMessage replaces it wholesale; an
UpdateMessage moves the position and clocks forward in place. The viewer loop
owns the store and hands store.view to the renderer after every apply.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace

from chesstv.events import (
    Color,
    FeatureMessage,
    FeedMessage,
    PlayerState,
    UpdateMessage,
)

logger = logging.getLogger(__name__)


@dataclass
class GameView:
    game_id: str
    orientation: Color
    white: PlayerState
    black: PlayerState
    position: str
    last_move: str | None = None


class GameStore:
    """Holds the GameView; has no error conditions of its own."""

    def __init__(self) -> None:
        self._view: GameView | None = None

    @property
    def view(self) -> GameView | None:
        return self._view

    def apply(self, message: FeedMessage) -> bool:
        """Apply any feed message. Returns True if the view changed."""
        match message:
            case FeatureMessage():
                self.apply_feature(message)
                return True
            case UpdateMessage():
                return self.apply_update(message)

    def apply_feature(self, message: FeatureMessage) -> None:
        self._view = GameView(
            game_id=message.id,
            orientation=message.orientation,
            white=replace(message.white),
            black=replace(message.black),
            position=message.position,
        )

    def apply_update(self, message: UpdateMessage) -> bool:
        """
        Move the current game forward one ply.

        An update that arrives before any featured game has nothing to attach
        to and is dropped (returns False).
        """
        view = self._view
        if view is None:
            logger.debug("Update before any featured game; ignoring")
            return False

        view.position = message.position
        view.last_move = message.last_move
        view.white.seconds = message.white_seconds
        view.black.seconds = message.black_seconds
        return True
