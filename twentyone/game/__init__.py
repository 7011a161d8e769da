"""Game engine and state management."""

from twentyone.game.events import GameEvent, EventType
from twentyone.game.state import GameState
from twentyone.game.engine import TwentyOneGame

__all__ = [
    "GameEvent",
    "EventType",
    "GameState",
    "TwentyOneGame",
]
