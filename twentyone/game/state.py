"""Game state enumeration."""

from enum import Enum, auto


class GameState(Enum):
    """
    Game state machine states.

    Flow: WAITING_FOR_ROUND → DEALING → PLAYER_TURN → DEALER_TURN → RESOLVING → ROUND_COMPLETE
    """

    # Between rounds
    WAITING_FOR_ROUND = auto()

    # Initial cards being dealt
    DEALING = auto()

    # Players act on their live hands
    PLAYER_TURN = auto()

    # Dealer draws by fixed policy
    DEALER_TURN = auto()

    # Hands compared against the dealer
    RESOLVING = auto()

    # Round finished, ready for next
    ROUND_COMPLETE = auto()

    # All rounds played
    GAME_OVER = auto()

    def __str__(self) -> str:
        return self.name.replace("_", " ").title()

