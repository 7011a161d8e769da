"""Players, the dealer, and the roster that names them."""

from dataclasses import dataclass

from twentyone.cards import Deck
from twentyone.hand import Hand, Outcome

DEALER_NAME = "Dealer"


@dataclass
class Score:
    """Cumulative results kept across rounds."""

    hands_won: int = 0
    hands_played: int = 0

    def record(self, outcome: Outcome) -> None:
        """Count one finished hand."""
        self.hands_played += 1
        if outcome is Outcome.WIN:
            self.hands_won += 1

    @property
    def win_percentage(self) -> float:
        """Percentage of hands won, 0.0 before any hand is played."""
        if self.hands_played == 0:
            return 0.0
        return self.hands_won / self.hands_played * 100


class Participant:
    """Anyone seated at the table holding hands."""

    def __init__(self, name: str) -> None:
        self.name = name
        self.hands: list[Hand] = [Hand()]

    @property
    def has_live_hands(self) -> bool:
        return any(hand.is_live for hand in self.hands)

    def hit(self, hand: Hand, deck: Deck) -> Hand:
        """Deal one card from the deck into the hand."""
        hand.add_card(deck.deal())
        return hand

    def stay(self, hand: Hand) -> Hand:
        return hand.stay()

    def reset_hands(self) -> None:
        """Start the next round with a single empty hand."""
        self.hands = [Hand()]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r}, hands={self.hands!r})"


class Dealer(Participant):
    """The house. Always plays exactly one hand."""

    def __init__(self) -> None:
        super().__init__(DEALER_NAME)

    @property
    def hand(self) -> Hand:
        return self.hands[0]


class Player(Participant):
    """A human seat with a split counter and a running score."""

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.splits = 0
        self.score = Score()

    def split(self, hand: Hand) -> tuple[Hand, Hand]:
        """
        Turn a two-card hand into two one-card hands.

        Both new hands are marked as obtained via split and replace the
        original at the end of the hand list. Eligibility under the table
        rules is the caller's job (see ``twentyone.actions.can_split``).

        Raises:
            ValueError: If the hand is not one of ours or lacks 2 cards
        """
        if not any(h is hand for h in self.hands):
            raise ValueError(f"{self.name} does not hold this hand")
        if len(hand) != 2:
            raise ValueError("Only a two-card hand can be split")

        first = Hand(cards=[hand.cards[0]])
        second = Hand(cards=[hand.cards[1]])
        first.mark_obtained_via_split()
        second.mark_obtained_via_split()

        self.hands = [h for h in self.hands if h is not hand]
        self.hands.extend([first, second])
        self.splits += 1
        return first, second

    def reset_splits(self) -> None:
        self.splits = 0


class PlayerRegistry:
    """
    Roster of seated players.

    Names are unique ignoring case, and the dealer's name is reserved.
    """

    def __init__(self) -> None:
        self._players: list[Player] = []

    def validate_name(self, name: str) -> str:
        """
        Check that a name can be seated.

        Returns:
            The name with surrounding whitespace removed

        Raises:
            ValueError: If the name is empty, reserved or already taken
        """
        name = name.strip()
        if not name:
            raise ValueError("Names must have at least one character")
        if name.lower() == DEALER_NAME.lower():
            raise ValueError(f"Name '{DEALER_NAME}' is reserved")
        if name.lower() in {p.name.lower() for p in self._players}:
            raise ValueError(f"Name '{name}' is already taken")
        return name

    def register(self, name: str) -> Player:
        """Seat a new player under a validated name."""
        player = Player(self.validate_name(name))
        self._players.append(player)
        return player

    @property
    def players(self) -> list[Player]:
        return list(self._players)

    def __len__(self) -> int:
        return len(self._players)

    def __contains__(self, name: object) -> bool:
        if not isinstance(name, str):
            return False
        return name.strip().lower() in {p.name.lower() for p in self._players}
