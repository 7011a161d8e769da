"""Card and Deck classes - immutable cards dealt from a shuffled supply."""

from dataclasses import dataclass
from enum import Enum
from random import Random


class Suit(Enum):
    """Card suits."""

    DIAMONDS = "diamonds"
    CLUBS = "clubs"
    HEARTS = "hearts"
    SPADES = "spades"

    def __str__(self) -> str:
        return self.value


class Face(Enum):
    """Card faces, valued by their display label."""

    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "10"
    JACK = "J"
    QUEEN = "Q"
    KING = "K"
    ACE = "A"

    def __str__(self) -> str:
        return self.value

    @property
    def numeric_value(self) -> int:
        """Return the point value (Ace = 11, picture cards = 10)."""
        if self.value.isdigit():
            return int(self.value)
        if self == Face.ACE:
            return 11
        return 10

    @property
    def is_ace(self) -> bool:
        return self == Face.ACE


@dataclass(frozen=True, slots=True)
class Card:
    """Immutable playing card."""

    face: Face
    suit: Suit

    def __str__(self) -> str:
        return f"{self.face} of {self.suit}"

    def __repr__(self) -> str:
        return f"Card({self.face.name}, {self.suit.name})"

    @property
    def value(self) -> int:
        """Return the unreduced point value."""
        return self.face.numeric_value

    @property
    def is_ace(self) -> bool:
        return self.face.is_ace

    @classmethod
    def from_string(cls, s: str) -> "Card":
        """Create a card from short notation like 'AS', '10d' or 'Kh'."""
        s = s.strip().upper()
        if len(s) < 2:
            raise ValueError(f"Invalid card string: {s}")

        face_str = s[:-1]
        suit_str = s[-1]

        if face_str == "T":
            face_str = "10"

        suit_map = {
            "D": Suit.DIAMONDS,
            "C": Suit.CLUBS,
            "H": Suit.HEARTS,
            "S": Suit.SPADES,
        }

        try:
            face = Face(face_str)
        except ValueError:
            raise ValueError(f"Invalid face: {face_str}") from None
        if suit_str not in suit_map:
            raise ValueError(f"Invalid suit: {suit_str}")

        return cls(face, suit_map[suit_str])


class Deck:
    """
    A shuffled supply of one or more standard 52-card decks.

    Cards are dealt from the top until the supply runs out. An exhausted
    deck is never refilled; callers replace it with a fresh Deck.
    """

    def __init__(self, deck_count: int = 1, rng: Random | None = None) -> None:
        """
        Build and shuffle the supply.

        Args:
            deck_count: Number of standard decks combined into the supply
            rng: Random number generator for shuffling
        """
        if deck_count < 1:
            raise ValueError("Deck must contain at least 1 standard deck")

        self._deck_count = deck_count
        self._cards: list[Card] = [
            Card(face, suit)
            for _ in range(deck_count)
            for suit in Suit
            for face in Face
        ]
        (rng or Random()).shuffle(self._cards)

    @classmethod
    def from_cards(cls, cards: list[Card], deck_count: int = 1) -> "Deck":
        """Build an unshuffled deck that deals the given cards in order."""
        deck = cls.__new__(cls)
        deck._deck_count = deck_count
        deck._cards = list(reversed(cards))
        return deck

    def deal(self) -> Card:
        """Remove and return the top card."""
        if not self._cards:
            raise IndexError("Cannot deal from an empty deck")
        return self._cards.pop()

    def is_empty(self) -> bool:
        return not self._cards

    @property
    def cards_remaining(self) -> int:
        """Return the number of cards remaining."""
        return len(self._cards)

    @property
    def deck_count(self) -> int:
        """Return the number of standard decks in the supply."""
        return self._deck_count

    def __len__(self) -> int:
        return len(self._cards)
