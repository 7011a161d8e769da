"""Pytest fixtures for Twenty One tests."""

import pytest
from random import Random

from twentyone.cards import Card, Deck
from twentyone.hand import Hand
from twentyone.participants import Dealer, Player
from twentyone.rules import RuleSet
from twentyone.game import TwentyOneGame


def make_hand(*codes: str, obtained_via_split: bool = False) -> Hand:
    """Build a hand from short card codes such as 'AS' or '10H'."""
    return Hand(
        cards=[Card.from_string(code) for code in codes],
        obtained_via_split=obtained_via_split,
    )


def stacked_game(
    cards: list[str],
    rules: RuleSet | None = None,
    player_names: list[str] | None = None,
    max_rounds: int | None = None,
) -> TwentyOneGame:
    """
    A game whose every deck deals ``cards`` in order.

    Opening deal order is each player's two cards, then the dealer's.
    """
    deck_cards = [Card.from_string(code) for code in cards]
    rules = rules or RuleSet(number_of_players=1)
    return TwentyOneGame(
        rules=rules,
        player_names=player_names,
        max_rounds=max_rounds,
        deck_factory=lambda count: Deck.from_cards(deck_cards),
    )


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return Random(42)


@pytest.fixture
def deck(rng):
    """A shuffled single deck."""
    return Deck(rng=rng)


@pytest.fixture
def rules():
    """Default house rules."""
    return RuleSet()


@pytest.fixture
def player():
    """A freshly seated player."""
    return Player("Alice")


@pytest.fixture
def dealer():
    return Dealer()


@pytest.fixture
def blackjack_hand():
    """A natural blackjack hand."""
    return make_hand("AS", "KH")


@pytest.fixture
def soft_17_hand():
    """A soft 17 hand (A-6)."""
    return make_hand("AS", "6H")


@pytest.fixture
def hard_17_hand():
    """A hard 17 hand (10-7)."""
    return make_hand("10S", "7H")


@pytest.fixture
def pair_8s_hand():
    """A pair of 8s hand."""
    return make_hand("8S", "8H")


@pytest.fixture
def bust_hand():
    """A busted hand."""
    return make_hand("10S", "6H", "KC")


@pytest.fixture
def game(rng):
    """A new three-seat game instance."""
    return TwentyOneGame(rules=RuleSet(), max_rounds=2, rng=rng)

