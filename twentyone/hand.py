"""Hand valuation and comparison against the dealer."""

from dataclasses import dataclass, field
from enum import Enum

from twentyone.cards import Card, Face
from twentyone.rules import RuleSet

BLACKJACK_RANK = 22
TWENTY_ONE = 21


@dataclass
class Hand:
    """A hand of cards with derived value and status."""

    cards: list[Card] = field(default_factory=list)
    stayed: bool = False
    obtained_via_split: bool = False

    def add_card(self, card: Card) -> None:
        """Add a card to the hand."""
        self.cards.append(card)

    def stay(self) -> "Hand":
        """Mark the hand as finished."""
        self.stayed = True
        return self

    def mark_obtained_via_split(self) -> None:
        self.obtained_via_split = True

    @property
    def raw_value(self) -> int:
        """Sum of card values with every Ace counted as 11."""
        return sum(card.value for card in self.cards)

    @property
    def value(self) -> int:
        """
        Calculate the best hand value.

        Aces are reduced from 11 to 1 one at a time while the total is over
        21. The result can still exceed 21 once every Ace is reduced.
        """
        total = self.raw_value
        aces = sum(1 for card in self.cards if card.is_ace)

        while total > TWENTY_ONE and aces > 0:
            total -= 10
            aces -= 1

        return total

    @property
    def is_soft(self) -> bool:
        """Check if an Ace is still counted as 11 in the final value."""
        return self.has_ace and self.value == self.raw_value

    @property
    def is_hard(self) -> bool:
        return not self.is_soft

    @property
    def has_ace(self) -> bool:
        return any(card.is_ace for card in self.cards)

    @property
    def is_busted(self) -> bool:
        """Check if the hand has busted (value > 21)."""
        return self.value > TWENTY_ONE

    @property
    def is_twenty_one(self) -> bool:
        return self.value == TWENTY_ONE

    @property
    def is_blackjack(self) -> bool:
        """Check if the hand is 21 with exactly 2 cards."""
        return len(self.cards) == 2 and self.is_twenty_one

    def is_true_blackjack(self, rules: RuleSet) -> bool:
        """
        Check if the hand counts as a blackjack under the table rules.

        Hands created by a split only qualify when the rules allow
        post-split blackjack.
        """
        return self.is_blackjack and (
            rules.post_split_blackjack or not self.obtained_via_split
        )

    @property
    def is_live(self) -> bool:
        """Check if the hand still needs a decision."""
        return not self.stayed and not self.is_busted and not self.is_twenty_one

    @property
    def first_face(self) -> Face | None:
        return self.cards[0].face if self.cards else None

    def __len__(self) -> int:
        return len(self.cards)

    def __repr__(self) -> str:
        return f"Hand({self.cards!r}, value={self.value})"


class Outcome(Enum):
    """Result of a player hand against the dealer."""

    WIN = "win"
    LOSS = "loss"
    TIE = "tie"

    def __str__(self) -> str:
        return self.value


def rank(hand: Hand, rules: RuleSet) -> int:
    """
    Score a hand for comparison against another hand.

    Returns:
        22 for a true blackjack, 21 for any other 21, 0 for a bust,
        otherwise the hand value
    """
    if hand.is_true_blackjack(rules):
        return BLACKJACK_RANK
    if hand.is_twenty_one:
        return TWENTY_ONE
    if hand.is_busted:
        return 0
    return hand.value


def compare_hand(player_hand: Hand, dealer_hand: Hand, rules: RuleSet) -> Outcome:
    """
    Compare a player hand with the dealer hand.

    A busted player hand loses even when the dealer also busts.
    """
    if player_hand.is_busted:
        return Outcome.LOSS

    player_rank = rank(player_hand, rules)
    dealer_rank = rank(dealer_hand, rules)

    if player_rank > dealer_rank:
        return Outcome.WIN
    if player_rank < dealer_rank:
        return Outcome.LOSS
    return Outcome.TIE


def performance_vs_dealer(
    player_hand: Hand, dealer_hand: Hand, rules: RuleSet
) -> Outcome:
    """Compare hands, awarding ties to the dealer when the rules say so."""
    outcome = compare_hand(player_hand, dealer_hand, rules)
    if outcome is Outcome.TIE and rules.dealer_wins_tie:
        return Outcome.LOSS
    return outcome
