"""Move eligibility and the dealer's fixed drawing policy."""

from enum import Enum

from twentyone.cards import Face
from twentyone.hand import Hand
from twentyone.participants import Player
from twentyone.rules import RuleSet

DEALER_STANDS_ON = 17


class Move(Enum):
    """Choices offered to a player for a live hand."""

    HIT = "hit"
    STAY = "stay"
    SPLIT = "split"

    def __str__(self) -> str:
        return self.value


def can_hit(hand: Hand, rules: RuleSet) -> bool:
    """Split Aces may not take more cards unless the rules allow it."""
    if (
        hand.first_face == Face.ACE
        and hand.obtained_via_split
        and not rules.can_hit_split_aces
    ):
        return False
    return True


def can_split(player: Player, hand: Hand, rules: RuleSet) -> bool:
    """
    Check if a hand may be split under the table rules.

    The two cards must share a value (10 and K do), and with rank based
    splitting the same face as well. Each player may split at most
    ``rules.split_limit`` times per round.
    """
    if len(hand) != 2:
        return False
    if player.splits >= rules.split_limit:
        return False
    first, second = hand.cards
    if first.value != second.value:
        return False
    if rules.rank_based_split and first.face != second.face:
        return False
    return True


def available_moves(player: Player, hand: Hand, rules: RuleSet) -> list[Move]:
    """List the legal moves for a hand, in menu order."""
    moves = []
    if can_hit(hand, rules):
        moves.append(Move.HIT)
    moves.append(Move.STAY)
    if can_split(player, hand, rules):
        moves.append(Move.SPLIT)
    return moves


def dealer_hits(hand: Hand, rules: RuleSet) -> bool:
    """Determine if the dealer draws another card."""
    value = hand.value
    if value < DEALER_STANDS_ON:
        return True
    if value == DEALER_STANDS_ON and hand.is_soft and rules.h17:
        return True
    return False
