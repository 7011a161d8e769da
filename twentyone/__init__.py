"""Twenty One rule engine - 100% UI-agnostic."""

from twentyone.actions import Move, available_moves, can_hit, can_split, dealer_hits
from twentyone.cards import Card, Deck, Face, Suit
from twentyone.hand import Hand, Outcome, compare_hand, performance_vs_dealer, rank
from twentyone.participants import Dealer, Player, PlayerRegistry, Score
from twentyone.rules import RuleSet

__all__ = [
    "Card",
    "Deck",
    "Face",
    "Suit",
    "Hand",
    "Outcome",
    "rank",
    "compare_hand",
    "performance_vs_dealer",
    "RuleSet",
    "Move",
    "can_hit",
    "can_split",
    "available_moves",
    "dealer_hits",
    "Dealer",
    "Player",
    "PlayerRegistry",
    "Score",
]
