"""Twenty One house rule variations."""

from dataclasses import dataclass, fields
from typing import Any, Mapping


@dataclass(frozen=True)
class RuleSet:
    """
    Table rules configuration.

    Fixed for the lifetime of a game; every eligibility and comparison
    decision reads from it.
    """

    # Table setup
    number_of_players: int = 3
    number_of_decks: int = 3

    # Split rules
    split_limit: int = 4  # Max splits per player per round
    can_hit_split_aces: bool = False
    post_split_blackjack: bool = False  # Split hands may count as blackjack
    rank_based_split: bool = False  # Faces must match, not just values

    # Dealer rules
    h17: bool = True  # Dealer hits soft 17
    dealer_wins_tie: bool = True
    deal_hole_card_after: bool = False  # Hole card dealt after player turns

    def __post_init__(self) -> None:
        """Validate rule values."""
        if self.number_of_players < 1:
            raise ValueError("number_of_players must be at least 1")
        if self.number_of_decks < 1:
            raise ValueError("number_of_decks must be at least 1")
        if self.split_limit < 0:
            raise ValueError("split_limit cannot be negative")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "RuleSet":
        """
        Build a RuleSet from a plain mapping of rule names to values.

        Raises:
            ValueError: If the mapping contains an unknown rule name
        """
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown rules: {', '.join(sorted(unknown))}")
        return cls(**data)

    def as_dict(self) -> dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def house(cls) -> "RuleSet":
        """The classic house table."""
        return cls()

    @classmethod
    def player_friendly(cls) -> "RuleSet":
        """Generous table: S17, ties push and split hands play freely."""
        return cls(
            h17=False,
            dealer_wins_tie=False,
            can_hit_split_aces=True,
            post_split_blackjack=True,
        )

    @classmethod
    def european(cls) -> "RuleSet":
        """No hole card until players finish; only identical faces split."""
        return cls(
            number_of_decks=6,
            h17=False,
            deal_hole_card_after=True,
            rank_based_split=True,
        )
