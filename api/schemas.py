"""Pydantic schemas for API requests and responses."""

from pydantic import BaseModel, Field
from typing import Literal


class RulesData(BaseModel):
    """House rules for a new game; omitted fields use the table defaults."""

    number_of_players: int | None = Field(default=None, ge=1, le=7)
    number_of_decks: int | None = Field(default=None, ge=1, le=8)
    split_limit: int | None = Field(default=None, ge=0)
    h17: bool | None = None
    dealer_wins_tie: bool | None = None
    can_hit_split_aces: bool | None = None
    post_split_blackjack: bool | None = None
    deal_hole_card_after: bool | None = None
    rank_based_split: bool | None = None


class NewGameRequest(BaseModel):
    """Request to seat players at a new table."""

    player_names: list[str] | None = None
    max_rounds: int | None = Field(default=None, ge=1)
    preset: Literal["house", "player_friendly", "european"] | None = None
    rules: RulesData = Field(default_factory=RulesData)


class NewGameResponse(BaseModel):
    """Created game session."""

    session_id: str
    players: list[str]
    rules: dict[str, int | bool]


class ActionRequest(BaseModel):
    """Request for player action."""

    action: Literal["hit", "stay", "split"]


class CardResponse(BaseModel):
    """Card representation."""

    face: str
    suit: str
    value: int


class HandResponse(BaseModel):
    """Hand representation."""

    cards: list[CardResponse]
    value: int
    is_soft: bool
    is_blackjack: bool
    is_true_blackjack: bool
    is_busted: bool
    stayed: bool
    obtained_via_split: bool
    outcome: Literal["win", "loss", "tie"] | None = None


class ScoreResponse(BaseModel):
    """Cumulative player score."""

    hands_won: int
    hands_played: int
    win_percentage: float


class PlayerResponse(BaseModel):
    """A seated player."""

    name: str
    hands: list[HandResponse]
    splits: int
    score: ScoreResponse


class GameStateResponse(BaseModel):
    """Current game state."""

    state: str
    round: int
    max_rounds: int | None
    players: list[PlayerResponse]
    current_player: str | None
    current_hand_index: int | None
    dealer_hand: HandResponse | None
    dealer_showing: CardResponse | None
    available_moves: list[Literal["hit", "stay", "split"]]
