"""Game API endpoints."""

import logging
from fastapi import APIRouter, HTTPException, Header
from typing import Annotated

from api.schemas import (
    ActionRequest,
    CardResponse,
    GameStateResponse,
    HandResponse,
    NewGameRequest,
    NewGameResponse,
    PlayerResponse,
    ScoreResponse,
)
from api.session import create_session_id, extract_session_id, get_game_registry
from config import config
from twentyone.actions import Move
from twentyone.cards import Card
from twentyone.game import GameState, TwentyOneGame
from twentyone.hand import Hand, Outcome
from twentyone.participants import Player
from twentyone.rules import RuleSet

logger = logging.getLogger(__name__)

router = APIRouter()

PRESETS = {
    "house": RuleSet.house,
    "player_friendly": RuleSet.player_friendly,
    "european": RuleSet.european,
}

# States in which the dealer's hole card is visible
REVEALED_STATES = {
    GameState.DEALER_TURN,
    GameState.RESOLVING,
    GameState.ROUND_COMPLETE,
    GameState.GAME_OVER,
}


def _build_rules(request: NewGameRequest) -> RuleSet:
    """Merge preset or table defaults with explicit overrides."""
    if request.preset is not None:
        base = PRESETS[request.preset]()
    else:
        base = config.table.to_rules()

    overrides = request.rules.model_dump(exclude_none=True)
    if request.player_names is not None and "number_of_players" not in overrides:
        overrides["number_of_players"] = len(request.player_names)

    return RuleSet.from_mapping({**base.as_dict(), **overrides})


def _get_game(session_id: str) -> TwentyOneGame:
    """Look up the game for a signed session token."""
    if extract_session_id(session_id) is None:
        raise HTTPException(status_code=401, detail="Invalid session")

    game = get_game_registry().get(session_id)
    if game is None:
        raise HTTPException(status_code=404, detail="Game not found")
    return game


def _card_to_response(card: Card) -> CardResponse:
    return CardResponse(face=str(card.face), suit=str(card.suit), value=card.value)


def _hand_to_response(
    hand: Hand, rules: RuleSet, outcome: Outcome | None = None
) -> HandResponse:
    """Convert a Hand to HandResponse."""
    return HandResponse(
        cards=[_card_to_response(c) for c in hand.cards],
        value=hand.value,
        is_soft=hand.is_soft,
        is_blackjack=hand.is_blackjack,
        is_true_blackjack=hand.is_true_blackjack(rules),
        is_busted=hand.is_busted,
        stayed=hand.stayed,
        obtained_via_split=hand.obtained_via_split,
        outcome=outcome.value if outcome is not None else None,
    )


def _player_to_response(
    player: Player, outcomes: list[Outcome], rules: RuleSet
) -> PlayerResponse:
    hands = [
        _hand_to_response(hand, rules, outcomes[i] if i < len(outcomes) else None)
        for i, hand in enumerate(player.hands)
    ]
    return PlayerResponse(
        name=player.name,
        hands=hands,
        splits=player.splits,
        score=ScoreResponse(
            hands_won=player.score.hands_won,
            hands_played=player.score.hands_played,
            win_percentage=player.score.win_percentage,
        ),
    )


def _game_state_response(game: TwentyOneGame) -> GameStateResponse:
    """Convert game state to response."""
    results = game.round_results
    dealer = game.dealer_hand

    dealer_showing = _card_to_response(dealer.cards[0]) if dealer.cards else None
    dealer_hand = None
    if game.state in REVEALED_STATES:
        dealer_hand = _hand_to_response(dealer, game.rules)

    current_player = game.current_player
    current_hand = game.current_hand
    current_hand_index = None
    if current_player is not None and current_hand is not None:
        current_hand_index = next(
            i for i, h in enumerate(current_player.hands) if h is current_hand
        )

    return GameStateResponse(
        state=game.state.name,
        round=game.round,
        max_rounds=game.max_rounds,
        players=[
            _player_to_response(p, results.get(p.name, []), game.rules)
            for p in game.players
        ],
        current_player=current_player.name if current_player else None,
        current_hand_index=current_hand_index,
        dealer_hand=dealer_hand,
        dealer_showing=dealer_showing,
        available_moves=[m.value for m in game.available_moves()],
    )


@router.post("/new")
async def new_game(request: NewGameRequest | None = None) -> NewGameResponse:
    """Seat players at a new table."""
    request = request or NewGameRequest()

    try:
        rules = _build_rules(request)
        game = TwentyOneGame(
            rules=rules,
            player_names=request.player_names,
            max_rounds=request.max_rounds or config.table.max_rounds,
        )
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    session_id = create_session_id()
    get_game_registry().add(session_id, game)
    logger.info("New game with %d players", len(game.players))

    return NewGameResponse(
        session_id=session_id,
        players=[p.name for p in game.players],
        rules=rules.as_dict(),
    )


@router.get("/state")
async def get_state(
    session_id: Annotated[str, Header(alias="X-Session-ID")],
) -> GameStateResponse:
    """Get current game state."""
    game = _get_game(session_id)
    return _game_state_response(game)


@router.post("/round")
async def start_round(
    session_id: Annotated[str, Header(alias="X-Session-ID")],
) -> GameStateResponse:
    """Deal the opening cards of a round."""
    game = _get_game(session_id)

    if not game.start_round():
        raise HTTPException(status_code=400, detail="Cannot start a round now")

    return _game_state_response(game)


@router.post("/action")
async def player_action(
    request: ActionRequest,
    session_id: Annotated[str, Header(alias="X-Session-ID")],
) -> GameStateResponse:
    """Execute a move for the current hand."""
    game = _get_game(session_id)

    if not game.play(Move(request.action)):
        raise HTTPException(status_code=400, detail=f"Cannot {request.action} now")

    return _game_state_response(game)


@router.post("/next")
async def next_round(
    session_id: Annotated[str, Header(alias="X-Session-ID")],
) -> GameStateResponse:
    """Clear the table for the next round."""
    game = _get_game(session_id)

    if not game.next_round():
        raise HTTPException(status_code=400, detail="Round is not complete")

    return _game_state_response(game)
