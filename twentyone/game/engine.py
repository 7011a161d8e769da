"""Twenty One round engine with state machine."""

import logging
from random import Random
from typing import Callable

from transitions import Machine

from twentyone.actions import Move, available_moves, dealer_hits
from twentyone.cards import Card, Deck
from twentyone.game.events import EventEmitter, EventType, GameEvent
from twentyone.game.state import GameState
from twentyone.hand import Hand, Outcome, performance_vs_dealer
from twentyone.participants import Dealer, Participant, Player, PlayerRegistry
from twentyone.rules import RuleSet

logger = logging.getLogger(__name__)

DeckFactory = Callable[[int], Deck]


class TwentyOneGame:
    """
    Multi-player Twenty One engine using a state machine.

    Sequences the rule engine through each round: deal, player turns in
    seat order, dealer play, resolution and scoring. It performs no I/O;
    front ends drive it through method calls and listen to events.
    """

    # State machine states
    STATES = [s.name.lower() for s in GameState]

    # State machine transitions
    TRANSITIONS = [
        {"trigger": "begin_round", "source": "waiting_for_round", "dest": "dealing"},
        {"trigger": "deal_done", "source": "dealing", "dest": "player_turn"},
        {"trigger": "dealer_blackjack", "source": "dealing", "dest": "resolving"},
        {"trigger": "player_action", "source": "player_turn", "dest": "player_turn"},
        {"trigger": "players_done", "source": "player_turn", "dest": "dealer_turn"},
        {"trigger": "dealer_done", "source": "dealer_turn", "dest": "resolving"},
        {"trigger": "resolve", "source": "resolving", "dest": "round_complete"},
        {"trigger": "new_round", "source": "round_complete", "dest": "waiting_for_round"},
        {"trigger": "end_game", "source": "*", "dest": "game_over"},
    ]

    def __init__(
        self,
        rules: RuleSet | None = None,
        player_names: list[str] | None = None,
        max_rounds: int | None = None,
        rng: Random | None = None,
        deck_factory: DeckFactory | None = None,
    ) -> None:
        """
        Initialize a new game.

        Args:
            rules: Table rules (uses the house table if not provided)
            player_names: One name per seat; defaults to "Player 1".."Player N"
            max_rounds: Number of rounds to play, or None for no limit
            rng: Random number generator for reproducible shuffles
            deck_factory: Builds a fresh deck from a deck count
        """
        self.rules = rules or RuleSet()
        if max_rounds is not None and max_rounds < 1:
            raise ValueError("max_rounds must be at least 1")
        self.max_rounds = max_rounds

        if player_names is None:
            player_names = [f"Player {i + 1}" for i in range(self.rules.number_of_players)]
        if len(player_names) != self.rules.number_of_players:
            raise ValueError(
                f"Expected {self.rules.number_of_players} player names, "
                f"got {len(player_names)}"
            )

        self.registry = PlayerRegistry()
        for name in player_names:
            self.registry.register(name)
        self.players: list[Player] = self.registry.players
        self.dealer = Dealer()

        rng = rng or Random()
        self._deck_factory = deck_factory or (lambda count: Deck(count, rng=rng))
        self.deck = self._deck_factory(self.rules.number_of_decks)

        self.round = 1
        self._player_index = 0
        self._round_results: dict[str, list[Outcome]] = {}
        self.events = EventEmitter()

        # Initialize state machine
        self.machine = Machine(
            model=self,
            states=self.STATES,
            transitions=self.TRANSITIONS,
            initial="waiting_for_round",
            auto_transitions=False,
            model_attribute="_machine_state",
        )

    @property
    def state(self) -> GameState:
        """Get current game state as enum."""
        return GameState[self._machine_state.upper()]  # type: ignore

    def subscribe(
        self,
        handler: Callable[[GameEvent], None],
        event_type: EventType | None = None,
    ) -> None:
        """Subscribe to game events."""
        self.events.subscribe(handler, event_type)

    @property
    def dealer_hand(self) -> Hand:
        return self.dealer.hand

    @property
    def current_player(self) -> Player | None:
        """Get the player whose turn it is."""
        if self.state != GameState.PLAYER_TURN:
            return None
        return self.players[self._player_index]

    @property
    def current_hand(self) -> Hand | None:
        """Get the first live hand of the current player."""
        player = self.current_player
        if player is None:
            return None
        return next((h for h in player.hands if h.is_live), None)

    @property
    def round_results(self) -> dict[str, list[Outcome]]:
        """Outcomes of the last resolved round, keyed by player name."""
        return {name: list(outcomes) for name, outcomes in self._round_results.items()}

    @property
    def is_final_round(self) -> bool:
        return self.max_rounds is not None and self.round >= self.max_rounds

    def available_moves(self) -> list[Move]:
        """Moves the current player may make on the current hand."""
        player = self.current_player
        hand = self.current_hand
        if player is None or hand is None:
            return []
        return available_moves(player, hand, self.rules)

    def start_round(self) -> bool:
        """
        Deal the opening cards.

        Returns:
            True if the round was started
        """
        if self.state != GameState.WAITING_FOR_ROUND:
            self.events.emit_new(
                EventType.INVALID_ACTION,
                message="Cannot start a round in current state",
                state=self.state.name,
            )
            return False

        self._round_results = {}
        self.begin_round()
        logger.debug("Round %d started with %d players", self.round, len(self.players))
        self._deal_initial_cards()
        return True

    def _deal_initial_cards(self) -> None:
        """Deal two cards to every player and one or two to the dealer."""
        for player in self.players:
            for _ in range(2):
                self._deal_card_to_hand(player.hands[0], player)

        dealer_cards = 1 if self.rules.deal_hole_card_after else 2
        for i in range(dealer_cards):
            self._deal_card_to_hand(self.dealer_hand, self.dealer, face_up=i == 0)

        self.events.emit_new(EventType.ROUND_STARTED, round=self.round)

        # Dealer blackjack ends the round before anyone acts
        if self.dealer_hand.is_blackjack and self.rules.dealer_wins_tie:
            self.events.emit_new(EventType.DEALER_BLACKJACK, early=True)
            self.dealer_blackjack()
            self._resolve_round()
            return

        for player in self.players:
            if player.hands[0].is_blackjack:
                self.events.emit_new(EventType.PLAYER_BLACKJACK, player=player.name)

        self.deal_done()
        self._player_index = 0
        self._advance()

    def _deal_card_to_hand(
        self, hand: Hand, participant: Participant, face_up: bool = True
    ) -> Card:
        """Deal a card to a hand, replacing the deck first if it ran out."""
        if self.deck.is_empty():
            self.deck = self._deck_factory(self.rules.number_of_decks)
            self.events.emit_new(EventType.DECK_REPLENISHED, cards=len(self.deck))

        participant.hit(hand, self.deck)
        card = hand.cards[-1]
        self.events.emit_new(
            EventType.CARD_DEALT,
            card=str(card) if face_up else "??",
            participant=participant.name,
            hand_value=hand.value if face_up else None,
        )
        return card

    def play(self, move: Move) -> bool:
        """
        Apply a move to the current player's current hand.

        Returns:
            True if the move was legal and applied
        """
        player = self.current_player
        hand = self.current_hand
        if player is None or hand is None:
            self.events.emit_new(
                EventType.INVALID_ACTION,
                message="No hand is waiting for a move",
                state=self.state.name,
            )
            return False

        if move not in available_moves(player, hand, self.rules):
            self.events.emit_new(
                EventType.INVALID_ACTION,
                message=f"Cannot {move} this hand",
                player=player.name,
            )
            return False

        if move is Move.HIT:
            self._deal_card_to_hand(hand, player)
            self.events.emit_new(EventType.PLAYER_HIT, player=player.name, hand_value=hand.value)
            self._announce_finished(player, hand)
        elif move is Move.STAY:
            player.stay(hand)
            self.events.emit_new(EventType.PLAYER_STAY, player=player.name, hand_value=hand.value)
        elif move is Move.SPLIT:
            first, second = player.split(hand)
            self._deal_card_to_hand(first, player)
            self._deal_card_to_hand(second, player)
            self.events.emit_new(
                EventType.PLAYER_SPLIT,
                player=player.name,
                splits=player.splits,
                hand1_value=first.value,
                hand2_value=second.value,
            )
            self._announce_finished(player, first)
            self._announce_finished(player, second)

        self.player_action()
        self._advance()
        return True

    def hit(self) -> bool:
        return self.play(Move.HIT)

    def stay(self) -> bool:
        return self.play(Move.STAY)

    def split(self) -> bool:
        return self.play(Move.SPLIT)

    def _announce_finished(self, player: Player, hand: Hand) -> None:
        if hand.is_busted:
            self.events.emit_new(EventType.PLAYER_BUSTS, player=player.name, hand_value=hand.value)
        elif hand.is_twenty_one:
            self.events.emit_new(
                EventType.PLAYER_TWENTY_ONE,
                player=player.name,
                blackjack=hand.is_true_blackjack(self.rules),
            )

    def _advance(self) -> None:
        """Move to the next player with a live hand, or to the dealer."""
        while self._player_index < len(self.players):
            if self.players[self._player_index].has_live_hands:
                return
            self._player_index += 1

        self.players_done()
        self._play_dealer()

    def _play_dealer(self) -> None:
        """Dealer draws until the fixed policy says stop."""
        if len(self.dealer_hand) < 2:
            self._deal_card_to_hand(self.dealer_hand, self.dealer)
        self.events.emit_new(
            EventType.DEALER_REVEALS,
            cards=[str(c) for c in self.dealer_hand.cards],
            hand_value=self.dealer_hand.value,
        )

        while self.dealer_hand.is_live:
            if dealer_hits(self.dealer_hand, self.rules):
                self._deal_card_to_hand(self.dealer_hand, self.dealer)
                self.events.emit_new(EventType.DEALER_HITS, hand_value=self.dealer_hand.value)
            else:
                self.dealer.stay(self.dealer_hand)
                self.events.emit_new(EventType.DEALER_STAYS, hand_value=self.dealer_hand.value)

        if self.dealer_hand.is_busted:
            self.events.emit_new(EventType.DEALER_BUSTS, hand_value=self.dealer_hand.value)
        elif self.dealer_hand.is_blackjack:
            self.events.emit_new(EventType.DEALER_BLACKJACK, early=False)
        elif self.dealer_hand.is_twenty_one:
            self.events.emit_new(EventType.DEALER_TWENTY_ONE)

        logger.debug("Dealer finished round %d on %d", self.round, self.dealer_hand.value)
        self.dealer_done()
        self._resolve_round()

    def _resolve_round(self) -> None:
        """Compare every player hand with the dealer and update scores."""
        results: dict[str, list[Outcome]] = {}
        for player in self.players:
            outcomes = []
            for i, hand in enumerate(player.hands):
                outcome = performance_vs_dealer(hand, self.dealer_hand, self.rules)
                player.score.record(outcome)
                outcomes.append(outcome)
                self.events.emit_new(
                    EventType.HAND_RESOLVED,
                    player=player.name,
                    hand_index=i,
                    hand_value=hand.value,
                    outcome=outcome.value,
                )
            results[player.name] = outcomes
        self._round_results = results

        self.events.emit_new(
            EventType.SCORES_UPDATED,
            scores={
                p.name: {
                    "hands_won": p.score.hands_won,
                    "hands_played": p.score.hands_played,
                    "win_percentage": p.score.win_percentage,
                }
                for p in self.players
            },
        )
        self.resolve()
        self.events.emit_new(EventType.ROUND_ENDED, round=self.round)

        if self.is_final_round:
            self.events.emit_new(EventType.GAME_ENDED, rounds=self.round)
            self.end_game()

    def next_round(self) -> bool:
        """
        Clear hands, split counters and the deck for the next round.

        Returns:
            True if the game is ready for another round
        """
        if self.state != GameState.ROUND_COMPLETE:
            return False

        for player in self.players:
            player.reset_hands()
            player.reset_splits()
        self.dealer.reset_hands()
        self.deck = self._deck_factory(self.rules.number_of_decks)
        self._player_index = 0
        self.round += 1
        self.new_round()
        return True
