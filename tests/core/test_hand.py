"""Tests for Hand valuation and comparison."""

from hypothesis import given, strategies as st

from conftest import make_hand
from twentyone.cards import Card, Face, Suit
from twentyone.hand import (
    Hand,
    Outcome,
    compare_hand,
    performance_vs_dealer,
    rank,
)
from twentyone.rules import RuleSet

cards = st.builds(Card, st.sampled_from(list(Face)), st.sampled_from(list(Suit)))
hands = st.lists(cards, min_size=1, max_size=8).map(lambda c: Hand(cards=c))
rule_sets = st.builds(
    RuleSet,
    dealer_wins_tie=st.booleans(),
    post_split_blackjack=st.booleans(),
    h17=st.booleans(),
)


class TestHandValue:
    """Tests for value and softness."""

    def test_hard_hand(self, hard_17_hand):
        assert hard_17_hand.value == 17
        assert not hard_17_hand.is_soft
        assert hard_17_hand.is_hard

    def test_soft_hand(self, soft_17_hand):
        assert soft_17_hand.value == 17
        assert soft_17_hand.is_soft

    def test_ace_nine(self):
        hand = make_hand("AS", "9H")
        assert hand.value == 20
        assert hand.is_soft
        assert not hand.is_blackjack

    def test_two_aces_and_nine_is_hard_21(self):
        """An Ace had to be reduced, so the hand is no longer soft."""
        hand = make_hand("AS", "AH", "9C")
        assert hand.value == 21
        assert not hand.is_soft

    def test_soft_to_hard_transition(self):
        hand = make_hand("AS", "5H")
        assert hand.value == 16
        assert hand.is_soft

        hand.add_card(Card(Face.EIGHT, Suit.CLUBS))
        assert hand.value == 14
        assert hand.is_hard

    def test_pair_of_aces(self):
        hand = make_hand("AS", "AH")
        assert hand.value == 12
        assert not hand.is_soft

    def test_many_aces_reduce_one_at_a_time(self):
        hand = make_hand("AS", "AH", "AC", "AD", "7S")
        assert hand.value == 21

    def test_all_aces_reduced_can_still_bust(self):
        hand = make_hand("AS", "AH", "KC", "QD", "5S")
        assert hand.value == 27
        assert hand.is_busted

    def test_no_ace_is_never_soft(self):
        assert not make_hand("10S", "KH").is_soft

    @given(hands)
    def test_value_never_exceeds_raw_sum(self, hand):
        assert hand.value <= hand.raw_value

    @given(hands)
    def test_value_only_reduced_by_tens(self, hand):
        aces = sum(1 for c in hand.cards if c.is_ace)
        reduction = hand.raw_value - hand.value
        assert reduction % 10 == 0
        assert 0 <= reduction // 10 <= aces

    @given(hands)
    def test_reduction_stops_at_twenty_one(self, hand):
        """Once reduced, the total sits at or under 21 unless every Ace is 1."""
        aces = sum(1 for c in hand.cards if c.is_ace)
        reductions = (hand.raw_value - hand.value) // 10
        if hand.value > 21:
            assert reductions == aces
        if reductions:
            assert hand.value + 10 > 21


class TestHandStatus:
    """Tests for bust, blackjack and live status."""

    def test_blackjack(self, blackjack_hand):
        assert blackjack_hand.is_blackjack
        assert blackjack_hand.value == 21
        assert blackjack_hand.is_twenty_one

    def test_three_card_21_is_not_blackjack(self):
        hand = make_hand("7S", "7H", "7C")
        assert hand.is_twenty_one
        assert not hand.is_blackjack

    def test_bust(self, bust_hand):
        assert bust_hand.is_busted
        assert bust_hand.value == 26

    def test_true_blackjack_respects_split_lineage(self):
        hand = make_hand("AS", "KH", obtained_via_split=True)
        assert hand.is_blackjack
        assert not hand.is_true_blackjack(RuleSet(post_split_blackjack=False))
        assert hand.is_true_blackjack(RuleSet(post_split_blackjack=True))

    def test_unsplit_blackjack_is_always_true(self, blackjack_hand):
        assert blackjack_hand.is_true_blackjack(RuleSet(post_split_blackjack=False))

    def test_live(self, hard_17_hand):
        assert hard_17_hand.is_live
        hard_17_hand.stay()
        assert not hard_17_hand.is_live
        assert hard_17_hand.stayed

    def test_twenty_one_and_bust_are_not_live(self, bust_hand):
        assert not bust_hand.is_live
        assert not make_hand("7S", "7H", "7C").is_live

    def test_split_flag_is_set_once(self):
        hand = make_hand("8S")
        hand.mark_obtained_via_split()
        hand.stay()
        assert hand.obtained_via_split

    def test_first_face(self):
        hand = make_hand("KS", "AH")
        assert hand.first_face == Face.KING
        assert Hand().first_face is None


class TestRank:
    """Tests for the comparison rank."""

    def test_rank_values(self, rules, blackjack_hand, bust_hand, hard_17_hand):
        assert rank(blackjack_hand, rules) == 22
        assert rank(make_hand("7S", "7H", "7C"), rules) == 21
        assert rank(hard_17_hand, rules) == 17
        assert rank(bust_hand, rules) == 0

    def test_split_blackjack_ranks_as_plain_21(self, rules):
        hand = make_hand("AS", "KH", obtained_via_split=True)
        assert rank(hand, rules) == 21

    @given(rule_sets)
    def test_rank_ordering(self, rules):
        blackjack = make_hand("AS", "KH")
        plain_21 = make_hand("5S", "6H", "KC")
        numeric = make_hand("10S", "9H")
        busted = make_hand("10S", "9H", "5C")
        assert rank(blackjack, rules) > rank(plain_21, rules) > rank(numeric, rules)
        assert rank(numeric, rules) > rank(busted, rules) == 0


class TestCompareHand:
    """Tests for player versus dealer comparison."""

    def test_player_wins_higher_value(self, rules):
        assert compare_hand(make_hand("10S", "9H"), make_hand("10C", "8D"), rules) == Outcome.WIN

    def test_dealer_wins_higher_value(self, rules):
        assert compare_hand(make_hand("10S", "7H"), make_hand("10C", "9D"), rules) == Outcome.LOSS

    def test_equal_values_tie(self, rules):
        assert compare_hand(make_hand("10S", "8H"), make_hand("10C", "8D"), rules) == Outcome.TIE

    def test_player_bust_loses_even_if_dealer_busts(self, rules, bust_hand):
        dealer = make_hand("10D", "6C", "QS")
        assert compare_hand(bust_hand, dealer, rules) == Outcome.LOSS

    def test_dealer_bust_player_wins(self, rules):
        dealer = make_hand("10C", "6D", "KS")
        assert compare_hand(make_hand("10S", "2H"), dealer, rules) == Outcome.WIN

    def test_blackjack_beats_three_card_21(self, rules, blackjack_hand):
        dealer = make_hand("7C", "7D", "7S")
        assert compare_hand(blackjack_hand, dealer, rules) == Outcome.WIN
        assert compare_hand(dealer, blackjack_hand, rules) == Outcome.LOSS

    def test_split_blackjack_ties_dealer_21(self):
        rules = RuleSet(post_split_blackjack=False)
        player = make_hand("AS", "KH", obtained_via_split=True)
        dealer = make_hand("7C", "7D", "7S")
        assert compare_hand(player, dealer, rules) == Outcome.TIE


class TestPerformanceVsDealer:
    """Tests for the house tie rule."""

    def test_tie_goes_to_dealer(self):
        rules = RuleSet(dealer_wins_tie=True)
        result = performance_vs_dealer(make_hand("KS", "QH"), make_hand("10C", "JD"), rules)
        assert result == Outcome.LOSS

    def test_tie_stays_tie(self):
        rules = RuleSet(dealer_wins_tie=False)
        result = performance_vs_dealer(make_hand("KS", "QH"), make_hand("10C", "JD"), rules)
        assert result == Outcome.TIE

    def test_wins_and_losses_unchanged(self):
        rules = RuleSet(dealer_wins_tie=True)
        dealer = make_hand("10C", "8D")
        assert performance_vs_dealer(make_hand("10S", "9H"), dealer, rules) == Outcome.WIN
        assert performance_vs_dealer(make_hand("10S", "7H"), dealer, rules) == Outcome.LOSS
