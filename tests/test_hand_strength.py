"""Tests for the hand-strength heuristic."""

import pytest

from holdem_sim.core.game_state import PlayerState
from holdem_sim.core.hand_evaluator import HandEvaluation
from holdem_sim.core.hand_strength import compute_hand_strength, seat_strength, strength_label
from holdem_sim.utils.card import Card
from holdem_sim.utils.constants import HandCategory


def _cards(s: str) -> list[Card]:
    return [Card.from_str(c) for c in s.split()]


class TestComputeHandStrength:
    @pytest.mark.parametrize(
        "category,expected",
        [
            (HandCategory.ONE_PAIR, 12.5),
            (HandCategory.TWO_PAIR, 25.0),
            (HandCategory.STRAIGHT, 50.0),
            (HandCategory.FULL_HOUSE, 75.0),
            (HandCategory.STRAIGHT_FLUSH, 100.0),
        ],
    )
    def test_category_scale(self, category: HandCategory, expected: float) -> None:
        assert compute_hand_strength(HandEvaluation(category, 14)) == pytest.approx(expected)

    def test_high_card_bonus(self) -> None:
        assert compute_hand_strength(HandEvaluation(HandCategory.HIGH_CARD, 2)) == 0.0
        assert compute_hand_strength(HandEvaluation(HandCategory.HIGH_CARD, 14)) == pytest.approx(15.0)
        assert compute_hand_strength(HandEvaluation(HandCategory.HIGH_CARD, 8)) == pytest.approx(7.5)

    def test_bonus_only_for_high_card(self) -> None:
        low = compute_hand_strength(HandEvaluation(HandCategory.ONE_PAIR, 3))
        high = compute_hand_strength(HandEvaluation(HandCategory.ONE_PAIR, 14))
        assert low == high

    def test_always_in_range(self) -> None:
        for category in HandCategory:
            for high in range(2, 15):
                assert 0.0 <= compute_hand_strength(HandEvaluation(category, high)) <= 100.0


class TestSeatStrength:
    def test_no_cards_is_zero(self) -> None:
        assert seat_strength(PlayerState(name="Empty", chips=100), []) == 0.0

    def test_uses_board(self) -> None:
        player = PlayerState(name="Hero", chips=100, hole_cards=_cards("Ah Kh"))
        assert seat_strength(player, _cards("Qh Jh Th")) == 100.0


class TestStrengthLabel:
    @pytest.mark.parametrize(
        "strength,label",
        [
            (0.0, "Weak"),
            (30.0, "Weak"),
            (30.5, "Medium"),
            (50.0, "Medium"),
            (62.5, "Strong"),
            (70.0, "Strong"),
            (75.0, "Very Strong"),
        ],
    )
    def test_bands(self, strength: float, label: str) -> None:
        assert strength_label(strength) == label
