"""Hand-strength heuristic used by the rule-based AI and the coaching panel."""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

from holdem_sim.core.hand_evaluator import HandEvaluation, evaluate_hand
from holdem_sim.utils.constants import HandCategory

if TYPE_CHECKING:
    from holdem_sim.core.game_state import PlayerState
    from holdem_sim.utils.card import Card

# Extra strength a high-card hand can earn from its top card (2 -> 0, A -> 15)
HIGH_CARD_BONUS = 15.0


def compute_hand_strength(evaluation: HandEvaluation) -> float:
    """Map an evaluated hand to a strength percentage in [0, 100]."""
    strength = evaluation.category / HandCategory.STRAIGHT_FLUSH * 100
    if evaluation.category == HandCategory.HIGH_CARD:
        strength += (evaluation.high_card - 2) / 12 * HIGH_CARD_BONUS
    return min(100.0, max(0.0, float(strength)))


def seat_strength(player: PlayerState, community_cards: Sequence[Card]) -> float:
    """Strength of a seat's current hand, 0 when it holds no cards."""
    if not player.hole_cards:
        return 0.0
    return compute_hand_strength(evaluate_hand(player.hole_cards, community_cards))


def strength_label(strength: float) -> str:
    if strength > 70:
        return "Very Strong"
    if strength > 50:
        return "Strong"
    if strength > 30:
        return "Medium"
    return "Weak"
