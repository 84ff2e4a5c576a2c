"""Texas Hold'em hand evaluation engine.

Scores hole cards plus whatever community cards are out (2-7 cards) into a
hand category and a single high-card tie-break. The tie-break is the highest
card among all collected cards, not a full five-card kicker comparison, so two
one-pair hands with the same pair and different kickers can compare equal.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Iterable, Sequence

from holdem_sim.utils.card import Card
from holdem_sim.utils.constants import HandCategory

_WHEEL = frozenset({14, 2, 3, 4, 5})


@dataclass(frozen=True, order=True)
class HandEvaluation:
    """Result of evaluating a hand. Orders by category, then high card."""

    category: HandCategory
    high_card: int

    @property
    def name(self) -> str:
        return self.category.display_name

    def __str__(self) -> str:
        return f"{self.name} ({self.high_card} high)"


class HandEvaluator:
    """Evaluates hands from hole cards plus community cards."""

    @staticmethod
    def evaluate(cards: Sequence[Card]) -> HandEvaluation:
        """Evaluate 2 to 7 cards.

        Raises:
            ValueError: On fewer than 2 or more than 7 cards, or duplicates.
        """
        if not 2 <= len(cards) <= 7:
            raise ValueError(f"Need 2 to 7 cards, got {len(cards)}")
        if len(set(cards)) != len(cards):
            raise ValueError("Duplicate cards in hand")

        values = [c.value for c in cards]
        counts = sorted(Counter(values).values(), reverse=True)
        is_flush = HandEvaluator._is_flush(cards)
        is_straight = HandEvaluator._is_straight(values)
        second = counts[1] if len(counts) > 1 else 0

        if is_flush and is_straight:
            category = HandCategory.STRAIGHT_FLUSH
        elif counts[0] == 4:
            category = HandCategory.FOUR_OF_A_KIND
        elif counts[0] == 3 and second >= 2:
            category = HandCategory.FULL_HOUSE
        elif is_flush:
            category = HandCategory.FLUSH
        elif is_straight:
            category = HandCategory.STRAIGHT
        elif counts[0] == 3:
            category = HandCategory.THREE_OF_A_KIND
        elif counts[0] == 2 and second == 2:
            category = HandCategory.TWO_PAIR
        elif counts[0] == 2:
            category = HandCategory.ONE_PAIR
        else:
            category = HandCategory.HIGH_CARD

        return HandEvaluation(category=category, high_card=max(values))

    @staticmethod
    def _is_flush(cards: Sequence[Card]) -> bool:
        """True if any suit appears at least 5 times."""
        suit_counts = Counter(c.suit for c in cards)
        return max(suit_counts.values()) >= 5

    @staticmethod
    def _is_straight(values: list[int]) -> bool:
        """True if 5 consecutive values are present, counting the wheel."""
        unique = sorted(set(values))
        for i in range(len(unique) - 4):
            if unique[i + 4] - unique[i] == 4:
                return True
        return _WHEEL <= set(unique)

    @staticmethod
    def best_of(evaluations: Sequence[HandEvaluation]) -> list[int]:
        """Indices of the best evaluations; more than one means a split."""
        if not evaluations:
            return []
        best = max(evaluations)
        return [i for i, e in enumerate(evaluations) if e == best]


def evaluate_hand(
    hole_cards: Iterable[Card],
    community_cards: Iterable[Card] = (),
) -> HandEvaluation:
    """Evaluate a seat's hole cards together with the community cards."""
    return HandEvaluator.evaluate([*hole_cards, *community_cards])


def compare_evaluations(a: HandEvaluation, b: HandEvaluation) -> int:
    """Return 1 if a wins, -1 if b wins, 0 on a tie."""
    if a > b:
        return 1
    if a < b:
        return -1
    return 0
