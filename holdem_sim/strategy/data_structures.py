"""Shared data structures for the AI action selectors.

AIDecision: The action an AI seat takes, with its raise-to amount.
Recommendation: A suggested action with a human-readable reason.
ActionSelector: Interface both AI engines implement.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from holdem_sim.utils.constants import Action

if TYPE_CHECKING:
    from holdem_sim.core.game_state import GameState


@dataclass(frozen=True)
class AIDecision:
    """An AI seat's chosen action.

    Attributes:
        action: The action to take.
        amount: Raise-to total for RAISE, 0 otherwise.
    """

    action: Action
    amount: int = 0

    def __str__(self) -> str:
        if self.action == Action.RAISE:
            return f"{self.action} to {self.amount}"
        return str(self.action)


@dataclass(frozen=True)
class Recommendation:
    """A suggested action and why it was suggested."""

    action: Action
    reason: str

    def __str__(self) -> str:
        return f"{self.action.upper()}: {self.reason}"


@runtime_checkable
class ActionSelector(Protocol):
    """Interface every AI engine implements.

    Usage:
        decision = selector.choose_action(state, seat, rng)
    """

    def choose_action(
        self,
        state: GameState,
        seat: int,
        rng: random.Random | None = None,
    ) -> AIDecision: ...
