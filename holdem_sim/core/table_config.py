"""Table configuration for the two simulator variants."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import StrEnum


class EngineType(StrEnum):
    MCTS = "mcts"
    RULE_BASED = "rule_based"


@dataclass
class TableConfig:
    """Everything needed to seat a table and drive its AI opponents.

    The heads-up variant plays against the MCTS selector and lets a short
    stack call all-in. The three-handed variant plays against the rule-based
    selector and rejects calls the seat cannot cover.
    """

    player_names: list[str] = field(default_factory=lambda: ["You", "CPU"])
    starting_chips: int = 1000
    small_blind: int = 10
    big_blind: int = 20
    human_seat: int | None = 0
    engine: EngineType = EngineType.MCTS
    short_call_all_in: bool = True

    # AI pacing and search
    ai_delay_ms: int = 1000
    mcts_iterations: int = 500
    exploration: float = math.sqrt(2)

    def __post_init__(self) -> None:
        if len(self.player_names) < 2:
            raise ValueError("A table needs at least 2 players")
        if self.small_blind <= 0 or self.big_blind <= 0:
            raise ValueError("Blinds must be positive")
        if self.small_blind > self.big_blind:
            raise ValueError("Small blind cannot exceed the big blind")
        if self.starting_chips <= 0:
            raise ValueError("Starting chips must be positive")
        if self.human_seat is not None and not 0 <= self.human_seat < len(self.player_names):
            raise ValueError(f"Human seat {self.human_seat} is not at the table")
        if self.mcts_iterations < 0:
            raise ValueError("MCTS iterations cannot be negative")
        self.engine = EngineType(self.engine)

    @property
    def num_players(self) -> int:
        return len(self.player_names)

    @property
    def is_heads_up(self) -> bool:
        return self.num_players == 2

    @classmethod
    def heads_up(cls, mcts_iterations: int = 500, **overrides) -> TableConfig:
        """Human vs a single MCTS-driven CPU."""
        return cls(
            player_names=["You", "CPU"],
            engine=EngineType.MCTS,
            short_call_all_in=True,
            mcts_iterations=mcts_iterations,
            **overrides,
        )

    @classmethod
    def three_handed(cls, **overrides) -> TableConfig:
        """Human vs two rule-based opponents."""
        return cls(
            player_names=["You", "Opponent 1", "Opponent 2"],
            engine=EngineType.RULE_BASED,
            short_call_all_in=False,
            **overrides,
        )
