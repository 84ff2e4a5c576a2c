"""Pit the MCTS engine against the rule-based engine heads-up.

Plays N hands without a human seat and prints summary statistics plus the
biggest pot of the session.

Usage:
    python -m holdem_sim.simulation.run_simulations --hands 200 --iterations 300 --seed 7
"""

from __future__ import annotations

import argparse
import logging
import random
from collections import Counter
from dataclasses import dataclass, field

import numpy as np

from holdem_sim.core.game_state import GameState, ShowdownResult
from holdem_sim.core.table_config import EngineType, TableConfig
from holdem_sim.simulation.scheduler import ManualScheduler
from holdem_sim.simulation.table_session import TableSession
from holdem_sim.strategy.mcts import MCTSAI
from holdem_sim.strategy.rule_based import RuleBasedAI
from holdem_sim.utils.constants import HandCategory

ENGINE_NAMES = ["MCTS", "RuleBased"]


@dataclass
class HandRecord:
    """Record of a single played hand."""

    hand_number: int
    winners: list[str]
    pot_size: int
    community_cards: list[str]
    player_hands: dict[str, list[str]]
    winning_category: HandCategory | None
    profits: list[int]


@dataclass
class SimulationSummary:
    """Aggregate results of a simulation run."""

    records: list[HandRecord] = field(default_factory=list)

    @property
    def hands(self) -> int:
        return len(self.records)

    def profit_matrix(self) -> np.ndarray:
        """Hands x seats array of chip profit per hand."""
        if not self.records:
            return np.zeros((0, len(ENGINE_NAMES)))
        return np.array([r.profits for r in self.records])

    def wins(self, name: str) -> int:
        return sum(1 for r in self.records if name in r.winners)

    def category_counts(self) -> Counter[HandCategory]:
        return Counter(r.winning_category for r in self.records if r.winning_category is not None)

    @property
    def biggest_pot(self) -> HandRecord | None:
        return max(self.records, key=lambda r: r.pot_size) if self.records else None


class _Recorder:
    """SessionListener that turns finished hands into HandRecords."""

    def __init__(self) -> None:
        self.summary = SimulationSummary()
        self._starting: list[int] = []

    def mark_start(self, state: GameState) -> None:
        self._starting = [p.chips + p.bet for p in state.players]

    def on_state_changed(self, state: GameState) -> None:
        pass

    def on_message(self, text: str) -> None:
        pass

    def on_hand_finished(self, result: ShowdownResult, state: GameState) -> None:
        winning = result.winning_hand
        self.summary.records.append(
            HandRecord(
                hand_number=state.hand_number,
                winners=[state.players[s].name for s in result.winners],
                pot_size=result.pot,
                community_cards=[str(c) for c in state.community_cards],
                player_hands={p.name: [str(c) for c in p.hole_cards] for p in state.players},
                winning_category=winning.category if winning else None,
                profits=[p.chips - start for p, start in zip(state.players, self._starting)],
            )
        )


def run_simulation(
    num_hands: int = 100,
    iterations: int = 300,
    seed: int | None = None,
    starting_chips: int = 1000,
) -> SimulationSummary:
    """Play num_hands heads-up hands, rebuying both seats when one busts."""
    rng = random.Random(seed)
    config = TableConfig(
        player_names=list(ENGINE_NAMES),
        starting_chips=starting_chips,
        human_seat=None,
        engine=EngineType.MCTS,
        short_call_all_in=True,
        ai_delay_ms=0,
        mcts_iterations=iterations,
    )
    scheduler = ManualScheduler()
    recorder = _Recorder()
    session = TableSession(
        config,
        scheduler,
        listener=recorder,
        rng=rng,
        selectors={0: MCTSAI(iterations=iterations), 1: RuleBasedAI()},
    )

    for _ in range(num_hands):
        if session.state is None or len(session.state.players_with_chips) < 2:
            session.new_game()
        else:
            session.next_hand()
        # Blinds are already posted; count them back into the starting stacks
        recorder.mark_start(session.state)
        scheduler.run_all()

    return recorder.summary


def print_summary(summary: SimulationSummary) -> None:
    profits = summary.profit_matrix()
    n = summary.hands

    print("=" * 60)
    print(f"  MCTS vs RULE-BASED: {n} hands")
    print("=" * 60)
    print()
    for i, name in enumerate(ENGINE_NAMES):
        column = profits[:, i] if n else np.zeros(1)
        print(f"  {name}")
        print(f"    Hands won:        {summary.wins(name)} ({summary.wins(name) / max(n, 1):.1%})")
        print(f"    Net chips:        {column.sum():+.0f}")
        print(f"    Avg profit/hand:  {column.mean():+.1f} (std {column.std():.1f})")
        print()

    print("  Winning hands at showdown:")
    for category, count in sorted(summary.category_counts().items()):
        print(f"    {category.display_name:<16} {count}")
    print()

    record = summary.biggest_pot
    if record is not None:
        print("-" * 60)
        print(f"  Biggest pot (Hand #{record.hand_number}): {record.pot_size}")
        for name, cards in record.player_hands.items():
            print(f"    {name:<10} {' '.join(cards)}")
        print(f"    Board:     {' '.join(record.community_cards) or '(none)'}")
        print(f"    Winner:    {', '.join(record.winners)}", end="")
        if record.winning_category is not None:
            print(f" ({record.winning_category.display_name})")
        else:
            print()
    print("=" * 60)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        description="Play the MCTS engine against the rule-based engine.",
    )
    parser.add_argument("--hands", type=int, default=100, help="Hands to play")
    parser.add_argument("--iterations", type=int, default=300, help="MCTS iterations per decision")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--chips", type=int, default=1000, help="Starting stack per seat")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every decision")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    summary = run_simulation(
        num_hands=args.hands,
        iterations=args.iterations,
        seed=args.seed,
        starting_chips=args.chips,
    )
    print_summary(summary)


if __name__ == "__main__":
    main()
