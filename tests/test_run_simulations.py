"""Tests for the headless MCTS vs rule-based runner."""

import numpy as np

from holdem_sim.simulation.run_simulations import (
    ENGINE_NAMES,
    HandRecord,
    SimulationSummary,
    main,
    print_summary,
    run_simulation,
)
from holdem_sim.utils.constants import HandCategory


def _record(number: int, winners: list[str], pot: int, profits: list[int], category=None) -> HandRecord:
    return HandRecord(
        hand_number=number,
        winners=winners,
        pot_size=pot,
        community_cards=[],
        player_hands={name: [] for name in ENGINE_NAMES},
        winning_category=category,
        profits=profits,
    )


class TestRunSimulation:
    def test_plays_requested_hands(self) -> None:
        summary = run_simulation(num_hands=5, iterations=20, seed=3)
        assert summary.hands == 5

    def test_profits_are_zero_sum(self) -> None:
        summary = run_simulation(num_hands=5, iterations=20, seed=4)
        profits = summary.profit_matrix()
        assert profits.shape == (5, 2)
        assert np.all(profits.sum(axis=1) == 0)

    def test_every_hand_has_a_winner(self) -> None:
        summary = run_simulation(num_hands=5, iterations=20, seed=5)
        for record in summary.records:
            assert record.winners
            assert set(record.winners) <= set(ENGINE_NAMES)
            assert record.pot_size > 0

    def test_seeded_runs_agree(self) -> None:
        a = run_simulation(num_hands=3, iterations=20, seed=8)
        b = run_simulation(num_hands=3, iterations=20, seed=8)
        assert [r.profits for r in a.records] == [r.profits for r in b.records]


class TestSummary:
    def test_empty(self) -> None:
        summary = SimulationSummary()
        assert summary.profit_matrix().shape == (0, 2)
        assert summary.biggest_pot is None
        assert summary.wins("MCTS") == 0

    def test_counts(self) -> None:
        summary = SimulationSummary(
            records=[
                _record(1, ["MCTS"], 40, [20, -20], HandCategory.ONE_PAIR),
                _record(2, ["RuleBased"], 100, [-50, 50], HandCategory.FLUSH),
                _record(3, ["MCTS"], 30, [10, -10]),
            ]
        )
        assert summary.wins("MCTS") == 2
        assert summary.biggest_pot.hand_number == 2
        assert summary.category_counts() == {HandCategory.ONE_PAIR: 1, HandCategory.FLUSH: 1}

    def test_print_summary(self, capsys) -> None:
        summary = SimulationSummary(records=[_record(1, ["MCTS"], 40, [20, -20], HandCategory.ONE_PAIR)])
        print_summary(summary)
        out = capsys.readouterr().out
        assert "MCTS vs RULE-BASED: 1 hands" in out
        assert "Pair" in out
        assert "Biggest pot (Hand #1): 40" in out


class TestMain:
    def test_cli(self, capsys) -> None:
        main(["--hands", "2", "--iterations", "10", "--seed", "1"])
        out = capsys.readouterr().out
        assert "2 hands" in out
