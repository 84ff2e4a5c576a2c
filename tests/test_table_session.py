"""Tests for TableSession driven by a manual clock and a mock listener."""

import logging
import random
from unittest.mock import MagicMock

import pytest

from holdem_sim.core.table_config import TableConfig
from holdem_sim.simulation.scheduler import ManualScheduler
from holdem_sim.simulation.table_session import HistoryEntry, TableSession, make_selector
from holdem_sim.strategy.data_structures import AIDecision
from holdem_sim.strategy.mcts import MCTSAI
from holdem_sim.strategy.rule_based import RuleBasedAI
from holdem_sim.utils.constants import Action, Phase


class _Passive:
    """Checks when it can, calls otherwise, after any scripted decisions."""

    def __init__(self, *script: AIDecision) -> None:
        self.script = list(script)
        self.seats: list[int] = []

    def choose_action(self, state, seat, rng=None) -> AIDecision:
        self.seats.append(seat)
        if self.script:
            return self.script.pop(0)
        return AIDecision(Action.CALL if state.to_call(seat) > 0 else Action.CHECK)


def _session(config: TableConfig | None = None, selector=None, seed: int = 1):
    config = config or TableConfig.heads_up()
    clock = ManualScheduler()
    listener = MagicMock()
    selector = selector or _Passive()
    selectors = {seat: selector for seat in range(config.num_players)}
    session = TableSession(config, clock, listener=listener, rng=random.Random(seed), selectors=selectors)
    return session, clock, listener


def _messages(listener: MagicMock) -> list[str]:
    return [c.args[0] for c in listener.on_message.call_args_list]


class TestNewGame:
    def test_deals_and_waits_for_human(self) -> None:
        session, clock, listener = _session()
        session.new_game()

        assert session.state.hand_number == 1
        assert session.state.players[0].bet == 10
        assert session.state.players[1].bet == 20
        assert session.can_human_act
        assert not session.is_waiting_for_ai
        assert _messages(listener)[-1] == "New hand started! Make your move."
        listener.on_state_changed.assert_called()

    def test_history_starts_with_hand_marker(self) -> None:
        session, _, _ = _session()
        session.new_game()
        assert session.history == [HistoryEntry("game", "Hand #1")]

    def test_human_legal_actions(self) -> None:
        session, _, _ = _session()
        session.new_game()
        assert session.human_legal_actions() == [Action.FOLD, Action.CALL, Action.RAISE, Action.ALL_IN]


class TestHumanAction:
    def test_call_then_ai_after_delay(self) -> None:
        session, clock, listener = _session()
        session.new_game()

        assert session.human_action(Action.CALL)
        assert _messages(listener)[-1] == "You called."
        assert session.is_waiting_for_ai
        assert session.human_legal_actions() == []

        clock.advance(999)
        assert session.state.players[1].bet == 20
        assert "CPU checked" not in _messages(listener)
        clock.advance(1)
        assert "CPU checked" in _messages(listener)

    def test_round_advances_after_second_delay(self) -> None:
        session, clock, listener = _session()
        session.new_game()
        session.human_action(Action.CALL)

        clock.advance(1000)
        assert session.state.phase == Phase.PREFLOP
        clock.advance(1000)
        assert session.state.phase == Phase.FLOP
        assert len(session.state.community_cards) == 3
        assert "Flop revealed!" in _messages(listener)
        assert session.can_human_act
        assert not session.is_waiting_for_ai

    def test_raise_message(self) -> None:
        session, _, listener = _session()
        session.new_game()
        assert session.human_action(Action.RAISE, 60)
        assert _messages(listener)[-1] == "You raised to $60."
        assert session.history[-1] == HistoryEntry("You", "raised", 60)

    def test_invalid_raise_is_reported(self) -> None:
        session, _, listener = _session()
        session.new_game()
        before = session.state

        assert not session.human_action(Action.RAISE, 20)
        assert _messages(listener)[-1] == "Raise must be higher than current bet!"
        assert session.state is before
        assert not session.is_waiting_for_ai

    def test_check_facing_bet_refused(self) -> None:
        session, _, _ = _session()
        session.new_game()
        assert not session.human_action(Action.CHECK)

    def test_refused_while_ai_pending(self) -> None:
        session, _, listener = _session()
        session.new_game()
        session.human_action(Action.CALL)

        assert not session.human_action(Action.CHECK)
        assert _messages(listener)[-1] == "Wait for your opponents to act."

    def test_fold_ends_hand(self) -> None:
        session, clock, listener = _session()
        session.new_game()

        session.human_action(Action.FOLD)

        assert session.state.is_hand_over
        assert _messages(listener)[-1] == "CPU wins $30!"
        listener.on_hand_finished.assert_called_once()
        result, state = listener.on_hand_finished.call_args.args
        assert result.winners == [1]
        assert state.players[1].chips == 1010
        assert clock.pending == 0

    def test_refused_after_hand_over(self) -> None:
        session, _, listener = _session()
        session.new_game()
        session.human_action(Action.FOLD)
        assert not session.human_action(Action.CHECK)
        assert _messages(listener)[-1] == "No hand in progress."


class TestFullHand:
    def test_checked_down_to_showdown(self) -> None:
        session, clock, listener = _session()
        session.new_game()
        session.human_action(Action.CALL)
        clock.run_all()

        for _ in range(3):
            assert session.can_human_act
            session.human_action(Action.CHECK)
            clock.run_all()

        assert session.state.is_hand_over
        assert len(session.state.community_cards) == 5
        listener.on_hand_finished.assert_called_once()
        assert sum(p.chips for p in session.state.players) == 2000

    def test_ai_raise_asks_human_to_respond(self) -> None:
        raiser = _Passive(AIDecision(Action.RAISE, 60))
        session, clock, listener = _session(selector=raiser)
        session.new_game()
        session.human_action(Action.CALL)
        clock.run_all()

        assert session.state.phase == Phase.PREFLOP
        assert session.state.to_call(0) == 40
        assert _messages(listener)[-1] == "Your move - $40 to call."
        assert session.can_human_act

    def test_all_in_runs_out_the_board(self) -> None:
        session, clock, listener = _session()
        session.new_game()
        session.human_action(Action.ALL_IN)
        clock.run_all()

        assert session.state.is_hand_over
        assert len(session.state.community_cards) == 5
        assert sum(p.chips for p in session.state.players) == 2000

    def test_history_records_actions_and_streets(self) -> None:
        session, clock, _ = _session()
        session.new_game()
        session.human_action(Action.CALL)
        clock.run_all()

        lines = [str(e) for e in session.history]
        assert lines == ["Hand #1", "You called", "CPU checked", "Flop revealed!"]

    def test_recent_history_is_capped(self) -> None:
        session, clock, _ = _session()
        session.new_game()
        session.human_action(Action.CALL)
        clock.run_all()
        for _ in range(3):
            session.human_action(Action.CHECK)
            clock.run_all()

        assert len(session.history) > 8
        assert session.recent_history() == session.history[-8:]
        assert len(session.recent_history(3)) == 3


class TestAIFallback:
    def test_illegal_ai_action_falls_back(self, caplog) -> None:
        bad = _Passive(AIDecision(Action.RAISE, 5))
        session, clock, listener = _session(selector=bad)
        session.new_game()
        session.human_action(Action.RAISE, 60)

        with caplog.at_level(logging.WARNING, logger="holdem_sim.session"):
            clock.advance(1000)

        assert "CPU called" in _messages(listener)
        assert session.state.players[1].bet == 60
        assert "trying a fallback" in caplog.text


class TestNextHand:
    def test_refused_mid_hand(self) -> None:
        session, _, listener = _session()
        session.new_game()
        assert not session.next_hand()
        assert _messages(listener)[-1] == "Finish the current hand first."

    def test_rotates_dealer(self) -> None:
        session, _, _ = _session()
        session.new_game()
        session.human_action(Action.FOLD)

        assert session.next_hand()
        assert session.state.hand_number == 2
        assert session.state.dealer_position == 1
        # Heads-up: the dealer posts the small blind
        assert session.state.players[1].bet == 10
        assert session.state.players[0].bet == 20

    def test_chips_carry_over(self) -> None:
        session, _, _ = _session()
        session.new_game()
        session.human_action(Action.FOLD)
        session.next_hand()
        assert session.state.players[0].chips + session.state.players[0].bet == 990

    def test_game_over(self) -> None:
        session, _, listener = _session()
        session.new_game()
        session.human_action(Action.FOLD)
        session.state.players[0].chips = 0

        assert not session.next_hand()
        assert _messages(listener)[-1] == "Game Over! Not enough players with chips."

    def test_new_game_resets_chips(self) -> None:
        session, _, _ = _session()
        session.new_game()
        session.human_action(Action.FOLD)
        session.new_game()
        assert session.state.hand_number == 1
        assert session.state.total_chips == 2000
        assert session.state.players[0].chips == 990


class TestWithoutHuman:
    def test_ai_only_table_plays_itself(self) -> None:
        config = TableConfig(player_names=["A", "B"], human_seat=None, ai_delay_ms=0)
        session, clock, listener = _session(config)
        session.new_game()
        assert session.is_waiting_for_ai

        clock.run_all()

        assert session.state.is_hand_over
        listener.on_hand_finished.assert_called_once()
        assert session.coaching() is None

    def test_folded_human_leaves_ai_to_finish(self) -> None:
        session, clock, listener = _session(TableConfig.three_handed())
        session.new_game()
        session.human_action(Action.FOLD)
        clock.run_all()

        assert session.state.is_hand_over
        listener.on_hand_finished.assert_called_once()


class TestCoaching:
    def test_coaching_for_human(self) -> None:
        session, _, _ = _session()
        session.new_game()
        info = session.coaching()
        assert 0.0 <= info.strength <= 100.0
        assert info.label in ("Weak", "Medium", "Strong", "Very Strong")
        assert info.recommendation.reason
        assert info.tips


class TestMakeSelector:
    def test_heads_up_uses_mcts(self) -> None:
        selector = make_selector(TableConfig.heads_up(mcts_iterations=50))
        assert isinstance(selector, MCTSAI)
        assert selector.iterations == 50

    def test_three_handed_uses_rule_based(self) -> None:
        assert isinstance(make_selector(TableConfig.three_handed()), RuleBasedAI)


@pytest.mark.parametrize("factory", [TableConfig.heads_up, TableConfig.three_handed])
def test_real_engines_finish_hands(factory) -> None:
    config = factory(ai_delay_ms=0, mcts_iterations=30)
    clock = ManualScheduler()
    session = TableSession(config, clock, rng=random.Random(4))
    session.new_game()
    session.human_action(Action.FOLD)
    clock.run_all()

    assert session.state.is_hand_over
    assert session.state.total_chips == config.starting_chips * config.num_players
