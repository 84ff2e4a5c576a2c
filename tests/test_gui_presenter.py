"""Tests for TablePresenter with a mock TableView.

These tests verify the presenter logic without any Qt/PySide6 dependency:
the view is a MagicMock and the session runs on a manual clock.
"""

from __future__ import annotations

import random
from unittest.mock import MagicMock

from holdem_sim.core.betting import apply_action
from holdem_sim.core.table_config import TableConfig
from holdem_sim.gui.presenter import (
    EMPTY_HISTORY,
    TablePresenter,
    build_table_view,
    button_states,
    raise_range,
)
from holdem_sim.gui.view_protocol import ActionButtons
from holdem_sim.simulation.scheduler import ManualScheduler
from holdem_sim.simulation.table_session import CoachingInfo, TableSession
from holdem_sim.strategy.data_structures import AIDecision
from holdem_sim.utils.constants import Action


class _Passive:
    def choose_action(self, state, seat, rng=None) -> AIDecision:
        return AIDecision(Action.CALL if state.to_call(seat) > 0 else Action.CHECK)


def _make_mock_view(raise_amount: int = 60):
    """Create a mock TableView with a preset raise amount."""
    view = MagicMock()
    view.get_raise_amount.return_value = raise_amount
    return view


def _setup(config: TableConfig | None = None, **view_kwargs):
    config = config or TableConfig.heads_up()
    clock = ManualScheduler()
    selectors = {seat: _Passive() for seat in range(config.num_players)}
    session = TableSession(config, clock, rng=random.Random(2), selectors=selectors)
    view = _make_mock_view(**view_kwargs)
    presenter = TablePresenter(view=view, session=session)
    return presenter, session, view, clock


def _last_buttons(view: MagicMock) -> ActionButtons:
    return view.set_buttons.call_args.args[0]


class TestStart:
    def test_registers_as_listener(self) -> None:
        presenter, session, _, _ = _setup()
        assert session.listener is presenter

    def test_start_shows_table(self) -> None:
        presenter, session, view, _ = _setup()
        presenter.start()

        model = view.show_table.call_args.args[0]
        assert model.hand_number == 1
        assert model.pot == 30
        assert model.to_call == 10
        assert len(model.seats) == 2
        view.show_message.assert_any_call("New hand started! Make your move.")

    def test_start_shows_coaching_and_history(self) -> None:
        presenter, _, view, _ = _setup()
        presenter.start()

        coaching = view.show_coaching.call_args.args[0]
        assert isinstance(coaching, CoachingInfo)
        view.show_history.assert_called_with(["Hand #1"])

    def test_start_sets_raise_range(self) -> None:
        presenter, _, view, _ = _setup()
        presenter.start()
        # The half-pot suggestion (35) is lifted to the minimum raise
        view.set_raise_range.assert_called_with(40, 1000, 40)


class TestButtons:
    def test_facing_bet_disables_check(self) -> None:
        presenter, _, view, _ = _setup()
        presenter.start()
        buttons = _last_buttons(view)
        assert not buttons.check
        assert buttons.call
        assert buttons.fold
        assert buttons.raise_
        assert not buttons.next_hand

    def test_nothing_to_call_disables_call(self) -> None:
        presenter, _, view, clock = _setup()
        presenter.start()
        presenter.on_call_clicked()
        clock.run_all()

        buttons = _last_buttons(view)
        assert buttons.check
        assert not buttons.call

    def test_all_disabled_while_ai_pending(self) -> None:
        presenter, _, view, _ = _setup()
        presenter.start()
        presenter.on_call_clicked()
        assert _last_buttons(view) == ActionButtons()

    def test_next_hand_offered_when_hand_over(self) -> None:
        presenter, _, view, _ = _setup()
        presenter.start()
        presenter.on_fold_clicked()
        assert _last_buttons(view) == ActionButtons(next_hand=True)

    def test_no_state_only_next_hand(self) -> None:
        _, session, _, _ = _setup()
        assert button_states(session) == ActionButtons(next_hand=True)


class TestActions:
    def test_raise_reads_amount_from_view(self) -> None:
        presenter, session, view, _ = _setup(raise_amount=80)
        presenter.start()
        presenter.on_raise_clicked()

        assert session.state.current_bet == 80
        view.show_message.assert_any_call("You raised to $80.")

    def test_invalid_raise_shows_message(self) -> None:
        presenter, session, view, _ = _setup(raise_amount=20)
        presenter.start()
        presenter.on_raise_clicked()

        view.show_message.assert_called_with("Raise must be higher than current bet!")
        assert session.state.current_bet == 20

    def test_check_click(self) -> None:
        presenter, session, view, clock = _setup()
        presenter.start()
        presenter.on_call_clicked()
        clock.run_all()
        presenter.on_check_clicked()
        view.show_message.assert_any_call("You checked.")

    def test_all_in_click(self) -> None:
        presenter, session, _, clock = _setup()
        presenter.start()
        presenter.on_all_in_clicked()
        clock.run_all()
        assert session.state.is_hand_over

    def test_next_hand_click(self) -> None:
        presenter, session, view, _ = _setup()
        presenter.start()
        presenter.on_fold_clicked()
        presenter.on_next_hand_clicked()

        assert session.state.hand_number == 2
        assert view.show_table.call_args.args[0].hand_number == 2

    def test_new_game_click(self) -> None:
        presenter, session, _, _ = _setup()
        presenter.start()
        presenter.on_fold_clicked()
        presenter.on_new_game_clicked()
        assert session.state.hand_number == 1
        assert session.state.total_chips == 2000

    def test_ai_turn_updates_view(self) -> None:
        presenter, _, view, clock = _setup()
        presenter.start()
        presenter.on_call_clicked()
        view.show_message.reset_mock()

        clock.advance(1000)
        view.show_message.assert_any_call("CPU checked")


class TestTableViewModel:
    def test_opponent_cards_hidden_during_hand(self) -> None:
        _, session, _, _ = _setup()
        session.new_game()
        model = build_table_view(session.state, 0)
        assert all(c != "" for c in model.seats[0].cards)
        assert model.seats[1].cards == ["", ""]

    def test_cards_revealed_at_showdown(self) -> None:
        _, session, _, clock = _setup()
        session.new_game()
        session.human_action(Action.ALL_IN)
        clock.run_all()
        model = build_table_view(session.state, 0)
        assert all(c != "" for c in model.seats[1].cards)

    def test_cards_stay_hidden_after_fold_win(self) -> None:
        _, session, _, _ = _setup()
        session.new_game()
        session.human_action(Action.FOLD)
        model = build_table_view(session.state, 0)
        assert model.seats[1].cards == ["", ""]

    def test_seat_status(self) -> None:
        _, session, _, _ = _setup(TableConfig.three_handed())
        session.new_game()
        state = apply_action(session.state, 0, Action.FOLD)
        model = build_table_view(state, 0)
        assert model.seats[0].status == "Folded"
        assert model.seats[2].status == "Bet: $20"
        assert model.seats[0].is_dealer
        assert model.phase == "PREFLOP"

    def test_no_human_seat(self) -> None:
        _, session, _, _ = _setup(TableConfig(player_names=["A", "B"], human_seat=None))
        session.new_game()
        model = build_table_view(session.state, None)
        assert model.to_call == 0
        assert all(seat.cards == ["", ""] for seat in model.seats)


class TestRaiseRange:
    def test_short_stack_range_collapses(self) -> None:
        _, session, _, _ = _setup(TableConfig.heads_up(starting_chips=30))
        session.new_game()
        # Seat 0 posted 10 and has 20 behind
        assert raise_range(session.state, 0) == (30, 30, 30)


class TestHistory:
    def test_empty_history_placeholder(self) -> None:
        presenter, session, view, _ = _setup()
        presenter.start()
        session.history = []
        presenter.refresh()
        view.show_history.assert_called_with([EMPTY_HISTORY])
