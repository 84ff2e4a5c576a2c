"""Framework-agnostic presenter for the Hold'em trainer GUI.

TablePresenter mediates between the TableView (UI) and a TableSession.
It has NO Qt/PySide6 imports; it depends only on the TableView Protocol
and the session. It is also the session's listener, so every state
change, status message and finished hand lands here and is pushed to
the view.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from holdem_sim.core.game_state import GameState, ShowdownResult
from holdem_sim.gui.view_protocol import ActionButtons, SeatView, TableViewModel
from holdem_sim.strategy.rule_based import raise_size
from holdem_sim.utils.constants import Action

if TYPE_CHECKING:
    from holdem_sim.gui.view_protocol import TableView
    from holdem_sim.simulation.table_session import TableSession

EMPTY_HISTORY = "Your decision path will appear here"


def build_table_view(state: GameState, human_seat: int | None) -> TableViewModel:
    """Table view model; AI cards stay face down until a contested showdown."""
    result = state.result
    reveal = state.is_hand_over and result is not None and not result.uncontested
    seats = []
    for i, player in enumerate(state.players):
        face_up = i == human_seat or (reveal and not player.folded)
        seats.append(
            SeatView(
                name=player.name,
                chips=player.chips,
                bet=player.bet,
                cards=[str(c) if face_up else "" for c in player.hole_cards],
                folded=player.folded,
                is_dealer=i == state.dealer_position,
                is_human=i == human_seat,
            )
        )
    return TableViewModel(
        hand_number=state.hand_number,
        phase=state.phase.value.upper(),
        pot=state.pot,
        to_call=state.to_call(human_seat) if human_seat is not None else 0,
        community_cards=[str(c) for c in state.community_cards],
        seats=seats,
    )


def button_states(session: TableSession) -> ActionButtons:
    """Enabled buttons for the human seat.

    Check is only offered with nothing to call and call only with something
    to call. Everything is off while an AI task is pending.
    """
    actions = session.human_legal_actions()
    state = session.state
    if not actions:
        return ActionButtons(next_hand=state is None or state.is_hand_over)
    return ActionButtons(
        fold=Action.FOLD in actions,
        check=Action.CHECK in actions,
        call=Action.CALL in actions,
        raise_=Action.RAISE in actions,
        all_in=Action.ALL_IN in actions,
    )


def raise_range(state: GameState, seat: int) -> tuple[int, int, int]:
    """(minimum, maximum, suggested) raise-to totals for a seat."""
    player = state.players[seat]
    maximum = player.chips + player.bet
    minimum = min(state.current_bet + state.big_blind, maximum)
    suggested = min(max(raise_size(state), minimum), maximum)
    return minimum, maximum, suggested


class TablePresenter:
    """Coordinates view events, the table session and display updates.

    Framework-agnostic: depends only on the TableView Protocol.
    """

    def __init__(self, view: TableView, session: TableSession) -> None:
        self._view = view
        self._session = session
        session.listener = self

    def start(self) -> None:
        """Deal the first hand."""
        self._session.new_game()
        self.refresh()

    # --- View events ---

    def on_fold_clicked(self) -> None:
        self._act(Action.FOLD)

    def on_check_clicked(self) -> None:
        self._act(Action.CHECK)

    def on_call_clicked(self) -> None:
        self._act(Action.CALL)

    def on_raise_clicked(self) -> None:
        self._act(Action.RAISE, self._view.get_raise_amount())

    def on_all_in_clicked(self) -> None:
        self._act(Action.ALL_IN)

    def on_next_hand_clicked(self) -> None:
        self._session.next_hand()
        self.refresh()

    def on_new_game_clicked(self) -> None:
        self._session.new_game()
        self.refresh()

    def _act(self, action: Action, amount: int = 0) -> None:
        self._session.human_action(action, amount)
        self.refresh()

    # --- SessionListener ---

    def on_state_changed(self, state: GameState) -> None:
        self.refresh()

    def on_message(self, text: str) -> None:
        self._view.show_message(text)

    def on_hand_finished(self, result: ShowdownResult, state: GameState) -> None:
        self.refresh()

    # --- Rendering ---

    def refresh(self) -> None:
        """Push the session's current state to the view."""
        session = self._session
        state = session.state
        self._view.set_buttons(button_states(session))
        if state is None:
            return

        seat = session.config.human_seat
        self._view.show_table(build_table_view(state, seat))
        if session.can_human_act:
            self._view.set_raise_range(*raise_range(state, seat))

        coaching = session.coaching()
        if coaching is not None:
            self._view.show_coaching(coaching)

        history = [str(entry) for entry in session.recent_history()]
        self._view.show_history(history or [EMPTY_HISTORY])
