"""Table session: sequences human and AI turns over a run of hands.

The human acts; after the AI delay every live AI seat acts once in seat
order; after another delay the round is checked and either the next street
is dealt or the human is asked to respond to a raise. When the human cannot
act (folded, all-in, or no human seat) AI passes keep running on their own.
All AI work goes through one TurnScheduler, so at most one AI task is ever
pending.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Protocol

from holdem_sim.core.betting import (
    ActionError,
    advance_street,
    apply_action,
    is_betting_round_complete,
    legal_actions,
    next_dealer,
    start_hand,
)
from holdem_sim.core.game_state import GameState, ShowdownResult
from holdem_sim.core.hand_strength import seat_strength, strength_label
from holdem_sim.core.table_config import EngineType, TableConfig
from holdem_sim.simulation.scheduler import Scheduler, TurnScheduler
from holdem_sim.strategy.data_structures import ActionSelector, AIDecision, Recommendation
from holdem_sim.strategy.mcts import MCTSAI
from holdem_sim.strategy.rule_based import RuleBasedAI, coaching_tips, recommend_for_seat
from holdem_sim.utils.constants import ACTION_PAST_TENSE, Action, Phase

logger = logging.getLogger("holdem_sim.session")

_PHASE_MESSAGES = {
    Phase.FLOP: "Flop revealed!",
    Phase.TURN: "Turn card revealed!",
    Phase.RIVER: "River card revealed!",
}


# ---------------------------------------------------------------------------
# Data types
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class HistoryEntry:
    """One line of the decision history. Actor "game" marks table events."""

    actor: str
    action: str
    amount: int = 0

    def __str__(self) -> str:
        if self.actor == "game":
            return self.action
        suffix = f" ${self.amount}" if self.amount > 0 else ""
        return f"{self.actor} {self.action}{suffix}"


@dataclass(frozen=True)
class CoachingInfo:
    """Everything the coaching panel shows for the human seat."""

    strength: float
    label: str
    recommendation: Recommendation
    tips: list[str]


class SessionListener(Protocol):
    """Receives session updates (the presenter implements this)."""

    def on_state_changed(self, state: GameState) -> None: ...

    def on_message(self, text: str) -> None: ...

    def on_hand_finished(self, result: ShowdownResult, state: GameState) -> None: ...


def make_selector(config: TableConfig) -> ActionSelector:
    """The AI engine a table variant plays with."""
    if config.engine == EngineType.MCTS:
        return MCTSAI(iterations=config.mcts_iterations, exploration=config.exploration)
    return RuleBasedAI()


# ---------------------------------------------------------------------------
# Session
# ---------------------------------------------------------------------------


class TableSession:
    """Runs hands at one table for a human seat and its AI opponents."""

    def __init__(
        self,
        config: TableConfig,
        scheduler: Scheduler,
        listener: SessionListener | None = None,
        rng: random.Random | None = None,
        selectors: dict[int, ActionSelector] | None = None,
    ) -> None:
        self.config = config
        self.listener = listener
        self._rng = rng or random.Random()
        self._turns = TurnScheduler(scheduler, config.ai_delay_ms)
        default = make_selector(config)
        self._selectors = {
            seat: (selectors or {}).get(seat, default)
            for seat in self.ai_seats
        }
        self.state: GameState | None = None
        self.history: list[HistoryEntry] = []

    # --- Queries ---

    @property
    def ai_seats(self) -> list[int]:
        return [i for i in range(self.config.num_players) if i != self.config.human_seat]

    @property
    def is_waiting_for_ai(self) -> bool:
        return self._turns.has_pending

    @property
    def can_human_act(self) -> bool:
        seat = self.config.human_seat
        if self.state is None or seat is None or self.state.is_hand_over:
            return False
        player = self.state.players[seat]
        return not player.folded and player.chips > 0

    def human_legal_actions(self) -> list[Action]:
        if not self.can_human_act or self.is_waiting_for_ai:
            return []
        return legal_actions(self.state, self.config.human_seat)

    def recent_history(self, limit: int = 8) -> list[HistoryEntry]:
        return self.history[-limit:]

    def coaching(self) -> CoachingInfo | None:
        """Strength, recommendation and tips for the human seat."""
        seat = self.config.human_seat
        if self.state is None or seat is None:
            return None
        strength = seat_strength(self.state.players[seat], self.state.community_cards)
        return CoachingInfo(
            strength=strength,
            label=strength_label(strength),
            recommendation=recommend_for_seat(self.state, seat),
            tips=coaching_tips(self.state, seat),
        )

    # --- Hand lifecycle ---

    def new_game(self) -> None:
        """Reseat everyone with starting chips and deal the first hand."""
        self.history = []
        self._start(GameState.from_config(self.config, rng=self._rng))

    def next_hand(self) -> bool:
        """Deal the next hand. Returns False if it cannot be dealt."""
        if self.state is None:
            self.new_game()
            return True
        if not self.state.is_hand_over:
            self._message("Finish the current hand first.")
            return False
        if len(self.state.players_with_chips) < 2:
            self._message("Game Over! Not enough players with chips.")
            return False

        table = self.state.copy()
        table.dealer_position = next_dealer(table)
        self._start(table)
        return True

    def _start(self, table: GameState) -> None:
        self._turns.reset()
        self.state = start_hand(table, self._rng)
        self.history.append(HistoryEntry("game", f"Hand #{self.state.hand_number}"))
        if self.can_human_act:
            self._message("New hand started! Make your move.")
        else:
            self._turns.schedule(self._run_ai_turns)
        self._notify()

    # --- Human input ---

    def human_action(self, action: Action | str, amount: int = 0) -> bool:
        """Apply the human's action. Returns False if it was refused."""
        if self.state is None or self.state.is_hand_over:
            self._message("No hand in progress.")
            return False
        if self.is_waiting_for_ai:
            self._message("Wait for your opponents to act.")
            return False
        if not self.can_human_act:
            self._message("You cannot act in this hand.")
            return False

        seat = self.config.human_seat
        action = Action(action)
        try:
            self.state = apply_action(self.state, seat, action, amount)
        except ActionError as e:
            self._message(str(e))
            return False

        self._record(seat, action)
        if action == Action.RAISE:
            self._message(f"You raised to ${amount}.")
        else:
            self._message(f"You {ACTION_PAST_TENSE[action]}.")

        if self.state.is_hand_over:
            self._finish_hand()
        else:
            self._turns.schedule(self._run_ai_turns)
        self._notify()
        return True

    # --- AI turns ---

    def _run_ai_turns(self) -> None:
        for seat in self.ai_seats:
            if self.state.is_hand_over:
                break
            player = self.state.players[seat]
            if player.folded or player.chips == 0:
                continue
            decision = self._selectors[seat].choose_action(self.state, seat, self._rng)
            self._apply_ai(seat, decision)

        if self.state.is_hand_over:
            self._finish_hand()
        else:
            self._turns.schedule(self._check_round)
        self._notify()

    def _apply_ai(self, seat: int, decision: AIDecision) -> None:
        name = self.state.players[seat].name
        to_call = self.state.to_call(seat)
        candidates = [decision]
        if to_call == 0:
            candidates.append(AIDecision(Action.CHECK))
        else:
            candidates += [AIDecision(Action.CALL), AIDecision(Action.FOLD)]

        for candidate in candidates:
            try:
                self.state = apply_action(self.state, seat, candidate.action, candidate.amount)
            except ActionError as e:
                logger.warning("%s cannot %s (%s) - trying a fallback", name, candidate, e)
                continue
            self._record(seat, candidate.action)
            if candidate.action == Action.RAISE:
                self._message(f"{name} raised to ${candidate.amount}")
            else:
                self._message(f"{name} {ACTION_PAST_TENSE[candidate.action]}")
            return

    def _check_round(self) -> None:
        if self.state.is_hand_over:
            self._finish_hand()
            return

        if is_betting_round_complete(self.state):
            self.state = advance_street(self.state)
            if self.state.is_hand_over:
                self._finish_hand()
                self._notify()
                return
            text = _PHASE_MESSAGES[self.state.phase]
            self.history.append(HistoryEntry("game", text))
            self._message(text)

        if not self.can_human_act:
            self._turns.schedule(self._run_ai_turns)
        elif self.state.to_call(self.config.human_seat) > 0:
            self._message(f"Your move - ${self.state.to_call(self.config.human_seat)} to call.")
        self._notify()

    def _finish_hand(self) -> None:
        result = self.state.result
        names = " & ".join(self.state.players[s].name for s in result.winners)
        if result.uncontested:
            text = f"{names} wins ${result.pot}!"
        elif result.is_split:
            text = f"Split pot: {names} share ${result.pot} with {result.winning_hand.name}!"
        else:
            text = f"{names} wins ${result.pot} with {result.winning_hand.name}!"
        self.history.append(HistoryEntry("game", text))
        self._message(text)
        if self.listener is not None:
            self.listener.on_hand_finished(result, self.state)

    # --- Helpers ---

    def _record(self, seat: int, action: Action) -> None:
        player = self.state.players[seat]
        # Raises and all-ins show the seat's total bet for the street
        amount = player.bet if action in (Action.RAISE, Action.ALL_IN) else 0
        self.history.append(HistoryEntry(player.name, ACTION_PAST_TENSE[action], amount))

    def _message(self, text: str) -> None:
        logger.debug(text)
        if self.listener is not None:
            self.listener.on_message(text)

    def _notify(self) -> None:
        if self.listener is not None and self.state is not None:
            self.listener.on_state_changed(self.state)
