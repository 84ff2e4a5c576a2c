"""Monte Carlo Tree Search action selector for the heads-up table.

A fresh tree is grown for every decision and thrown away afterwards. Nodes
live in a flat arena (``MCTSSearch.nodes``) and point at their parent and
children by index. Each node carries a frozen ``HandSnapshot``; children are
derived with ``dataclasses.replace`` so they share the parent's card tuples
and can never modify it.

Each iteration:
  select     descend while the node has children and has been visited,
             taking an unvisited child first, else the best UCB1 score
  expand     a visited leaf gets one child per legal action; step into a
             random one
  simulate   deal the rest of the board once and compare both hands
             (1 win, 0.5 tie, 0 loss)
  backprop   add the reward and a visit to every node up to the root

The chosen action is the root child with the most visits.
"""

from __future__ import annotations

import logging
import math
import random
import time
from dataclasses import dataclass, field, replace

import numpy as np

from holdem_sim.core.game_state import GameState
from holdem_sim.core.hand_evaluator import evaluate_hand
from holdem_sim.strategy.data_structures import AIDecision
from holdem_sim.utils.card import Card, Deck
from holdem_sim.utils.constants import Action, Phase

logger = logging.getLogger("holdem_sim.strategy.mcts")

DEFAULT_ITERATIONS = 500
EXPLORATION = math.sqrt(2)


# ---------------------------------------------------------------------------
# Snapshots
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class HandSnapshot:
    """Immutable view of one hand from the deciding seat's side.

    Attributes:
        hole_cards: The deciding seat's two cards.
        opponent_cards: The opponent's cards, empty when unknown.
        community_cards: Board cards dealt so far.
        pot: Chips in the pot.
        current_bet: Table bet to match this street.
        bet: Chips the deciding seat has put in this street.
        chips: The deciding seat's remaining stack.
        big_blind: Minimum raise increment.
        phase: Current street.
        action: The hypothetical action that produced this snapshot.
    """

    hole_cards: tuple[Card, ...]
    opponent_cards: tuple[Card, ...] = ()
    community_cards: tuple[Card, ...] = ()
    pot: int = 0
    current_bet: int = 0
    bet: int = 0
    chips: int = 0
    big_blind: int = 20
    phase: Phase = Phase.PREFLOP
    action: Action | None = None

    @classmethod
    def from_state(
        cls,
        state: GameState,
        seat: int,
        reveal_opponent: bool = True,
    ) -> HandSnapshot:
        """Snapshot the hand for ``seat`` against the first other live seat."""
        player = state.players[seat]
        opponents = [
            p for i, p in enumerate(state.players)
            if i != seat and not p.folded
        ]
        opponent_cards = tuple(opponents[0].hole_cards) if opponents and reveal_opponent else ()
        return cls(
            hole_cards=tuple(player.hole_cards),
            opponent_cards=opponent_cards,
            community_cards=tuple(state.community_cards),
            pot=state.pot,
            current_bet=state.current_bet,
            bet=player.bet,
            chips=player.chips,
            big_blind=state.big_blind,
            phase=state.phase,
        )

    @property
    def to_call(self) -> int:
        return max(0, self.current_bet - self.bet)

    @property
    def raise_to(self) -> int:
        """Raise-to total: current bet plus half the pot (at least a big blind)."""
        target = self.current_bet + max(self.big_blind, self.pot // 2)
        return min(target, self.chips + self.bet)

    @property
    def can_raise(self) -> bool:
        return self.raise_to > self.current_bet

    def legal_actions(self) -> list[Action]:
        """Fold/call/raise facing a bet, check/raise otherwise. None after a fold."""
        if self.action == Action.FOLD:
            return []
        actions = [Action.FOLD, Action.CALL] if self.to_call > 0 else [Action.CHECK]
        if self.can_raise:
            actions.append(Action.RAISE)
        return actions

    def after(self, action: Action) -> HandSnapshot:
        """Snapshot tagged with ``action`` and its chips applied."""
        match action:
            case Action.CALL:
                paid = min(self.to_call, self.chips)
                return replace(
                    self, action=action,
                    chips=self.chips - paid, bet=self.bet + paid, pot=self.pot + paid,
                )
            case Action.RAISE:
                target = self.raise_to
                paid = target - self.bet
                return replace(
                    self, action=action,
                    chips=self.chips - paid, bet=target,
                    current_bet=target, pot=self.pot + paid,
                )
            case _:
                return replace(self, action=action)


# ---------------------------------------------------------------------------
# Search tree
# ---------------------------------------------------------------------------


@dataclass
class MCTSNode:
    """One decision point in the arena. Links are arena indices."""

    snapshot: HandSnapshot
    parent: int | None = None
    children: list[int] = field(default_factory=list)
    visits: int = 0
    value: float = 0.0

    @property
    def action(self) -> Action | None:
        return self.snapshot.action

    @property
    def mean_value(self) -> float:
        return self.value / self.visits if self.visits else 0.0


class MCTSSearch:
    """Grows and queries one search tree."""

    def __init__(
        self,
        snapshot: HandSnapshot,
        rng: random.Random | None = None,
        exploration: float = EXPLORATION,
    ) -> None:
        self.rng = rng or random.Random()
        self.exploration = exploration
        self.nodes: list[MCTSNode] = [MCTSNode(snapshot=snapshot)]
        self.iterations = 0

    @property
    def root(self) -> MCTSNode:
        return self.nodes[0]

    def run(self, iterations: int) -> None:
        for _ in range(iterations):
            leaf = self._select(0)
            if self.nodes[leaf].visits > 0 and not self.nodes[leaf].children:
                children = self._expand(leaf)
                if children:
                    leaf = self.rng.choice(children)
            reward = self._simulate(leaf)
            self._backpropagate(leaf, reward)
            self.iterations += 1

    def _select(self, index: int) -> int:
        node = self.nodes[index]
        while node.children and node.visits > 0:
            index = self._best_child(index)
            node = self.nodes[index]
        return index

    def _best_child(self, index: int) -> int:
        children = self.nodes[index].children
        for child in children:
            if self.nodes[child].visits == 0:
                return child
        return max(children, key=self.ucb1)

    def ucb1(self, index: int) -> float:
        """Mean reward plus the exploration bonus; unvisited nodes score inf."""
        node = self.nodes[index]
        if node.visits == 0 or node.parent is None:
            return math.inf
        parent_visits = self.nodes[node.parent].visits
        return node.mean_value + self.exploration * math.sqrt(
            math.log(parent_visits) / node.visits
        )

    def _expand(self, index: int) -> list[int]:
        snapshot = self.nodes[index].snapshot
        for action in snapshot.legal_actions():
            self.nodes.append(MCTSNode(snapshot=snapshot.after(action), parent=index))
            self.nodes[index].children.append(len(self.nodes) - 1)
        return self.nodes[index].children

    def _simulate(self, index: int) -> float:
        """Deal one random runout and score the deciding seat's hand."""
        snapshot = self.nodes[index].snapshot
        deck = Deck(self.rng)
        deck.remove([*snapshot.hole_cards, *snapshot.opponent_cards, *snapshot.community_cards])

        opponent = list(snapshot.opponent_cards)
        opponent += deck.deal(2 - len(opponent))
        board = list(snapshot.community_cards)
        board += deck.deal(5 - len(board))

        ours = evaluate_hand(snapshot.hole_cards, board)
        theirs = evaluate_hand(opponent, board)
        if ours > theirs:
            return 1.0
        if ours < theirs:
            return 0.0
        return 0.5

    def _backpropagate(self, index: int | None, reward: float) -> None:
        while index is not None:
            node = self.nodes[index]
            node.visits += 1
            node.value += reward
            index = node.parent

    def child_visits(self) -> dict[Action, int]:
        """Visit count per root action, in generation order."""
        return {
            self.nodes[c].action: self.nodes[c].visits
            for c in self.root.children
        }

    def best_action(self) -> Action | None:
        """Most visited root action, first generated on ties."""
        children = self.root.children
        if not children:
            return None
        visits = np.array([self.nodes[c].visits for c in children])
        return self.nodes[children[int(np.argmax(visits))]].action


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def choose_ai_action(
    snapshot: HandSnapshot,
    iterations: int = DEFAULT_ITERATIONS,
    rng: random.Random | None = None,
    exploration: float = EXPLORATION,
) -> AIDecision:
    """Pick fold/check/call/raise for the snapshot's seat.

    Never raises: a snapshot without two hole cards, a board that is already
    over-full, or a non-positive iteration count all fall back to check.
    """
    t_start = time.perf_counter()

    if len(snapshot.hole_cards) != 2 or len(snapshot.community_cards) > 5:
        logger.debug(
            "Degenerate snapshot (%d hole, %d board cards) - checking",
            len(snapshot.hole_cards), len(snapshot.community_cards),
        )
        return AIDecision(Action.CHECK)
    if iterations <= 0:
        logger.debug("No iterations requested - checking")
        return AIDecision(Action.CHECK)

    search = MCTSSearch(snapshot, rng=rng, exploration=exploration)
    try:
        search.run(iterations)
    except Exception:
        logger.exception("MCTS search failed after %d iterations - checking", search.iterations)
        return AIDecision(Action.CHECK)
    action = search.best_action() or Action.CHECK

    decision = AIDecision(action, snapshot.raise_to if action == Action.RAISE else 0)
    elapsed_ms = (time.perf_counter() - t_start) * 1000
    logger.info(
        "%s -> %s (visits=%s, %d iterations, %.1fms)",
        snapshot.phase,
        decision,
        {str(a): v for a, v in search.child_visits().items()},
        iterations,
        elapsed_ms,
    )
    return decision


class MCTSAI:
    """ActionSelector backed by a per-decision MCTS search."""

    def __init__(
        self,
        iterations: int = DEFAULT_ITERATIONS,
        exploration: float = EXPLORATION,
        reveal_opponent: bool = True,
    ) -> None:
        self.iterations = iterations
        self.exploration = exploration
        self.reveal_opponent = reveal_opponent

    def choose_action(
        self,
        state: GameState,
        seat: int,
        rng: random.Random | None = None,
    ) -> AIDecision:
        snapshot = HandSnapshot.from_state(state, seat, reveal_opponent=self.reveal_opponent)
        return choose_ai_action(
            snapshot,
            iterations=self.iterations,
            rng=rng,
            exploration=self.exploration,
        )
