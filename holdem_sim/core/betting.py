"""Betting round state machine.

Every transition works on a deep copy of the incoming GameState and returns
it, so a rejected action leaves the caller's state untouched:

    preflop -> flop (3 cards) -> turn (1) -> river (1) -> showdown

A fold that leaves one seat in the hand jumps straight to showdown and pays
that seat without evaluating any cards.
"""

from __future__ import annotations

import logging
import random

from holdem_sim.core.game_state import GameState, ShowdownResult
from holdem_sim.core.hand_evaluator import HandEvaluator, evaluate_hand
from holdem_sim.utils.card import Deck
from holdem_sim.utils.constants import NEXT_PHASE, STREET_CARDS, Action, Phase

logger = logging.getLogger("holdem_sim.betting")


class ActionError(ValueError):
    """Base class for actions the table refuses."""


class InvalidActionError(ActionError):
    """The action is not legal in the current state."""


class InsufficientChipsError(InvalidActionError):
    """The seat cannot cover the amount it needs to put in."""


# ---------------------------------------------------------------------------
# Hand setup
# ---------------------------------------------------------------------------


def start_hand(state: GameState, rng: random.Random | None = None) -> GameState:
    """Shuffle, deal two cards to every seat with chips and post the blinds.

    Seats without chips sit the hand out (folded, no cards).
    """
    new = state.copy()
    new.hand_number += 1
    if rng is not None:
        new.deck = Deck(rng)
    else:
        new.deck.reset()
    new.community_cards = []
    new.pot = 0
    new.current_bet = 0
    new.phase = Phase.PREFLOP
    new.result = None

    for player in new.players:
        player.reset_for_hand()
        if player.chips <= 0:
            player.folded = True

    seated = new.active_indices
    if len(seated) < 2:
        raise InvalidActionError("Not enough players with chips to start a hand")

    for _ in range(2):
        for i in seated:
            new.players[i].hole_cards.extend(new.deck.deal(1))

    sb_seat, bb_seat = blind_seats(new)
    _post_blind(new, sb_seat, new.small_blind)
    _post_blind(new, bb_seat, new.big_blind)
    new.current_bet = max(p.bet for p in new.players)

    logger.debug(
        "Hand #%d: %s posts %d, %s posts %d",
        new.hand_number,
        new.players[sb_seat].name, new.players[sb_seat].bet,
        new.players[bb_seat].name, new.players[bb_seat].bet,
    )
    return new


def blind_seats(state: GameState) -> tuple[int, int]:
    """Small and big blind seats for the current dealer.

    Heads-up the dealer posts the small blind; otherwise the two seats after
    the dealer post.
    """
    seated = [i for i, p in enumerate(state.players) if not p.folded]
    n = len(state.players)
    order = [(state.dealer_position + k) % n for k in range(n)]
    order = [i for i in order if i in seated]
    if len(order) == 2:
        return order[0], order[1]
    return order[1], order[2]


def _post_blind(state: GameState, seat: int, blind: int) -> None:
    player = state.players[seat]
    amount = min(blind, player.chips)
    player.chips -= amount
    player.bet += amount
    player.contributed += amount
    state.pot += amount


def next_dealer(state: GameState) -> int:
    """Next seat clockwise from the dealer that still has chips."""
    n = len(state.players)
    for k in range(1, n + 1):
        seat = (state.dealer_position + k) % n
        if state.players[seat].chips > 0:
            return seat
    return state.dealer_position


# ---------------------------------------------------------------------------
# Actions
# ---------------------------------------------------------------------------


def apply_action(
    state: GameState,
    seat: int,
    action: Action | str,
    amount: int = 0,
) -> GameState:
    """Apply one seat's action and return the new state.

    For RAISE, amount is the total the seat raises to.

    Raises:
        InvalidActionError: The action is illegal (raise not above the
            current bet, raise beyond the seat's chips, check facing a bet,
            acting out of the hand).
        InsufficientChipsError: A call the seat cannot cover on a table that
            does not convert short calls to all-ins.
    """
    action = Action(action)
    if state.is_hand_over:
        raise InvalidActionError("The hand is over")
    if not 0 <= seat < len(state.players):
        raise InvalidActionError(f"No seat {seat} at the table")
    if state.players[seat].folded:
        raise InvalidActionError(f"{state.players[seat].name} has already folded")

    new = state.copy()
    player = new.players[seat]
    to_call = new.to_call(seat)

    match action:
        case Action.FOLD:
            player.folded = True
            if new.players_in_hand == 1:
                _settle(new, resolve_showdown(new))

        case Action.CHECK:
            if to_call > 0:
                raise InvalidActionError(f"Cannot check facing a bet of {to_call}")

        case Action.CALL:
            if to_call > player.chips:
                if not new.short_call_all_in:
                    raise InsufficientChipsError(
                        f"Not enough chips to call {to_call} (have {player.chips})"
                    )
                to_call = player.chips
            _commit(new, seat, to_call)

        case Action.RAISE:
            if amount <= new.current_bet:
                raise InvalidActionError("Raise must be higher than current bet!")
            if amount > player.chips + player.bet:
                raise InvalidActionError("Not enough chips!")
            _commit(new, seat, amount - player.bet)
            new.current_bet = amount

        case Action.ALL_IN:
            _commit(new, seat, player.chips)
            new.current_bet = max(new.current_bet, player.bet)

    return new


def _commit(state: GameState, seat: int, chips: int) -> None:
    player = state.players[seat]
    player.chips -= chips
    player.bet += chips
    player.contributed += chips
    state.pot += chips


def legal_actions(state: GameState, seat: int) -> list[Action]:
    """Actions the seat may take right now."""
    player = state.players[seat]
    if state.is_hand_over or player.folded:
        return []
    to_call = state.to_call(seat)
    actions = [Action.FOLD]
    if to_call == 0:
        actions.append(Action.CHECK)
    elif to_call <= player.chips or state.short_call_all_in:
        actions.append(Action.CALL)
    # Nobody left to call a raise once every other live seat is all-in
    contested = any(
        p.chips > 0 for i, p in enumerate(state.players) if i != seat and not p.folded
    )
    if contested and player.chips + player.bet > state.current_bet:
        actions.append(Action.RAISE)
    if player.chips > 0 and (contested or to_call >= player.chips):
        actions.append(Action.ALL_IN)
    return actions


def is_betting_round_complete(state: GameState) -> bool:
    """True when one seat remains or every live seat has matched the bet."""
    active = state.active_players
    if len(active) <= 1:
        return True
    return all(p.bet == state.current_bet or p.chips == 0 for p in active)


# ---------------------------------------------------------------------------
# Streets and showdown
# ---------------------------------------------------------------------------


def advance_street(state: GameState) -> GameState:
    """Move to the next phase, dealing its community cards.

    Per-street bets and the current bet reset to 0. Entering showdown (or
    advancing with a single seat left) pays out the pot.

    Raises:
        InvalidActionError: If the hand is already at showdown.
    """
    if state.is_hand_over:
        raise InvalidActionError("Cannot advance past showdown")

    new = state.copy()
    for player in new.players:
        player.bet = 0
    new.current_bet = 0

    if new.players_in_hand <= 1:
        _settle(new, resolve_showdown(new))
        return new

    new.phase = NEXT_PHASE[new.phase]
    if new.phase == Phase.SHOWDOWN:
        _settle(new, resolve_showdown(new))
    else:
        new.community_cards.extend(new.deck.deal(STREET_CARDS[new.phase]))
    return new


def run_out_board(state: GameState) -> GameState:
    """Advance street by street until the hand reaches showdown."""
    while not state.is_hand_over:
        state = advance_street(state)
    return state


def uncalled_chips(state: GameState) -> dict[int, int]:
    """Chips a live seat put in this hand beyond what any other seat matched.

    A short all-in call leaves the bettor's excess unmatched; it goes back to
    the bettor rather than into the contested pot.
    """
    refunds = {}
    for i in state.active_indices:
        matched = max(
            (p.contributed for j, p in enumerate(state.players) if j != i), default=0
        )
        excess = state.players[i].contributed - matched
        if excess > 0:
            refunds[i] = excess
    return refunds


def resolve_showdown(state: GameState) -> ShowdownResult:
    """Work out who gets the pot; does not modify the state.

    Uncalled chips are returned first. Exact ties split the rest evenly and
    the remainder goes to the first tied seat.
    """
    active = state.active_indices
    if len(active) == 1:
        return ShowdownResult(pot=state.pot, awards={active[0]: state.pot}, uncontested=True)

    refunds = uncalled_chips(state)
    pot = state.pot - sum(refunds.values())
    evaluations = {
        i: evaluate_hand(state.players[i].hole_cards, state.community_cards)
        for i in active
    }
    best = HandEvaluator.best_of([evaluations[i] for i in active])
    winners = [active[k] for k in best]

    share, remainder = divmod(pot, len(winners))
    awards = {seat: share for seat in winners}
    awards[winners[0]] += remainder
    return ShowdownResult(pot=pot, awards=awards, evaluations=evaluations, refunds=refunds)


def _settle(state: GameState, result: ShowdownResult) -> None:
    for seat, chips in result.refunds.items():
        state.players[seat].chips += chips
        logger.debug(
            "Hand #%d: %d uncalled returned to %s",
            state.hand_number, chips, state.players[seat].name,
        )
    for seat, chips in result.awards.items():
        state.players[seat].chips += chips
    state.pot = 0
    state.phase = Phase.SHOWDOWN
    state.result = result

    names = ", ".join(state.players[s].name for s in result.winners)
    if result.uncontested:
        logger.info("Hand #%d: %s wins %d uncontested", state.hand_number, names, result.pot)
    else:
        logger.info(
            "Hand #%d: %s wins %d with %s%s",
            state.hand_number, names, result.pot,
            result.winning_hand.name if result.winning_hand else "unknown",
            " (split)" if result.is_split else "",
        )
