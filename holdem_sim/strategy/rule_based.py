"""Rule-based AI for the three-handed table.

Architecture:
  hole cards + board -> hand strength (0-100)
    -> recommendation (strength bands + pot odds)
    -> randomised follow-through (70% raise, 80% fold)
    -> AIDecision(action, amount)

The same recommendation drives the coaching panel for the human seat.
"""

from __future__ import annotations

import logging
import random

from holdem_sim.core.game_state import GameState
from holdem_sim.core.hand_strength import seat_strength
from holdem_sim.strategy.data_structures import AIDecision, Recommendation
from holdem_sim.utils.constants import Action, Phase

logger = logging.getLogger("holdem_sim.strategy.rule_based")

RAISE_THRESHOLD = 70.0
DECENT_THRESHOLD = 40.0
MARGINAL_THRESHOLD = 20.0
MAX_CALL_POT_ODDS = 0.3

# A roll above these follows the recommendation: raise 70%, fold 80% of the time
RAISE_FOLLOW_ROLL = 0.3
FOLD_FOLLOW_ROLL = 0.2

RAISE_POT_FRACTION = 0.5


def pot_odds(to_call: int, pot: int) -> float:
    """Share of the final pot the caller puts in: to_call / (pot + to_call)."""
    total = pot + to_call
    return to_call / total if total > 0 else 0.0


def recommend_action(strength: float, to_call: int, pot: int) -> Recommendation:
    """Suggest an action from hand strength and pot odds.

    Bands are exclusive at their lower bound: a strength of exactly 70 is a
    decent hand, not a raising hand.
    """
    if strength > RAISE_THRESHOLD:
        return Recommendation(Action.RAISE, "Strong hand - maximize value")
    if strength > DECENT_THRESHOLD:
        if to_call == 0:
            return Recommendation(Action.CHECK, "Decent hand - see more cards for free")
        return Recommendation(Action.CALL, "Decent hand - worth seeing more cards")
    if strength > MARGINAL_THRESHOLD and pot_odds(to_call, pot) < MAX_CALL_POT_ODDS:
        return Recommendation(Action.CALL, "Getting good pot odds")
    if to_call == 0:
        return Recommendation(Action.CHECK, "Free card - why not?")
    return Recommendation(Action.FOLD, "Weak hand - save your chips")


def recommend_for_seat(state: GameState, seat: int) -> Recommendation:
    strength = seat_strength(state.players[seat], state.community_cards)
    return recommend_action(strength, state.to_call(seat), state.pot)


def raise_size(state: GameState) -> int:
    """Raise-to amount: current bet plus half the pot, rounded down."""
    return state.current_bet + int(state.pot * RAISE_POT_FRACTION)


def coaching_tips(state: GameState, seat: int) -> list[str]:
    """Short tips for the coaching panel."""
    tips: list[str] = []
    strength = seat_strength(state.players[seat], state.community_cards)

    if seat == 0:
        tips.append("You're first to act - being early is a disadvantage")
    else:
        tips.append("Later position gives you information advantage")

    if strength > 60:
        tips.append("Premium hand - consider raising to build the pot")
    elif strength < 30:
        tips.append("Marginal hand - be cautious with large bets")

    match state.phase:
        case Phase.PREFLOP:
            tips.append("Starting hand selection is crucial in poker")
        case Phase.FLOP:
            tips.append("The flop defines your hand - reassess your strength")
        case Phase.RIVER:
            tips.append("Last chance to bet - make it count or save chips")

    return tips


class RuleBasedAI:
    """Follows the strength-band recommendation with some randomness."""

    def choose_action(
        self,
        state: GameState,
        seat: int,
        rng: random.Random | None = None,
    ) -> AIDecision:
        rng = rng or random.Random()
        recommendation = recommend_for_seat(state, seat)
        to_call = state.to_call(seat)
        passive = Action.CHECK if to_call == 0 else Action.CALL
        roll = rng.random()

        match recommendation.action:
            case Action.FOLD:
                decision = AIDecision(Action.FOLD if roll > FOLD_FOLLOW_ROLL else passive)
            case Action.RAISE:
                if roll > RAISE_FOLLOW_ROLL:
                    decision = AIDecision(Action.RAISE, raise_size(state))
                else:
                    decision = AIDecision(passive)
            case _:
                decision = AIDecision(recommendation.action)

        logger.debug(
            "%s: recommended %s, roll %.2f -> %s",
            state.players[seat].name, recommendation.action, roll, decision,
        )
        return decision
