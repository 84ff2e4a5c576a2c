"""AI action selectors for the Hold'em simulator.

Two independent engines, one per table variant:

Key public API:
    MCTSAI          -- Heads-up selector built on a per-decision MCTS search
    RuleBasedAI     -- Three-handed selector driven by hand strength and pot odds
    choose_ai_action -- MCTS entry point working on a HandSnapshot
    ActionSelector  -- Interface both engines implement
"""

from holdem_sim.strategy.data_structures import ActionSelector, AIDecision, Recommendation
from holdem_sim.strategy.mcts import HandSnapshot, MCTSAI, choose_ai_action
from holdem_sim.strategy.rule_based import RuleBasedAI, recommend_action

__all__ = [
    "ActionSelector",
    "AIDecision",
    "Recommendation",
    "HandSnapshot",
    "MCTSAI",
    "choose_ai_action",
    "RuleBasedAI",
    "recommend_action",
]
