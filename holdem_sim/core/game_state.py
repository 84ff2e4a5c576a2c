"""Game state tracking for Texas Hold'em."""

from __future__ import annotations

import copy
import random
from dataclasses import dataclass, field

from holdem_sim.core.hand_evaluator import HandEvaluation
from holdem_sim.core.table_config import TableConfig
from holdem_sim.utils.card import Card, Deck
from holdem_sim.utils.constants import Phase


@dataclass
class PlayerState:
    """State of a single seat at the table."""

    name: str
    chips: int
    hole_cards: list[Card] = field(default_factory=list)
    bet: int = 0
    folded: bool = False
    is_human: bool = False
    # Chips put in over the whole hand; bet resets each street
    contributed: int = 0

    def reset_for_hand(self) -> None:
        """Clear cards and bets; chips carry over between hands."""
        self.hole_cards = []
        self.bet = 0
        self.contributed = 0
        self.folded = False

    @property
    def is_all_in(self) -> bool:
        return self.chips == 0 and not self.folded and bool(self.hole_cards)


@dataclass(frozen=True)
class ShowdownResult:
    """How the pot was paid out at the end of a hand."""

    pot: int
    awards: dict[int, int]
    evaluations: dict[int, HandEvaluation] = field(default_factory=dict)
    uncontested: bool = False
    # Uncalled chips handed back before the pot is contested
    refunds: dict[int, int] = field(default_factory=dict)

    @property
    def winners(self) -> list[int]:
        return sorted(self.awards)

    @property
    def is_split(self) -> bool:
        return len(self.awards) > 1

    @property
    def winning_hand(self) -> HandEvaluation | None:
        if self.uncontested or not self.awards:
            return None
        return self.evaluations.get(self.winners[0])


@dataclass
class GameState:
    """Complete state of a Texas Hold'em hand."""

    players: list[PlayerState]
    small_blind: int
    big_blind: int
    deck: Deck = field(default_factory=Deck)
    community_cards: list[Card] = field(default_factory=list)
    pot: int = 0
    phase: Phase = Phase.PREFLOP
    current_bet: int = 0
    dealer_position: int = 0
    short_call_all_in: bool = False
    hand_number: int = 0
    result: ShowdownResult | None = None

    @classmethod
    def from_config(cls, config: TableConfig, rng: random.Random | None = None) -> GameState:
        """Seat a fresh table with starting stacks."""
        players = [
            PlayerState(
                name=name,
                chips=config.starting_chips,
                is_human=(i == config.human_seat),
            )
            for i, name in enumerate(config.player_names)
        ]
        return cls(
            players=players,
            small_blind=config.small_blind,
            big_blind=config.big_blind,
            deck=Deck(rng),
            short_call_all_in=config.short_call_all_in,
        )

    def copy(self) -> GameState:
        """Independent deep copy; transitions work on copies."""
        return copy.deepcopy(self)

    def to_call(self, seat: int) -> int:
        """Chips the seat must add to match the current bet."""
        return max(0, self.current_bet - self.players[seat].bet)

    @property
    def active_players(self) -> list[PlayerState]:
        """Players who have not folded this hand."""
        return [p for p in self.players if not p.folded]

    @property
    def active_indices(self) -> list[int]:
        return [i for i, p in enumerate(self.players) if not p.folded]

    @property
    def players_in_hand(self) -> int:
        return len(self.active_indices)

    @property
    def players_with_chips(self) -> list[PlayerState]:
        return [p for p in self.players if p.chips > 0]

    @property
    def is_hand_over(self) -> bool:
        return self.phase == Phase.SHOWDOWN

    @property
    def total_chips(self) -> int:
        """Chips in stacks plus the pot; constant within a hand."""
        return sum(p.chips for p in self.players) + self.pot
