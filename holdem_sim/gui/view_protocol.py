"""Abstract view interface for the Hold'em trainer GUI.

The TableView Protocol defines the contract between the TablePresenter
and any concrete UI framework. The presenter depends only on this
protocol and the plain view models below, never on Qt imports.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from holdem_sim.simulation.table_session import CoachingInfo


@dataclass(frozen=True)
class SeatView:
    """One seat as the table area draws it.

    Attributes:
        name: Seat name.
        chips: Remaining stack.
        bet: Chips put in this street.
        cards: Card strings like 'Ah'; '' for a face-down card.
        folded: Whether the seat is out of the hand.
        is_dealer: Whether the seat holds the dealer button.
        is_human: Whether this is the human seat.
    """

    name: str
    chips: int
    bet: int = 0
    cards: list[str] = field(default_factory=list)
    folded: bool = False
    is_dealer: bool = False
    is_human: bool = False

    @property
    def status(self) -> str:
        if self.folded:
            return "Folded"
        return f"Bet: ${self.bet}" if self.bet > 0 else ""


@dataclass(frozen=True)
class TableViewModel:
    """Everything the table area shows for one state."""

    hand_number: int
    phase: str
    pot: int
    to_call: int
    community_cards: list[str]
    seats: list[SeatView]


@dataclass(frozen=True)
class ActionButtons:
    """Which action buttons are enabled."""

    fold: bool = False
    check: bool = False
    call: bool = False
    raise_: bool = False
    all_in: bool = False
    next_hand: bool = False


class TableView(Protocol):
    """Interface that any GUI framework must implement."""

    # --- Input reading ---

    def get_raise_amount(self) -> int:
        """Return the raise-to total entered by the user."""
        ...

    # --- Output display ---

    def show_table(self, model: TableViewModel) -> None:
        """Redraw cards, pot, stacks and opponent panels."""
        ...

    def set_buttons(self, buttons: ActionButtons) -> None:
        """Enable or disable the action buttons."""
        ...

    def set_raise_range(self, minimum: int, maximum: int, value: int) -> None:
        """Bound the raise input and preset its value."""
        ...

    def show_coaching(self, coaching: CoachingInfo) -> None:
        """Update the strength bar, recommendation and tips."""
        ...

    def show_history(self, lines: list[str]) -> None:
        """Show the recent decision history, oldest first."""
        ...

    def show_message(self, text: str) -> None:
        """Show a status line."""
        ...
