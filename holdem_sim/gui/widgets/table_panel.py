"""Table area: opponent panels, community cards, pot and the human seat."""

from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QVBoxLayout,
    QWidget,
)

from holdem_sim.gui.view_protocol import SeatView, TableViewModel
from holdem_sim.gui.widgets.card_display import CardRow


class SeatPanel(QGroupBox):
    """Name, chips, cards and last-bet line for one seat."""

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        layout = QVBoxLayout(self)
        layout.setSpacing(4)

        self._cards = CardRow(2)
        layout.addWidget(self._cards, alignment=Qt.AlignCenter)

        self._chips = QLabel()
        self._chips.setObjectName("chips")
        self._chips.setAlignment(Qt.AlignCenter)
        layout.addWidget(self._chips)

        self._status = QLabel()
        self._status.setObjectName("seatStatus")
        self._status.setAlignment(Qt.AlignCenter)
        layout.addWidget(self._status)

    def show_seat(self, seat: SeatView) -> None:
        title = f"{seat.name} (D)" if seat.is_dealer else seat.name
        self.setTitle(title)
        self._cards.set_cards(seat.cards)
        self._chips.setText(f"${seat.chips}")
        self._status.setText(seat.status)
        # Folded seats are dimmed
        self.setEnabled(not seat.folded)


class TablePanel(QWidget):
    """Felt area holding every seat plus the board and pot."""

    def __init__(self, num_seats: int, human_seat: int | None, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setObjectName("felt")
        self._human_seat = human_seat
        self._seats: list[SeatPanel] = []
        self._build_ui(num_seats)

    def _build_ui(self, num_seats: int) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(12, 12, 12, 12)

        # --- Opponents across the top ---
        opponents_row = QHBoxLayout()
        human_panel = None
        for i in range(num_seats):
            panel = SeatPanel()
            self._seats.append(panel)
            if i == self._human_seat:
                human_panel = panel
            else:
                opponents_row.addWidget(panel)
        layout.addLayout(opponents_row)

        # --- Board and pot ---
        self._phase = QLabel()
        self._phase.setObjectName("phase")
        self._phase.setAlignment(Qt.AlignCenter)
        layout.addWidget(self._phase)

        self._board = CardRow(5)
        layout.addWidget(self._board, alignment=Qt.AlignCenter)

        self._pot = QLabel("Pot: $0")
        self._pot.setObjectName("pot")
        self._pot.setAlignment(Qt.AlignCenter)
        layout.addWidget(self._pot)

        # --- Human seat at the bottom ---
        if human_panel is not None:
            layout.addWidget(human_panel, alignment=Qt.AlignCenter)

    def show_table(self, model: TableViewModel) -> None:
        self._phase.setText(f"Hand #{model.hand_number} - {model.phase}")
        self._board.set_cards(model.community_cards)
        self._pot.setText(f"Pot: ${model.pot}")
        for panel, seat in zip(self._seats, model.seats):
            panel.show_seat(seat)
