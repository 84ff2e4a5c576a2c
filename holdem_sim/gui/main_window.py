"""Main window assembling all panels, implementing the TableView protocol."""

from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QVBoxLayout,
    QWidget,
)

from holdem_sim.gui.view_protocol import ActionButtons, TableViewModel
from holdem_sim.gui.widgets.action_bar import ActionBar
from holdem_sim.gui.widgets.coaching_panel import CoachingPanel
from holdem_sim.gui.widgets.table_panel import TablePanel
from holdem_sim.simulation.table_session import CoachingInfo


class MainWindow(QMainWindow):
    """Top-level window implementing the TableView protocol.

    Layout:
      - Status line (top)
      - TablePanel (left ~65%) with the ActionBar under it
      - CoachingPanel (right ~35%)
    """

    def __init__(self, num_seats: int, human_seat: int | None, title: str = "Hold'em Trainer") -> None:
        super().__init__()
        self.setWindowTitle(title)
        self.setMinimumSize(960, 640)
        self.resize(1100, 720)

        central = QWidget()
        self.setCentralWidget(central)
        layout = QVBoxLayout(central)
        layout.setContentsMargins(10, 10, 10, 10)
        layout.setSpacing(6)

        # Status line (top)
        self._status = QLabel("Welcome to the table!")
        self._status.setObjectName("statusLine")
        self._status.setAlignment(Qt.AlignCenter)
        layout.addWidget(self._status)

        body = QHBoxLayout()
        layout.addLayout(body, stretch=1)

        # Table and actions (left)
        left = QVBoxLayout()
        self._table_panel = TablePanel(num_seats, human_seat)
        left.addWidget(self._table_panel, stretch=1)
        self._action_bar = ActionBar()
        left.addWidget(self._action_bar)
        body.addLayout(left, stretch=2)

        # Coaching (right)
        self._coaching_panel = CoachingPanel()
        body.addWidget(self._coaching_panel, stretch=1)

    # --- TableView protocol implementation ---

    def get_raise_amount(self) -> int:
        return self._action_bar.get_raise_amount()

    def show_table(self, model: TableViewModel) -> None:
        self._table_panel.show_table(model)
        self._action_bar.set_call_amount(model.to_call)

    def set_buttons(self, buttons: ActionButtons) -> None:
        self._action_bar.set_buttons(buttons)

    def set_raise_range(self, minimum: int, maximum: int, value: int) -> None:
        self._action_bar.set_raise_range(minimum, maximum, value)

    def show_coaching(self, coaching: CoachingInfo) -> None:
        self._coaching_panel.show_coaching(coaching)

    def show_history(self, lines: list[str]) -> None:
        self._coaching_panel.show_history(lines)

    def show_message(self, text: str) -> None:
        self._status.setText(text)

    # --- Signal accessors for wiring ---

    @property
    def action_bar(self) -> ActionBar:
        return self._action_bar
