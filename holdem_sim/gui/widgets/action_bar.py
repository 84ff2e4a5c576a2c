"""Action bar: fold/check/call/raise/all-in buttons and the raise amount."""

from __future__ import annotations

from PySide6.QtCore import Signal
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QPushButton,
    QSpinBox,
    QWidget,
)

from holdem_sim.gui.view_protocol import ActionButtons

_BUTTON_COLORS = {
    "fold": ("#ef4444", "#dc2626"),
    "check": ("#6b7280", "#4b5563"),
    "call": ("#3b82f6", "#2563eb"),
    "raise": ("#22c55e", "#16a34a"),
    "all_in": ("#f97316", "#ea580c"),
    "next_hand": ("#2563eb", "#1d4ed8"),
    "new_game": ("#4b5563", "#374151"),
}


def _button(text: str, key: str) -> QPushButton:
    bg, hover = _BUTTON_COLORS[key]
    btn = QPushButton(text)
    btn.setFixedHeight(36)
    btn.setMinimumWidth(80)
    btn.setStyleSheet(
        f"QPushButton {{ background: {bg}; color: white; font-weight: bold;"
        f" font-size: 13px; border-radius: 6px; padding: 0 14px; }}"
        f"QPushButton:hover {{ background: {hover}; }}"
        f"QPushButton:disabled {{ background: #d1d5db; color: #9ca3af; }}"
    )
    return btn


class ActionBar(QWidget):
    """Bottom row of player controls."""

    fold_clicked = Signal()
    check_clicked = Signal()
    call_clicked = Signal()
    raise_clicked = Signal()
    all_in_clicked = Signal()
    next_hand_clicked = Signal()
    new_game_clicked = Signal()

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._build_ui()

    def _build_ui(self) -> None:
        layout = QHBoxLayout(self)
        layout.setContentsMargins(8, 4, 8, 4)

        self._fold_btn = _button("Fold", "fold")
        self._fold_btn.clicked.connect(self.fold_clicked.emit)
        layout.addWidget(self._fold_btn)

        self._check_btn = _button("Check", "check")
        self._check_btn.clicked.connect(self.check_clicked.emit)
        layout.addWidget(self._check_btn)

        self._call_btn = _button("Call", "call")
        self._call_btn.clicked.connect(self.call_clicked.emit)
        layout.addWidget(self._call_btn)

        layout.addSpacing(12)
        layout.addWidget(QLabel("Raise to:"))
        self._raise_spin = QSpinBox()
        self._raise_spin.setPrefix("$")
        self._raise_spin.setRange(0, 0)
        layout.addWidget(self._raise_spin)

        self._raise_btn = _button("Raise", "raise")
        self._raise_btn.clicked.connect(self.raise_clicked.emit)
        layout.addWidget(self._raise_btn)

        self._all_in_btn = _button("All-in", "all_in")
        self._all_in_btn.clicked.connect(self.all_in_clicked.emit)
        layout.addWidget(self._all_in_btn)

        layout.addStretch()

        self._next_btn = _button("Next Hand", "next_hand")
        self._next_btn.clicked.connect(self.next_hand_clicked.emit)
        layout.addWidget(self._next_btn)

        self._new_game_btn = _button("New Game", "new_game")
        self._new_game_btn.clicked.connect(self.new_game_clicked.emit)
        layout.addWidget(self._new_game_btn)

        self.set_buttons(ActionButtons())

    def set_buttons(self, buttons: ActionButtons) -> None:
        self._fold_btn.setEnabled(buttons.fold)
        self._check_btn.setEnabled(buttons.check)
        self._call_btn.setEnabled(buttons.call)
        self._raise_btn.setEnabled(buttons.raise_)
        self._raise_spin.setEnabled(buttons.raise_)
        self._all_in_btn.setEnabled(buttons.all_in)
        self._next_btn.setVisible(buttons.next_hand)

    def set_call_amount(self, amount: int) -> None:
        self._call_btn.setText(f"Call ${amount}" if amount > 0 else "Call")

    def set_raise_range(self, minimum: int, maximum: int, value: int) -> None:
        self._raise_spin.setRange(minimum, maximum)
        self._raise_spin.setValue(value)

    def get_raise_amount(self) -> int:
        return self._raise_spin.value()
