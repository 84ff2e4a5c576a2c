"""Card face widget.

Shows a card as rank plus suit glyph in the suit's colour, a patterned back
for a face-down card, or a dashed empty slot for a card not yet dealt.
"""

from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QHBoxLayout, QLabel, QWidget

from holdem_sim.utils.card import Card

_SUIT_COLORS = {
    "s": "#1a1a2e",
    "h": "#e63946",
    "d": "#e63946",
    "c": "#1a1a2e",
}

_EMPTY_STYLE = (
    "QLabel { font-size: 16px; color: #9ca3af;"
    " border: 2px dashed #6b8f71; border-radius: 6px; background: transparent; }"
)
_BACK_STYLE = (
    "QLabel { border: 2px solid #1e3a8a; border-radius: 6px;"
    " background: qlineargradient(x1:0, y1:0, x2:1, y2:1,"
    " stop:0 #1d4ed8, stop:0.5 #3b82f6, stop:1 #1d4ed8); }"
)


class CardLabel(QLabel):
    """A single card: face up, face down or empty."""

    EMPTY = None
    FACE_DOWN = ""

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setFixedSize(52, 72)
        self.setAlignment(Qt.AlignCenter)
        self.set_card(self.EMPTY)

    def set_card(self, card: str | None) -> None:
        """Card string like 'Ah', '' for face down, None for an empty slot."""
        if card is None:
            self.setText("")
            self.setStyleSheet(_EMPTY_STYLE)
        elif card == "":
            self.setText("")
            self.setStyleSheet(_BACK_STYLE)
        else:
            parsed = Card.from_str(card)
            color = _SUIT_COLORS[parsed.suit.value]
            self.setText(parsed.symbol)
            self.setStyleSheet(
                f"QLabel {{ font-size: 18px; font-weight: bold; color: {color};"
                f" border: 2px solid {color}; border-radius: 6px; background: #fff; }}"
            )


class CardRow(QWidget):
    """A fixed number of card slots in a row."""

    def __init__(self, slots: int, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(4)
        self._labels = [CardLabel() for _ in range(slots)]
        for label in self._labels:
            layout.addWidget(label)

    def set_cards(self, cards: list[str]) -> None:
        for i, label in enumerate(self._labels):
            label.set_card(cards[i] if i < len(cards) else CardLabel.EMPTY)
