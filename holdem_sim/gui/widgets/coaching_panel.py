"""Coaching panel: strength bar, recommended action, tips and history.

The strength bar is custom-painted and coloured by band (weak red through
very strong green). The history list shows the most recent decisions and
scrolls to the newest.
"""

from __future__ import annotations

from PySide6.QtCore import QRectF, Qt
from PySide6.QtGui import QColor, QFont, QPainter
from PySide6.QtWidgets import (
    QGroupBox,
    QLabel,
    QListWidget,
    QSizePolicy,
    QVBoxLayout,
    QWidget,
)

from holdem_sim.core.hand_strength import strength_label
from holdem_sim.simulation.table_session import CoachingInfo
from holdem_sim.utils.constants import Action

_LABEL_COLORS = {
    "Very Strong": "#22c55e",
    "Strong": "#84cc16",
    "Medium": "#f59e0b",
    "Weak": "#ef4444",
}

_ACTION_COLORS = {
    Action.RAISE: ("#22c55e", "#fff"),
    Action.CALL: ("#3b82f6", "#fff"),
    Action.FOLD: ("#ef4444", "#fff"),
    Action.CHECK: ("#6b7280", "#fff"),
    Action.ALL_IN: ("#f97316", "#fff"),
}


class StrengthBar(QWidget):
    """Horizontal bar filled to the hand strength percentage."""

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._strength = 0.0
        self.setFixedHeight(26)
        self.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Fixed)

    def set_strength(self, strength: float) -> None:
        self._strength = max(0.0, min(100.0, strength))
        self.update()

    def paintEvent(self, event) -> None:
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing)
        rect = QRectF(0, 0, self.width(), self.height())

        painter.setPen(Qt.NoPen)
        painter.setBrush(QColor("#e5e7eb"))
        painter.drawRoundedRect(rect, 6, 6)

        label = strength_label(self._strength)
        fill_w = max(0.0, rect.width() * self._strength / 100)
        if fill_w > 0:
            painter.setBrush(QColor(_LABEL_COLORS[label]))
            painter.drawRoundedRect(QRectF(0, 0, fill_w, rect.height()), 6, 6)

        painter.setFont(QFont("Segoe UI", 10, QFont.Bold))
        painter.setPen(QColor("#1f2937"))
        painter.drawText(rect, Qt.AlignCenter, f"{label} ({round(self._strength)}%)")
        painter.end()


class CoachingPanel(QWidget):
    """Right-hand side panel for the human seat."""

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(8, 4, 8, 4)

        strength_group = QGroupBox("Hand Strength")
        strength_layout = QVBoxLayout(strength_group)
        self._bar = StrengthBar()
        strength_layout.addWidget(self._bar)
        layout.addWidget(strength_group)

        rec_group = QGroupBox("Recommended Action")
        rec_layout = QVBoxLayout(rec_group)
        self._recommendation = QLabel()
        self._recommendation.setWordWrap(True)
        self._recommendation.setAlignment(Qt.AlignCenter)
        self._recommendation.setMinimumHeight(40)
        rec_layout.addWidget(self._recommendation)
        layout.addWidget(rec_group)

        tips_group = QGroupBox("Coaching Tips")
        tips_layout = QVBoxLayout(tips_group)
        self._tips = QLabel()
        self._tips.setWordWrap(True)
        self._tips.setStyleSheet("QLabel { color: #374151; padding: 4px; }")
        tips_layout.addWidget(self._tips)
        layout.addWidget(tips_group)

        history_group = QGroupBox("Decision Path")
        history_layout = QVBoxLayout(history_group)
        self._history = QListWidget()
        history_layout.addWidget(self._history)
        layout.addWidget(history_group, stretch=1)

    def show_coaching(self, coaching: CoachingInfo) -> None:
        self._bar.set_strength(coaching.strength)

        bg, fg = _ACTION_COLORS.get(coaching.recommendation.action, ("#6b7280", "#fff"))
        self._recommendation.setText(str(coaching.recommendation))
        self._recommendation.setStyleSheet(
            f"QLabel {{ font-size: 13px; font-weight: bold; color: {fg};"
            f" background: {bg}; border-radius: 8px; padding: 6px; }}"
        )

        self._tips.setText("\n".join(f"• {tip}" for tip in coaching.tips))

    def show_history(self, lines: list[str]) -> None:
        self._history.clear()
        self._history.addItems(lines)
        self._history.scrollToBottom()
