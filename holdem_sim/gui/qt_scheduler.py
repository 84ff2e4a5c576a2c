"""Scheduler backed by the Qt event loop.

AI turns run on the GUI thread when their single-shot timer fires, so the
table state is only ever touched from one thread.
"""

from __future__ import annotations

from PySide6.QtCore import QObject, QTimer

from holdem_sim.simulation.scheduler import Task


class QtScheduler(QObject):
    """Runs callbacks after a delay via QTimer.singleShot."""

    def call_later(self, delay_ms: int, callback: Task) -> None:
        QTimer.singleShot(max(0, delay_ms), self, callback)
