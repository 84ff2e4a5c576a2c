"""Delayed task scheduling for AI turns.

The table is single-threaded: AI "thinking time" is a delayed callback on
whatever event loop drives the table (a QTimer in the GUI, a manual clock in
tests and headless runs). TurnScheduler sits on top and keeps at most one AI
task pending at any time.
"""

from __future__ import annotations

import heapq
import itertools
import logging
from typing import Callable, Protocol

logger = logging.getLogger("holdem_sim.scheduler")

Task = Callable[[], None]


class Scheduler(Protocol):
    """Runs a callback once after a delay."""

    def call_later(self, delay_ms: int, callback: Task) -> None: ...


class ManualScheduler:
    """Scheduler driven by an explicit clock.

    Callbacks run in due-time order (FIFO among equal times) when the clock
    is advanced. Callbacks may schedule further callbacks.
    """

    def __init__(self) -> None:
        self.now_ms = 0
        self._queue: list[tuple[int, int, Task]] = []
        self._seq = itertools.count()

    def call_later(self, delay_ms: int, callback: Task) -> None:
        heapq.heappush(self._queue, (self.now_ms + max(0, delay_ms), next(self._seq), callback))

    @property
    def pending(self) -> int:
        return len(self._queue)

    def advance(self, ms: int) -> int:
        """Move the clock forward, running everything that falls due. Returns tasks run."""
        deadline = self.now_ms + ms
        ran = 0
        while self._queue and self._queue[0][0] <= deadline:
            due, _, callback = heapq.heappop(self._queue)
            self.now_ms = due
            callback()
            ran += 1
        self.now_ms = deadline
        return ran

    def run_all(self, max_tasks: int = 100_000) -> int:
        """Run until the queue is empty.

        Raises:
            RuntimeError: If more than max_tasks run (a task keeps rescheduling).
        """
        ran = 0
        while self._queue:
            if ran >= max_tasks:
                raise RuntimeError(f"Scheduler still busy after {max_tasks} tasks")
            due, _, callback = heapq.heappop(self._queue)
            self.now_ms = max(self.now_ms, due)
            callback()
            ran += 1
        return ran


class TurnScheduler:
    """Schedules AI work with at most one task pending.

    A request made while a task is pending is ignored. reset() forgets a
    pending task so it does nothing when its timer fires; a task that has
    already started always runs to completion.
    """

    def __init__(self, scheduler: Scheduler, delay_ms: int = 1000) -> None:
        self._scheduler = scheduler
        self.delay_ms = delay_ms
        self._pending = False
        self._generation = 0

    @property
    def has_pending(self) -> bool:
        return self._pending

    def schedule(self, task: Task, delay_ms: int | None = None) -> bool:
        """Queue task after the delay. Returns False if another task is pending."""
        if self._pending:
            logger.debug("AI task already pending - ignoring %s", getattr(task, "__name__", task))
            return False

        self._pending = True
        generation = self._generation

        def fire() -> None:
            if generation != self._generation:
                return
            self._pending = False
            task()

        self._scheduler.call_later(self.delay_ms if delay_ms is None else delay_ms, fire)
        return True

    def reset(self) -> None:
        """Drop any pending task."""
        self._generation += 1
        self._pending = False
