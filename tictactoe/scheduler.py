"""
Deferred task scheduling for the opponent's move.

The session never sleeps or spawns threads itself. It hands the opponent's
move to a Scheduler and keeps the returned handle so the task can be
cancelled on reset, undo, redo or review.
"""

import itertools
import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict

logger = logging.getLogger(__name__)


class Scheduler(ABC):
    """Runs callbacks after a delay, on the caller's event loop."""

    @abstractmethod
    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> Any:
        """
        Schedule `callback` to run once after `delay_ms` milliseconds.

        Returns:
            A handle that can be passed to cancel().
        """

    @abstractmethod
    def cancel(self, handle: Any):
        """Cancel a scheduled callback. Unknown or finished handles are ignored."""


class ManualScheduler(Scheduler):
    """
    Scheduler driven by the caller.

    Tasks wait until run_pending() is called. The console front end sleeps
    for the delay and then runs them; tests run them directly.
    """

    def __init__(self):
        self._ids = itertools.count(1)
        self._tasks: Dict[int, Callable[[], None]] = {}

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> int:
        handle = next(self._ids)
        self._tasks[handle] = callback
        logger.debug("Task %d scheduled in %d ms", handle, delay_ms)
        return handle

    def cancel(self, handle: int):
        if self._tasks.pop(handle, None) is not None:
            logger.debug("Task %d cancelled", handle)

    @property
    def pending(self) -> int:
        return len(self._tasks)

    def run_pending(self) -> int:
        """
        Run every task scheduled so far, oldest first.

        Tasks scheduled while running wait for the next call, and tasks
        cancelled while running are skipped.

        Returns:
            Number of tasks run.
        """
        ran = 0
        for handle in sorted(self._tasks):
            callback = self._tasks.pop(handle, None)
            if callback is None:
                continue
            logger.debug("Running task %d", handle)
            callback()
            ran += 1
        return ran
