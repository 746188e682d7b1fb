"""Cancelable one-shot and repeating callbacks driven by the runtime loop."""

from __future__ import annotations

import heapq
import itertools
import logging
import time
from typing import Callable, Optional, Protocol


Callback = Callable[[], None]


class CancelHandle(Protocol):
    """Handle returned for every scheduled callback."""
    @property
    def cancelled(self) -> bool:
        ...

    def cancel(self) -> None:
        ...


class Scheduler(Protocol):
    """Timer source used by the interval state machine."""
    def schedule_repeating(self, interval_ms: int, fn: Callback) -> CancelHandle:
        ...

    def schedule_once(self, delay_ms: int, fn: Callback) -> CancelHandle:
        ...


class _ScheduledEntry:
    def __init__(self, due_at: float, interval_seconds: Optional[float], fn: Callback):
        self.due_at = due_at
        self.interval_seconds = interval_seconds
        self.fn = fn
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        self._cancelled = True


class LoopScheduler:
    """Single-threaded scheduler whose callbacks run inside `run_due()`.

    The owning loop calls `run_due()` repeatedly and may block for at most
    `seconds_until_next()` between calls. All callbacks therefore execute on
    the loop's thread, serialized with every other operation it performs.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self._logger = logger or logging.getLogger("scheduler")
        self._queue: list[tuple[float, int, _ScheduledEntry]] = []
        self._sequence = itertools.count()

    def schedule_repeating(self, interval_ms: int, fn: Callback) -> _ScheduledEntry:
        if interval_ms <= 0:
            raise ValueError("interval_ms must be greater than zero")
        interval_seconds = interval_ms / 1000.0
        entry = _ScheduledEntry(time.monotonic() + interval_seconds, interval_seconds, fn)
        self._push(entry)
        return entry

    def schedule_once(self, delay_ms: int, fn: Callback) -> _ScheduledEntry:
        if delay_ms < 0:
            raise ValueError("delay_ms cannot be negative")
        entry = _ScheduledEntry(time.monotonic() + delay_ms / 1000.0, None, fn)
        self._push(entry)
        return entry

    def pending(self) -> int:
        return sum(1 for _, _, entry in self._queue if not entry.cancelled)

    def seconds_until_next(self) -> Optional[float]:
        self._drop_cancelled()
        if not self._queue:
            return None
        return max(0.0, self._queue[0][0] - time.monotonic())

    def run_due(self) -> int:
        """Fire every callback whose due time has passed; return how many ran."""
        now = time.monotonic()
        fired = 0
        while self._queue and self._queue[0][0] <= now:
            _, _, entry = heapq.heappop(self._queue)
            if entry.cancelled:
                continue

            if entry.interval_seconds is None:
                entry.cancel()
            else:
                entry.due_at += entry.interval_seconds
                # Skip missed periods instead of firing a burst after a stall.
                if entry.due_at <= now:
                    missed = int((now - entry.due_at) // entry.interval_seconds) + 1
                    entry.due_at += missed * entry.interval_seconds
                self._push(entry)

            try:
                entry.fn()
            except Exception as error:
                self._logger.error("Scheduled callback failed: %s", error, exc_info=True)
            fired += 1
        return fired

    def cancel_all(self) -> None:
        for _, _, entry in self._queue:
            entry.cancel()
        self._queue.clear()

    def _push(self, entry: _ScheduledEntry) -> None:
        heapq.heappush(self._queue, (entry.due_at, next(self._sequence), entry))

    def _drop_cancelled(self) -> None:
        while self._queue and self._queue[0][2].cancelled:
            heapq.heappop(self._queue)
