"""Deadline queue driving deferred callbacks from the main loop.

All callbacks run on the loop thread between key reads; nothing here
spawns threads or blocks.
"""

from __future__ import annotations

import heapq
import itertools
import time
from collections.abc import Callable


class TimerHandle:
    """Cancellable reference to one scheduled callback."""

    __slots__ = ("deadline", "callback", "cancelled")

    def __init__(self, deadline: float, callback: Callable[[], None]) -> None:
        self.deadline = deadline
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class TimerQueue:
    """Monotonic-clock scheduler implementing ``call_later``."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self.clock = clock
        self._heap: list[tuple[float, int, TimerHandle]] = []
        self._sequence = itertools.count()

    def __len__(self) -> int:
        return sum(1 for _, _, handle in self._heap if not handle.cancelled)

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        """Schedule ``callback`` after ``delay`` seconds."""
        handle = TimerHandle(self.clock() + max(0.0, delay), callback)
        heapq.heappush(self._heap, (handle.deadline, next(self._sequence), handle))
        return handle

    def _drop_cancelled(self) -> None:
        while self._heap and self._heap[0][2].cancelled:
            heapq.heappop(self._heap)

    def seconds_until_next(self) -> float | None:
        """Return seconds until the earliest live deadline, ``None`` when idle."""
        self._drop_cancelled()
        if not self._heap:
            return None
        return max(0.0, self._heap[0][0] - self.clock())

    def run_due(self) -> int:
        """Run every callback whose deadline has passed; return how many ran.

        Callbacks scheduled while draining wait for the next call, so a
        zero-delay reschedule cannot spin this loop forever.
        """
        now = self.clock()
        due: list[TimerHandle] = []
        while self._heap and self._heap[0][0] <= now:
            _, _, handle = heapq.heappop(self._heap)
            if not handle.cancelled:
                due.append(handle)
        ran = 0
        for handle in due:
            if handle.cancelled:
                continue
            handle.cancelled = True
            handle.callback()
            ran += 1
        return ran
