"""Virtual-time scheduler — owns every one-shot and repeating game timer."""

from __future__ import annotations

import heapq
import itertools
from dataclasses import dataclass, field
from typing import Callable, Hashable


@dataclass(order=True)
class TimerHandle:
    """A scheduled callback. Ordered by due time, then by scheduling order."""

    due_ms: float
    seq: int
    callback: Callable[[], None] = field(compare=False)
    interval_ms: float | None = field(default=None, compare=False)
    key: Hashable | None = field(default=None, compare=False)
    cancelled: bool = field(default=False, compare=False)

    @property
    def repeating(self) -> bool:
        return self.interval_ms is not None


class Scheduler:
    """Fires callbacks as virtual time is advanced by the game loop.

    Nothing happens between calls to :meth:`advance`, so pausing the game is
    simply a matter of not advancing the clock. Timers due at the same
    instant fire in the order they were scheduled.
    """

    def __init__(self) -> None:
        self.now_ms: float = 0.0
        self._queue: list[TimerHandle] = []
        self._seq = itertools.count()

    def call_later(
        self, delay_ms: float, callback: Callable[[], None], key: Hashable | None = None
    ) -> TimerHandle:
        if delay_ms < 0:
            raise ValueError(f"delay must be non-negative, got {delay_ms}")
        handle = TimerHandle(self.now_ms + delay_ms, next(self._seq), callback, key=key)
        heapq.heappush(self._queue, handle)
        return handle

    def call_every(
        self, interval_ms: float, callback: Callable[[], None], key: Hashable | None = None
    ) -> TimerHandle:
        """Fire ``callback`` every ``interval_ms``, first one interval from now."""
        if interval_ms <= 0:
            raise ValueError(f"interval must be positive, got {interval_ms}")
        handle = TimerHandle(
            self.now_ms + interval_ms, next(self._seq), callback,
            interval_ms=interval_ms, key=key,
        )
        heapq.heappush(self._queue, handle)
        return handle

    def cancel(self, handle: TimerHandle) -> None:
        handle.cancelled = True

    def cancel_key(self, key: Hashable) -> int:
        """Cancel every pending timer registered under ``key``. Returns the count."""
        count = 0
        for handle in self._queue:
            if handle.key == key and not handle.cancelled:
                handle.cancelled = True
                count += 1
        return count

    def cancel_all(self) -> None:
        for handle in self._queue:
            handle.cancelled = True
        self._queue.clear()

    def pending(self, key: Hashable | None = None) -> int:
        """Number of live timers, optionally only those under ``key``."""
        return sum(
            1 for h in self._queue
            if not h.cancelled and (key is None or h.key == key)
        )

    def advance(self, ms: float) -> int:
        """Move the clock forward by ``ms`` and fire everything that falls due.

        Returns the number of callbacks fired.
        """
        if ms < 0:
            raise ValueError(f"cannot move the clock backwards ({ms})")
        target = self.now_ms + ms
        fired = 0
        while self._queue and self._queue[0].due_ms <= target:
            handle = heapq.heappop(self._queue)
            if handle.cancelled:
                continue
            self.now_ms = handle.due_ms
            if handle.repeating:
                handle.due_ms += handle.interval_ms
                handle.seq = next(self._seq)
                heapq.heappush(self._queue, handle)
            handle.callback()
            fired += 1
        self.now_ms = target
        return fired
