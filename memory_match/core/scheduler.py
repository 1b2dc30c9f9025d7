"""Deferred actions for the game engine.

The engine never sleeps: match/mismatch settling and the countdown are
scheduled continuations. ``VirtualScheduler`` runs them on a virtual clock
so tests can fast-forward; the UI supplies a QTimer-backed implementation.
"""

from __future__ import annotations

import heapq
import itertools
from dataclasses import dataclass, field
from typing import Callable, List, Protocol

Callback = Callable[[], None]


class Scheduler(Protocol):
    def call_later(self, delay_ms: int, callback: Callback, tag: str) -> None:
        """Run *callback* once after *delay_ms* milliseconds."""

    def cancel(self, tag: str) -> None:
        """Drop every pending action scheduled with *tag*."""


@dataclass(order=True)
class _Pending:
    due_ms: int
    seq: int
    tag: str = field(compare=False)
    callback: Callback = field(compare=False)
    cancelled: bool = field(default=False, compare=False)


class VirtualScheduler:
    """Single queue of delayed actions on a manually advanced clock."""

    def __init__(self) -> None:
        self._now_ms = 0
        self._queue: List[_Pending] = []
        self._seq = itertools.count()

    @property
    def now_ms(self) -> int:
        return self._now_ms

    def call_later(self, delay_ms: int, callback: Callback, tag: str) -> None:
        entry = _Pending(self._now_ms + max(0, int(delay_ms)), next(self._seq), tag, callback)
        heapq.heappush(self._queue, entry)

    def cancel(self, tag: str) -> None:
        for entry in self._queue:
            if entry.tag == tag:
                entry.cancelled = True

    def pending(self, tag: str) -> int:
        """Number of live actions carrying *tag*."""
        return sum(1 for entry in self._queue if entry.tag == tag and not entry.cancelled)

    def advance(self, ms: int) -> None:
        """Move the clock forward, firing due actions in time order.

        Actions scheduled by a callback fire in the same call when they fall
        due before the new time.
        """
        target = self._now_ms + max(0, int(ms))
        while self._queue and self._queue[0].due_ms <= target:
            entry = heapq.heappop(self._queue)
            if entry.cancelled:
                continue
            self._now_ms = entry.due_ms
            entry.callback()
        self._now_ms = target
