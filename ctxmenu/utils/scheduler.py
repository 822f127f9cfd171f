# ctxmenu/utils/scheduler.py
from __future__ import annotations

import heapq
import itertools
import logging
from typing import Callable, List, Optional, Tuple

import pygame

log = logging.getLogger(__name__)


class TimerHandle:
    """A scheduled callback. ``cancel()`` is safe to call any number of times."""

    __slots__ = ("due", "callback", "_cancelled", "_fired")

    def __init__(self, due: int, callback: Callable[[], None]) -> None:
        self.due = due
        self.callback = callback
        self._cancelled = False
        self._fired = False

    @property
    def active(self) -> bool:
        """True while the callback can still run."""
        return not (self._cancelled or self._fired)

    @property
    def fired(self) -> bool:
        return self._fired

    def cancel(self) -> None:
        self._cancelled = True

    def __repr__(self) -> str:
        state = "active" if self.active else ("fired" if self._fired else "cancelled")
        return f"TimerHandle(due={self.due}, {state})"


class Scheduler:
    """
    Cancelable one-shot timers driven from the frame loop:
        handle = scheduler.call_later(250, open_sub_menu)
        ...
        scheduler.run_due()   # call every frame
        handle.cancel()       # no-op if it already ran

    The clock returns milliseconds; it defaults to pygame.time.get_ticks and
    is injectable so tests can advance time by hand.
    """

    def __init__(self, clock: Optional[Callable[[], int]] = None) -> None:
        self._clock = clock or pygame.time.get_ticks
        self._heap: List[Tuple[int, int, TimerHandle]] = []
        self._seq = itertools.count()

    def now(self) -> int:
        return int(self._clock())

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> TimerHandle:
        handle = TimerHandle(self.now() + max(0, int(delay_ms)), callback)
        heapq.heappush(self._heap, (handle.due, next(self._seq), handle))
        return handle

    @property
    def pending(self) -> int:
        return sum(1 for _, _, h in self._heap if h.active)

    def run_due(self) -> int:
        """Run every active timer whose due time has passed; return how many ran."""
        now = self.now()
        ran = 0
        while self._heap and self._heap[0][0] <= now:
            _, _, handle = heapq.heappop(self._heap)
            if not handle.active:
                continue
            handle._fired = True
            handle.callback()
            ran += 1
        return ran

    def clear(self) -> None:
        for _, _, handle in self._heap:
            handle.cancel()
        self._heap.clear()
