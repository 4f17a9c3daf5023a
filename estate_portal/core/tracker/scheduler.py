"""
Timer scheduling for status trackers.

Trackers never sleep or create timers directly; every delayed transition
goes through a Scheduler so the timing source can be swapped (real event
loop in the service, virtual clock in tests and replays).

Dependencies: asyncio
System role: Single source of truth for "which delay triggers which transition"
"""

import asyncio
import heapq
import inspect
import itertools
import logging
from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable

logger = logging.getLogger(__name__)

Callback = Callable[[], "Awaitable[Any] | Any"]


class TimerHandle(ABC):
    """Handle to a scheduled callback."""

    @abstractmethod
    def cancel(self) -> None:
        """Prevent the callback from running (or stop it if it is in flight)."""
        ...

    @property
    @abstractmethod
    def cancelled(self) -> bool:
        ...


class Scheduler(ABC):
    """Abstract timer source."""

    @abstractmethod
    def now(self) -> float:
        """Current time in seconds on this scheduler's clock."""
        ...

    @abstractmethod
    def call_later(self, delay: float, callback: Callback) -> TimerHandle:
        """
        Run ``callback`` after ``delay`` seconds.

        Coroutine functions are supported: the returned awaitable is run to
        completion on the scheduler's loop.
        """
        ...


class _AsyncioHandle(TimerHandle):
    def __init__(self) -> None:
        self._timer: asyncio.TimerHandle | None = None
        self._task: asyncio.Task | None = None
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True
        if self._timer is not None:
            self._timer.cancel()
        if self._task is not None and not self._task.done():
            self._task.cancel()

    @property
    def cancelled(self) -> bool:
        return self._cancelled


class AsyncioScheduler(Scheduler):
    """Scheduler backed by the running asyncio event loop."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop
        self._tasks: set[asyncio.Task] = set()

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def now(self) -> float:
        return self.loop.time()

    def call_later(self, delay: float, callback: Callback) -> TimerHandle:
        handle = _AsyncioHandle()

        def _fire() -> None:
            if handle.cancelled:
                return
            result = callback()
            if inspect.isawaitable(result):
                task = self.loop.create_task(result)
                handle._task = task
                self._tasks.add(task)
                task.add_done_callback(self._task_done)

        handle._timer = self.loop.call_later(max(delay, 0.0), _fire)
        return handle

    def _task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error(
                f"{__name__}:_task_done - Scheduled callback raised {type(exc).__name__}: {exc}"
            )


class _ManualHandle(TimerHandle):
    def __init__(self, due: float, callback: Callback) -> None:
        self.due = due
        self.callback = callback
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled


class ManualScheduler(Scheduler):
    """
    Virtual-clock scheduler.

    Time only moves when ``advance`` is awaited; due callbacks run in due
    order (ties in scheduling order) and coroutine callbacks are awaited
    before the next one runs.
    """

    def __init__(self, start: float = 0.0) -> None:
        self._now = start
        self._queue: list[tuple[float, int, _ManualHandle]] = []
        self._seq = itertools.count()

    def now(self) -> float:
        return self._now

    def call_later(self, delay: float, callback: Callback) -> TimerHandle:
        handle = _ManualHandle(self._now + max(delay, 0.0), callback)
        heapq.heappush(self._queue, (handle.due, next(self._seq), handle))
        return handle

    @property
    def pending(self) -> int:
        """Number of scheduled, not cancelled callbacks."""
        return sum(1 for _, _, handle in self._queue if not handle.cancelled)

    async def advance(self, seconds: float) -> None:
        """Move the clock forward, running every callback that falls due."""
        target = self._now + seconds
        while self._queue and self._queue[0][0] <= target:
            due, _, handle = heapq.heappop(self._queue)
            if handle.cancelled:
                continue
            self._now = due
            result = handle.callback()
            if inspect.isawaitable(result):
                await result
        self._now = target
