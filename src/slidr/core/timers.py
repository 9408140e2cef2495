"""Repeating timers and the handlers that run on them.

Everything is cooperative: callbacks run to completion on whatever loop
drives the scheduler. ManualScheduler is advanced explicitly (tests,
step-through tooling); AsyncioScheduler rides an asyncio event loop.
"""

import asyncio
import logging
from typing import TYPE_CHECKING, Callable, Optional, Protocol

if TYPE_CHECKING:
    from .state import Slidr

logger = logging.getLogger("Slidr.core.timers")

RESIZE_INTERVAL_MS = 250


class TimerHandle:
    """A repeating timer. cancel() is idempotent."""

    def __init__(self, interval_ms: int, callback: Callable[[], object]):
        self.interval_ms = interval_ms
        self.callback = callback
        self.active = True
        self._on_cancel: Optional[Callable[["TimerHandle"], None]] = None

    def cancel(self):
        if not self.active:
            return
        self.active = False
        if self._on_cancel is not None:
            self._on_cancel(self)


class Scheduler(Protocol):
    def call_every(self, interval_ms: int, callback: Callable[[], object]) -> TimerHandle: ...


class ManualScheduler:
    """Deterministic scheduler driven by advance()."""

    def __init__(self):
        self.now = 0  # ms
        self._due: dict[TimerHandle, int] = {}

    def call_every(self, interval_ms: int, callback: Callable[[], object]) -> TimerHandle:
        if interval_ms <= 0:
            raise ValueError("interval_ms must be positive")
        handle = TimerHandle(interval_ms, callback)
        handle._on_cancel = self._forget
        self._due[handle] = self.now + interval_ms
        return handle

    def _forget(self, handle: TimerHandle):
        self._due.pop(handle, None)

    @property
    def pending(self) -> int:
        return len(self._due)

    def advance(self, ms: int) -> int:
        """Move the clock forward, firing due callbacks in time order.

        Returns the number of callbacks fired.
        """
        target = self.now + ms
        fired = 0
        while self._due:
            handle, due = min(self._due.items(), key=lambda item: item[1])
            if due > target:
                break
            self.now = due
            self._due[handle] = due + handle.interval_ms
            handle.callback()
            fired += 1
        self.now = target
        return fired


class AsyncioScheduler:
    """Repeating timers on an asyncio loop via call_later chains."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        return self._loop or asyncio.get_running_loop()

    def call_every(self, interval_ms: int, callback: Callable[[], object]) -> TimerHandle:
        if interval_ms <= 0:
            raise ValueError("interval_ms must be positive")
        loop = self.loop
        handle = TimerHandle(interval_ms, callback)
        state: dict[str, asyncio.TimerHandle] = {}

        def fire():
            if not handle.active:
                return
            try:
                callback()
            except Exception as e:
                logger.error(f"Timer callback failed: {str(e)}")
            if handle.active:
                state["next"] = loop.call_later(interval_ms / 1000, fire)

        def stop(_handle: TimerHandle):
            pending = state.get("next")
            if pending is not None:
                pending.cancel()

        handle._on_cancel = stop
        state["next"] = loop.call_later(interval_ms / 1000, fire)
        return handle


class ResizeWatcher:
    """Keeps the container sized to the current slide.

    Registered on a scheduler by start() and cancelled by unregister() or
    once the container is detached from its document.
    """

    def __init__(self, slidr: "Slidr", interval_ms: int = RESIZE_INTERVAL_MS):
        self.slidr = slidr
        self.interval_ms = interval_ms
        self.width: Optional[float] = None
        self.height: Optional[float] = None
        self._handle: Optional[TimerHandle] = None

    @property
    def registered(self) -> bool:
        return self._handle is not None and self._handle.active

    def register(self, scheduler: Scheduler):
        if self.registered:
            return
        self.tick()
        if self.slidr.surface.is_attached():
            self._handle = scheduler.call_every(self.interval_ms, self.tick)

    def unregister(self):
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def tick(self):
        surface = self.slidr.surface
        if not surface.is_attached():
            logger.debug(f"Container '{self.slidr.id}' detached; resize watcher stopped")
            self.unregister()
            return
        if surface.is_hidden():
            width = height = 0.0
        else:
            node = self.slidr.graph.get(self.slidr.current)
            if node is None:
                return
            width = surface.measure(node.target, "width")
            height = surface.measure(node.target, "height")
        if (width, height) != (self.width, self.height):
            self.width, self.height = width, height
            surface.set_container_size(width, height)
