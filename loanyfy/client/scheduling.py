"""Per-frame coalescing scheduler for UI recomputation"""

import asyncio
import itertools
import math
from typing import Any, Callable, Dict, Optional, Protocol

from loanyfy.config import settings


class FrameSource(Protocol):
    """Something that can run a callback on the next rendering frame"""

    def request(self, callback: Callable[[], None]) -> Any: ...

    def cancel(self, handle: Any) -> None: ...


class AsyncioFrameSource:
    """
    Frame source backed by the running asyncio loop.

    Callbacks fire at the next frame boundary (multiples of `interval` on the
    loop clock), so every request made during one frame shares a deadline.
    """

    def __init__(self, interval: float | None = None, loop: asyncio.AbstractEventLoop | None = None):
        self.interval = interval or settings.frame_interval_seconds
        self._loop = loop

    def request(self, callback: Callable[[], None]) -> asyncio.TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        now = loop.time()
        next_frame = (math.floor(now / self.interval) + 1) * self.interval
        return loop.call_at(next_frame, callback)

    def cancel(self, handle: asyncio.TimerHandle) -> None:
        handle.cancel()


class ManualFrameSource:
    """Frame source driven by the host calling tick() once per frame"""

    def __init__(self) -> None:
        self._ids = itertools.count(1)
        self._pending: Dict[int, Callable[[], None]] = {}

    def request(self, callback: Callable[[], None]) -> int:
        handle = next(self._ids)
        self._pending[handle] = callback
        return handle

    def cancel(self, handle: int) -> None:
        self._pending.pop(handle, None)

    def tick(self) -> int:
        """Run callbacks requested before this frame; returns how many ran"""
        callbacks = list(self._pending.values())
        self._pending.clear()
        for callback in callbacks:
            callback()
        return len(callbacks)

    @property
    def pending(self) -> int:
        return len(self._pending)


class FrameScheduler:
    """
    Leading-edge-cancel, trailing-edge-fire scheduler.

    Each schedule() cancels the request already waiting for the frame and
    issues a new one, so a burst of calls within one frame runs the callback
    exactly once, after the last call.
    """

    def __init__(self, callback: Callable[[], None], frame_source: Optional[FrameSource] = None):
        self._callback = callback
        self._source = frame_source or AsyncioFrameSource()
        self._handle: Any = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def schedule(self) -> None:
        if self._handle is not None:
            self._source.cancel(self._handle)
        self._handle = self._source.request(self._fire)

    def cancel(self) -> None:
        if self._handle is not None:
            self._source.cancel(self._handle)
            self._handle = None

    def _fire(self) -> None:
        self._handle = None
        self._callback()
