"""Slider state and auto-play.

`SlideCursor` is the position in a ring of slides. `AutoPlay` advances a
cursor on a fixed interval as an asyncio task: it can be started, stopped
and reset, and a user interaction pauses it for `resume_after` seconds.
"""

import asyncio
import logging
from collections.abc import Callable

logger = logging.getLogger("uvicorn.error")

DEFAULT_INTERVAL = 5.0
DEFAULT_RESUME_AFTER = 10.0


class SlideCursor:
    """Current index in a ring of `count` slides."""

    def __init__(self, count: int, index: int = 0):
        if count < 0:
            raise ValueError("count must be >= 0")
        self.count = count
        self.index = index % count if count else 0

    def next(self) -> int:
        if self.count:
            self.index = (self.index + 1) % self.count
        return self.index

    def previous(self) -> int:
        if self.count:
            self.index = (self.index - 1) % self.count
        return self.index

    def go_to(self, index: int) -> int:
        if self.count:
            self.index = index % self.count
        return self.index

    def __repr__(self) -> str:
        return f"<SlideCursor {self.index}/{self.count}>"


class AutoPlay:
    """Advance a cursor every `interval` seconds until stopped.

    Must be used from inside a running event loop.
    """

    def __init__(
        self,
        cursor: SlideCursor,
        interval: float = DEFAULT_INTERVAL,
        resume_after: float = DEFAULT_RESUME_AFTER,
        on_advance: Callable[[int], None] | None = None,
    ):
        self.cursor = cursor
        self.interval = interval
        self.resume_after = resume_after
        self.on_advance = on_advance
        self._task: asyncio.Task[None] | None = None
        self._resume_task: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def paused(self) -> bool:
        return self._resume_task is not None and not self._resume_task.done()

    def start(self) -> None:
        """Start advancing. No-op when already running or with fewer than 2 slides."""
        if self.running or self.cursor.count < 2:
            return
        self._task = asyncio.create_task(self._run())

    async def stop(self) -> None:
        """Stop advancing and drop any pending resume."""
        await _cancel(self._resume_task)
        self._resume_task = None
        await _cancel(self._task)
        self._task = None

    async def reset(self) -> None:
        """Restart the interval from now."""
        await self.stop()
        self.start()

    def pause_for_interaction(self) -> None:
        """Pause after a manual slide change; resume after `resume_after` seconds.

        Repeated interactions restart the resume countdown.
        """
        if self._task is not None:
            self._task.cancel()
            self._task = None
        if self._resume_task is not None:
            self._resume_task.cancel()
        self._resume_task = asyncio.create_task(self._resume_later())

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            index = self.cursor.next()
            if self.on_advance is not None:
                self.on_advance(index)

    async def _resume_later(self) -> None:
        await asyncio.sleep(self.resume_after)
        self._resume_task = None
        self.start()


async def _cancel(task: asyncio.Task[None] | None) -> None:
    if task is None or task.done():
        return
    task.cancel()
    try:
        await task
    except asyncio.CancelledError:
        pass
