"""Cancellable delayed callback on the running event loop."""

import asyncio
from collections.abc import Callable


class PollTimer:
    """
    Holds at most one scheduled callback.

    Scheduling again replaces the armed callback instead of adding a second
    one, so repeated ``watch()`` calls reset the interval.
    """

    def __init__(self):
        self._handle: asyncio.TimerHandle | None = None

    def schedule(self, delay: float, callback: Callable[[], object]) -> None:
        """Arm ``callback`` to run after ``delay`` seconds, replacing any armed one."""
        self.cancel()
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(delay, self._fire, callback)

    def _fire(self, callback: Callable[[], object]) -> None:
        self._handle = None
        callback()

    def cancel(self) -> None:
        """Disarm the pending callback, if any."""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    @property
    def armed(self) -> bool:
        """Whether a callback is waiting to fire."""
        return self._handle is not None
