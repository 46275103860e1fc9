"""
Delayed reconnect task for a node.

A node owns exactly one :class:`ReconnectTimer`. Arming replaces any pending
timer, so at most one reconnect is ever outstanding.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Optional, Set


class ReconnectTimer:
    """Cancellable single-shot timer that runs a coroutine when it fires."""

    def __init__(
        self,
        delay: float,
        callback: Callable[[], Awaitable[None]],
        logger: Optional[logging.Logger] = None,
    ) -> None:
        """
        Args:
            delay: Seconds between arming and firing
            callback: Coroutine function run as a task when the timer fires
            logger: Logger instance
        """
        self.delay: float = delay
        self.callback = callback
        self.logger: logging.Logger = logger or logging.getLogger(__name__)
        self._handle: Optional[asyncio.TimerHandle] = None
        self._tasks: Set[asyncio.Task] = set()

    @property
    def armed(self) -> bool:
        """True while a fire is pending."""
        return self._handle is not None

    def arm(self) -> None:
        """Schedule the callback ``delay`` seconds from now."""
        self.cancel()
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(self.delay, self._fire)

    def cancel(self) -> None:
        """Drop the pending fire. A callback already running is unaffected."""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self) -> None:
        self._handle = None
        task = asyncio.get_running_loop().create_task(self.callback())
        self._tasks.add(task)
        task.add_done_callback(self._on_done)

    def _on_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if not task.cancelled() and task.exception() is not None:
            self.logger.error("Reconnect callback failed", exc_info=task.exception())

    async def wait_idle(self) -> None:
        """Wait for callbacks that have already fired to finish."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
