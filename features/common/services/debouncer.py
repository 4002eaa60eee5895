import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional, Set

logger = logging.getLogger(__name__)

class Debouncer:
    """Delays an async action until calls stop arriving for `delay` seconds."""

    def __init__(self, delay: float):
        """Initialize debouncer.

        Args:
            delay: Seconds to wait after the latest call before running its action
        """
        self.delay = delay
        self._handle: Optional[asyncio.TimerHandle] = None
        self._running: Set[asyncio.Task] = set()

    @property
    def pending(self) -> bool:
        """True while an action is scheduled but has not fired yet."""
        return self._handle is not None

    @property
    def in_flight(self) -> int:
        """Number of fired actions that are still running."""
        return len(self._running)

    def debounce(self, action: Callable[[], Awaitable[Any]]) -> None:
        """Schedule `action`, replacing any action that has not fired yet.

        Must be called from a running event loop. Actions that already
        fired keep running; only the pending timer is cancelled.
        """
        self.cancel()
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(self.delay, self._fire, loop, action)

    def cancel(self) -> None:
        """Drop the pending action, if any."""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self, loop: asyncio.AbstractEventLoop, action: Callable[[], Awaitable[Any]]) -> None:
        self._handle = None
        task = loop.create_task(self._execute(action))
        self._running.add(task)
        task.add_done_callback(self._running.discard)

    async def _execute(self, action: Callable[[], Awaitable[Any]]) -> None:
        try:
            await action()
        except Exception as e:
            logger.error(f"Error in debounced action: {str(e)}")

    async def shutdown(self) -> None:
        """Cancel the pending action and any running ones."""
        self.cancel()
        tasks = list(self._running)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
