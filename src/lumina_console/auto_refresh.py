"""
Auto-refresh timer — periodic background fetches of the current page.
"""

import asyncio
import logging
from typing import Optional

from lumina_console.models.fetch import FetchMode
from lumina_console.refresh import RefreshController

logger = logging.getLogger(__name__)

REFRESH_INTERVALS_MS = (5000, 10000, 30000, 60000)
DEFAULT_INTERVAL_MS = 30000


class AutoRefreshTimer:
    """At most one live timer handle per instance; re-arming always cancels the old one first."""

    def __init__(self, controller: RefreshController, interval_ms: int = DEFAULT_INTERVAL_MS):
        _check_interval(interval_ms)
        self._controller = controller
        self._interval_ms = interval_ms
        self._enabled = False
        self._handle: Optional[asyncio.TimerHandle] = None
        self._tasks: set[asyncio.Task] = set()

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def interval_ms(self) -> int:
        return self._interval_ms

    def set_enabled(self, enabled: bool) -> None:
        self._enabled = enabled
        if enabled:
            self._arm()
        else:
            self._disarm()

    def set_interval(self, interval_ms: int) -> None:
        _check_interval(interval_ms)
        self._interval_ms = interval_ms
        if self._enabled:
            self._arm()

    def restart(self) -> None:
        """Start a fresh interval from now, if enabled. Called after the user moves to another page."""
        if self._enabled:
            self._arm()

    def close(self) -> None:
        self.set_enabled(False)
        for task in list(self._tasks):
            task.cancel()

    def _arm(self) -> None:
        self._disarm()
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(self._interval_ms / 1000, self._tick)

    def _disarm(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _tick(self) -> None:
        self._handle = None
        if not self._enabled:
            return
        self._arm()
        state = self._controller.state
        task = asyncio.get_running_loop().create_task(
            self._controller.fetch_page(state.current_page, state.page_size, FetchMode.BACKGROUND)
        )
        self._tasks.add(task)
        task.add_done_callback(self._on_done)

    def _on_done(self, task: "asyncio.Task") -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Background refresh crashed", exc_info=exc)


def _check_interval(interval_ms: int) -> None:
    if interval_ms <= 0:
        raise ValueError(f"Refresh interval must be positive, got {interval_ms}ms")
