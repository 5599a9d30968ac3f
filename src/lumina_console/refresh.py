"""
Paginated refresh controller.

User actions (page change, page-size change, manual refresh) and the
auto-refresh timer all end up in `fetch_page`. Every call bumps the
generation before it suspends on the network; a completion is applied
only if no later call has bumped it again, so the view never regresses
to an older response when replies arrive out of order.
"""

import logging
import math
from typing import Any, Awaitable, Callable, Optional

from pydantic import BaseModel

from lumina_console.auth import SessionStore
from lumina_console.errors import LuminaError
from lumina_console.models.fetch import FetchMode, FetchOutcome
from lumina_console.models.page import Page
from lumina_console.notifications import NotificationScheduler

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 10
PAGE_SIZE_OPTIONS = (10, 20, 50, 100)

PageFetcher = Callable[[int, int], Awaitable[Page[Any]]]


class PageState(BaseModel):
    current_page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE
    total_records: int = 0
    records: list[Any] = []
    generation: int = 0

    @property
    def total_pages(self) -> int:
        if self.total_records <= 0 or self.page_size <= 0:
            return 0
        return math.ceil(self.total_records / self.page_size)


class RefreshController:
    def __init__(
        self,
        fetch: PageFetcher,
        session: Optional[SessionStore] = None,
        notifier: Optional[NotificationScheduler] = None,
        page_size: int = DEFAULT_PAGE_SIZE,
    ):
        self._fetch = fetch
        self._session = session
        self._notifier = notifier
        self._foreground_in_flight = 0
        self._closed = False
        self.state = PageState(page_size=page_size)

    @property
    def loading(self) -> bool:
        """Visible loading indicator: on while any foreground fetch is outstanding."""
        return self._foreground_in_flight > 0

    @property
    def closed(self) -> bool:
        return self._closed

    async def fetch_page(self, page: int, size: int, mode: FetchMode = FetchMode.FOREGROUND) -> FetchOutcome:
        if self._closed:
            return FetchOutcome.SKIPPED
        if page < 1 or size <= 0:
            logger.debug("Ignoring fetch of page %d with size %d", page, size)
            return FetchOutcome.SKIPPED
        if self._session is not None and not self._session.is_authenticated:
            logger.debug("Not authenticated, skipping %s fetch of page %d", mode.value, page)
            return FetchOutcome.SKIPPED

        self.state.generation += 1
        generation = self.state.generation
        foreground = mode is FetchMode.FOREGROUND
        if foreground:
            self._foreground_in_flight += 1
        try:
            result = await self._fetch(page, size)
        except LuminaError as e:
            if generation != self.state.generation:
                logger.debug("Discarding failure of superseded fetch (generation %d): %s", generation, e)
                return FetchOutcome.DISCARDED
            self._report_failure(e, mode)
            return FetchOutcome.FAILED
        finally:
            if foreground:
                self._foreground_in_flight -= 1

        if generation != self.state.generation:
            logger.debug("Discarding stale page %d (generation %d, current %d)",
                         page, generation, self.state.generation)
            return FetchOutcome.DISCARDED
        self._apply(result, size)
        return FetchOutcome.APPLIED

    async def change_page(self, new_page: int) -> FetchOutcome:
        if new_page < 1 or new_page > self.state.total_pages:
            return FetchOutcome.SKIPPED
        return await self.fetch_page(new_page, self.state.page_size, FetchMode.FOREGROUND)

    async def change_page_size(self, new_size: int) -> FetchOutcome:
        if new_size <= 0:
            return FetchOutcome.SKIPPED
        return await self.fetch_page(1, new_size, FetchMode.FOREGROUND)

    async def manual_refresh(self) -> FetchOutcome:
        return await self.fetch_page(self.state.current_page, self.state.page_size, FetchMode.FOREGROUND)

    def close(self) -> None:
        """Tear down: in-flight completions become stale and later calls are skipped."""
        self._closed = True
        self.state.generation += 1

    def _apply(self, result: Page[Any], requested_size: int) -> None:
        state = self.state
        state.records = list(result.records)
        state.total_records = max(result.total, 0)
        state.page_size = result.size if result.size > 0 else requested_size
        state.current_page = min(max(result.current, 1), max(state.total_pages, 1))

    def _report_failure(self, error: LuminaError, mode: FetchMode) -> None:
        if mode is FetchMode.BACKGROUND:
            logger.info("Background refresh failed: %s", error)
            return
        logger.warning("Failed to fetch page: %s", error)
        if self._notifier is not None:
            self._notifier.error(error.message)
