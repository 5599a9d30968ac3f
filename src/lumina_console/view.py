"""
Request log view — the refresh controller, its auto-refresh timer and
the detail loader, mounted and torn down together.
"""

from typing import Any, Optional

from lumina_console.auth import SessionStore
from lumina_console.auto_refresh import DEFAULT_INTERVAL_MS, AutoRefreshTimer
from lumina_console.detail import DetailLoader
from lumina_console.logs import RequestLogsAPI
from lumina_console.models.fetch import FetchMode, FetchOutcome
from lumina_console.notifications import NotificationScheduler
from lumina_console.refresh import DEFAULT_PAGE_SIZE, RefreshController


class LogsView:
    def __init__(
        self,
        logs: RequestLogsAPI,
        session: SessionStore,
        notifier: Optional[NotificationScheduler] = None,
        page_size: int = DEFAULT_PAGE_SIZE,
        refresh_interval_ms: int = DEFAULT_INTERVAL_MS,
    ):
        self.pages = RefreshController(logs.page, session=session, notifier=notifier, page_size=page_size)
        self.auto_refresh = AutoRefreshTimer(self.pages, refresh_interval_ms)
        self.detail = DetailLoader(logs.get, session=session)

    async def mount(self) -> FetchOutcome:
        """Initial load of the first page."""
        return await self.pages.fetch_page(1, self.pages.state.page_size, FetchMode.FOREGROUND)

    async def change_page(self, new_page: int) -> FetchOutcome:
        outcome = await self.pages.change_page(new_page)
        if outcome is FetchOutcome.APPLIED:
            self.auto_refresh.restart()
        return outcome

    async def change_page_size(self, new_size: int) -> FetchOutcome:
        outcome = await self.pages.change_page_size(new_size)
        if outcome is FetchOutcome.APPLIED:
            self.auto_refresh.restart()
        return outcome

    def unmount(self) -> None:
        self.auto_refresh.close()
        self.pages.close()
        self.detail.close()

    async def __aenter__(self) -> "LogsView":
        await self.mount()
        return self

    async def __aexit__(self, *exc: Any) -> None:
        self.unmount()
