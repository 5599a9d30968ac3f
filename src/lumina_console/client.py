"""
AsyncLumina — main console client.
"""

from typing import Optional

import httpx

from lumina_console.auth import SessionStore
from lumina_console.auto_refresh import DEFAULT_INTERVAL_MS
from lumina_console.dashboard import DashboardAPI
from lumina_console.logs import RequestLogsAPI
from lumina_console.notifications import NotificationScheduler
from lumina_console.profile import ProfileAPI
from lumina_console.refresh import DEFAULT_PAGE_SIZE
from lumina_console.storage import BASE_URL_KEY, ConfigStorage
from lumina_console.transport.http import DEFAULT_BASE_URL, HttpClient
from lumina_console.view import LogsView


class AsyncLumina:
    """Async Lumina admin client. Restores the persisted session on construction."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        storage: Optional[ConfigStorage] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        notifier: Optional[NotificationScheduler] = None,
    ):
        self.storage = storage or ConfigStorage()
        self.http = HttpClient(
            base_url=base_url or self.storage.load().get(BASE_URL_KEY) or DEFAULT_BASE_URL,
            transport=transport,
        )
        self.session = SessionStore(self.http, self.storage)
        self.session.restore()
        self.logs = RequestLogsAPI(self.http)
        self.profile = ProfileAPI(self.http)
        self.dashboard = DashboardAPI(self.http)
        self.notifications = notifier or NotificationScheduler()

    @property
    def is_authenticated(self) -> bool:
        return self.session.is_authenticated

    def logs_view(self, page_size: int = DEFAULT_PAGE_SIZE,
                  refresh_interval_ms: int = DEFAULT_INTERVAL_MS) -> LogsView:
        return LogsView(
            self.logs, self.session, self.notifications,
            page_size=page_size, refresh_interval_ms=refresh_interval_ms,
        )

    async def close(self) -> None:
        self.notifications.close()
        await self.http.close()
