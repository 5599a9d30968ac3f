"""
Detail-load lifecycle for the log detail modal.

    IDLE -> LOADING -> LOADED | FAILED -> IDLE (close)
    LOADING -> LOADING (re-open, supersedes the pending request)

There is no transport-level abort: `open` and `close` bump the request
token and a completion carrying an older token is dropped.
"""

import logging
from enum import Enum
from typing import Any, Awaitable, Callable, Optional

from lumina_console.auth import SessionStore
from lumina_console.errors import LuminaError
from lumina_console.models.fetch import FetchOutcome

logger = logging.getLogger(__name__)

DetailFetcher = Callable[[str], Awaitable[Any]]


class DetailPhase(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    FAILED = "failed"


class DetailLoader:
    def __init__(self, fetch: DetailFetcher, session: Optional[SessionStore] = None):
        self._fetch = fetch
        self._session = session
        self.phase = DetailPhase.IDLE
        self.target_id: Optional[str] = None
        self.result: Optional[Any] = None
        self.error: Optional[str] = None
        self.request_token = 0

    @property
    def is_open(self) -> bool:
        return self.phase is not DetailPhase.IDLE

    async def open(self, record_id: str) -> FetchOutcome:
        if self._session is not None and not self._session.is_authenticated:
            self.close()
            logger.debug("Not authenticated, not opening detail for %s", record_id)
            return FetchOutcome.SKIPPED

        self.request_token += 1
        token = self.request_token
        self.phase = DetailPhase.LOADING
        self.target_id = record_id
        self.result = None
        self.error = None
        try:
            detail = await self._fetch(record_id)
        except LuminaError as e:
            if token != self.request_token:
                return FetchOutcome.DISCARDED
            logger.warning("Failed to load detail for %s: %s", record_id, e)
            self.phase = DetailPhase.FAILED
            self.error = e.message
            return FetchOutcome.FAILED

        if token != self.request_token:
            logger.debug("Discarding detail for %s (token %d, current %d)", record_id, token, self.request_token)
            return FetchOutcome.DISCARDED
        self.phase = DetailPhase.LOADED
        self.result = detail
        return FetchOutcome.APPLIED

    def close(self) -> None:
        self.request_token += 1
        self.phase = DetailPhase.IDLE
        self.target_id = None
        self.result = None
        self.error = None
