"""
lumina-console — admin console client for the Lumina LLM gateway.

Session handling, paginated request-log views with auto-refresh, log
detail loading and toast notifications over the Lumina admin REST API.
"""

from lumina_console.client import AsyncLumina
from lumina_console.auth import SessionStore
from lumina_console.auto_refresh import AutoRefreshTimer
from lumina_console.detail import DetailLoader, DetailPhase
from lumina_console.errors import LuminaError, AuthError, FetchError, TransportError
from lumina_console.models.fetch import FetchMode, FetchOutcome
from lumina_console.notifications import NotificationKind, NotificationScheduler
from lumina_console.refresh import PageState, RefreshController
from lumina_console.view import LogsView

__version__ = "0.1.0"
__all__ = [
    "AsyncLumina",
    "SessionStore",
    "AutoRefreshTimer",
    "DetailLoader",
    "DetailPhase",
    "LogsView",
    "PageState",
    "RefreshController",
    "NotificationKind",
    "NotificationScheduler",
    "FetchMode",
    "FetchOutcome",
    "LuminaError",
    "AuthError",
    "FetchError",
    "TransportError",
]
