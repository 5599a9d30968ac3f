"""
Notification scheduler — timed, auto-dismissing toasts.

Each notification runs two timers on the event loop:
- a repeating decay tick that walks `remaining_percent` from 100 to 0
- a one-shot expiry at `duration_ms`

Either one reaching the end starts the exit transition; removal follows
after a short grace period for the exit animation. Explicit dismissal
takes the same route. `_begin_exit` and `_remove` both ignore ids that
already went through them, so a notification is removed exactly once.
"""

import asyncio
import logging
import uuid
from enum import Enum
from typing import Callable, Optional

logger = logging.getLogger(__name__)

DEFAULT_DURATION_MS = 3000
TICK_MS = 100
EXIT_GRACE_MS = 200
DEFAULT_MAX_ACTIVE = 5

# Listener events
ADDED = "added"
EXITING = "exiting"
REMOVED = "removed"


class NotificationKind(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"
    WARNING = "warning"


class Notification:
    __slots__ = ("id", "kind", "text", "duration_ms", "remaining_percent", "exiting",
                 "_ticks", "_tick_handle", "_expiry_handle", "_removal_handle")

    def __init__(self, id: str, kind: NotificationKind, text: str, duration_ms: int):
        self.id = id
        self.kind = kind
        self.text = text
        self.duration_ms = duration_ms
        self.remaining_percent = 100.0
        self.exiting = False
        self._ticks = 0
        self._tick_handle: Optional[asyncio.TimerHandle] = None
        self._expiry_handle: Optional[asyncio.TimerHandle] = None
        self._removal_handle: Optional[asyncio.TimerHandle] = None

    def _cancel_timers(self) -> None:
        for handle in (self._tick_handle, self._expiry_handle, self._removal_handle):
            if handle is not None:
                handle.cancel()
        self._tick_handle = self._expiry_handle = self._removal_handle = None

    def __repr__(self) -> str:
        return f"Notification(id={self.id!r}, kind={self.kind.value!r}, remaining={self.remaining_percent:.0f}%)"


Listener = Callable[[str, Notification], None]


class NotificationScheduler:
    def __init__(
        self,
        tick_ms: int = TICK_MS,
        exit_grace_ms: int = EXIT_GRACE_MS,
        max_active: Optional[int] = DEFAULT_MAX_ACTIVE,
    ):
        self._tick_ms = tick_ms
        self._exit_grace_ms = exit_grace_ms
        self._max_active = max_active
        self._active: dict[str, Notification] = {}  # insertion order == creation order
        self._listeners: list[Listener] = []

    @property
    def active(self) -> list[Notification]:
        return list(self._active.values())

    def get(self, notification_id: str) -> Optional[Notification]:
        return self._active.get(notification_id)

    def add_listener(self, listener: Listener) -> Callable[[], None]:
        """Add a listener for added/exiting/removed events. Returns a cleanup function."""
        self._listeners.append(listener)

        def remove() -> None:
            try:
                self._listeners.remove(listener)
            except ValueError:
                pass
        return remove

    def notify(
        self,
        text: str,
        kind: NotificationKind = NotificationKind.INFO,
        duration_ms: int = DEFAULT_DURATION_MS,
    ) -> str:
        if duration_ms <= 0:
            raise ValueError(f"duration_ms must be positive, got {duration_ms}")
        loop = asyncio.get_running_loop()
        notification = Notification(uuid.uuid4().hex, NotificationKind(kind), text, duration_ms)
        self._active[notification.id] = notification
        notification._tick_handle = loop.call_later(self._tick_ms / 1000, self._tick, notification.id)
        notification._expiry_handle = loop.call_later(duration_ms / 1000, self._begin_exit, notification.id)
        self._emit(ADDED, notification)

        if self._max_active is not None:
            while len(self._active) > self._max_active:
                oldest = next(iter(self._active))
                logger.debug("Dropping notification %s, over the %d cap", oldest, self._max_active)
                self._remove(oldest)
        return notification.id

    def success(self, text: str, duration_ms: int = DEFAULT_DURATION_MS) -> str:
        return self.notify(text, NotificationKind.SUCCESS, duration_ms)

    def error(self, text: str, duration_ms: int = DEFAULT_DURATION_MS) -> str:
        return self.notify(text, NotificationKind.ERROR, duration_ms)

    def info(self, text: str, duration_ms: int = DEFAULT_DURATION_MS) -> str:
        return self.notify(text, NotificationKind.INFO, duration_ms)

    def warning(self, text: str, duration_ms: int = DEFAULT_DURATION_MS) -> str:
        return self.notify(text, NotificationKind.WARNING, duration_ms)

    def dismiss(self, notification_id: str) -> None:
        """User dismissal. Unknown or already-removed ids are ignored."""
        self._begin_exit(notification_id)

    def close(self) -> None:
        """Cancel every timer and drop all notifications without emitting events."""
        for notification in self._active.values():
            notification._cancel_timers()
        self._active.clear()

    def _tick(self, notification_id: str) -> None:
        notification = self._active.get(notification_id)
        if notification is None or notification.exiting:
            return
        notification._ticks += 1
        elapsed_ms = notification._ticks * self._tick_ms
        if elapsed_ms >= notification.duration_ms:
            notification.remaining_percent = 0.0
            notification._tick_handle = None
            self._begin_exit(notification_id)
            return
        notification.remaining_percent = max(0.0, 100.0 * (1 - elapsed_ms / notification.duration_ms))
        loop = asyncio.get_running_loop()
        notification._tick_handle = loop.call_later(self._tick_ms / 1000, self._tick, notification_id)

    def _begin_exit(self, notification_id: str) -> None:
        notification = self._active.get(notification_id)
        if notification is None or notification.exiting:
            return
        notification.exiting = True
        notification._cancel_timers()
        loop = asyncio.get_running_loop()
        notification._removal_handle = loop.call_later(self._exit_grace_ms / 1000, self._remove, notification_id)
        self._emit(EXITING, notification)

    def _remove(self, notification_id: str) -> None:
        notification = self._active.pop(notification_id, None)
        if notification is None:
            return
        notification._cancel_timers()
        self._emit(REMOVED, notification)

    def _emit(self, event: str, notification: Notification) -> None:
        for listener in list(self._listeners):
            listener(event, notification)
