"""Shared rich rendering for notifications."""

from rich.console import Console
from rich.text import Text

from lumina_console.notifications import Notification, NotificationKind, NotificationScheduler

KIND_STYLES = {
    NotificationKind.SUCCESS: "green",
    NotificationKind.ERROR: "red",
    NotificationKind.INFO: "cyan",
    NotificationKind.WARNING: "yellow",
}


def notification_line(n: Notification) -> Text:
    bar = "▁" * round(n.remaining_percent / 10)
    return Text.assemble((n.text, "dim" if n.exiting else KIND_STYLES[n.kind]), " ", (bar, "dim"))


def print_notifications(console: Console, notifier: NotificationScheduler) -> None:
    """Flush pending toasts to the terminal; one-shot commands exit before they decay."""
    for n in notifier.active:
        style = KIND_STYLES[n.kind]
        console.print(f"[{style}]{n.text}[/{style}]")
        notifier.dismiss(n.id)
