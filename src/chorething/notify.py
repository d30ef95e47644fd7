"""Notification text and the desktop notification sink."""

from __future__ import annotations

import logging
from typing import Protocol

from plyer import notification

logger = logging.getLogger(__name__)

APP_TITLE = "Chore Thing"

# Show at most this many chore names in a notification
MAX_DISPLAY = 3


class Presenter(Protocol):
    """Receives the results of a polling cycle."""

    def notify(self, title: str, message: str) -> None: ...

    def set_icon(self, warning: bool) -> None: ...


def format_message(overdue: list[str], max_display: int = MAX_DISPLAY) -> str:
    """
    Build the notification body for a list of overdue chores.

    Example:
        You have 5 overdue chores!

        - Dishes
        - Laundry
        - Trash
        ...and 2 more
    """
    lines = [f"You have {len(overdue)} overdue chores!", ""]
    lines.extend(f"- {name}" for name in overdue[:max_display])
    if len(overdue) > max_display:
        lines.append(f"...and {len(overdue) - max_display} more")
    return "\n".join(lines)


class DesktopNotifier:
    """Sends OS notifications through plyer."""

    def __init__(self, app_name: str = APP_TITLE, timeout: int = 10) -> None:
        self.app_name = app_name
        self.timeout = timeout

    def notify(self, title: str, message: str) -> None:
        notification.notify(
            title=title,
            message=message,
            app_name=self.app_name,
            timeout=self.timeout,
        )
