"""
Transient notifications for the storefront shell.

Network and save failures are reported here instead of being raised to the
page. The shell decides how to show them (toast, banner, log line).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from composer.kernel.types import now_iso

logger = logging.getLogger(__name__)


@dataclass
class Notification:
    level: str
    message: str
    timestamp: str = ""


class Notifier:
    """Base notifier. Subclasses implement notify()."""

    def notify(self, level: str, message: str) -> None:
        raise NotImplementedError

    def info(self, message: str) -> None:
        self.notify("info", message)

    def success(self, message: str) -> None:
        self.notify("success", message)

    def error(self, message: str) -> None:
        self.notify("error", message)


class MemoryNotifier(Notifier):
    """Collects notifications in order. Used by tests and the CLI."""

    def __init__(self) -> None:
        self.notifications: list[Notification] = []

    def notify(self, level: str, message: str) -> None:
        self.notifications.append(Notification(level=level, message=message, timestamp=now_iso()))

    @property
    def errors(self) -> list[str]:
        return [n.message for n in self.notifications if n.level == "error"]

    def clear(self) -> None:
        self.notifications.clear()


class LoggingNotifier(Notifier):
    """Writes notifications to the log."""

    def notify(self, level: str, message: str) -> None:
        if level == "error":
            logger.warning("notify: %s", message)
        else:
            logger.info("notify: %s", message)
