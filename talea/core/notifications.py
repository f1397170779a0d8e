"""Toast notification queue."""

from __future__ import annotations

import itertools
import logging
import threading
import time
from typing import Callable, List, Optional

from talea.schemas import Notification, NotificationType

_LOGGER = logging.getLogger(__name__)

DEFAULT_DURATION_MS = 5000


class NotificationCenter:
    """Collects notifications until they expire or are dismissed."""

    def __init__(
        self,
        *,
        default_duration_ms: int = DEFAULT_DURATION_MS,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._default_duration_ms = default_duration_ms
        self._clock = clock
        self._counter = itertools.count(1)
        self._lock = threading.Lock()
        self._items: List[Notification] = []

    def add(
        self,
        type: NotificationType | str,
        title: str,
        message: str,
        *,
        duration_ms: Optional[int] = None,
    ) -> Notification:
        kind = NotificationType(type)
        now = self._clock()
        notification = Notification(
            id=f"toast-{int(now * 1000)}-{next(self._counter)}",
            type=kind,
            title=title,
            message=message,
            timestamp=now,
            duration_ms=self._default_duration_ms if duration_ms is None else max(0, duration_ms),
        )
        with self._lock:
            self._items.append(notification)
        _LOGGER.debug("%s: %s - %s", kind.value.upper(), title, message)
        return notification

    def success(self, title: str, message: str, **kwargs) -> Notification:
        return self.add(NotificationType.SUCCESS, title, message, **kwargs)

    def info(self, title: str, message: str, **kwargs) -> Notification:
        return self.add(NotificationType.INFO, title, message, **kwargs)

    def warning(self, title: str, message: str, **kwargs) -> Notification:
        return self.add(NotificationType.WARNING, title, message, **kwargs)

    def error(self, title: str, message: str, **kwargs) -> Notification:
        return self.add(NotificationType.ERROR, title, message, **kwargs)

    def dismiss(self, notification_id: str) -> bool:
        with self._lock:
            before = len(self._items)
            self._items = [item for item in self._items if item.id != notification_id]
            return len(self._items) != before

    def clear(self) -> None:
        with self._lock:
            self._items.clear()

    def active(self) -> List[Notification]:
        """Return unexpired notifications, pruning the rest."""

        now = self._clock()
        with self._lock:
            self._items = [
                item for item in self._items if item.expires_at() is None or item.expires_at() > now
            ]
            return list(self._items)


__all__ = ["DEFAULT_DURATION_MS", "NotificationCenter"]
