"""Per-page notification channel (toasts).

Workflows publish; a single subscriber (the page audit log) sees each
notification as it is published. The queue is bounded:
when full, the oldest notification is dropped.
"""

from __future__ import annotations

import time
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from uuid import uuid4


class NotificationVariant(str, Enum):
    DEFAULT = "default"
    SUCCESS = "success"
    DESTRUCTIVE = "destructive"


@dataclass(frozen=True)
class Notification:
    """A transient message. ``duration`` of None means manual dismiss only."""

    title: str
    description: str
    variant: NotificationVariant = NotificationVariant.DEFAULT
    duration: float | None = None
    id: str = field(default_factory=lambda: uuid4().hex[:12])
    created_at: float = field(default_factory=time.monotonic)

    def expired(self, now: float) -> bool:
        return self.duration is not None and now - self.created_at >= self.duration

    def as_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "variant": self.variant.value,
            "dismissible": True,
            "auto_dismiss": self.duration is not None,
        }


Subscriber = Callable[[Notification], None]


class NotificationBus:
    def __init__(self, limit: int = 5, ttl_seconds: float = 8.0, clock: Callable[[], float] = time.monotonic):
        self._queue: deque[Notification] = deque(maxlen=limit)
        self._ttl = ttl_seconds
        self._clock = clock
        self._subscriber: Subscriber | None = None

    def subscribe(self, callback: Subscriber) -> None:
        """Register the listener. A later subscribe replaces the earlier one."""
        self._subscriber = callback

    def publish(
        self,
        title: str,
        description: str,
        variant: NotificationVariant = NotificationVariant.DEFAULT,
    ) -> Notification:
        # Errors stay until the user dismisses them
        duration = None if variant is NotificationVariant.DESTRUCTIVE else self._ttl
        notification = Notification(
            title=title,
            description=description,
            variant=variant,
            duration=duration,
            created_at=self._clock(),
        )
        self._queue.append(notification)
        if self._subscriber is not None:
            self._subscriber(notification)
        return notification

    def success(self, title: str, description: str) -> Notification:
        return self.publish(title, description, NotificationVariant.SUCCESS)

    def error(self, title: str, description: str) -> Notification:
        return self.publish(title, description, NotificationVariant.DESTRUCTIVE)

    def dismiss(self, notification_id: str) -> bool:
        """Remove a notification. Returns False if it is unknown or already gone."""
        for notification in self._queue:
            if notification.id == notification_id:
                self._queue.remove(notification)
                return True
        return False

    def active(self) -> list[Notification]:
        """Live notifications, oldest first. Expired ones are dropped here."""
        now = self._clock()
        for notification in [n for n in self._queue if n.expired(now)]:
            self._queue.remove(notification)
        return list(self._queue)

    def clear(self) -> None:
        self._queue.clear()

    def __len__(self) -> int:
        return len(self.active())
