"""Transient user-visible notifications ("toasts").

Presentation is up to the view layer: it subscribes to a NotificationCenter
and renders whatever arrives. Controllers only ever talk to the `Notifier`
protocol (`success()` / `error()`).

Example:
    >>> center = NotificationCenter()
    >>> center.subscribe(lambda n: print(f'[{n.level}] {n.message}'))
    >>> center.error('Failed to fetch URLs')
    [error] Failed to fetch URLs
    >>> center.latest.message
    'Failed to fetch URLs'
"""

import logging
from collections import deque
from dataclasses import dataclass
from enum import StrEnum
from collections.abc import Callable


logger = logging.getLogger(__name__)


class Level(StrEnum):
    SUCCESS = 'success'
    ERROR = 'error'


@dataclass(frozen=True)
class Notification:
    message: str
    level: Level


class NotificationCenter:
    """Record notifications in order and forward them to subscribers

    Attributes:
        history (deque[Notification]):
            The most recent notifications, oldest first (bounded by `maxlen`).
    """

    def __init__(self, maxlen: int = 50):
        self.history: deque[Notification] = deque(maxlen=maxlen)
        self._listeners: list[Callable[[Notification], None]] = []

    def subscribe(self, listener: Callable[[Notification], None]) -> Callable[[], None]:
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    def success(self, message: str) -> None:
        self._publish(Notification(message=message, level=Level.SUCCESS))

    def error(self, message: str) -> None:
        self._publish(Notification(message=message, level=Level.ERROR))

    @property
    def latest(self) -> Notification | None:
        return self.history[-1] if self.history else None

    def _publish(self, notification: Notification) -> None:
        logger.debug('Notification published.', extra={'level': str(notification.level), 'notification': notification.message})
        self.history.append(notification)
        for listener in list(self._listeners):
            listener(notification)
