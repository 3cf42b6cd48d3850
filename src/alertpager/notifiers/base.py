"""
Base class for notification targets.

A target is an address on a delivery channel. The pager only calls
notify(); delivery errors are logged here and never reach the pager.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Protocol, runtime_checkable

import structlog

from alertpager.core.errors import NotificationError
from alertpager.domain.models import NotifierType

logger = structlog.get_logger()


@runtime_checkable
class NotificationTarget(Protocol):
    notifier_type: NotifierType
    address: str

    def notify(self, message: str) -> None: ...


class BaseNotifier(ABC):
    """
    Abstract base class for notification targets.

    Subclasses implement _deliver() and raise NotificationError when the
    channel rejects or cannot accept the message.
    """

    notifier_type: NotifierType

    def __init__(self, address: str) -> None:
        self.address = address

    def __repr__(self) -> str:
        return f"{type(self).__name__}(address={self.address!r})"

    def notify(self, message: str) -> None:
        log = logger.bind(channel=self.notifier_type.value, address=self.address)
        log.info("sending_notification")
        try:
            self._deliver(message)
        except NotificationError as exc:
            log.error("notification_failed", error=exc.message, **exc.details)
            return
        log.info("notification_sent")

    @abstractmethod
    def _deliver(self, message: str) -> None:
        """Send ``message`` to ``self.address``."""
