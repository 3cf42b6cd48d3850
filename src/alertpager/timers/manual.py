"""
Acknowledgement timer driven explicitly by the caller.

Arms are recorded with their due time; due() lists what has expired and
fire_due() delivers those timeouts. Used by tests and by deployments
where an external scheduler (cron) triggers the timeout.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable

import structlog

from alertpager.timers.base import DEFAULT_ACK_TIMEOUT, TimeoutHandler

logger = structlog.get_logger()


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class ArmedTimeout:
    service_id: str
    due_at: datetime


class ManualAcknowledgeTimer:
    def __init__(
        self,
        delay: timedelta = DEFAULT_ACK_TIMEOUT,
        handler: TimeoutHandler | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.delay = delay
        self._handler = handler
        self._clock = clock
        self._armed: list[ArmedTimeout] = []

    def attach(self, handler: TimeoutHandler) -> None:
        self._handler = handler

    def set_acknowledge_timer(self, service_id: str) -> None:
        armed = ArmedTimeout(service_id=service_id, due_at=self._clock() + self.delay)
        self._armed.append(armed)
        logger.info(
            "acknowledge_timer_armed",
            service_id=service_id,
            due_at=armed.due_at.isoformat(),
        )

    @property
    def armed(self) -> list[ArmedTimeout]:
        return list(self._armed)

    def due(self, now: datetime | None = None) -> list[ArmedTimeout]:
        cutoff = now or self._clock()
        return [a for a in self._armed if a.due_at <= cutoff]

    def fire_due(self, now: datetime | None = None) -> list[str]:
        """Deliver every expired timeout once, in arm order; returns the service ids."""
        if self._handler is None:
            raise RuntimeError("ManualAcknowledgeTimer has no timeout handler attached")
        expired = self.due(now)
        for armed in expired:
            self._armed.remove(armed)
        for armed in expired:
            logger.info("acknowledge_timer_fired", service_id=armed.service_id)
            self._handler(armed.service_id)
        return [a.service_id for a in expired]
