"""
Thread-backed acknowledgement timer.

Each arm starts one daemon threading.Timer which calls the attached
handler exactly once. Armed timers are never cancelled by the pager;
stale timeouts are ignored by the state checks in the handler.
"""

from __future__ import annotations

import threading
from datetime import timedelta

import structlog

from alertpager.timers.base import DEFAULT_ACK_TIMEOUT, TimeoutHandler

logger = structlog.get_logger()


class ThreadingAcknowledgeTimer:
    def __init__(
        self,
        delay: timedelta = DEFAULT_ACK_TIMEOUT,
        handler: TimeoutHandler | None = None,
    ) -> None:
        self.delay = delay
        self._handler = handler
        self._timers: set[threading.Timer] = set()
        self._lock = threading.Lock()

    def attach(self, handler: TimeoutHandler) -> None:
        """Set the callback invoked with the service id when a timer fires."""
        self._handler = handler

    def set_acknowledge_timer(self, service_id: str) -> None:
        if self._handler is None:
            raise RuntimeError("ThreadingAcknowledgeTimer has no timeout handler attached")

        timer = threading.Timer(self.delay.total_seconds(), self._fire, args=(service_id,))
        timer.daemon = True
        with self._lock:
            self._timers.add(timer)
        # _fire discards the timer, so it must be tracked before it can run
        timer.start()
        logger.info(
            "acknowledge_timer_armed",
            service_id=service_id,
            delay_seconds=self.delay.total_seconds(),
        )

    def _fire(self, service_id: str) -> None:
        with self._lock:
            self._timers.discard(threading.current_thread())  # type: ignore[arg-type]
        logger.info("acknowledge_timer_fired", service_id=service_id)
        handler = self._handler
        if handler is None:
            logger.error("acknowledge_timer_handler_missing", service_id=service_id)
            return
        try:
            handler(service_id)
        except Exception:
            logger.exception("acknowledge_timeout_failed", service_id=service_id)
            raise

    @property
    def pending(self) -> int:
        with self._lock:
            return len(self._timers)

    def cancel_all(self) -> None:
        """Cancel every timer that has not fired yet (process shutdown)."""
        with self._lock:
            timers, self._timers = self._timers, set()
        for timer in timers:
            timer.cancel()
        logger.info("acknowledge_timers_cancelled", count=len(timers))
