"""
Per-service serialisation in front of the pager.

Health reporters, operators and timer threads may touch the same
service concurrently. The dispatcher runs each pager operation inside
the store's lock for that service id so the read-modify-write cycle is
atomic; operations on different services run in parallel.
"""

from __future__ import annotations

from typing import Any, Callable, Protocol

from alertpager.domain.models import AlertRecord
from alertpager.escalation.policy import EscalationPolicy
from alertpager.pager import Pager
from alertpager.storage.base import LockingAlertStateStore
from alertpager.timers.base import AcknowledgeTimer, TimeoutHandler


class AttachableTimer(AcknowledgeTimer, Protocol):
    def attach(self, handler: TimeoutHandler) -> None: ...


class PagerDispatcher:
    def __init__(self, pager: Pager, store: LockingAlertStateStore) -> None:
        self._pager = pager
        self._store = store

    @property
    def pager(self) -> Pager:
        return self._pager

    def _run(self, service_id: str, operation: Callable[..., Any], *args: Any) -> Any:
        with self._store.locked(service_id):
            return operation(service_id, *args)

    def report_unhealthy(self, service_id: str, message: str) -> None:
        self._run(service_id, self._pager.report_unhealthy, message)

    def report_healthy(self, service_id: str) -> None:
        self._run(service_id, self._pager.report_healthy)

    def acknowledge(self, service_id: str) -> None:
        self._run(service_id, self._pager.acknowledge)

    def handle_acknowledge_timeout(self, service_id: str) -> None:
        self._run(service_id, self._pager.handle_acknowledge_timeout)

    def status(self, service_id: str) -> AlertRecord:
        return self._run(service_id, self._pager.status)


def build_dispatcher(
    policy: EscalationPolicy,
    store: LockingAlertStateStore,
    timer: AttachableTimer,
) -> PagerDispatcher:
    """Wire a pager to its collaborators; fired timeouts re-enter through the dispatcher."""
    dispatcher = PagerDispatcher(Pager(policy, store, timer), store)
    timer.attach(dispatcher.handle_acknowledge_timeout)
    return dispatcher
