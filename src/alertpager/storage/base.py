"""
Alert state store interface.

The pager only needs load/save. Stores that also offer locked() give
callers read-modify-write atomicity per service.
"""

from __future__ import annotations

from contextlib import AbstractContextManager
from typing import Protocol, runtime_checkable

from alertpager.domain.models import AlertRecord


@runtime_checkable
class AlertStateStore(Protocol):
    def save(self, record: AlertRecord) -> bool: ...

    def load(self, service_id: str) -> AlertRecord | None: ...


@runtime_checkable
class LockingAlertStateStore(AlertStateStore, Protocol):
    def locked(self, service_id: str) -> AbstractContextManager[None]: ...
