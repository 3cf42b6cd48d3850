from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import replace

from alertpager.domain.models import AlertRecord
from alertpager.storage.locks import KeyedLock


class InMemoryAlertStore:
    """Process-local alert store for development and tests."""

    def __init__(self) -> None:
        self._records: dict[str, AlertRecord] = {}
        self._locks = KeyedLock()

    def save(self, record: AlertRecord) -> bool:
        self._records[record.service_id] = replace(record)
        return True

    def load(self, service_id: str) -> AlertRecord | None:
        record = self._records.get(service_id)
        return replace(record) if record is not None else None

    @contextmanager
    def locked(self, service_id: str) -> Iterator[None]:
        with self._locks.hold(service_id):
            yield

    def service_ids(self) -> list[str]:
        return sorted(self._records)

    def __len__(self) -> int:
        return len(self._records)
