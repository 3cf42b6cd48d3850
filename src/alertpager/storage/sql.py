"""
SQLAlchemy-backed alert state store.

Records reference their escalation level by position in the policy, so
the store needs the same policy the pager runs with to rehydrate them.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

import structlog
from sqlalchemy import Engine, create_engine, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from alertpager.core.errors import StorageError
from alertpager.domain.models import AlertRecord
from alertpager.escalation.policy import EscalationPolicy
from alertpager.storage.locks import KeyedLock
from alertpager.storage.models import AlertRecordModel, Base

logger = structlog.get_logger()


def create_store_engine(database_url: str, *, echo: bool = False) -> Engine:
    """Create an engine; SQLite connections may be shared with timer threads."""
    connect_args = {"check_same_thread": False} if database_url.startswith("sqlite") else {}
    return create_engine(database_url, echo=echo, future=True, connect_args=connect_args)


class SqlAlertStore:
    """Alert store persisting one row per service in ``alert_records``."""

    def __init__(
        self,
        policy: EscalationPolicy,
        database_url: str | None = None,
        *,
        engine: Engine | None = None,
        echo: bool = False,
    ) -> None:
        if engine is None and database_url is None:
            raise ValueError("SqlAlertStore needs a database_url or an engine")
        self._policy = policy
        self._engine = engine or create_store_engine(database_url or "", echo=echo)
        self._session_factory = sessionmaker(self._engine, expire_on_commit=False)
        self._locks = KeyedLock()
        self._schema_ready = False

    def _ensure_schema(self) -> None:
        if not self._schema_ready:
            Base.metadata.create_all(self._engine)
            self._schema_ready = True

    @contextmanager
    def _session(self) -> Iterator[Session]:
        try:
            self._ensure_schema()
            with self._session_factory() as session, session.begin():
                yield session
        except SQLAlchemyError as exc:
            logger.error("alert_store_error", error=str(exc))
            raise StorageError(f"Alert store failure: {exc}") from exc

    def save(self, record: AlertRecord) -> bool:
        index = self._policy.index_of(record.escalation_level)
        with self._session() as session:
            model = session.get(AlertRecordModel, record.service_id)
            if model is None:
                model = AlertRecordModel(service_id=record.service_id)
                session.add(model)
            model.health_status = record.health_status
            model.acknowledge_status = record.acknowledge_status
            model.escalation_index = index
            model.escalation_label = record.escalation_level.level
            model.message = record.message
        return True

    def load(self, service_id: str) -> AlertRecord | None:
        with self._session() as session:
            model = session.get(AlertRecordModel, service_id)
            if model is None:
                return None
            return AlertRecord(
                service_id=model.service_id,
                health_status=model.health_status,
                acknowledge_status=model.acknowledge_status,
                escalation_level=self._policy.level_at(model.escalation_index),
                message=model.message,
            )

    def service_ids(self) -> list[str]:
        with self._session() as session:
            result = session.execute(
                select(AlertRecordModel.service_id).order_by(AlertRecordModel.service_id)
            )
            return list(result.scalars().all())

    @contextmanager
    def locked(self, service_id: str) -> Iterator[None]:
        with self._locks.hold(service_id):
            yield

    def dispose(self) -> None:
        self._engine.dispose()
