"""
Pager state machine.

Decides, per monitored service, whether a health report, acknowledgement
or acknowledgement timeout should notify targets, advance the escalation
level, or do nothing. Every operation reads the full record, decides,
and writes the full record back.
"""

from __future__ import annotations

import structlog

from alertpager.core.errors import NotFoundError
from alertpager.domain.models import (
    AcknowledgeStatus,
    AlertRecord,
    HealthStatus,
    default_record,
)
from alertpager.escalation.policy import EscalationPolicy
from alertpager.storage.base import AlertStateStore
from alertpager.timers.base import AcknowledgeTimer

logger = structlog.get_logger()


class Pager:
    def __init__(
        self,
        escalation_policy: EscalationPolicy,
        store: AlertStateStore,
        timer: AcknowledgeTimer,
    ) -> None:
        self._policy = escalation_policy
        self._store = store
        self._timer = timer

    @property
    def escalation_policy(self) -> EscalationPolicy:
        return self._policy

    def _get_record(self, service_id: str) -> AlertRecord:
        record = self._store.load(service_id)
        if record is None:
            record = default_record(service_id, self._policy)
        return record

    def status(self, service_id: str) -> AlertRecord:
        """Current record for ``service_id``, defaulted when nothing is stored."""
        return self._get_record(service_id)

    def report_unhealthy(self, service_id: str, message: str) -> None:
        record = self._get_record(service_id)
        record.message = message

        if record.health_status == HealthStatus.UNHEALTHY:
            # Incident already open: keep the escalation where it is.
            self._save(record)
            logger.info("unhealthy_report_updated", service_id=service_id)
            return

        record.health_status = HealthStatus.UNHEALTHY
        logger.info(
            "service_became_unhealthy",
            service_id=service_id,
            level=record.escalation_level.level,
        )
        self._save_and_notify(record)

    def report_healthy(self, service_id: str) -> None:
        record = self._get_record(service_id)
        record.health_status = HealthStatus.HEALTHY
        self._save(record)
        logger.info("service_healthy", service_id=service_id)

    def acknowledge(self, service_id: str) -> None:
        record = self._get_record(service_id)
        record.acknowledge_status = AcknowledgeStatus.ACKNOWLEDGED
        self._save(record)
        logger.info("alert_acknowledged", service_id=service_id)

    def handle_acknowledge_timeout(self, service_id: str) -> None:
        record = self._store.load(service_id)
        if record is None:
            raise NotFoundError(
                f"Could not find an open alert for service {service_id}",
                details={"service_id": service_id},
            )

        if record.acknowledge_status == AcknowledgeStatus.ACKNOWLEDGED:
            logger.info("acknowledge_timeout_ignored", service_id=service_id, reason="acknowledged")
            return

        if record.health_status == HealthStatus.HEALTHY:
            logger.info("acknowledge_timeout_ignored", service_id=service_id, reason="healthy")
            return

        next_level = self._policy.get_next_escalation_level(record.escalation_level)
        if next_level is None:
            logger.warning(
                "escalation_exhausted",
                service_id=service_id,
                level=record.escalation_level.level,
            )
            return

        logger.info(
            "escalation_advanced",
            service_id=service_id,
            from_level=record.escalation_level.level,
            to_level=next_level.level,
        )
        record.escalation_level = next_level
        self._save_and_notify(record)

    def _save(self, record: AlertRecord) -> None:
        if not self._store.save(record):
            # Best effort: retrying is the store's decision.
            logger.warning("alert_state_save_failed", service_id=record.service_id)

    def _save_and_notify(self, record: AlertRecord) -> None:
        self._save(record)

        for target in record.escalation_level.targets:
            target.notify(record.message)

        self._timer.set_acknowledge_timer(record.service_id)
