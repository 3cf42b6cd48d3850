from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from alertpager.escalation.policy import EscalationLevel, EscalationPolicy


class HealthStatus(StrEnum):
    """Health of a monitored service as last reported."""

    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"


class AcknowledgeStatus(StrEnum):
    """Whether a human has acknowledged the open alert."""

    UNACKNOWLEDGED = "unacknowledged"
    ACKNOWLEDGED = "acknowledged"


class NotifierType(StrEnum):
    """Delivery channel of a notification target."""

    SMS = "sms"
    EMAIL = "email"


@dataclass
class AlertRecord:
    """Alert state of one monitored service."""

    service_id: str
    health_status: HealthStatus
    acknowledge_status: AcknowledgeStatus
    escalation_level: EscalationLevel
    message: str = ""

    @property
    def is_unhealthy(self) -> bool:
        return self.health_status == HealthStatus.UNHEALTHY

    @property
    def is_acknowledged(self) -> bool:
        return self.acknowledge_status == AcknowledgeStatus.ACKNOWLEDGED

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "service_id": self.service_id,
            "health_status": self.health_status.value,
            "acknowledge_status": self.acknowledge_status.value,
            "escalation_level": self.escalation_level.level,
            "message": self.message,
        }


def default_record(service_id: str, policy: EscalationPolicy) -> AlertRecord:
    """Return the implicit state of a service that has no stored record."""
    return AlertRecord(
        service_id=service_id,
        health_status=HealthStatus.HEALTHY,
        acknowledge_status=AcknowledgeStatus.UNACKNOWLEDGED,
        escalation_level=policy.get_first_escalation_level(),
        message="",
    )
