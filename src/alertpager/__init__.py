"""alertpager: escalating notifications for unhealthy services."""

from alertpager.core.errors import AlertPagerError, ConfigurationError, NotFoundError
from alertpager.dispatch import PagerDispatcher, build_dispatcher
from alertpager.domain.models import (
    AcknowledgeStatus,
    AlertRecord,
    HealthStatus,
    NotifierType,
    default_record,
)
from alertpager.escalation.policy import EscalationLevel, EscalationPolicy
from alertpager.pager import Pager

__version__ = "0.1.0"

__all__ = [
    "AcknowledgeStatus",
    "AlertPagerError",
    "AlertRecord",
    "ConfigurationError",
    "EscalationLevel",
    "EscalationPolicy",
    "HealthStatus",
    "NotFoundError",
    "NotifierType",
    "Pager",
    "PagerDispatcher",
    "build_dispatcher",
    "default_record",
]
