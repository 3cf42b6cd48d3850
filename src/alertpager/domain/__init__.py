from alertpager.domain.models import (
    AcknowledgeStatus,
    AlertRecord,
    HealthStatus,
    NotifierType,
    default_record,
)

__all__ = [
    "AcknowledgeStatus",
    "AlertRecord",
    "HealthStatus",
    "NotifierType",
    "default_record",
]
