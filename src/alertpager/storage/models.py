from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import DateTime, Enum, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from alertpager.domain.models import AcknowledgeStatus, HealthStatus


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class AlertRecordModel(Base):
    __tablename__ = "alert_records"

    service_id: Mapped[str] = mapped_column(String(255), primary_key=True)
    health_status: Mapped[HealthStatus] = mapped_column(
        Enum(HealthStatus, name="health_status", native_enum=False), nullable=False
    )
    acknowledge_status: Mapped[AcknowledgeStatus] = mapped_column(
        Enum(AcknowledgeStatus, name="acknowledge_status", native_enum=False), nullable=False
    )
    # Position in the escalation policy; the label is kept for diagnostics only.
    escalation_index: Mapped[int] = mapped_column(Integer, nullable=False)
    escalation_label: Mapped[int] = mapped_column(Integer, nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False, default="")
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False
    )
