"""
Notification targets.

Each target wraps one address on one delivery channel. Use
build_notifier() to construct the right target for a channel from
application settings.
"""

from __future__ import annotations

from alertpager.config import Settings, get_settings
from alertpager.core.errors import ConfigurationError
from alertpager.domain.models import NotifierType
from alertpager.notifiers.base import BaseNotifier, NotificationTarget
from alertpager.notifiers.email import EmailNotifier
from alertpager.notifiers.sms import SmsNotifier


def build_notifier(
    notifier_type: NotifierType | str,
    address: str,
    settings: Settings | None = None,
) -> BaseNotifier:
    """Create a notification target for ``address`` on the given channel."""
    cfg = settings or get_settings()
    try:
        channel = NotifierType(str(notifier_type).lower())
    except ValueError as exc:
        raise ConfigurationError(
            f"Unknown notifier type: {notifier_type}",
            details={"supported": ", ".join(t.value for t in NotifierType)},
        ) from exc

    if channel == NotifierType.EMAIL:
        return EmailNotifier(
            address,
            smtp_host=cfg.smtp_host,
            smtp_port=cfg.smtp_port,
            smtp_username=cfg.smtp_username,
            smtp_password=cfg.smtp_password,
            from_address=cfg.email_from,
            use_tls=cfg.smtp_use_tls,
            timeout=cfg.http_timeout,
        )

    if not cfg.sms_gateway_url:
        raise ConfigurationError(
            "SMS targets require ALERTPAGER_SMS_GATEWAY_URL to be set",
            details={"address": address},
        )
    return SmsNotifier(
        address,
        gateway_url=cfg.sms_gateway_url,
        token=cfg.sms_gateway_token,
        timeout=cfg.http_timeout,
        max_retries=cfg.http_max_retries,
    )


__all__ = [
    "BaseNotifier",
    "EmailNotifier",
    "NotificationTarget",
    "SmsNotifier",
    "build_notifier",
]
