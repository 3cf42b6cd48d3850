"""Email notification target using SMTP."""

from __future__ import annotations

import smtplib
import ssl
from email.mime.text import MIMEText

from alertpager.core.errors import NotificationError
from alertpager.domain.models import NotifierType
from alertpager.notifiers.base import BaseNotifier

SUBJECT_PREFIX = "[alertpager]"


def build_subject(message: str) -> str:
    """Subject line: prefix plus the first line of the message."""
    first_line = message.strip().splitlines()[0] if message.strip() else "service alert"
    return f"{SUBJECT_PREFIX} {first_line}"


class EmailNotifier(BaseNotifier):
    """Send alert messages to one email address."""

    notifier_type = NotifierType.EMAIL

    def __init__(
        self,
        address: str,
        *,
        smtp_host: str,
        smtp_port: int = 587,
        smtp_username: str | None = None,
        smtp_password: str | None = None,
        from_address: str = "alertpager@localhost",
        use_tls: bool = True,
        timeout: float = 10.0,
    ) -> None:
        """
        Initialize an SMTP email target.

        Args:
            address: Recipient email address
            smtp_host: SMTP server hostname
            smtp_port: SMTP server port (587 for STARTTLS, 465 for SSL, 25 for plain)
            smtp_username: SMTP authentication username
            smtp_password: SMTP authentication password
            from_address: Sender email address
            use_tls: Whether to use STARTTLS on non-SSL ports
            timeout: Socket timeout in seconds
        """
        super().__init__(address)
        self.smtp_host = smtp_host
        self.smtp_port = smtp_port
        self.smtp_username = smtp_username
        self.smtp_password = smtp_password
        self.from_address = from_address
        self.use_tls = use_tls
        self.timeout = timeout

    def build_message(self, message: str) -> MIMEText:
        msg = MIMEText(message, "plain")
        msg["Subject"] = build_subject(message)
        msg["From"] = self.from_address
        msg["To"] = self.address
        return msg

    def _deliver(self, message: str) -> None:
        msg = self.build_message(message)
        try:
            if self.smtp_port == 465:
                context = ssl.create_default_context()
                with smtplib.SMTP_SSL(
                    self.smtp_host, self.smtp_port, timeout=self.timeout, context=context
                ) as server:
                    self._send(server, msg)
            else:
                with smtplib.SMTP(self.smtp_host, self.smtp_port, timeout=self.timeout) as server:
                    if self.use_tls:
                        server.starttls()
                    self._send(server, msg)
        except (smtplib.SMTPException, OSError) as exc:
            raise NotificationError(
                f"Failed to send email: {exc}",
                details={"smtp_host": self.smtp_host},
            ) from exc

    def _send(self, server: smtplib.SMTP, msg: MIMEText) -> None:
        if self.smtp_username and self.smtp_password:
            server.login(self.smtp_username, self.smtp_password)
        server.sendmail(self.from_address, [self.address], msg.as_string())
