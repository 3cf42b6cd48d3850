"""Tests for notification targets."""

import json
import smtplib
from unittest.mock import MagicMock, patch

import httpx
import pytest
import respx
from alertpager.config import Settings
from alertpager.domain.models import NotifierType
from alertpager.notifiers import EmailNotifier, SmsNotifier, build_notifier
from alertpager.notifiers.email import build_subject
from structlog.testing import capture_logs

GATEWAY = "https://sms.example.com/messages"


def _sms(**kwargs) -> SmsNotifier:
    options = {"gateway_url": GATEWAY, "token": "secret", "backoff_factor": 0}
    options.update(kwargs)
    return SmsNotifier("+1234567890", **options)


class TestSmsNotifier:
    def test_posts_message_to_gateway(self):
        notifier = _sms()

        with respx.mock:
            route = respx.post(GATEWAY).mock(return_value=httpx.Response(202))
            notifier.notify("checkout down")

        assert route.call_count == 1
        request = route.calls.last.request
        assert request.headers["Authorization"] == "Bearer secret"
        assert json.loads(request.content) == {"to": "+1234567890", "body": "checkout down"}

    def test_retries_on_503(self):
        notifier = _sms(max_retries=3)

        with respx.mock:
            route = respx.post(GATEWAY)
            route.side_effect = [httpx.Response(503), httpx.Response(200)]
            with capture_logs() as logs:
                notifier.notify("checkout down")

        assert route.call_count == 2
        assert any(e["event"] == "notification_sent" for e in logs)

    def test_gives_up_after_max_retries_without_raising(self):
        notifier = _sms(max_retries=2)

        with respx.mock:
            route = respx.post(GATEWAY).mock(return_value=httpx.Response(503))
            with capture_logs() as logs:
                notifier.notify("checkout down")

        assert route.call_count == 2
        failed = [e for e in logs if e["event"] == "notification_failed"]
        assert len(failed) == 1
        assert failed[0]["channel"] == "sms"
        assert failed[0]["address"] == "+1234567890"

    def test_permanent_error_is_not_retried(self):
        notifier = _sms()

        with respx.mock:
            route = respx.post(GATEWAY).mock(return_value=httpx.Response(400))
            with capture_logs() as logs:
                notifier.notify("checkout down")

        assert route.call_count == 1
        failed = [e for e in logs if e["event"] == "notification_failed"]
        assert failed[0]["status"] == 400

    def test_network_error_is_retried(self):
        notifier = _sms(max_retries=2)

        with respx.mock:
            route = respx.post(GATEWAY)
            route.side_effect = [httpx.ConnectError("refused"), httpx.Response(200)]
            notifier.notify("checkout down")

        assert route.call_count == 2

    def test_gateway_down_until_retries_exhausted(self):
        notifier = _sms(max_retries=3)

        with respx.mock:
            route = respx.post(GATEWAY).mock(side_effect=httpx.ConnectError("refused"))
            with capture_logs() as logs:
                notifier.notify("checkout down")

        assert route.call_count == 3
        failed = [e for e in logs if e["event"] == "notification_failed"]
        assert len(failed) == 1
        assert failed[0]["gateway_url"] == GATEWAY
        assert not any(e["event"] == "notification_sent" for e in logs)

    def test_protocol_error_is_contained_and_not_retried(self):
        notifier = _sms(max_retries=3)

        with respx.mock:
            route = respx.post(GATEWAY).mock(
                side_effect=httpx.RemoteProtocolError("server disconnected")
            )
            with capture_logs() as logs:
                notifier.notify("checkout down")

        assert route.call_count == 1
        failed = [e for e in logs if e["event"] == "notification_failed"]
        assert failed[0]["error_type"] == "RemoteProtocolError"

    def test_unsupported_scheme_is_contained(self):
        notifier = _sms(gateway_url="ftp://sms.example.com/messages")

        with capture_logs() as logs:
            notifier.notify("checkout down")

        failed = [e for e in logs if e["event"] == "notification_failed"]
        assert failed[0]["error_type"] == "UnsupportedProtocol"

    def test_failing_gateway_does_not_stop_escalation(self):
        from alertpager.escalation.policy import EscalationLevel, EscalationPolicy
        from alertpager.pager import Pager
        from alertpager.storage.memory import InMemoryAlertStore

        other = MagicMock()
        level = EscalationLevel(level=1, targets=[_sms(), other])
        timer = MagicMock()
        pager = Pager(EscalationPolicy([level]), InMemoryAlertStore(), timer)

        with respx.mock:
            respx.post(GATEWAY).mock(side_effect=httpx.RemoteProtocolError("server disconnected"))
            pager.report_unhealthy("svc", "down")

        other.notify.assert_called_once_with("down")
        timer.set_acknowledge_timer.assert_called_once_with("svc")

    def test_no_token_no_auth_header(self):
        notifier = _sms(token=None)

        with respx.mock:
            route = respx.post(GATEWAY).mock(return_value=httpx.Response(200))
            notifier.notify("hi")

        assert "Authorization" not in route.calls.last.request.headers


class TestEmailNotifier:
    def _notifier(self, **kwargs) -> EmailNotifier:
        options = {"smtp_host": "smtp.example.com", "from_address": "pager@example.com"}
        options.update(kwargs)
        return EmailNotifier("oncall@example.com", **options)

    @patch("alertpager.notifiers.email.smtplib.SMTP")
    def test_sends_with_starttls(self, smtp_cls):
        server = smtp_cls.return_value.__enter__.return_value
        notifier = self._notifier(smtp_username="user", smtp_password="pw")

        notifier.notify("db unreachable\nsince 10:02")

        smtp_cls.assert_called_once_with("smtp.example.com", 587, timeout=10.0)
        server.starttls.assert_called_once()
        server.login.assert_called_once_with("user", "pw")
        sender, recipients, body = server.sendmail.call_args.args
        assert sender == "pager@example.com"
        assert recipients == ["oncall@example.com"]
        assert "Subject: [alertpager] db unreachable" in body

    @patch("alertpager.notifiers.email.smtplib.SMTP_SSL")
    def test_port_465_uses_ssl(self, smtp_ssl_cls):
        server = smtp_ssl_cls.return_value.__enter__.return_value
        notifier = self._notifier(smtp_port=465)

        notifier.notify("down")

        smtp_ssl_cls.assert_called_once()
        server.login.assert_not_called()
        server.sendmail.assert_called_once()

    @patch("alertpager.notifiers.email.smtplib.SMTP")
    def test_smtp_failure_is_logged_not_raised(self, smtp_cls):
        smtp_cls.side_effect = smtplib.SMTPConnectError(421, "busy")
        notifier = self._notifier()

        with capture_logs() as logs:
            notifier.notify("down")

        failed = [e for e in logs if e["event"] == "notification_failed"]
        assert failed[0]["smtp_host"] == "smtp.example.com"

    @patch("alertpager.notifiers.email.smtplib.SMTP")
    def test_connection_refused_is_logged_not_raised(self, smtp_cls):
        smtp_cls.side_effect = ConnectionRefusedError()

        with capture_logs() as logs:
            self._notifier().notify("down")

        assert any(e["event"] == "notification_failed" for e in logs)

    def test_build_subject(self):
        assert build_subject("disk full\nmore detail") == "[alertpager] disk full"
        assert build_subject("   ") == "[alertpager] service alert"


class TestBuildNotifier:
    def test_email_from_settings(self):
        settings = Settings(smtp_host="mail.internal", smtp_port=25, smtp_use_tls=False)

        notifier = build_notifier("email", "ops@example.com", settings)

        assert isinstance(notifier, EmailNotifier)
        assert notifier.notifier_type is NotifierType.EMAIL
        assert notifier.smtp_host == "mail.internal"
        assert notifier.use_tls is False

    def test_sms_from_settings(self):
        settings = Settings(sms_gateway_url=GATEWAY, sms_gateway_token="t")

        notifier = build_notifier(NotifierType.SMS, "+1555", settings)

        assert isinstance(notifier, SmsNotifier)
        assert notifier.gateway_url == GATEWAY
        assert repr(notifier) == "SmsNotifier(address='+1555')"

    def test_unexpected_errors_propagate(self):
        notifier = build_notifier("sms", "+1555", Settings(sms_gateway_url=GATEWAY))
        notifier._deliver = MagicMock(side_effect=RuntimeError("bug"))

        with pytest.raises(RuntimeError, match="bug"):
            notifier.notify("x")
