"""SMS notification target backed by an HTTP SMS gateway."""

from __future__ import annotations

from typing import Any

import httpx
import structlog
from tenacity import (
    RetryError,
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from alertpager.core.errors import NotificationError
from alertpager.domain.models import NotifierType
from alertpager.notifiers.base import BaseNotifier

logger = structlog.get_logger()


class RetryableGatewayError(Exception):
    """Gateway errors that should be retried."""


def is_retryable_status(status_code: int) -> bool:
    """Determine if HTTP status code is retryable."""
    return status_code in (408, 429, 500, 502, 503, 504)


class SmsNotifier(BaseNotifier):
    """Send alert messages to one phone number through an SMS gateway."""

    notifier_type = NotifierType.SMS

    def __init__(
        self,
        address: str,
        *,
        gateway_url: str,
        token: str | None = None,
        timeout: float = 10.0,
        max_retries: int = 3,
        backoff_factor: float = 2.0,
    ) -> None:
        super().__init__(address)
        self.gateway_url = gateway_url
        self._token = token
        self._timeout = timeout
        self._max_retries = max(1, max_retries)
        self._backoff_factor = backoff_factor

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    def _payload(self, message: str) -> dict[str, Any]:
        return {"to": self.address, "body": message}

    def _deliver(self, message: str) -> None:
        retrying = Retrying(
            retry=retry_if_exception_type(RetryableGatewayError),
            stop=stop_after_attempt(self._max_retries),
            wait=wait_exponential(multiplier=self._backoff_factor, max=30),
        )
        try:
            for attempt in retrying:
                with attempt:
                    self._post(message)
        except RetryError as exc:
            raise NotificationError(
                f"SMS gateway unavailable after {self._max_retries} attempts",
                details={"gateway_url": self.gateway_url},
            ) from exc

    def _post(self, message: str) -> None:
        try:
            with httpx.Client(timeout=self._timeout) as client:
                response = client.post(
                    self.gateway_url,
                    json=self._payload(message),
                    headers=self._headers(),
                )
        except (httpx.TimeoutException, httpx.NetworkError) as exc:
            logger.warning("sms_gateway_network_error", url=self.gateway_url, error=str(exc))
            raise RetryableGatewayError(str(exc)) from exc
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise NotificationError(
                f"SMS gateway request failed: {exc}",
                details={"gateway_url": self.gateway_url, "error_type": type(exc).__name__},
            ) from exc

        if is_retryable_status(response.status_code):
            logger.warning(
                "sms_gateway_retryable_error",
                status=response.status_code,
                url=self.gateway_url,
            )
            raise RetryableGatewayError(f"HTTP {response.status_code}: {response.text}")

        if response.is_error:
            raise NotificationError(
                f"SMS gateway rejected message: HTTP {response.status_code}",
                details={"gateway_url": self.gateway_url, "status": response.status_code},
            )
