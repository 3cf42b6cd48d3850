"""Root test configuration."""

import logging
from unittest.mock import MagicMock

import pytest
import structlog
from alertpager.domain.models import NotifierType
from alertpager.escalation.policy import EscalationLevel, EscalationPolicy


def pytest_configure(config):
    """Configure structlog for tests to suppress debug/info output."""
    logging.basicConfig(level=logging.WARNING, force=True)
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.processors.add_log_level,
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )


def make_target(notifier_type: NotifierType, address: str) -> MagicMock:
    target = MagicMock()
    target.notifier_type = notifier_type
    target.address = address
    return target


@pytest.fixture
def level1_email():
    return make_target(NotifierType.EMAIL, "john@example.com")


@pytest.fixture
def level1_sms():
    return make_target(NotifierType.SMS, "+1234567890")


@pytest.fixture
def level2_email():
    return make_target(NotifierType.EMAIL, "jane@example.com")


@pytest.fixture
def level2_sms():
    return make_target(NotifierType.SMS, "+9876543210")


@pytest.fixture
def level1(level1_email, level1_sms):
    return EscalationLevel(level=1, targets=[level1_email, level1_sms])


@pytest.fixture
def level2(level2_email, level2_sms):
    return EscalationLevel(level=2, targets=[level2_email, level2_sms])


@pytest.fixture
def policy(level1, level2):
    return EscalationPolicy([level1, level2])


@pytest.fixture
def store():
    mock_store = MagicMock()
    mock_store.load.return_value = None
    mock_store.save.return_value = True
    return mock_store


@pytest.fixture
def timer():
    return MagicMock()


@pytest.fixture
def target_factory():
    return make_target
