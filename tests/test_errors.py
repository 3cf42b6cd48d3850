"""Tests for core/errors.py."""

import pytest
from alertpager.core.errors import (
    AlertPagerError,
    ConfigurationError,
    ExitCode,
    NotFoundError,
    NotificationError,
    StorageError,
    format_error_message,
    main_with_error_handling,
)


class TestErrorHierarchy:
    @pytest.mark.parametrize(
        "error_cls, code",
        [
            (ConfigurationError, ExitCode.CONFIG_ERROR),
            (StorageError, ExitCode.PROVIDER_ERROR),
            (NotificationError, ExitCode.PROVIDER_ERROR),
            (NotFoundError, ExitCode.NOT_FOUND),
        ],
    )
    def test_exit_codes(self, error_cls, code):
        error = error_cls("boom")
        assert isinstance(error, AlertPagerError)
        assert error.exit_code == code

    def test_details_default_to_empty(self):
        assert NotFoundError("missing").details == {}


class TestMainWithErrorHandling:
    def test_success_passthrough(self):
        @main_with_error_handling()
        def command() -> int:
            return 0

        assert command() == 0

    def test_alertpager_error_maps_to_exit_code(self):
        @main_with_error_handling()
        def command() -> int:
            raise NotFoundError("no alert", details={"service_id": "svc"})

        assert command() == ExitCode.NOT_FOUND

    def test_alertpager_error_is_printed(self, capsys):
        @main_with_error_handling(log_errors=False)
        def command() -> int:
            raise ConfigurationError("bad policy", details={"position": 2})

        assert command() == ExitCode.CONFIG_ERROR
        assert "bad policy (position=2)" in capsys.readouterr().out

    def test_keyboard_interrupt(self):
        @main_with_error_handling()
        def command() -> int:
            raise KeyboardInterrupt

        assert command() == 130

    def test_unexpected_error(self):
        @main_with_error_handling(log_errors=False)
        def command() -> int:
            raise RuntimeError("surprise")

        assert command() == ExitCode.UNKNOWN_ERROR


def test_format_error_message():
    error = ConfigurationError("bad policy", details={"path": "p.yaml", "line": 3})
    assert format_error_message(error) == "bad policy (path=p.yaml, line=3)"
    assert format_error_message(ConfigurationError("plain")) == "plain"
