"""
Core utilities shared across alertpager modules.
"""

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

__all__ = [
    "AlertPagerError",
    "ConfigurationError",
    "ExitCode",
    "NotFoundError",
    "NotificationError",
    "StorageError",
    "format_error_message",
    "main_with_error_handling",
]
