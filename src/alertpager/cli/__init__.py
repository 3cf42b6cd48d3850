"""
CLI commands for alertpager.
"""

from alertpager.cli.commands import (
    acknowledge_command,
    healthy_command,
    status_command,
    timeout_command,
    unhealthy_command,
)

__all__ = [
    "acknowledge_command",
    "healthy_command",
    "status_command",
    "timeout_command",
    "unhealthy_command",
]
