"""
alertpager command line.

Usage:
    alertpager [--policy FILE] [--database-url URL] <command> [args]
"""

from __future__ import annotations

import argparse
import sys
from typing import Sequence

from alertpager.config import Settings, get_settings
from alertpager.logging import configure_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="alertpager",
        description="Escalating notifications for unhealthy services",
    )
    parser.add_argument("--policy", help="Escalation policy YAML (default: settings)")
    parser.add_argument("--database-url", help="SQLAlchemy URL of the alert store")
    parser.add_argument("--log-level", help="Logging level (default: settings)")
    subparsers = parser.add_subparsers(dest="command")

    unhealthy_parser = subparsers.add_parser("unhealthy", help="Report a service as unhealthy")
    unhealthy_parser.add_argument("service_id")
    unhealthy_parser.add_argument("message")

    healthy_parser = subparsers.add_parser("healthy", help="Report a service as healthy")
    healthy_parser.add_argument("service_id")

    ack_parser = subparsers.add_parser("ack", help="Acknowledge the open alert of a service")
    ack_parser.add_argument("service_id")

    timeout_parser = subparsers.add_parser(
        "timeout", help="Deliver an acknowledgement timeout (run by the scheduler)"
    )
    timeout_parser.add_argument("service_id")

    status_parser = subparsers.add_parser("status", help="Show the alert state of a service")
    status_parser.add_argument("service_id")
    status_parser.add_argument("--format", choices=["text", "json"], default="text")

    return parser


def _resolve_settings(args: argparse.Namespace) -> Settings:
    overrides = {}
    if args.policy:
        overrides["policy_file"] = args.policy
    if args.database_url:
        overrides["database_url"] = args.database_url
    if args.log_level:
        overrides["log_level"] = args.log_level
    return get_settings().model_copy(update=overrides)


def run(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    settings = _resolve_settings(args)
    configure_logging(settings.log_level)

    from alertpager.cli import commands

    if args.command == "unhealthy":
        return commands.unhealthy_command(args.service_id, args.message, settings)
    if args.command == "healthy":
        return commands.healthy_command(args.service_id, settings)
    if args.command == "ack":
        return commands.acknowledge_command(args.service_id, settings)
    if args.command == "timeout":
        return commands.timeout_command(args.service_id, settings)
    return commands.status_command(args.service_id, settings, output_format=args.format)


def main(argv: Sequence[str] | None = None) -> None:
    sys.exit(run(argv))


if __name__ == "__main__":
    main()
