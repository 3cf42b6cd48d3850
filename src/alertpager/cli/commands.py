"""
Pager commands for health reporters, operators and schedulers.

Each invocation opens the SQL alert store, runs one pager operation and
reports any acknowledgement timeout it armed. Timeouts are not waited
for here: the external scheduler runs `alertpager timeout SERVICE` once
the reported due time has passed.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import timedelta

from alertpager.cli.ux import console, info, print_key_value, success, warning
from alertpager.config import Settings
from alertpager.core.errors import main_with_error_handling
from alertpager.dispatch import PagerDispatcher, build_dispatcher
from alertpager.domain.models import HealthStatus
from alertpager.escalation.loader import load_policy
from alertpager.storage.sql import SqlAlertStore
from alertpager.timers.manual import ManualAcknowledgeTimer


@dataclass
class CliSession:
    dispatcher: PagerDispatcher
    store: SqlAlertStore
    timer: ManualAcknowledgeTimer

    def close(self) -> None:
        self.store.dispose()


def open_session(settings: Settings) -> CliSession:
    policy = load_policy(settings.policy_file, settings=settings)
    store = SqlAlertStore(policy, settings.database_url, echo=settings.debug)
    timer = ManualAcknowledgeTimer(delay=timedelta(seconds=settings.ack_timeout_seconds))
    dispatcher = build_dispatcher(policy, store, timer)
    return CliSession(dispatcher=dispatcher, store=store, timer=timer)


def _report_armed(session: CliSession) -> None:
    for armed in session.timer.armed:
        due_at = f"{armed.due_at:%Y-%m-%d %H:%M:%S} UTC"
        info(f"Acknowledgement timeout for {armed.service_id} due at {due_at}")
        console.print(f"[muted]  Run: alertpager timeout {armed.service_id}[/muted]")


@main_with_error_handling()
def unhealthy_command(service_id: str, message: str, settings: Settings) -> int:
    session = open_session(settings)
    try:
        session.dispatcher.report_unhealthy(service_id, message)
        if session.timer.armed:
            success(f"{service_id} is unhealthy; escalation level notified")
            _report_armed(session)
        else:
            warning(f"{service_id} already unhealthy; message updated, no new page sent")
    finally:
        session.close()
    return 0


@main_with_error_handling()
def healthy_command(service_id: str, settings: Settings) -> int:
    session = open_session(settings)
    try:
        session.dispatcher.report_healthy(service_id)
        success(f"{service_id} is healthy")
    finally:
        session.close()
    return 0


@main_with_error_handling()
def acknowledge_command(service_id: str, settings: Settings) -> int:
    session = open_session(settings)
    try:
        session.dispatcher.acknowledge(service_id)
        success(f"Alert for {service_id} acknowledged")
    finally:
        session.close()
    return 0


@main_with_error_handling()
def timeout_command(service_id: str, settings: Settings) -> int:
    session = open_session(settings)
    try:
        session.dispatcher.handle_acknowledge_timeout(service_id)
        if session.timer.armed:
            record = session.dispatcher.status(service_id)
            success(f"Escalated {service_id} to level {record.escalation_level.level}")
            _report_armed(session)
        else:
            info(f"No escalation for {service_id}")
    finally:
        session.close()
    return 0


@main_with_error_handling()
def status_command(service_id: str, settings: Settings, output_format: str = "text") -> int:
    session = open_session(settings)
    try:
        record = session.dispatcher.status(service_id)
    finally:
        session.close()

    data = record.to_dict()
    if output_format == "json":
        print(json.dumps(data, sort_keys=True))
        return 0

    style = "error" if record.health_status == HealthStatus.UNHEALTHY else "success"
    console.print(f"[{style}]{service_id}: {record.health_status.value}[/{style}]")
    print_key_value({key: str(value) for key, value in data.items()})
    return 0
