"""
Escalation policy loader.

Reads an already-authored policy from YAML:

    levels:
      - level: 1
        targets:
          - type: email
            address: oncall@example.com
          - type: sms
            address: "+15550100"
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable

import structlog
import yaml

from alertpager.config import Settings, get_settings
from alertpager.core.errors import ConfigurationError
from alertpager.escalation.policy import EscalationLevel, EscalationPolicy
from alertpager.notifiers import build_notifier
from alertpager.notifiers.base import NotificationTarget

logger = structlog.get_logger()

TargetFactory = Callable[[str, str], NotificationTarget]


def parse_policy(data: dict[str, Any], target_factory: TargetFactory) -> EscalationPolicy:
    """Build a policy from parsed YAML using ``target_factory(type, address)``."""
    raw_levels = data.get("levels") if isinstance(data, dict) else None
    if not raw_levels or not isinstance(raw_levels, list):
        raise ConfigurationError("Escalation policy must define a non-empty 'levels' list")

    levels = []
    for position, raw in enumerate(raw_levels):
        if not isinstance(raw, dict):
            raise ConfigurationError(f"Escalation level #{position} must be a mapping")
        try:
            label = int(raw.get("level", position + 1))
        except (TypeError, ValueError) as exc:
            raise ConfigurationError(
                f"Escalation level #{position} has a non-integer label: {raw.get('level')!r}",
                details={"position": position},
            ) from exc
        raw_targets = raw.get("targets") or []
        if not raw_targets:
            raise ConfigurationError(
                f"Escalation level {label} has no targets",
                details={"position": position},
            )
        targets = []
        for target in raw_targets:
            if not isinstance(target, dict) or "type" not in target or "address" not in target:
                raise ConfigurationError(
                    f"Targets of escalation level {label} need 'type' and 'address'",
                    details={"position": position},
                )
            targets.append(target_factory(str(target["type"]), str(target["address"])))
        levels.append(EscalationLevel(level=label, targets=targets))

    return EscalationPolicy(levels)


def load_policy(
    path: str | Path | None = None,
    settings: Settings | None = None,
    target_factory: TargetFactory | None = None,
) -> EscalationPolicy:
    """Load the escalation policy file named by ``path`` or settings."""
    cfg = settings or get_settings()
    policy_path = Path(path or cfg.policy_file)
    if not policy_path.exists():
        raise ConfigurationError(f"Escalation policy file not found: {policy_path}")

    try:
        with open(policy_path) as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Invalid YAML in {policy_path}: {exc}") from exc

    factory = target_factory or (lambda kind, address: build_notifier(kind, address, cfg))
    policy = parse_policy(data, factory)
    logger.info("escalation_policy_loaded", path=str(policy_path), levels=len(policy))
    return policy
