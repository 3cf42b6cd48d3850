"""
Escalation policy: the ordered ladder of notification levels.

Levels are compared by identity. Two levels may share the same numeric
label and still be told apart by their position in the policy.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterator, Sequence

from alertpager.core.errors import ConfigurationError

if TYPE_CHECKING:
    from alertpager.notifiers.base import NotificationTarget


@dataclass(eq=False)
class EscalationLevel:
    """One rung of the escalation ladder."""

    level: int
    targets: Sequence[NotificationTarget] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        self.targets = tuple(self.targets)

    def __repr__(self) -> str:
        addresses = ", ".join(str(t.address) for t in self.targets)
        return f"EscalationLevel(level={self.level}, targets=[{addresses}])"


class EscalationPolicy:
    """Immutable ordered sequence of escalation levels."""

    def __init__(self, levels: Sequence[EscalationLevel]) -> None:
        if not levels:
            raise ConfigurationError("Escalation policy must define at least one level")
        self._levels: tuple[EscalationLevel, ...] = tuple(levels)

    @property
    def levels(self) -> tuple[EscalationLevel, ...]:
        return self._levels

    def __len__(self) -> int:
        return len(self._levels)

    def __iter__(self) -> Iterator[EscalationLevel]:
        return iter(self._levels)

    def get_first_escalation_level(self) -> EscalationLevel:
        """Level paged when a service first becomes unhealthy."""
        return self._levels[0]

    def get_next_escalation_level(self, current: EscalationLevel) -> EscalationLevel | None:
        """Return the level after ``current``, or None if ``current`` is the last one."""
        position = self.index_of(current)
        if position + 1 >= len(self._levels):
            return None
        return self._levels[position + 1]

    def index_of(self, level: EscalationLevel) -> int:
        """Position of ``level`` in the policy, matched by identity."""
        for position, candidate in enumerate(self._levels):
            if candidate is level:
                return position
        raise ValueError(f"Escalation level {level.level} is not part of this policy")

    def level_at(self, index: int) -> EscalationLevel:
        """Level stored at ``index``; used to rehydrate persisted records."""
        if not 0 <= index < len(self._levels):
            raise ConfigurationError(
                f"Escalation index {index} is outside the configured policy",
                details={"levels": len(self._levels)},
            )
        return self._levels[index]
