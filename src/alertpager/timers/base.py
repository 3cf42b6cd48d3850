from __future__ import annotations

from datetime import timedelta
from typing import Callable, Protocol, runtime_checkable

DEFAULT_ACK_TIMEOUT = timedelta(minutes=15)

TimeoutHandler = Callable[[str], None]


@runtime_checkable
class AcknowledgeTimer(Protocol):
    """Delivers an acknowledgement timeout for a service after a fixed delay."""

    def set_acknowledge_timer(self, service_id: str) -> None: ...
