from alertpager.timers.base import DEFAULT_ACK_TIMEOUT, AcknowledgeTimer, TimeoutHandler
from alertpager.timers.manual import ArmedTimeout, ManualAcknowledgeTimer
from alertpager.timers.scheduled import ThreadingAcknowledgeTimer

__all__ = [
    "DEFAULT_ACK_TIMEOUT",
    "AcknowledgeTimer",
    "ArmedTimeout",
    "ManualAcknowledgeTimer",
    "ThreadingAcknowledgeTimer",
    "TimeoutHandler",
]
