from alertpager.escalation.loader import load_policy, parse_policy
from alertpager.escalation.policy import EscalationLevel, EscalationPolicy

__all__ = [
    "EscalationLevel",
    "EscalationPolicy",
    "load_policy",
    "parse_policy",
]
