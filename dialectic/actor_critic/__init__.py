"""Actor-critic thinking — alternating perspectives over a fixed number of thoughts."""

from dialectic.actor_critic.display import LoggingThoughtSink, ThoughtSink, format_thought
from dialectic.actor_critic.schemas import Role, RoundStatus, Thought
from dialectic.actor_critic.tracker import InvalidThoughtError, RoundTracker, parse_thought

__all__ = [
    "InvalidThoughtError",
    "LoggingThoughtSink",
    "Role",
    "RoundStatus",
    "RoundTracker",
    "Thought",
    "ThoughtSink",
    "format_thought",
    "parse_thought",
]
