"""Human-readable rendering of thoughts for the server log.

Purely cosmetic: the tracker hands each recorded thought to a sink,
and nothing the sink does feeds back into tracker state.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from dialectic.actor_critic.schemas import Role, Thought
from dialectic.utils import display_width, round_number

display_logger = logging.getLogger("dialectic.display")

# Sink type: called once per recorded thought
ThoughtSink = Callable[[Thought], None]

_ROLE_ICONS = {Role.ACTOR: "🎭", Role.CRITIC: "🔍"}

# ANSI foreground colors
_ROLE_COLORS = {Role.ACTOR: "\033[34m", Role.CRITIC: "\033[33m"}
_RESET = "\033[0m"


def _format_number(value: int | float) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def format_thought(thought: Thought, color: bool = False) -> str:
    """Render a thought inside a box with a role header.

    Example (no color):

        ┌────────────────────────────┐
        │ 🎭 Actor 1/5 (Round 1)     │
        ├────────────────────────────┤
        │ Draft the opening argument │
        └────────────────────────────┘
    """
    icon = _ROLE_ICONS[thought.role]
    current_round = round_number(thought.thought_number)
    header = (
        f"{icon} {thought.role.value.capitalize()} "
        f"{_format_number(thought.thought_number)}/{_format_number(thought.total_thoughts)} "
        f"(Round {current_round})"
    )
    body = thought.content.splitlines() or [""]
    width = max(display_width(header), *(display_width(line) for line in body)) + 2

    if color:
        paint = _ROLE_COLORS[thought.role]
        header_text = f"{paint}{header}{_RESET}"
    else:
        header_text = header

    lines = [
        f"┌{'─' * width}┐",
        f"│ {header_text}{' ' * (width - display_width(header) - 1)}│",
        f"├{'─' * width}┤",
    ]
    lines.extend(f"│ {line}{' ' * (width - 2 - display_width(line))} │" for line in body)
    lines.append(f"└{'─' * width}┘")
    return "\n".join(lines)


class LoggingThoughtSink:
    """Writes formatted thoughts to the ``dialectic.display`` logger."""

    def __init__(self, color: bool = False, level: int = logging.INFO) -> None:
        self._color = color
        self._level = level

    def __call__(self, thought: Thought) -> None:
        display_logger.log(self._level, "\n%s", format_thought(thought, color=self._color))
