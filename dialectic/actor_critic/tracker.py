"""Round tracker — alternates actor and critic perspectives.

Each call validates one thought, appends it to the history and reports
round/role bookkeeping. Rounds pair an odd thought number (actor slot)
with the following even one (critic slot); the pairing is reported,
not enforced.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from dialectic.actor_critic.display import ThoughtSink
from dialectic.actor_critic.schemas import Role, RoundStatus, Thought
from dialectic.utils import error_payload, is_number, round_number

logger = logging.getLogger(__name__)

MIN_TOTAL_THOUGHTS = 3


class InvalidThoughtError(ValueError):
    """Raised by parse_thought when an input record fails validation."""


def parse_thought(data: Any) -> Thought:
    """Validate an untyped input record into a Thought.

    Checks run in a fixed order and the first failure wins.
    """
    if not isinstance(data, Mapping):
        raise InvalidThoughtError("Invalid input: thought data must be an object")

    content = data.get("content")
    if not isinstance(content, str) or not content:
        raise InvalidThoughtError("Invalid content: must be a non-empty string")

    role = data.get("role")
    if role not in (Role.ACTOR.value, Role.CRITIC.value):
        raise InvalidThoughtError("Invalid role: must be either 'actor' or 'critic'")

    next_round_needed = data.get("nextRoundNeeded")
    if not isinstance(next_round_needed, bool):
        raise InvalidThoughtError("Invalid nextRoundNeeded: must be a boolean")

    thought_number = data.get("thoughtNumber")
    if not is_number(thought_number):
        raise InvalidThoughtError("Invalid thoughtNumber: must be a number")

    total_thoughts = data.get("totalThoughts")
    if not is_number(total_thoughts):
        raise InvalidThoughtError("Invalid totalThoughts: must be a number")
    if total_thoughts < MIN_TOTAL_THOUGHTS:
        raise InvalidThoughtError(
            f"Invalid totalThoughts: must be at least {MIN_TOTAL_THOUGHTS} (got {total_thoughts})"
        )
    if total_thoughts % 2 != 1:
        raise InvalidThoughtError(
            f"Invalid totalThoughts: totalThoughts must be odd (got {total_thoughts})"
        )

    return Thought(
        content=content,
        role=Role(role),
        next_round_needed=next_round_needed,
        thought_number=thought_number,
        total_thoughts=total_thoughts,
    )


class RoundTracker:
    """Stateful actor-critic handler, one instance per process.

    Owns the append-only thought history and the current round, which
    is overwritten from each accepted thought (it can move backwards if
    thoughts arrive out of order).

    The optional sink receives every accepted thought for display.
    Sink errors are logged and otherwise ignored.
    """

    def __init__(self, sink: ThoughtSink | None = None) -> None:
        self._history: list[Thought] = []
        self._current_round = 0
        self._sink = sink

    @property
    def history(self) -> tuple[Thought, ...]:
        return tuple(self._history)

    @property
    def current_round(self) -> int:
        return self._current_round

    def process(self, data: Any) -> dict[str, Any]:
        """Validate and record one thought.

        Returns the round status payload, or {"error", "status": "failed"}
        when the input is rejected. Rejected input leaves state untouched.
        """
        try:
            thought = parse_thought(data)
        except InvalidThoughtError as e:
            logger.debug("Rejected thought: %s", e)
            return error_payload(str(e), status="failed")

        self._history.append(thought)
        self._current_round = round_number(thought.thought_number)
        self._render(thought)

        actor_count = sum(1 for t in self._history if t.role is Role.ACTOR)
        status = RoundStatus(
            thought_number=thought.thought_number,
            total_thoughts=thought.total_thoughts,
            current_round=self._current_round,
            current_role=thought.role,
            next_role=thought.role.opposite,
            is_round_complete=thought.thought_number % 2 == 0,
            next_round_needed=thought.next_round_needed,
            thought_history_length=len(self._history),
            actor_thoughts=actor_count,
            critic_thoughts=len(self._history) - actor_count,
        )
        return status.to_payload()

    def _render(self, thought: Thought) -> None:
        if self._sink is None:
            return
        try:
            self._sink(thought)
        except Exception:
            logger.warning("Thought display sink failed", exc_info=True)
