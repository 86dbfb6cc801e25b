"""Pydantic models for the actor-critic round tracker."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class Role(StrEnum):
    ACTOR = "actor"
    CRITIC = "critic"

    @property
    def opposite(self) -> Role:
        return Role.CRITIC if self is Role.ACTOR else Role.ACTOR


class Thought(BaseModel):
    """A validated thought, as stored in the tracker history."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    content: str
    role: Role
    next_round_needed: bool
    thought_number: int | float
    total_thoughts: int | float


class RoundStatus(BaseModel):
    """Summary returned after a thought has been recorded.

    Serialized with camelCase keys (thoughtNumber, currentRound, ...).
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    thought_number: int | float
    total_thoughts: int | float
    current_round: int
    current_role: Role
    next_role: Role
    is_round_complete: bool
    next_round_needed: bool
    thought_history_length: int
    actor_thoughts: int
    critic_thoughts: int

    def to_payload(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)
