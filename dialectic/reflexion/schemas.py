"""Data models for the Reflexion trial loop."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any


class StepType(StrEnum):
    ACTOR = "actor"
    EVALUATOR = "evaluator"
    SELF_REFLECTION = "self-reflection"


@dataclass(frozen=True)
class TrialRecord:
    """One completed trial, appended to the loop's trial history."""

    trial_number: int | float
    actor_output: str
    evaluator_score: str | int | float
    reflection_text: str

    def to_payload(self) -> dict[str, Any]:
        return {
            "trialNumber": self.trial_number,
            "actorOutput": self.actor_output,
            "evaluatorScore": self.evaluator_score,
            "reflectionText": self.reflection_text,
        }
