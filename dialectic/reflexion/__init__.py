"""Reflexion — actor, evaluator and self-reflection trials with bounded memory."""

from dialectic.reflexion.loop import TrialLoop
from dialectic.reflexion.memory import DEFAULT_MAX_DEPTH, ReflectionMemory
from dialectic.reflexion.schemas import StepType, TrialRecord

__all__ = [
    "DEFAULT_MAX_DEPTH",
    "ReflectionMemory",
    "StepType",
    "TrialLoop",
    "TrialRecord",
]
