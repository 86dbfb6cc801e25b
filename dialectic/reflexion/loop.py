"""Reflexion trial loop — actor -> evaluator -> self-reflection.

The loop keeps no "current step": the caller names the step on every
call and supplies the fields it needs. Only a completed self-reflection
(one that carries reflectionText) changes state, by pushing the
reflection into memory and appending a TrialRecord.

Memory overrides are the exception: a list in memoryOverride replaces
memory as soon as the trial numbers validate, before the step itself
is checked.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from dialectic.reflexion.memory import DEFAULT_MAX_DEPTH, ReflectionMemory
from dialectic.reflexion.schemas import StepType, TrialRecord
from dialectic.utils import error_payload, is_number

logger = logging.getLogger(__name__)

REFLECTION_TASK_DESCRIPTION = (
    "Based on the actor's output and the evaluator's score, generate a concise "
    "reflection on what can be improved. Consider the provided memory of past reflections."
)
REFLECTION_PENDING_MESSAGE = (
    "Self-reflection step initiated. LLM should generate reflectionText "
    "based on provided prompt components."
)


class TrialLoop:
    """Stateful Reflexion handler, one instance per process.

    Owns the bounded reflection memory and the append-only trial history.
    """

    def __init__(self, max_memory_depth: int = DEFAULT_MAX_DEPTH) -> None:
        self._memory = ReflectionMemory(max_memory_depth)
        self._trial_history: list[TrialRecord] = []

    @property
    def memory(self) -> list[str]:
        return self._memory.snapshot()

    @property
    def trial_history(self) -> tuple[TrialRecord, ...]:
        return tuple(self._trial_history)

    def process(self, data: Any) -> dict[str, Any]:
        """Validate and process one step.

        Always returns a JSON-serializable dict; invalid input yields
        {"error": message}.
        """
        if not isinstance(data, Mapping):
            return error_payload("Invalid input: stepData must be an object.")

        trial_number = data.get("trialNumber")
        max_trials = data.get("maxTrials")

        if not is_number(trial_number) or trial_number < 1:
            return error_payload("Invalid 'trialNumber': must be a positive integer.")
        if not is_number(max_trials) or max_trials < 1:
            return error_payload("Invalid 'maxTrials': must be a positive integer.")
        if trial_number > max_trials:
            return error_payload("'trialNumber' cannot exceed 'maxTrials'.")

        memory_override = data.get("memoryOverride")
        if isinstance(memory_override, Sequence) and not isinstance(memory_override, (str, bytes)):
            self._memory.replace(memory_override)
            logger.debug("Memory replaced by override (%d entries)", len(self._memory))

        step_type = data.get("stepType")
        match step_type:
            case StepType.ACTOR:
                return self._actor_step(data, trial_number, max_trials)
            case StepType.EVALUATOR:
                return self._evaluator_step(data, trial_number, max_trials)
            case StepType.SELF_REFLECTION:
                return self._reflection_step(data, trial_number, max_trials)
            case _:
                return error_payload(
                    f"Unknown stepType: '{step_type}'. "
                    "Must be 'actor', 'evaluator', or 'self-reflection'."
                )

    def _actor_step(self, data: Mapping, trial_number: int | float, max_trials: int | float) -> dict[str, Any]:
        actor_input = data.get("actorInputText")
        if not isinstance(actor_input, str):
            return error_payload("Invalid 'actorInputText': must be a string for 'actor' step.")
        return {
            "nextStep": StepType.EVALUATOR.value,
            "prompt_for_actor": actor_input,
            "current_memory": self._memory.snapshot(),
            "trialNumber": trial_number,
            "maxTrials": max_trials,
        }

    def _evaluator_step(self, data: Mapping, trial_number: int | float, max_trials: int | float) -> dict[str, Any]:
        actor_output = data.get("actorOutputText")
        if not isinstance(actor_output, str):
            return error_payload("Invalid 'actorOutputText': must be a string for 'evaluator' step.")
        return {
            "nextStep": StepType.SELF_REFLECTION.value,
            "content_to_evaluate": actor_output,
            "trialNumber": trial_number,
            "maxTrials": max_trials,
        }

    def _reflection_step(self, data: Mapping, trial_number: int | float, max_trials: int | float) -> dict[str, Any]:
        actor_output = data.get("actorOutputText")
        if not isinstance(actor_output, str):
            return error_payload("Invalid 'actorOutputText': must be a string for 'self-reflection' step.")

        score = data.get("evaluatorScore")
        if not isinstance(score, str) and not is_number(score):
            return error_payload(
                "Invalid 'evaluatorScore': must be a string or number for 'self-reflection' step."
            )

        reflection = data.get("reflectionText")
        if not isinstance(reflection, str):
            # Caller still has to produce the reflection; hand back its prompt.
            return {
                "nextStep": StepType.SELF_REFLECTION.value,
                "prompt_for_reflection_llm": {
                    "task_description": REFLECTION_TASK_DESCRIPTION,
                    "actor_output": actor_output,
                    "evaluator_score": score,
                    "current_memory": self._memory.snapshot(),
                },
                "trialNumber": trial_number,
                "maxTrials": max_trials,
                "message": REFLECTION_PENDING_MESSAGE,
            }

        self._memory.push(reflection)
        self._trial_history.append(
            TrialRecord(
                trial_number=trial_number,
                actor_output=actor_output,
                evaluator_score=score,
                reflection_text=reflection,
            )
        )
        logger.info(
            "Trial %s/%s completed (memory=%d, history=%d)",
            trial_number,
            max_trials,
            len(self._memory),
            len(self._trial_history),
        )
        return {
            "trialCompleted": trial_number,
            "reflection_added_to_memory": reflection,
            "memory": self._memory.snapshot(),
            "next_trial_needed": trial_number < max_trials,
            "trial_history_length": len(self._trial_history),
        }
