"""Shared fixtures: fresh handlers and settings, no transport."""

import os

import pytest

from dialectic.actor_critic import RoundTracker, Thought
from dialectic.config import Settings
from dialectic.reflexion import TrialLoop

# ---------------------------------------------------------------------------
# Recording sink
# ---------------------------------------------------------------------------


class RecordingSink:
    """Collects every thought the tracker hands to its display sink."""

    def __init__(self) -> None:
        self.thoughts: list[Thought] = []

    def __call__(self, thought: Thought) -> None:
        self.thoughts.append(thought)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def settings(monkeypatch) -> Settings:
    """Settings with defaults only (env vars and .env ignored)."""
    for key in list(os.environ):
        if key.startswith("DIALECTIC_"):
            monkeypatch.delenv(key)
    return Settings(_env_file=None)


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def tracker(sink) -> RoundTracker:
    return RoundTracker(sink=sink)


@pytest.fixture
def loop() -> TrialLoop:
    return TrialLoop()


def make_thought(**overrides) -> dict:
    """Valid actor-critic input with optional overrides."""
    data = {
        "content": "Propose a caching layer in front of the API",
        "role": "actor",
        "nextRoundNeeded": True,
        "thoughtNumber": 1,
        "totalThoughts": 5,
    }
    data.update(overrides)
    return data


def make_reflection(text: str, trial: int = 1, max_trials: int = 5, **overrides) -> dict:
    """Completed self-reflection step input."""
    data = {
        "stepType": "self-reflection",
        "trialNumber": trial,
        "maxTrials": max_trials,
        "actorOutputText": "draft",
        "evaluatorScore": 0.4,
        "reflectionText": text,
    }
    data.update(overrides)
    return data
