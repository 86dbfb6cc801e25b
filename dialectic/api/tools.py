"""Tool dispatcher and the two thinking tools.

Provides:
- ToolDispatcher: registers tools, dispatches calls, lists definitions
- 2 tool closures wrapping the stateful handlers:
  - actor-critic-thinking: RoundTracker.process
  - reflexion-thinking: TrialLoop.process

Each closure forwards its arguments unmodified and returns the handler's
result as MCP-format content: {"content": [{"type": "text", "text": json}]}.
Validation failures are ordinary results; only exceptions count as errors.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from typing import Any

from dialectic.actor_critic import LoggingThoughtSink, RoundTracker
from dialectic.config import Settings
from dialectic.reflexion import TrialLoop

logger = logging.getLogger(__name__)

ACTOR_CRITIC_TOOL = "actor-critic-thinking"
REFLEXION_TOOL = "reflexion-thinking"


# ---------------------------------------------------------------------------
# ToolDispatcher
# ---------------------------------------------------------------------------


class ToolDispatcher:
    """Registers tool handlers and dispatches tool calls.

    Each handler is an async callable that accepts **kwargs and returns
    an MCP-format response: {"content": [{"type": "text", "text": "..."}]}.
    """

    def __init__(self) -> None:
        self._handlers: dict[str, Callable[..., Any]] = {}
        self._schemas: dict[str, dict[str, Any]] = {}

    def register(self, name: str, handler: Callable[..., Any], schema: dict[str, Any]) -> None:
        """Register a tool handler with its JSON schema."""
        self._handlers[name] = handler
        self._schemas[name] = schema

    def __contains__(self, name: str) -> bool:
        return name in self._handlers

    async def dispatch(self, name: str, args: dict[str, Any]) -> tuple[str, bool]:
        """Dispatch a tool call and return (result_text, is_error).

        Unknown tools and handler exceptions come back as JSON
        {"error": ...} text with is_error=True.
        """
        handler = self._handlers.get(name)
        if not handler:
            return json.dumps({"error": f"Unknown tool: {name}"}), True
        try:
            result = await handler(**args)
            return result["content"][0]["text"], False
        except Exception as e:
            logger.exception("Tool dispatch error for %s", name)
            return json.dumps({"error": f"Tool error: {e}"}), True

    def tool_definitions(self) -> list[dict[str, Any]]:
        """Return all tool definitions (name, description, input_schema)."""
        return [
            {
                "name": name,
                "description": schema.get("description", ""),
                "input_schema": {k: v for k, v in schema.items() if k != "description"},
            }
            for name, schema in self._schemas.items()
        ]


# ---------------------------------------------------------------------------
# Tool closures
# ---------------------------------------------------------------------------


def _text_content(payload: dict[str, Any]) -> dict[str, Any]:
    return {"content": [{"type": "text", "text": json.dumps(payload)}]}


def create_thinking_tools(
    tracker: RoundTracker | None = None,
    loop: TrialLoop | None = None,
) -> dict[str, Any]:
    """Create tool closures with the handlers captured in closure context.

    Returns a dict of async callables suitable for ToolDispatcher
    registration. A handler passed as None has no closure.
    """
    tools: dict[str, Any] = {}

    if tracker is not None:

        async def actor_critic_thinking(**arguments: Any) -> dict[str, Any]:
            """Record one actor or critic thought."""
            return _text_content(tracker.process(arguments))

        tools[ACTOR_CRITIC_TOOL] = actor_critic_thinking

    if loop is not None:

        async def reflexion_thinking(**arguments: Any) -> dict[str, Any]:
            """Run one Reflexion step."""
            return _text_content(loop.process(arguments))

        tools[REFLEXION_TOOL] = reflexion_thinking

    return tools


def register_thinking_tools(
    dispatcher: ToolDispatcher,
    tracker: RoundTracker | None,
    loop: TrialLoop | None,
) -> None:
    """Create the thinking tools and register them with their schemas."""
    closures = create_thinking_tools(tracker, loop)

    if ACTOR_CRITIC_TOOL in closures:
        dispatcher.register(ACTOR_CRITIC_TOOL, closures[ACTOR_CRITIC_TOOL], _ACTOR_CRITIC_SCHEMA)
    if REFLEXION_TOOL in closures:
        dispatcher.register(REFLEXION_TOOL, closures[REFLEXION_TOOL], _REFLEXION_SCHEMA)


def build_dispatcher(settings: Settings) -> tuple[ToolDispatcher, RoundTracker | None, TrialLoop | None]:
    """Construct the enabled handlers and a dispatcher wired to them."""
    tracker = None
    if settings.actor_critic_enabled:
        sink = LoggingThoughtSink(color=settings.display_color) if settings.display_enabled else None
        tracker = RoundTracker(sink=sink)

    loop = TrialLoop(max_memory_depth=settings.max_memory_depth) if settings.reflexion_enabled else None

    dispatcher = ToolDispatcher()
    register_thinking_tools(dispatcher, tracker, loop)
    return dispatcher, tracker, loop


# ---------------------------------------------------------------------------
# Tool schemas (hints for callers; the handlers re-validate everything)
# ---------------------------------------------------------------------------

_ACTOR_CRITIC_SCHEMA: dict[str, Any] = {
    "type": "object",
    "description": (
        "Think through a problem by alternating actor and critic perspectives. "
        "The actor proposes, the critic challenges; each pair of thoughts forms a round. "
        "Use an odd total of at least 3 thoughts so the actor has the final word."
    ),
    "properties": {
        "content": {"type": "string", "description": "The thought itself"},
        "role": {
            "type": "string",
            "enum": ["actor", "critic"],
            "description": "Perspective of this thought",
        },
        "nextRoundNeeded": {
            "type": "boolean",
            "description": "Whether another round of thinking is needed",
        },
        "thoughtNumber": {
            "type": "integer",
            "minimum": 1,
            "description": "Position of this thought in the sequence",
        },
        "totalThoughts": {
            "type": "integer",
            "minimum": 3,
            "description": "Planned number of thoughts (odd, at least 3)",
        },
    },
    "required": ["content", "role", "nextRoundNeeded", "thoughtNumber", "totalThoughts"],
}

_REFLEXION_SCHEMA: dict[str, Any] = {
    "type": "object",
    "description": (
        "A tool for iterative refinement using the Reflexion framework (Actor, Evaluator, "
        "Self-Reflection). It guides the process of generating output, evaluating it, and then "
        "reflecting on the feedback to improve in subsequent trials. Memory of past reflections "
        "is maintained to aid learning."
    ),
    "properties": {
        "stepType": {
            "type": "string",
            "enum": ["actor", "evaluator", "self-reflection"],
            "description": "The current step in the Reflexion process.",
        },
        "trialNumber": {"type": "integer", "minimum": 1, "description": "Current trial number."},
        "maxTrials": {
            "type": "integer",
            "minimum": 1,
            "description": "Maximum number of trials planned.",
        },
        "actorInputText": {
            "type": "string",
            "description": "(For actor step) The initial prompt or task for the Actor.",
        },
        "actorOutputText": {
            "type": "string",
            "description": (
                "(For evaluator & self-reflection steps) The output generated by the Actor "
                "in the current trial."
            ),
        },
        "evaluatorScore": {
            "type": ["string", "number"],
            "description": "(For self-reflection step) The evaluation score or feedback for the Actor's output.",
        },
        "reflectionText": {
            "type": "string",
            "description": (
                "(For self-reflection step, if providing directly) The reflection text "
                "generated to complete the trial."
            ),
        },
        "memoryOverride": {
            "type": "array",
            "items": {"type": "string"},
            "description": "Optional. Provide an initial list of reflections for the memory.",
        },
    },
    "required": ["stepType", "trialNumber", "maxTrials"],
}
