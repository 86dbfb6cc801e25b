"""Dialectic entry point.

Initializes all components and starts the server:
  Settings -> RoundTracker / TrialLoop -> ToolDispatcher -> MCP Server -> transport

The transport is stdio by default; DIALECTIC_TRANSPORT=http serves
Streamable HTTP at /mcp through uvicorn instead.
"""

from __future__ import annotations

import asyncio
import logging
import sys

import uvicorn

from dialectic.api.mcp import create_http_app, create_mcp_server, run_stdio
from dialectic.api.tools import build_dispatcher
from dialectic.config import Settings

logger = logging.getLogger(__name__)


def create_components(settings: Settings) -> dict:
    """Initialize all components in dependency order.

    Returns dict with the handlers, the dispatcher and the MCP server.
    """
    dispatcher, tracker, loop = build_dispatcher(settings)
    server = create_mcp_server(dispatcher, settings)
    return {
        "tracker": tracker,
        "loop": loop,
        "dispatcher": dispatcher,
        "server": server,
    }


def configure_logging(settings: Settings) -> None:
    # stderr only: stdout carries the stdio transport
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
        stream=sys.stderr,
    )


def main() -> None:
    """Entry point — parse settings, build components, run the transport."""
    settings = Settings()
    configure_logging(settings)

    logger.info("Starting %s %s", settings.server_name, settings.server_version)
    logger.info(
        "Tools: actor-critic=%s reflexion=%s (memory depth %d)",
        "enabled" if settings.actor_critic_enabled else "disabled",
        "enabled" if settings.reflexion_enabled else "disabled",
        settings.max_memory_depth,
    )

    components = create_components(settings)
    server = components["server"]

    try:
        if settings.transport == "http":
            uvicorn.run(
                create_http_app(server),
                host=settings.host,
                port=settings.port,
                log_level=settings.log_level,
            )
        else:
            asyncio.run(run_stdio(server))
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")
    except Exception:
        logger.exception("Fatal error running server")
        sys.exit(1)


if __name__ == "__main__":
    main()
