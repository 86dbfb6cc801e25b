"""Dialectic — actor-critic and Reflexion thinking tools served over MCP."""

__version__ = "0.1.0"
