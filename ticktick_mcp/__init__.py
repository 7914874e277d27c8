"""MCP server exposing TickTick tasks to model-facing clients."""

__version__ = "1.0.0"
