"""Tool providers exposed over MCP."""
