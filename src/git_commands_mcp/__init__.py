"""MCP server exposing the installed git subcommands as tools."""

__version__ = "1.0.1"
