"""Translation between MCP tool calls and git command execution."""

from .bridge import GitCommandsBridge, UnknownCapabilityError
from .renderers import render_execution_result
from .tools import GitCommandTool

__all__ = ["GitCommandTool", "GitCommandsBridge", "UnknownCapabilityError", "render_execution_result"]
