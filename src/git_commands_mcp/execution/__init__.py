"""Execution model and git subprocess runner."""

from .models import ExecutionResult
from .runner import GitCommandRunner, compose_command

__all__ = [
    "ExecutionResult",
    "GitCommandRunner",
    "compose_command",
]
