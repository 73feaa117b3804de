from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Any

from .extractor import TOOL_PREFIX
from .models import GitOperation, ToolCapability

TOOL_NAME = "git"


def _input_schema(token: str) -> dict[str, Any]:
    return {
        "type": "object",
        "properties": {
            "args": {
                "type": "string",
                "description": (
                    f"Arguments to pass to the '{TOOL_NAME} {token}' command "
                    "(e.g., '-m \"commit message\"' for commit). Escape quotes properly."
                ),
                "default": "",
            },
            "cwd": {
                "type": "string",
                "description": (
                    "Working directory for command execution relative to the workspace root. "
                    "Defaults to the workspace root."
                ),
                "default": ".",
            },
        },
        "required": [],
    }


def build_capability(operation: GitOperation) -> ToolCapability:
    return ToolCapability(
        name=f"{TOOL_PREFIX}{operation.token}",
        description=f"Executes '{TOOL_NAME} {operation.token}': {operation.description}",
        input_schema=_input_schema(operation.token),
    )


def build_capabilities(operations: Iterable[GitOperation]) -> dict[str, ToolCapability]:
    return {operation.id: build_capability(operation) for operation in operations}


class CapabilityCatalog:
    """Read-only view over the tools discovered at startup."""

    def __init__(self, operations: Iterable[GitOperation] = ()) -> None:
        operations_by_id = {operation.id: operation for operation in operations}
        self._operations: Mapping[str, GitOperation] = MappingProxyType(operations_by_id)
        self._capabilities: Mapping[str, ToolCapability] = MappingProxyType(
            build_capabilities(operations_by_id.values())
        )

    @classmethod
    def empty(cls) -> "CapabilityCatalog":
        return cls(())

    @property
    def capabilities(self) -> Mapping[str, ToolCapability]:
        return self._capabilities

    def list_capabilities(self) -> list[ToolCapability]:
        return list(self._capabilities.values())

    def read(self, name: str) -> ToolCapability | None:
        return self._capabilities.get(name)

    def operation(self, name: str) -> GitOperation | None:
        return self._operations.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._capabilities

    def __len__(self) -> int:
        return len(self._capabilities)
