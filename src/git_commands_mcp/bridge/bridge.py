import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from mcp.types import TextContent

from ..capabilities import CapabilityCatalog, ToolCapability
from ..execution import GitCommandRunner
from .renderers import render_execution_result, text_block

logger = logging.getLogger(__name__)

DEFAULT_ARGS = ""
DEFAULT_CWD = "."


class UnknownCapabilityError(LookupError):
    """Raised when an invocation names a tool that is not in the catalog."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Tool not found: {name}")
        self.name = name


class GitCommandsBridge:
    """Serves tool listings and invocations from a catalog fixed at startup."""

    def __init__(self, catalog: CapabilityCatalog, runner: GitCommandRunner, root: Path) -> None:
        self.catalog = catalog
        self.runner = runner
        self.root = Path(root).resolve()

    def list_capabilities(self) -> list[ToolCapability]:
        capabilities = self.catalog.list_capabilities()
        logger.info("Responding with %d tools.", len(capabilities))
        return capabilities

    def resolve_cwd(self, cwd: str) -> Path:
        return (self.root / cwd).resolve()

    async def invoke(self, name: str, arguments: Mapping[str, Any] | None = None) -> list[TextContent]:
        operation = self.catalog.operation(name)
        if operation is None:
            logger.error("Tool not found: %s", name)
            raise UnknownCapabilityError(name)

        arguments = arguments or {}
        args_text = str(arguments.get("args") or DEFAULT_ARGS)
        relative_cwd = str(arguments.get("cwd") or DEFAULT_CWD)

        try:
            result = await self.runner.execute(operation.token, args_text, self.resolve_cwd(relative_cwd))
            content = render_execution_result(result)
        except Exception as exc:
            logger.exception("Error executing tool %s", name)
            return [text_block(f"Error executing tool {name}: {exc}")]

        logger.info("Responding to CallTool request for %s", name)
        return content
