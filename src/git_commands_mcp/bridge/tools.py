import copy
from collections.abc import Awaitable, Callable, Mapping
from typing import Any

from fastmcp.tools import Tool
from fastmcp.tools.tool import ToolResult
from mcp.types import TextContent
from pydantic import PrivateAttr

from ..capabilities import ToolCapability

ToolInvoker = Callable[[str, Mapping[str, Any] | None], Awaitable[list[TextContent]]]


class GitCommandTool(Tool):
    """FastMCP tool that advertises a capability's schema as built and hands raw arguments to the bridge.

    Arguments are not validated against a Python signature: `null` values and
    unknown keys reach the bridge, which applies the defaults.
    """

    _invoke: ToolInvoker | None = PrivateAttr(default=None)

    @classmethod
    def from_capability(cls, capability: ToolCapability, invoke: ToolInvoker) -> "GitCommandTool":
        tool = cls(
            name=capability.name,
            description=capability.description,
            parameters=copy.deepcopy(capability.input_schema),
        )
        tool._invoke = invoke
        return tool

    async def run(self, arguments: dict[str, Any]) -> ToolResult:
        if self._invoke is None:
            raise RuntimeError(f"tool {self.name} has no invoker")
        content = await self._invoke(self.name, arguments)
        return ToolResult(content=content)
