import asyncio
import logging
import pathlib
import signal
from collections.abc import Mapping
from typing import Any

from dotenv import load_dotenv
from fastmcp import FastMCP
from mcp.types import TextContent
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from . import __version__
from .bridge import GitCommandsBridge
from .bridge.renderers import text_block
from .bridge.tools import GitCommandTool
from .capabilities import CapabilityCatalog, CatalogExtractor, ExtractionError
from .config import ServerConfig
from .execution import GitCommandRunner

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

load_dotenv()

SERVER_NAME = "git-commands-server"
SERVER_INSTRUCTIONS = "Provides tools for executing Git commands via MCP."


class GitCommandsMCPServer:
    def __init__(self, config: ServerConfig) -> None:
        self.config = config
        self.server = FastMCP(name=SERVER_NAME, instructions=SERVER_INSTRUCTIONS, version=__version__)
        self._shutdown_requested = False

        self._setup_runtime()

    def _setup_runtime(self) -> None:
        self.workspace_root = pathlib.Path(self.config.workspace_root).resolve()
        self.catalog = self._load_catalog()
        self.runner = GitCommandRunner(
            executable=self.config.git_executable,
            stdout_max_bytes=self.config.stdout_max_bytes,
            stderr_max_bytes=self.config.stderr_max_bytes,
        )
        self.bridge = GitCommandsBridge(catalog=self.catalog, runner=self.runner, root=self.workspace_root)

    def _load_catalog(self) -> CapabilityCatalog:
        extractor = CatalogExtractor(executable=self.config.git_executable)
        try:
            operations = extractor.extract()
        except ExtractionError as exc:
            logger.error("Failed to initialize Git command tools: %s", exc)
            logger.error("Server starting without any Git tools due to initialization error.")
            return CapabilityCatalog.empty()

        catalog = CapabilityCatalog(operations)
        logger.info("Prepared %d tools.", len(catalog))
        return catalog

    def signal_handler(self, sig: int, frame: Any = None) -> None:
        """Record shutdown, then let the signal terminate the process with its default action."""
        logger.info("Received signal %s, shutting down...", sig)
        self._shutdown_requested = True
        signal.signal(sig, signal.SIG_DFL)
        signal.raise_signal(sig)

    async def invoke_tool(self, name: str, arguments: Mapping[str, Any] | None = None) -> list[TextContent]:
        if self._shutdown_requested:
            logger.info("Shutdown in progress, declining call to %s", name)
            return [text_block(f"Error executing tool {name}: server is shutting down")]
        return await self.bridge.invoke(name, arguments)

    def _register_tools(self) -> None:
        for capability in self.bridge.list_capabilities():
            self.server.add_tool(GitCommandTool.from_capability(capability, self.invoke_tool))
            logger.debug("Registered tool: %s", capability.name)
        logger.info("Registered %d git tools", len(self.catalog))

    def _register_health_endpoints(self) -> None:
        @self.server.custom_route("/health", methods=["GET"])
        async def health_check(request: Request) -> Response:
            return JSONResponse({"status": "ok", "service": SERVER_NAME})

        @self.server.custom_route("/ready", methods=["GET"])
        async def readiness_check(request: Request) -> Response:
            if len(self.catalog) == 0:
                return JSONResponse({"status": "not_ready", "reason": "git_catalog_empty"}, status_code=503)

            return JSONResponse(
                {
                    "status": "ready",
                    "service": SERVER_NAME,
                    "tools": len(self.catalog),
                    "workspace_root": str(self.workspace_root),
                }
            )

    async def _run_server(self) -> None:
        if self.config.transport == "stdio":
            await self.server.run_stdio_async()
            return

        port = self.config.sse_port if self.config.transport == "sse" else self.config.streamable_http_port
        await self.server.run_http_async(
            transport=self.config.transport,
            host=self.config.host,
            path=f"/git/{'sse' if self.config.transport == 'sse' else 'mcp'}",
            port=port,
        )

    async def run(self) -> None:
        signal.signal(signal.SIGINT, lambda sig, frame: self.signal_handler(sig, frame))
        signal.signal(signal.SIGTERM, lambda sig, frame: self.signal_handler(sig, frame))

        self._register_tools()
        self._register_health_endpoints()

        try:
            logger.info("Starting Git Commands MCP server over %s...", self.config.transport)
            await self._run_server()
        except KeyboardInterrupt:
            logger.info("Received keyboard interrupt (CTRL+C)")
        except Exception as exc:
            logger.error("Server error: %s", exc)
            raise
        finally:
            logger.info("Server has shut down.")


def main() -> None:
    config = ServerConfig()
    logging.getLogger().setLevel(config.log_level)
    server = GitCommandsMCPServer(config)
    asyncio.run(server.run())


if __name__ == "__main__":
    main()
