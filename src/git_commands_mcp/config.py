import os

from .capabilities.extractor import default_git_executable
from .execution.runner import DEFAULT_STDERR_MAX_BYTES, DEFAULT_STDOUT_MAX_BYTES

TRANSPORTS = ("stdio", "streamable-http", "sse")


class ServerConfig:
    def __init__(self) -> None:
        self.transport = self._get_choice_env("GIT_MCP_TRANSPORT", "stdio", TRANSPORTS)
        self.host = os.getenv("GIT_MCP_HOST", "0.0.0.0")
        self.sse_port = self._get_int_env("MCP_SSE_PORT", 8000)
        self.streamable_http_port = self._get_int_env("MCP_STREAMABLE_HTTP_PORT", 8080)
        self.git_executable = os.getenv("GIT_MCP_EXECUTABLE") or default_git_executable()
        self.workspace_root = os.getenv("GIT_MCP_ROOT") or os.getcwd()
        self.stdout_max_bytes = self._get_int_env("GIT_MCP_STDOUT_MAX_BYTES", DEFAULT_STDOUT_MAX_BYTES)
        self.stderr_max_bytes = self._get_int_env("GIT_MCP_STDERR_MAX_BYTES", DEFAULT_STDERR_MAX_BYTES)
        self.log_level = os.getenv("LOG_LEVEL", "INFO").upper()

    @staticmethod
    def _get_int_env(key: str, default: int) -> int:
        value = os.getenv(key)
        if not value:
            return default
        try:
            return int(value)
        except ValueError as exc:
            raise ValueError(f"Environment variable {key} must be an integer, got {value!r}") from exc

    @staticmethod
    def _get_choice_env(key: str, default: str, choices: tuple[str, ...]) -> str:
        """Get an environment variable restricted to a fixed set of values."""
        value = os.getenv(key) or default
        if value not in choices:
            raise ValueError(f"Environment variable {key} must be one of {', '.join(choices)}, got {value!r}")
        return value
