import asyncio
import logging
from pathlib import Path

from .models import ExecutionResult

logger = logging.getLogger(__name__)

DEFAULT_STDOUT_MAX_BYTES = 1_048_576
DEFAULT_STDERR_MAX_BYTES = 262_144


def compose_command(executable: str, token: str, args_text: str) -> str:
    # args_text reaches the shell verbatim; callers are trusted.
    return f"{executable} {token} {args_text}"


class GitCommandRunner:
    def __init__(
        self,
        executable: str,
        stdout_max_bytes: int = DEFAULT_STDOUT_MAX_BYTES,
        stderr_max_bytes: int = DEFAULT_STDERR_MAX_BYTES,
    ) -> None:
        self.executable = executable
        self.stdout_max_bytes = stdout_max_bytes
        self.stderr_max_bytes = stderr_max_bytes

    async def execute(self, token: str, args_text: str, cwd: Path | str) -> ExecutionResult:
        command = compose_command(self.executable, token, args_text)
        logger.info('Executing command: "%s" in directory: "%s"', command, cwd)

        try:
            process = await asyncio.create_subprocess_shell(
                command,
                cwd=str(cwd),
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
            stdout_bytes, stderr_bytes = await process.communicate()
        except (OSError, ValueError) as exc:
            logger.error('Failed to start "%s": %s', command, exc)
            return ExecutionResult(succeeded=False, command=command, error_message=str(exc))

        stdout = self._decode_and_cap(stdout_bytes, self.stdout_max_bytes, "stdout")
        stderr = self._decode_and_cap(stderr_bytes, self.stderr_max_bytes, "stderr")
        exit_code = process.returncode

        if exit_code != 0:
            message = f"Command failed with exit code {exit_code}: {command}"
            logger.error('Error executing "%s": %s', command, message)
            return ExecutionResult(
                succeeded=False,
                command=command,
                exit_code=exit_code,
                stdout=stdout,
                stderr=stderr,
                error_message=message,
            )

        if stderr:
            logger.warning('Stderr for "%s": %s', command, stderr)
        return ExecutionResult(
            succeeded=True,
            command=command,
            exit_code=exit_code,
            stdout=stdout,
            stderr=stderr,
        )

    @staticmethod
    def _decode_and_cap(raw: bytes, max_bytes: int, stream_name: str) -> str:
        if len(raw) <= max_bytes:
            return raw.decode("utf-8", errors="replace")

        capped = raw[:max_bytes].decode("utf-8", errors="replace")
        return f"{capped}\n[{stream_name} truncated at {max_bytes} bytes]"
