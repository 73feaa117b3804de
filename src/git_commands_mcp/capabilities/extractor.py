import logging
import re
import subprocess
import sys

from pydantic import BaseModel, ConfigDict

from .models import GitOperation

logger = logging.getLogger(__name__)

TOOL_PREFIX = "git-"
HELP_ARGS = ("help", "-a")

_COMMAND_LINE_RE = re.compile(r"^\s{3,}([a-zA-Z0-9._-]+)\s+(.*)$")

# GUI tools, foreign-SCM bridges, credential/transport helpers and shell libraries.
EXCLUDED_COMMANDS = (
    "citool",
    "gitk",
    "gui",
    "instaweb",
    "difftool",
    "mergetool",
    "credential",
    "daemon",
    "sh-i18n",
    "sh-setup",
    "archimport",
    "cvsexportcommit",
    "cvsimport",
    "cvsserver",
    "imap-send",
    "p4",
    "quiltimport",
    "request-pull",
    "svn",
    "remote-",
)


class ExtractionError(RuntimeError):
    """Raised when the git command catalog cannot be built."""


class SectionPolicy(BaseModel):
    """Rules deciding which lines of `git help -a` belong to a command listing.

    Headers are matched case-insensitively anywhere in the line. Continuation
    markers are matched case-sensitively and keep a section open across a line
    that would otherwise close it.
    """

    model_config = ConfigDict(frozen=True)

    headers: tuple[str, ...] = (
        "available git commands",
        "Main Porcelain Commands",
        "Ancillary Commands",
        "Interacting with Others",
        "Low-level Commands",
    )
    continuation_markers: tuple[str, ...] = ("See also",)

    def is_header(self, line: str) -> bool:
        line_lc = line.lower()
        return any(header.lower() in line_lc for header in self.headers)

    def closes_section(self, line: str) -> bool:
        if line.strip() and line[:1].isspace():
            return False
        return not any(marker in line for marker in self.continuation_markers)


DEFAULT_SECTION_POLICY = SectionPolicy()


def default_git_executable() -> str:
    return "git.exe" if sys.platform == "win32" else "git"


def is_excluded(token: str) -> bool:
    return any(token.startswith(excluded) for excluded in EXCLUDED_COMMANDS)


def parse_help_output(text: str, policy: SectionPolicy = DEFAULT_SECTION_POLICY) -> list[GitOperation]:
    operations: list[GitOperation] = []
    seen_ids: set[str] = set()
    in_section = False

    for line in text.splitlines():
        if policy.is_header(line):
            in_section = True
            continue

        if in_section and policy.closes_section(line):
            in_section = False

        if not in_section:
            continue

        match = _COMMAND_LINE_RE.match(line)
        if match is None:
            continue

        name = match.group(1)
        token = name[len(TOOL_PREFIX) :] if name.startswith(TOOL_PREFIX) else name
        if is_excluded(token):
            continue

        operation_id = f"{TOOL_PREFIX}{token}"
        if operation_id in seen_ids:
            continue

        seen_ids.add(operation_id)
        operations.append(GitOperation(id=operation_id, token=token, description=match.group(2).strip()))

    return operations


class CatalogExtractor:
    def __init__(self, executable: str | None = None, policy: SectionPolicy = DEFAULT_SECTION_POLICY) -> None:
        self.executable = executable or default_git_executable()
        self.policy = policy

    def extract(self) -> list[GitOperation]:
        command = [self.executable, *HELP_ARGS]
        try:
            completed = subprocess.run(command, capture_output=True, check=False)
        except OSError as exc:
            raise ExtractionError(f"failed to start {' '.join(command)}: {exc}") from exc

        stdout = completed.stdout.decode("utf-8", errors="replace")
        stderr = completed.stderr.decode("utf-8", errors="replace")
        if completed.returncode != 0:
            raise ExtractionError(
                f"{' '.join(command)} failed with code {completed.returncode}: {stderr.strip()}"
            )

        operations = parse_help_output(stdout, self.policy)
        logger.info("Parsed %d git commands", len(operations))
        if not operations:
            raise ExtractionError(f"no commands parsed from {' '.join(command)} output")
        return operations
