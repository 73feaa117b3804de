import stat
from pathlib import Path

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"

FAKE_GIT_SCRIPT = """#!/bin/sh
case "$1" in
  help)
    cat "{help_file}"
    ;;
  status)
    printf 'clean\\n'
    ;;
  commit)
    printf 'committed %s\\n' "$*"
    printf 'hint: informational\\n' >&2
    ;;
  pwd)
    pwd
    ;;
  noop)
    ;;
  silent-fail)
    exit 3
    ;;
  *)
    printf 'fatal: not a repository' >&2
    exit 1
    ;;
esac
"""


def write_fake_git(directory: Path, help_file: Path | None = None) -> Path:
    script_path = directory / "fake-git"
    help_path = help_file or FIXTURES_DIR / "git_help_modern.txt"
    script_path.write_text(FAKE_GIT_SCRIPT.format(help_file=help_path), encoding="utf-8")
    script_path.chmod(script_path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return script_path


@pytest.fixture
def fake_git(tmp_path: Path) -> Path:
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    return write_fake_git(bin_dir)


@pytest.fixture
def modern_help_text() -> str:
    return (FIXTURES_DIR / "git_help_modern.txt").read_text(encoding="utf-8")
