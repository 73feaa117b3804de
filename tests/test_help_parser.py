from pathlib import Path

import pytest
import yaml

from git_commands_mcp.capabilities import GitOperation, SectionPolicy, parse_help_output
from git_commands_mcp.capabilities.extractor import EXCLUDED_COMMANDS

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def _load_fixture_manifest() -> list[dict]:
    with (FIXTURES_DIR / "help_fixtures.yaml").open("r", encoding="utf-8") as manifest_file:
        return yaml.safe_load(manifest_file)["fixtures"]


@pytest.mark.parametrize("fixture", _load_fixture_manifest(), ids=lambda fixture: fixture["git_version"])
def test_parses_expected_commands_for_each_git_version(fixture: dict) -> None:
    text = (FIXTURES_DIR / fixture["file"]).read_text(encoding="utf-8")

    operations = parse_help_output(text)

    assert [operation.id for operation in operations] == fixture["expected_ids"]
    assert all(operation.id == f"git-{operation.token}" for operation in operations)


def test_main_porcelain_line_yields_operation() -> None:
    text = "Main Porcelain Commands\n   add   Add file contents to the index\n"

    assert parse_help_output(text) == [
        GitOperation(id="git-add", token="add", description="Add file contents to the index"),
    ]


def test_header_match_is_case_insensitive() -> None:
    text = "MAIN PORCELAIN COMMANDS\n   status   Show the working tree status\n"

    assert [operation.id for operation in parse_help_output(text)] == ["git-status"]


def test_lines_outside_a_section_are_ignored() -> None:
    text = "   add   Add file contents to the index\n\nMain Porcelain Commands\n   mv   Move or rename a file\n"

    assert [operation.token for operation in parse_help_output(text)] == ["mv"]


def test_blank_line_closes_section() -> None:
    text = "Main Porcelain Commands\n   add   Add things\n\n   rm   Remove things\n"

    assert [operation.token for operation in parse_help_output(text)] == ["add"]


def test_unindented_line_closes_section() -> None:
    text = "Main Porcelain Commands\n   add   Add things\nSomething else\n   rm   Remove things\n"

    assert [operation.token for operation in parse_help_output(text)] == ["add"]


def test_continuation_marker_keeps_section_open() -> None:
    text = "Main Porcelain Commands\n   add   Add things\nSee also the guides\n   rm   Remove things\n"

    assert [operation.token for operation in parse_help_output(text)] == ["add", "rm"]


def test_lines_with_fewer_than_three_leading_spaces_are_ignored() -> None:
    text = "Main Porcelain Commands\n  add   Add things\n   rm   Remove things\n"

    assert [operation.token for operation in parse_help_output(text)] == ["rm"]


def test_git_prefix_is_stripped_from_token() -> None:
    text = "available git commands in '/usr/lib/git-core'\n   git-log   Show commit logs\n"

    assert parse_help_output(text) == [GitOperation(id="git-log", token="log", description="Show commit logs")]


def test_first_occurrence_wins_on_duplicate_ids() -> None:
    text = (
        "Main Porcelain Commands\n"
        "   log       Show commit logs\n"
        "   git-log   Duplicate entry\n"
        "   log       Another duplicate\n"
    )

    assert parse_help_output(text) == [GitOperation(id="git-log", token="log", description="Show commit logs")]


def test_parse_order_follows_help_text_not_alphabet() -> None:
    text = "Main Porcelain Commands\n   zeta   Last letter\n   alpha   First letter\n"

    assert [operation.token for operation in parse_help_output(text)] == ["zeta", "alpha"]


@pytest.mark.parametrize("excluded", EXCLUDED_COMMANDS)
def test_excluded_prefixes_never_reach_the_catalog(excluded: str) -> None:
    token = f"{excluded}extra" if excluded.endswith("-") else excluded
    lines = ["Main Porcelain Commands"]
    lines.extend(f"   {token}   Excluded helper" for _ in range(3))
    lines.append(f"   git-{token}   Excluded helper with prefix")
    lines.append("   status   Show the working tree status")

    operations = parse_help_output("\n".join(lines))

    assert [operation.token for operation in operations] == ["status"]


def test_exclusion_is_prefix_based() -> None:
    text = "Main Porcelain Commands\n   remote   Manage remotes\n   remote-ext   Bridge helper\n"

    assert [operation.token for operation in parse_help_output(text)] == ["remote"]


def test_crlf_output_is_trimmed() -> None:
    text = "Main Porcelain Commands\r\n   add   Add file contents to the index\r\n"

    assert parse_help_output(text)[0].description == "Add file contents to the index"


def test_custom_policy_changes_section_boundaries() -> None:
    policy = SectionPolicy(headers=("Extra Commands",), continuation_markers=("---",))
    text = "Main Porcelain Commands\n   add   Add things\n\nExtra Commands\n   foo   Foo things\n---\n   bar   Bar things\n"

    assert [operation.token for operation in parse_help_output(text, policy)] == ["foo", "bar"]


def test_text_without_sections_yields_nothing() -> None:
    assert parse_help_output("usage: git [--version]\n\n   add   Add things\n") == []
