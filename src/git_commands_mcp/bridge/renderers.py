from mcp.types import TextContent

from ..execution.models import ExecutionResult

NO_OUTPUT_SUCCESS = "Command executed successfully with no output."
NO_OUTPUT_FAILURE = "Command failed with no output."


def text_block(text: str) -> TextContent:
    return TextContent(type="text", text=text)


def render_execution_result(result: ExecutionResult) -> list[TextContent]:
    blocks: list[TextContent] = []
    if result.stdout:
        blocks.append(text_block(f"STDOUT:\n{result.stdout}"))
    # stderr often carries progress or hints on success, so it is reported as-is.
    if result.stderr:
        blocks.append(text_block(f"STDERR:\n{result.stderr}"))
    if result.error_message:
        blocks.append(text_block(f"ERROR:\n{result.error_message}"))

    if not blocks:
        blocks.append(text_block(NO_OUTPUT_SUCCESS if result.succeeded else NO_OUTPUT_FAILURE))
    return blocks
