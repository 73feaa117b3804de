from pydantic import BaseModel


class ExecutionResult(BaseModel):
    succeeded: bool
    command: str = ""
    exit_code: int | None = None
    stdout: str | None = None
    stderr: str | None = None
    error_message: str | None = None
