from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class GitOperation(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    token: str
    description: str = ""


class ToolCapability(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    input_schema: dict[str, Any] = Field(default_factory=dict)
