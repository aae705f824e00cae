"""Response model shared by the tool layer and its transports."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class ToolResponse(BaseModel):
    """A textual tool result, optionally flagged as an error.

    Errors are always rendered as text; callers never receive a structured
    error object.
    """

    model_config = ConfigDict(frozen=True)

    text: str
    is_error: bool = False

    @classmethod
    def ok(cls, text: str) -> ToolResponse:
        return cls(text=text)

    @classmethod
    def error(cls, text: str) -> ToolResponse:
        return cls(text=text, is_error=True)
