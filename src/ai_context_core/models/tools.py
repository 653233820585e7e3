# ai_context_core/models/tools.py
"""Normalized tool definition models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator

from ai_context_core.models.enums import ToolType

# Default used when a tool declares no parameters
DEFAULT_PARAMETERS: dict[str, Any] = {"type": "object", "properties": {}}

# Default used when an array schema declares no items
DEFAULT_ARRAY_ITEMS: dict[str, Any] = {"type": "string"}


class ToolFunction(BaseModel):
    """Function definition within a normalized tool."""

    name: str = Field(..., min_length=1)
    description: str | None = None
    parameters: dict[str, Any] = Field(default_factory=lambda: dict(DEFAULT_PARAMETERS))

    @field_validator("parameters")
    @classmethod
    def _parameters_are_object(cls, value: dict[str, Any]) -> dict[str, Any]:
        if value.get("type") != "object":
            raise ValueError(f"tool parameters must be an object schema, got type={value.get('type')!r}")
        return value


class NormalizedTool(BaseModel):
    """Tool definition in the canonical (OpenAI-shaped) form."""

    type: ToolType = Field(default=ToolType.FUNCTION)
    function: ToolFunction

    @property
    def name(self) -> str:
        return self.function.name

    def to_dict(self) -> dict[str, Any]:
        """Plain-dict form with unset optional fields omitted."""
        return self.model_dump(mode="json", exclude_none=True)
