# ai_context_core/models/messages.py
"""Canonical message and content block models."""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import ConfigDict, Field

from ai_context_core.base_models import DictCompatModel
from ai_context_core.models.enums import MessageRole

# =============================================================================
# Content blocks
# =============================================================================


class TextBlock(DictCompatModel):
    """Plain text content."""

    model_config = ConfigDict(frozen=True, extra="allow")

    type: Literal["text"] = "text"
    text: str


class ToolUseBlock(DictCompatModel):
    """A tool invocation requested by the assistant.

    Never carries ``text``: an explanation riding on a tool call is dropped
    during normalization.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    type: Literal["tool_use"] = "tool_use"
    id: str | None = None
    name: str
    input: dict[str, Any] = Field(default_factory=dict)


class ToolResultBlock(DictCompatModel):
    """The result of a tool invocation, fed back to the model."""

    model_config = ConfigDict(frozen=True, extra="allow")

    type: Literal["tool_result"] = "tool_result"
    tool_use_id: str | None = None
    content: Any = None
    is_error: bool | None = None


class ImageBlock(DictCompatModel):
    """Image content in either Claude (``source``) or OpenAI (``image_url``) form."""

    model_config = ConfigDict(frozen=True, extra="allow")

    type: Literal["image", "image_url"] = "image"
    source: dict[str, Any] | None = None
    image_url: dict[str, Any] | str | None = None
    detail: str | None = None

    @property
    def is_low_resolution(self) -> bool:
        if self.detail == "low":
            return True
        if isinstance(self.image_url, dict):
            return self.image_url.get("detail") == "low"
        return False


ContentBlock = Annotated[
    Union[TextBlock, ToolUseBlock, ToolResultBlock, ImageBlock],
    Field(discriminator="type"),
]


# =============================================================================
# Messages
# =============================================================================


class CanonicalMessage(DictCompatModel):
    """
    A single conversation turn in canonical form.

    Extra top-level fields from the source message (``name``,
    ``tool_call_id``...) are kept so provider adapters can use them.
    """

    model_config = ConfigDict(frozen=True, extra="allow", use_enum_values=True)

    role: MessageRole
    content: list[ContentBlock] = Field(..., min_length=1)

    @property
    def extra_fields(self) -> dict[str, Any]:
        return dict(self.__pydantic_extra__ or {})

    def text_blocks(self) -> list[TextBlock]:
        return [block for block in self.content if isinstance(block, TextBlock)]

    def tool_uses(self) -> list[ToolUseBlock]:
        return [block for block in self.content if isinstance(block, ToolUseBlock)]
