# ai_context_core/models/cognitive.py
"""Task context, toolkit configuration, and advisory analysis models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from ai_context_core.config import DEFAULT_COMPLEXITY_THRESHOLD
from ai_context_core.models.enums import CognitiveToolType


class TaskContext(BaseModel):
    """Read-only input describing the current request."""

    model_config = ConfigDict(frozen=True)

    user_message: str
    conversation_history: list[str] = Field(default_factory=list)
    memory_context: str | None = None
    available_tools: list[str] = Field(default_factory=list)


class CognitiveToolConfig(BaseModel):
    """Configuration for cognitive scaffold injection."""

    # UNDERSTAND is off by default; it made models restate the request
    enabled_tools: list[CognitiveToolType] = Field(
        default_factory=lambda: [CognitiveToolType.PLAN, CognitiveToolType.VERIFY]
    )
    verbosity: int = Field(default=1, ge=1, le=3, description="1=minimal, 2=structured, 3=detailed")
    complexity_threshold: int = Field(default=DEFAULT_COMPLEXITY_THRESHOLD, ge=1, le=10)


class CognitiveMetadata(BaseModel):
    complexity: int | None = None
    steps_identified: int | None = None
    entities_found: list[str] | None = None


class CognitiveResult(BaseModel):
    """Advisory output of one analysis phase."""

    tool: CognitiveToolType
    output: str
    metadata: CognitiveMetadata = Field(default_factory=CognitiveMetadata)
