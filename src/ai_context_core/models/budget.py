# ai_context_core/models/budget.py
"""Model limits, token budget partition, and usage tracking models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from ai_context_core.base_models import DictCompatModel


class ModelLimits(BaseModel):
    """Context window limits for a model (conservative estimates)."""

    model_config = ConfigDict(frozen=True)

    context_window: int = Field(..., gt=0)
    max_output_tokens: int = Field(..., ge=0)
    name: str = Field(default="Unknown Model")

    @property
    def input_budget(self) -> int:
        """Tokens left for the prompt once the response is reserved."""
        return self.context_window - self.max_output_tokens


class TokenBudget(DictCompatModel):
    """
    Partition of a model's context window across prompt components.

    Computed once per model selection; immutable afterwards.
    """

    model_config = ConfigDict(frozen=True)

    total: int = Field(..., description="Total context window size")
    system: int = Field(default=0, description="Reserved for the system prompt")
    tools: int = Field(default=0, description="Reserved for tool definitions")
    memory: int = Field(default=0, description="Allocated for memory context")
    retrieval: int = Field(default=0, description="Allocated for retrieved context")
    conversation: int = Field(default=0, description="Allocated for conversation turns")
    response_buffer: int = Field(default=0, description="Reserved for the model's response")

    @property
    def input_budget(self) -> int:
        return self.total - self.response_buffer

    @property
    def allocated(self) -> int:
        """Sum of all component slices (never more than the input budget)."""
        return self.system + self.tools + self.memory + self.retrieval + self.conversation


class TokenUsage(DictCompatModel):
    """Running token usage per component plus derived totals."""

    system: int = 0
    tools: int = 0
    memory: int = 0
    retrieval: int = 0
    conversation: int = 0
    total: int = 0
    remaining: int = 0
    utilization_percent: float = 0.0
