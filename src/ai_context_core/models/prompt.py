# ai_context_core/models/prompt.py
"""Assembled per-turn prompt."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from ai_context_core.models.budget import TokenBudget, TokenUsage
from ai_context_core.models.messages import CanonicalMessage
from ai_context_core.models.retrieval import ContextChunk


class PreparedPrompt(BaseModel):
    """
    Everything a provider adapter needs to send one turn.

    ``messages`` never contains system messages; their text is folded into
    ``system_prompt`` together with memory, retrieved context and any
    cognitive scaffold.
    """

    messages: list[CanonicalMessage]
    system_prompt: str
    tools: list[dict[str, Any]] | None = None
    retrieval_context: str = ""
    cognitive_prompt: str = ""
    chunks: list[ContextChunk] = Field(default_factory=list)
    budget: TokenBudget
    usage: TokenUsage
    dropped_messages: int = Field(default=0, description="Conversation turns removed to fit the budget")
    warning: str | None = None
