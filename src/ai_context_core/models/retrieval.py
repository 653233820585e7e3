# ai_context_core/models/retrieval.py
"""Retrieval configuration, store payloads, and context chunk models."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from ai_context_core.base_models import DictCompatModel
from ai_context_core.config import DEFAULT_MAX_CHUNKS, DEFAULT_MIN_SCORE
from ai_context_core.models.enums import ChunkSource


class RetrievalConfig(BaseModel):
    """Configuration for context retrieval."""

    max_chunks: int = Field(default=DEFAULT_MAX_CHUNKS, ge=0, description="Maximum chunks returned")
    min_score: float = Field(default=DEFAULT_MIN_SCORE, ge=0.0, le=1.0, description="Minimum relevance score")

    # File search
    search_files: bool = Field(default=True, description="Whether to search file contents")
    file_search_limit: int = Field(default=10, ge=1, description="Results requested from the store")
    file_match_score: float = Field(default=0.7, ge=0.0, le=1.0, description="Score given to full-text hits")
    max_file_size: int = Field(default=50_000, description="Skip file content larger than this (bytes)")
    searchable_extensions: list[str] = Field(
        default_factory=lambda: [".txt", ".md", ".json", ".yaml", ".yml", ".csv", ".log"]
    )

    # Rendering
    max_chunk_chars: int = Field(default=500, gt=0, description="Truncate chunk content past this length")
    turn_spacing_seconds: int = Field(default=60, ge=0, description="Estimated gap between conversation turns")


class ChunkMetadata(BaseModel):
    """Source metadata attached to a context chunk."""

    message_index: int | None = None
    file_path: str | None = None
    action_type: str | None = None
    timestamp: datetime | None = None


class ContextChunk(DictCompatModel):
    """A scored snippet of retrieved context."""

    model_config = ConfigDict(use_enum_values=True)

    source: ChunkSource
    content: str
    score: float = Field(..., ge=0.0, le=1.0)
    metadata: ChunkMetadata = Field(default_factory=ChunkMetadata)


# =============================================================================
# Store payloads
# =============================================================================


class FileSearchResult(BaseModel):
    """One full-text search hit returned by a context store."""

    path: str
    content_text: str | None = None
    updated_at: datetime | None = None


class MemoryState(BaseModel):
    """Per-account memory state; only the recent action log is read here."""

    last_actions_json: str | None = None


class RecentAction(BaseModel):
    """An entry of the recent action log."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    tool_name: str = Field(..., alias="toolName")
    summary: str | None = None
    path: str | None = None
    timestamp: datetime | None = None

    def render(self) -> str:
        return f"{self.tool_name}: {self.summary or ''} {self.path or ''}".strip()
