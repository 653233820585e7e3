# ai_context_core/retrieval/storage.py
"""
Storage abstraction consumed by the context retriever.

The core never talks to a database itself. Callers inject an object
implementing ``ContextStore``; every call carries the account scope so a
store can enforce isolation.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from datetime import UTC, datetime
from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel, Field

from ai_context_core.models import FileSearchResult, MemoryState


@runtime_checkable
class ContextStore(Protocol):
    """Protocol for account-scoped file search and memory state."""

    async def search_files(self, scope: str, query: str, limit: int) -> Sequence[FileSearchResult]:
        """Keyword full-text search over the scope's files."""
        ...

    async def get_memory_state(self, scope: str) -> MemoryState | None:
        """Return the scope's memory state, if any."""
        ...


class StoredFile(BaseModel):
    """A file held by the in-memory store."""

    path: str
    content_text: str = ""
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


class InMemoryContextStore(BaseModel):
    """
    Simple in-memory store for testing/development.

    Files and memory state are partitioned by scope; a search never sees
    another scope's files. Matching is a case-insensitive "any term" test
    over path and content, ranked by the number of matching terms.
    """

    files: dict[str, list[StoredFile]] = Field(default_factory=dict)
    memory_states: dict[str, MemoryState] = Field(default_factory=dict)

    def add_file(self, scope: str, path: str, content_text: str, updated_at: datetime | None = None) -> None:
        stored = StoredFile(path=path, content_text=content_text)
        if updated_at is not None:
            stored.updated_at = updated_at
        self.files.setdefault(scope, []).append(stored)

    def set_recent_actions(self, scope: str, actions: list[dict[str, Any]]) -> None:
        self.memory_states[scope] = MemoryState(last_actions_json=json.dumps(actions, default=str))

    async def search_files(self, scope: str, query: str, limit: int) -> list[FileSearchResult]:
        terms = [term for term in query.lower().split() if term]
        if not terms:
            return []

        ranked: list[tuple[int, StoredFile]] = []
        for stored in self.files.get(scope, []):
            haystack = f"{stored.path}\n{stored.content_text}".lower()
            hits = sum(1 for term in terms if term in haystack)
            if hits:
                ranked.append((hits, stored))

        ranked.sort(key=lambda item: item[0], reverse=True)
        return [
            FileSearchResult(path=stored.path, content_text=stored.content_text, updated_at=stored.updated_at)
            for _, stored in ranked[:limit]
        ]

    async def get_memory_state(self, scope: str) -> MemoryState | None:
        return self.memory_states.get(scope)
