# tests/conftest.py
"""
Shared pytest fixtures and configuration for ai_context_core tests.
"""

import json
import logging
from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest

from ai_context_core.models import FileSearchResult, MemoryState, RetrievalConfig
from ai_context_core.retrieval import InMemoryContextStore

# Configure logging for tests
logging.basicConfig(level=logging.WARNING)
logging.getLogger("ai_context_core").setLevel(logging.DEBUG)

SCOPE_A = "0xaaaa000000000000000000000000000000000001"
SCOPE_B = "0xbbbb000000000000000000000000000000000002"


@pytest.fixture
def scope_a():
    return SCOPE_A


@pytest.fixture
def scope_b():
    return SCOPE_B


@pytest.fixture
def memory_store():
    """In-memory store with disjoint files and actions for two accounts."""
    store = InMemoryContextStore()
    store.add_file(SCOPE_A, "~/Documents/budget.md", "Quarterly budget: travel allowance is 12k")
    store.add_file(SCOPE_A, "~/Documents/notes.txt", "Meeting notes about the roadmap")
    store.add_file(SCOPE_B, "~/Documents/budget-b.md", "Budget for account B: marketing spend")
    store.set_recent_actions(
        SCOPE_A,
        [
            {"toolName": "write_file", "summary": "Updated budget spreadsheet", "path": "~/Documents/budget.csv"},
            {"toolName": "create_folder", "summary": "Created Projects", "path": "~/Desktop/Projects"},
        ],
    )
    return store


@pytest.fixture
def mock_store():
    """AsyncMock store returning no files and no memory state."""
    store = AsyncMock()
    store.search_files.return_value = []
    store.get_memory_state.return_value = None
    return store


@pytest.fixture
def failing_store():
    """Store whose every call raises."""
    store = AsyncMock()
    store.search_files.side_effect = RuntimeError("search backend down")
    store.get_memory_state.side_effect = RuntimeError("memory backend down")
    return store


@pytest.fixture
def file_hit():
    """Factory for FileSearchResult payloads."""

    def _make(path="~/Documents/budget.md", content="Quarterly budget", updated_at=None):
        return FileSearchResult(
            path=path,
            content_text=content,
            updated_at=updated_at or datetime(2025, 1, 1, tzinfo=timezone.utc),
        )

    return _make


@pytest.fixture
def actions_state():
    """Factory for MemoryState payloads holding an action log."""

    def _make(actions):
        return MemoryState(last_actions_json=json.dumps(actions))

    return _make


@pytest.fixture
def retrieval_config():
    return RetrievalConfig(max_chunks=5, min_score=0.3)


@pytest.fixture
def openai_tool():
    return {
        "type": "function",
        "function": {
            "name": "write_file",
            "description": "Write a file",
            "parameters": {
                "type": "object",
                "properties": {
                    "path": {"type": "string"},
                    "tags": {"type": "array"},
                },
                "required": ["path"],
            },
        },
    }


@pytest.fixture
def claude_tool():
    return {
        "name": "list_files",
        "description": "List files in a folder",
        "input_schema": {
            "type": "object",
            "properties": {"path": {"type": "string"}},
        },
    }
