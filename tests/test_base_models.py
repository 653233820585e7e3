# tests/test_base_models.py
"""Tests for DictCompatModel dict-style access."""

import pytest
from pydantic import ConfigDict

from ai_context_core.base_models import DictCompatModel
from ai_context_core.models import ChunkSource, ContextChunk, TokenUsage


class _SampleModel(DictCompatModel):
    """Minimal subclass for testing."""

    name: str = "default"
    count: int = 0


class _ExtraModel(DictCompatModel):
    model_config = ConfigDict(extra="allow")

    name: str = "default"


class TestDictCompatModelGetItem:
    """Test bracket-notation access."""

    def test_getitem_returns_field_value(self):
        m = _SampleModel(name="alice", count=5)
        assert m["name"] == "alice"
        assert m["count"] == 5

    def test_getitem_missing_key_raises(self):
        m = _SampleModel()
        with pytest.raises(KeyError):
            m["nonexistent"]

    def test_getitem_extra_field(self):
        m = _ExtraModel(name="x", tool_call_id="call_1")
        assert m["tool_call_id"] == "call_1"

    def test_get_with_default(self):
        m = _SampleModel()
        assert m.get("name") == "default"
        assert m.get("nonexistent", "fallback") == "fallback"


class TestDictCompatModelContains:
    """Test 'in' operator."""

    def test_contains_existing_field(self):
        m = _SampleModel()
        assert "name" in m
        assert "count" in m

    def test_contains_missing_field(self):
        m = _SampleModel()
        assert "nonexistent" not in m

    def test_contains_extra_field(self):
        assert "tool_call_id" in _ExtraModel(tool_call_id="c")

    def test_contains_non_string_key(self):
        m = _SampleModel()
        assert 42 not in m


class TestDictCompatModelEq:
    """Test equality comparisons."""

    def test_eq_matching_dict(self):
        m = _SampleModel(name="bob", count=3)
        assert m == {"name": "bob", "count": 3}

    def test_eq_non_matching_dict(self):
        m = _SampleModel(name="bob", count=3)
        assert m != {"name": "bob", "count": 999}

    def test_eq_same_model(self):
        m1 = _SampleModel(name="bob", count=3)
        m2 = _SampleModel(name="bob", count=3)
        assert m1 == m2

    def test_eq_different_model(self):
        m1 = _SampleModel(name="bob", count=3)
        m2 = _SampleModel(name="alice", count=1)
        assert m1 != m2


class TestDomainModels:
    def test_chunk_reads_like_dict(self):
        chunk = ContextChunk(source=ChunkSource.FILE, content="x", score=0.7)
        assert chunk["source"] == "file"
        assert chunk["score"] == 0.7

    def test_usage_reads_like_dict(self):
        usage = TokenUsage(system=10, total=10)
        assert usage["system"] == 10
        assert "utilization_percent" in usage

    def test_chunk_score_bounds(self):
        with pytest.raises(ValueError):
            ContextChunk(source=ChunkSource.FILE, content="x", score=1.5)
