# tests/test_config.py
"""Tests for environment-driven defaults."""

import importlib

import pytest

from ai_context_core import config


@pytest.fixture
def reload_config(monkeypatch):
    """Reload the config module under a patched environment, then restore it."""

    def _reload(**env):
        for key, value in env.items():
            monkeypatch.setenv(key, value)
        return importlib.reload(config)

    yield _reload
    monkeypatch.undo()
    importlib.reload(config)


def test_defaults(monkeypatch, reload_config):
    for key in (
        "AI_CONTEXT_DEFAULT_MODEL",
        "AI_CONTEXT_COMPLEXITY_THRESHOLD",
        "AI_CONTEXT_MAX_CHUNKS",
        "AI_CONTEXT_MIN_SCORE",
    ):
        monkeypatch.delenv(key, raising=False)
    module = reload_config()
    assert module.DEFAULT_MODEL == "gpt-4o-mini"
    assert module.DEFAULT_COMPLEXITY_THRESHOLD == 4
    assert module.DEFAULT_MAX_CHUNKS == 5
    assert module.DEFAULT_MIN_SCORE == 0.3


def test_environment_overrides(reload_config):
    module = reload_config(
        AI_CONTEXT_DEFAULT_MODEL="claude-3-5-haiku-20241022",
        AI_CONTEXT_COMPLEXITY_THRESHOLD="6",
        AI_CONTEXT_MAX_CHUNKS="3",
        AI_CONTEXT_MIN_SCORE="0.5",
    )
    assert module.DEFAULT_MODEL == "claude-3-5-haiku-20241022"
    assert module.DEFAULT_COMPLEXITY_THRESHOLD == 6
    assert module.DEFAULT_MAX_CHUNKS == 3
    assert module.DEFAULT_MIN_SCORE == 0.5
