# tests/test_system_prompt.py
"""Tests for the tagged system prompt builders."""

import math

from ai_context_core.prompts import (
    SystemPromptConfig,
    build_minimal_system_prompt,
    build_system_prompt,
    estimate_system_prompt_tokens,
)


class TestBuildSystemPrompt:
    def test_default_sections(self):
        prompt = build_system_prompt()
        assert prompt.startswith("<ROLE>\nYou are Assistant")
        assert "<REASONING_MODE>" in prompt
        assert "<CRITICAL_RULES>" in prompt
        assert prompt.endswith("</RESPONSE_GUIDELINES>")

    def test_optional_sections_omitted(self):
        prompt = build_system_prompt(SystemPromptConfig())
        assert "<CONTEXT_MEMORY>" not in prompt
        assert "<AVAILABLE_TOOLS>" not in prompt
        assert "<TOOL_RULES>" not in prompt
        assert "<REASONING_EXAMPLES>" not in prompt

    def test_assistant_name(self):
        assert "You are Atlas" in build_system_prompt(SystemPromptConfig(assistant_name="Atlas"))

    def test_memory_section(self):
        prompt = build_system_prompt(SystemPromptConfig(memory_context="Created ~/Desktop/Projects"))
        assert "<CONTEXT_MEMORY>\nCreated ~/Desktop/Projects\n</CONTEXT_MEMORY>" in prompt
        assert "<MEMORY_INSTRUCTIONS>" in prompt

    def test_tool_sections(self):
        prompt = build_system_prompt(SystemPromptConfig(tool_descriptions="- write_file: Write a file"))
        assert "<AVAILABLE_TOOLS>\n- write_file: Write a file\n</AVAILABLE_TOOLS>" in prompt
        assert "<TOOL_RULES>" in prompt

    def test_verbose_reasoning(self):
        prompt = build_system_prompt(SystemPromptConfig(verbose_reasoning=True))
        assert prompt.index("<REASONING_MODE>") < prompt.index("<REASONING_EXAMPLES>")

    def test_section_order(self):
        prompt = build_system_prompt(SystemPromptConfig(memory_context="m", tool_descriptions="t"))
        tags = ["<ROLE>", "<CONTEXT_MEMORY>", "<REASONING_MODE>", "<AVAILABLE_TOOLS>", "<RESPONSE_GUIDELINES>"]
        positions = [prompt.index(tag) for tag in tags]
        assert positions == sorted(positions)


class TestMinimalSystemPrompt:
    def test_shorter_than_full(self):
        config = SystemPromptConfig(memory_context="m", tool_descriptions="- f")
        assert len(build_minimal_system_prompt(config)) < len(build_system_prompt(config))

    def test_role_only_by_default(self):
        prompt = build_minimal_system_prompt()
        assert prompt.startswith("<ROLE>")
        assert "<TOOLS>" not in prompt

    def test_memory_and_tools(self):
        prompt = build_minimal_system_prompt(SystemPromptConfig(memory_context="m", tool_descriptions="- f"))
        assert "<CONTEXT_MEMORY>m</CONTEXT_MEMORY>" in prompt
        assert "<TOOLS>\n- f\n" in prompt


def test_estimate_matches_length():
    config = SystemPromptConfig(tool_descriptions="- f")
    assert estimate_system_prompt_tokens(config) == math.ceil(len(build_system_prompt(config)) / 4)
