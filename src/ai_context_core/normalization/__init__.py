# ai_context_core/normalization/__init__.py
"""
Provider-format normalization.

- Messages: canonical conversation turns from any provider shape
- Tools: canonical tool definitions plus per-provider re-serializers
"""

from .messages import (
    extract_and_remove_system_messages,
    extract_text,
    normalize_messages,
    normalize_single_message,
    to_openai_tool_calls,
)
from .tools import (
    make_claude_tools,
    make_gemini_tools,
    make_openai_tools,
    normalize_json_schema,
    normalize_tools_object,
)

__all__ = [
    # Messages
    "normalize_single_message",
    "normalize_messages",
    "extract_and_remove_system_messages",
    "extract_text",
    "to_openai_tool_calls",
    # Tools
    "normalize_json_schema",
    "normalize_tools_object",
    "make_openai_tools",
    "make_claude_tools",
    "make_gemini_tools",
]
