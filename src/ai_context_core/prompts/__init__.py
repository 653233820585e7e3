# ai_context_core/prompts/__init__.py
from .system_prompt import (
    SystemPromptConfig,
    build_minimal_system_prompt,
    build_system_prompt,
    estimate_system_prompt_tokens,
)

__all__ = [
    "SystemPromptConfig",
    "build_minimal_system_prompt",
    "build_system_prompt",
    "estimate_system_prompt_tokens",
]
