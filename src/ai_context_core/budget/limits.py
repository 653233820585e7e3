# ai_context_core/budget/limits.py
"""
Known model context limits.

Conservative estimates keyed by model id. Callers can pass their own
catalog to the budget manager; this table is only the default.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from ai_context_core.models import ModelLimits

logger = logging.getLogger(__name__)


def _limits(context_window: int, max_output_tokens: int, name: str) -> ModelLimits:
    return ModelLimits(context_window=context_window, max_output_tokens=max_output_tokens, name=name)


MODEL_LIMITS: dict[str, ModelLimits] = {
    # Claude
    "claude-sonnet-4-5-20250929": _limits(200_000, 8192, "Claude Sonnet 4.5"),
    "claude-opus-4-20250514": _limits(200_000, 8192, "Claude Opus 4"),
    "claude-3-5-sonnet-20241022": _limits(200_000, 8192, "Claude 3.5 Sonnet"),
    "claude-3-5-haiku-20241022": _limits(200_000, 8192, "Claude 3.5 Haiku"),
    # OpenAI
    "gpt-4o": _limits(128_000, 16_384, "GPT-4o"),
    "gpt-4o-mini": _limits(128_000, 16_384, "GPT-4o Mini"),
    "gpt-4-turbo": _limits(128_000, 4096, "GPT-4 Turbo"),
    "gpt-4": _limits(8192, 4096, "GPT-4"),
    "gpt-3.5-turbo": _limits(16_385, 4096, "GPT-3.5 Turbo"),
    # Gemini
    "gemini-2.0-flash": _limits(1_000_000, 8192, "Gemini 2.0 Flash"),
    "gemini-1.5-pro": _limits(2_000_000, 8192, "Gemini 1.5 Pro"),
    "gemini-1.5-flash": _limits(1_000_000, 8192, "Gemini 1.5 Flash"),
    "gemini-pro": _limits(32_000, 8192, "Gemini Pro"),
    # xAI
    "grok-3": _limits(131_072, 8192, "Grok 3"),
    "grok-3-fast": _limits(131_072, 8192, "Grok 3 Fast"),
    "grok-2": _limits(131_072, 8192, "Grok 2"),
    "grok-vision-beta": _limits(8192, 4096, "Grok Vision"),
    # Local models
    "deepseek-r1:1.5b": _limits(32_000, 4096, "DeepSeek R1 1.5B"),
    "deepseek-r1:7b": _limits(32_000, 4096, "DeepSeek R1 7B"),
    "deepseek-r1:14b": _limits(32_000, 4096, "DeepSeek R1 14B"),
    "llama3.2": _limits(128_000, 4096, "Llama 3.2"),
    "llama3.1": _limits(128_000, 4096, "Llama 3.1"),
    "llava": _limits(4096, 2048, "LLaVA"),
}

DEFAULT_LIMITS = _limits(8192, 2048, "Unknown Model")


def resolve_model_limits(
    model: str,
    catalog: Mapping[str, ModelLimits] | None = None,
) -> tuple[str, ModelLimits]:
    """
    Look up limits for ``model``.

    Tries the id as given, then the part after the first ``:`` (a provider
    prefix such as ``ollama:llama3.2``), then falls back to
    ``DEFAULT_LIMITS``. Returns the matched name and its limits.
    """
    catalog = MODEL_LIMITS if catalog is None else catalog

    if model in catalog:
        return model, catalog[model]

    if ":" in model:
        _, _, unprefixed = model.partition(":")
        if unprefixed in catalog:
            return unprefixed, catalog[unprefixed]
        model = unprefixed

    logger.warning(
        "Unknown model %r, using default limits (%d context, %d output)",
        model,
        DEFAULT_LIMITS.context_window,
        DEFAULT_LIMITS.max_output_tokens,
    )
    return model, DEFAULT_LIMITS
