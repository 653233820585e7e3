# ai_context_core/budget/__init__.py
"""Token budget partitioning, estimation and pruning."""

from .limits import DEFAULT_LIMITS, MODEL_LIMITS, resolve_model_limits
from .manager import IMAGE_TOKENS_HIGH, IMAGE_TOKENS_LOW, TokenBudgetManager

__all__ = [
    "DEFAULT_LIMITS",
    "IMAGE_TOKENS_HIGH",
    "IMAGE_TOKENS_LOW",
    "MODEL_LIMITS",
    "TokenBudgetManager",
    "resolve_model_limits",
]
