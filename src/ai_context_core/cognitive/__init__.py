# ai_context_core/cognitive/__init__.py
"""Complexity scoring and reasoning scaffolds for complex requests."""

from .templates import TEMPLATES, render_template
from .toolkit import ACTION_VERBS, CognitiveToolkit

__all__ = [
    "ACTION_VERBS",
    "CognitiveToolkit",
    "TEMPLATES",
    "render_template",
]
