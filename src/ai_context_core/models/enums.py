# ai_context_core/models/enums.py
"""Enums and constants shared across the context core."""

from enum import Enum

# =============================================================================
# Enums
# =============================================================================


class MessageRole(str, Enum):
    """Message roles in a canonical conversation."""

    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"
    TOOL = "tool"


class ContentType(str, Enum):
    """Tags of canonical content blocks."""

    TEXT = "text"
    TOOL_USE = "tool_use"
    TOOL_RESULT = "tool_result"
    IMAGE = "image"
    IMAGE_URL = "image_url"  # OpenAI-style image part


class ToolType(str, Enum):
    """Tool definition types."""

    FUNCTION = "function"


class Provider(str, Enum):
    """Provider conventions the core can serialize tools for."""

    OPENAI = "openai"
    CLAUDE = "claude"
    GEMINI = "gemini"
    OLLAMA = "ollama"
    XAI = "xai"


class ChunkSource(str, Enum):
    """Where a retrieved context chunk came from."""

    CONVERSATION = "conversation"
    FILE = "file"
    ACTION = "action"


class BudgetComponent(str, Enum):
    """Prompt components that receive a slice of the token budget."""

    SYSTEM = "system"
    TOOLS = "tools"
    MEMORY = "memory"
    RETRIEVAL = "retrieval"
    CONVERSATION = "conversation"


class CognitiveToolType(str, Enum):
    """
    Reasoning templates, in the order they are rendered.

    - UNDERSTAND: parse and clarify intent
    - PLAN: break the task into steps
    - EXECUTE: guide tool execution
    - VERIFY: confirm results match the request
    - REFLECT: capture learnings for follow-ups
    """

    UNDERSTAND = "UNDERSTAND"
    PLAN = "PLAN"
    EXECUTE = "EXECUTE"
    VERIFY = "VERIFY"
    REFLECT = "REFLECT"


# =============================================================================
# Constants
# =============================================================================

# Fixed rendering order for cognitive templates
COGNITIVE_TOOL_ORDER: list[CognitiveToolType] = list(CognitiveToolType)

# Share of the input budget given to each component
BUDGET_ALLOCATION: dict[BudgetComponent, float] = {
    BudgetComponent.SYSTEM: 0.15,
    BudgetComponent.TOOLS: 0.10,
    BudgetComponent.MEMORY: 0.10,
    BudgetComponent.RETRIEVAL: 0.05,
    BudgetComponent.CONVERSATION: 0.60,
}
