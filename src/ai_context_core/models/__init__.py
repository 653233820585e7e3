# ai_context_core/models/__init__.py
"""
Core models for the context core.

All public names are re-exported here so callers can use
``from ai_context_core.models import CanonicalMessage``.
"""

# --- budget -------------------------------------------------------------------
from ai_context_core.models.budget import (  # noqa: F401
    ModelLimits,
    TokenBudget,
    TokenUsage,
)

# --- cognitive ----------------------------------------------------------------
from ai_context_core.models.cognitive import (  # noqa: F401
    CognitiveMetadata,
    CognitiveResult,
    CognitiveToolConfig,
    TaskContext,
)

# --- enums & constants -------------------------------------------------------
from ai_context_core.models.enums import (  # noqa: F401
    BUDGET_ALLOCATION,
    COGNITIVE_TOOL_ORDER,
    BudgetComponent,
    ChunkSource,
    CognitiveToolType,
    ContentType,
    MessageRole,
    Provider,
    ToolType,
)

# --- messages -----------------------------------------------------------------
from ai_context_core.models.messages import (  # noqa: F401
    CanonicalMessage,
    ContentBlock,
    ImageBlock,
    TextBlock,
    ToolResultBlock,
    ToolUseBlock,
)

# --- prompt -------------------------------------------------------------------
from ai_context_core.models.prompt import PreparedPrompt  # noqa: F401

# --- retrieval ----------------------------------------------------------------
from ai_context_core.models.retrieval import (  # noqa: F401
    ChunkMetadata,
    ContextChunk,
    FileSearchResult,
    MemoryState,
    RecentAction,
    RetrievalConfig,
)

# --- tools --------------------------------------------------------------------
from ai_context_core.models.tools import (  # noqa: F401
    DEFAULT_ARRAY_ITEMS,
    DEFAULT_PARAMETERS,
    NormalizedTool,
    ToolFunction,
)

__all__ = [
    # enums
    "MessageRole",
    "ContentType",
    "ToolType",
    "Provider",
    "ChunkSource",
    "BudgetComponent",
    "CognitiveToolType",
    # constants
    "BUDGET_ALLOCATION",
    "COGNITIVE_TOOL_ORDER",
    "DEFAULT_ARRAY_ITEMS",
    "DEFAULT_PARAMETERS",
    # messages
    "CanonicalMessage",
    "ContentBlock",
    "TextBlock",
    "ToolUseBlock",
    "ToolResultBlock",
    "ImageBlock",
    # tools
    "NormalizedTool",
    "ToolFunction",
    # budget
    "ModelLimits",
    "TokenBudget",
    "TokenUsage",
    # retrieval
    "RetrievalConfig",
    "ChunkMetadata",
    "ContextChunk",
    "FileSearchResult",
    "MemoryState",
    "RecentAction",
    # cognitive
    "TaskContext",
    "CognitiveToolConfig",
    "CognitiveMetadata",
    "CognitiveResult",
    # prompt
    "PreparedPrompt",
]
