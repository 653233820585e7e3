# ai_context_core/__init__.py
"""
AI Context Core.

Prompt and context orchestration between an agent loop and LLM providers:
- Normalization: canonical messages and tools from any provider shape
- Budget: token partitioning, estimation and pruning per model
- Retrieval: keyword-scored context from conversation, files and actions
- Cognitive: reasoning scaffolds for complex requests
- Orchestrator: one budgeted prompt per turn
"""

from .budget import DEFAULT_LIMITS, MODEL_LIMITS, TokenBudgetManager, resolve_model_limits
from .cognitive import CognitiveToolkit
from .exceptions import (
    ContextCoreError,
    InvalidMessageShape,
    InvalidToolShape,
    MissingIsolationScope,
    NonTextContent,
)
from .models import (
    CanonicalMessage,
    ChunkSource,
    CognitiveToolConfig,
    CognitiveToolType,
    ContextChunk,
    ModelLimits,
    NormalizedTool,
    PreparedPrompt,
    Provider,
    RetrievalConfig,
    TaskContext,
    TokenBudget,
    TokenUsage,
)
from .normalization import (
    extract_and_remove_system_messages,
    extract_text,
    make_claude_tools,
    make_gemini_tools,
    make_openai_tools,
    normalize_json_schema,
    normalize_messages,
    normalize_single_message,
    normalize_tools_object,
    to_openai_tool_calls,
)
from .orchestrator import PromptOrchestrator, serialize_tools
from .prompts import (
    SystemPromptConfig,
    build_minimal_system_prompt,
    build_system_prompt,
    estimate_system_prompt_tokens,
)
from .retrieval import ContextRetriever, ContextStore, InMemoryContextStore

__version__ = "0.1.0"

__all__ = [
    # Errors
    "ContextCoreError",
    "InvalidMessageShape",
    "InvalidToolShape",
    "MissingIsolationScope",
    "NonTextContent",
    # Models
    "CanonicalMessage",
    "ChunkSource",
    "CognitiveToolConfig",
    "CognitiveToolType",
    "ContextChunk",
    "ModelLimits",
    "NormalizedTool",
    "PreparedPrompt",
    "Provider",
    "RetrievalConfig",
    "TaskContext",
    "TokenBudget",
    "TokenUsage",
    # Normalization
    "normalize_single_message",
    "normalize_messages",
    "extract_and_remove_system_messages",
    "extract_text",
    "to_openai_tool_calls",
    "normalize_json_schema",
    "normalize_tools_object",
    "make_openai_tools",
    "make_claude_tools",
    "make_gemini_tools",
    # Budget
    "TokenBudgetManager",
    "MODEL_LIMITS",
    "DEFAULT_LIMITS",
    "resolve_model_limits",
    # Retrieval
    "ContextRetriever",
    "ContextStore",
    "InMemoryContextStore",
    # Cognitive
    "CognitiveToolkit",
    # Prompts
    "SystemPromptConfig",
    "build_system_prompt",
    "build_minimal_system_prompt",
    "estimate_system_prompt_tokens",
    # Orchestration
    "PromptOrchestrator",
    "serialize_tools",
]
