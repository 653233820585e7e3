# ai_context_core/orchestrator.py
"""
Prompt Orchestrator.

Assembles one turn's prompt from the components:

    normalize -> retrieve -> scaffold -> budget -> assemble

The orchestrator performs no network I/O; the only awaited calls are the
retriever's store lookups.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import Any

from ai_context_core.budget import TokenBudgetManager
from ai_context_core.cognitive import CognitiveToolkit
from ai_context_core.config import DEFAULT_MODEL
from ai_context_core.models import (
    BudgetComponent,
    CanonicalMessage,
    CognitiveToolConfig,
    MessageRole,
    ModelLimits,
    NormalizedTool,
    PreparedPrompt,
    Provider,
    RetrievalConfig,
    TaskContext,
)
from ai_context_core.normalization import (
    extract_and_remove_system_messages,
    extract_text,
    make_claude_tools,
    make_gemini_tools,
    make_openai_tools,
    normalize_messages,
    normalize_tools_object,
)
from ai_context_core.prompts import SystemPromptConfig, build_system_prompt
from ai_context_core.retrieval import ContextRetriever, ContextStore

logger = logging.getLogger(__name__)


def serialize_tools(tools: list[NormalizedTool], provider: Provider | str) -> list[dict[str, Any]] | None:
    """Re-serialize canonical tools for a provider's wire format."""
    if not tools:
        return None
    provider = Provider(provider)
    if provider == Provider.CLAUDE:
        return make_claude_tools(tools)
    if provider == Provider.GEMINI:
        return make_gemini_tools(tools)
    return make_openai_tools(tools)


def describe_tools(tools: Iterable[NormalizedTool]) -> str:
    """One line per tool, for the system prompt's tool section."""
    lines = []
    for tool in tools:
        description = tool.function.description
        lines.append(f"- {tool.name}: {description}" if description else f"- {tool.name}")
    return "\n".join(lines)


class PromptOrchestrator:
    """
    Builds budgeted prompts for one account scope and one model.

    Examples:
        ```python
        orchestrator = PromptOrchestrator("claude:claude-3-5-haiku-20241022", scope, store, provider="claude")
        prepared = await orchestrator.prepare_turn(messages, tools=tools)
        response = await client.messages.create(
            system=prepared.system_prompt,
            messages=[m.model_dump(exclude_none=True) for m in prepared.messages],
            tools=prepared.tools,
        )
        ```
    """

    def __init__(
        self,
        model: str | None,
        scope: str,
        store: ContextStore,
        provider: Provider | str = Provider.OPENAI,
        retrieval_config: RetrievalConfig | None = None,
        cognitive_config: CognitiveToolConfig | None = None,
        limits: dict[str, ModelLimits] | None = None,
    ):
        """
        Raises:
            MissingIsolationScope: ``scope`` is empty
        """
        self.provider = Provider(provider)
        self.retriever = ContextRetriever(store, scope, retrieval_config)
        self.toolkit = CognitiveToolkit(cognitive_config)
        self.budget = TokenBudgetManager(model or DEFAULT_MODEL, limits)

    async def prepare_turn(
        self,
        messages: Sequence[Any],
        tools: Sequence[Any] | None = None,
        system_prompt: str | None = None,
        memory_context: str | None = None,
    ) -> PreparedPrompt:
        """
        Assemble the prompt for the latest user turn.

        Args:
            messages: Conversation in any accepted provider shape
            tools: Tool definitions in any accepted shape
            system_prompt: Base system text; when omitted, system messages in
                ``messages`` are used, and failing that a default prompt is built
            memory_context: Consolidated memory, truncated to its budget slice

        Raises:
            InvalidMessageShape: a message cannot be normalized
            InvalidToolShape: a tool cannot be normalized
        """
        canonical = normalize_messages(messages)
        system_messages, conversation = extract_and_remove_system_messages(canonical)
        normalized_tools = normalize_tools_object(tools or [])
        budget = self.budget.get_budget()

        # Retrieval over the latest user turn
        query, history = self._split_query(conversation)
        chunks = await self.retriever.retrieve(query, history)
        retrieval_context = self.budget.truncate_to_fit(
            ContextRetriever.build_retrieval_context(chunks), budget.retrieval
        )

        memory = self.budget.truncate_to_fit(memory_context, budget.memory) if memory_context else ""

        cognitive_prompt = self.toolkit.build_cognitive_prompt(
            TaskContext(
                user_message=query,
                conversation_history=history,
                memory_context=memory or None,
                available_tools=[tool.name for tool in normalized_tools],
            )
        )

        base_system = system_prompt or extract_text(system_messages)
        if not base_system:
            base_system = build_system_prompt(
                SystemPromptConfig(tool_descriptions=describe_tools(normalized_tools) or None)
            )
        # The scaffold shares the system slice
        system_room = max(0, budget.system - self.budget.estimate_tokens(cognitive_prompt))
        base_system = self.budget.truncate_to_fit(base_system, system_room)

        sections = [base_system] if base_system else []
        if memory:
            sections.append(f"<CONTEXT_MEMORY>\n{memory}\n</CONTEXT_MEMORY>")
        if retrieval_context:
            sections.append(retrieval_context)
        if cognitive_prompt:
            sections.append(cognitive_prompt)
        system_text = "\n\n".join(sections)

        provider_tools = serialize_tools(normalized_tools, self.provider)
        pruned: list[CanonicalMessage] = self.budget.prune_messages_to_fit(conversation, budget.conversation)

        self.budget.update_usage(
            BudgetComponent.SYSTEM,
            self.budget.estimate_tokens(base_system) + self.budget.estimate_tokens(cognitive_prompt),
        )
        self.budget.update_usage(BudgetComponent.TOOLS, self.budget.estimate_tools_tokens(provider_tools))
        self.budget.update_usage(BudgetComponent.MEMORY, self.budget.estimate_tokens(memory))
        self.budget.update_usage(BudgetComponent.RETRIEVAL, self.budget.estimate_tokens(retrieval_context))
        self.budget.update_usage(
            BudgetComponent.CONVERSATION,
            self.budget.estimate_messages_tokens(pruned),
            image_parts=self.budget.count_image_parts(pruned),
        )

        logger.info(self.budget.get_summary())
        warning = self.budget.budget_warning()
        if warning:
            logger.warning(warning)

        return PreparedPrompt(
            messages=pruned,
            system_prompt=system_text,
            tools=provider_tools,
            retrieval_context=retrieval_context,
            cognitive_prompt=cognitive_prompt,
            chunks=chunks,
            budget=budget,
            usage=self.budget.get_usage(),
            dropped_messages=len(conversation) - len(pruned),
            warning=warning,
        )

    @staticmethod
    def _split_query(conversation: list[CanonicalMessage]) -> tuple[str, list[str]]:
        """Text of the last user message, and the text of every turn before it."""
        for index in range(len(conversation) - 1, -1, -1):
            if conversation[index].role == MessageRole.USER.value:
                query = extract_text([conversation[index]])
                history = [extract_text([message]) for message in conversation[:index]]
                return query, history
        return "", [extract_text([message]) for message in conversation]
