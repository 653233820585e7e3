# ai_context_core/budget/manager.py
"""
Token Budget Manager.

Tracks context window usage for one model and keeps prompts inside it:
- partitions the input budget across prompt components
- estimates token counts (about 4 characters per token)
- prunes conversation history and truncates text to fit a slice

Token counts here are heuristics, not tokenizer output. Image parts are
costed at a flat rate (765 tokens, 85 for low detail).
"""

from __future__ import annotations

import json
import logging
import math
from collections.abc import Mapping, Sequence
from typing import Any

from ai_context_core.models import (
    BUDGET_ALLOCATION,
    BudgetComponent,
    CanonicalMessage,
    ContentType,
    MessageRole,
    ModelLimits,
    TokenBudget,
    TokenUsage,
)

from .limits import resolve_model_limits

logger = logging.getLogger(__name__)

CHARS_PER_TOKEN = 4
MESSAGE_OVERHEAD_TOKENS = 4
IMAGE_TOKENS_HIGH = 765
IMAGE_TOKENS_LOW = 85
MIN_KEPT_MESSAGES = 2
TRUNCATION_RESERVE_CHARS = 20
APPROACHING_LIMIT_PERCENT = 80.0
CRITICAL_PERCENT = 95.0

_IMAGE_TYPES = {ContentType.IMAGE.value, ContentType.IMAGE_URL.value}

MessageLike = Mapping[str, Any] | CanonicalMessage


def _as_dict(message: MessageLike) -> Mapping[str, Any]:
    if isinstance(message, CanonicalMessage):
        return message.model_dump(exclude_none=True)
    return message


def _is_low_detail(part: Mapping[str, Any]) -> bool:
    if part.get("detail") == "low":
        return True
    image_url = part.get("image_url")
    return isinstance(image_url, Mapping) and image_url.get("detail") == "low"


class TokenBudgetManager:
    """
    Manages token allocation and usage tracking for a model's context window.

    Examples:
        ```python
        budget = TokenBudgetManager("claude:claude-3-5-sonnet-20241022")
        budget.update_usage("system", budget.estimate_tokens(system_prompt))
        messages = budget.prune_messages_to_fit(messages)
        if budget.is_approaching_limit():
            logger.warning(budget.budget_warning())
        ```
    """

    def __init__(self, model: str, limits: Mapping[str, ModelLimits] | None = None):
        self._catalog = limits
        self._select_model(model)

    def _select_model(self, model: str) -> None:
        self.model, self._limits = resolve_model_limits(model, self._catalog)
        self._budget = self.calculate_budget()
        self._usage = TokenUsage(remaining=self._budget.input_budget)
        self._image_parts = 0
        logger.info(
            f"TokenBudgetManager initialized for {self.model}: "
            f"context={self._limits.context_window}, max_output={self._limits.max_output_tokens}"
        )

    # ------------------------------------------------------------------ #
    # Budget
    # ------------------------------------------------------------------ #

    def calculate_budget(self) -> TokenBudget:
        """Split the input budget (window minus response buffer) by component."""
        input_budget = self._limits.input_budget
        slices = {
            component.value: math.floor(input_budget * share) for component, share in BUDGET_ALLOCATION.items()
        }
        return TokenBudget(
            total=self._limits.context_window,
            response_buffer=self._limits.max_output_tokens,
            **slices,
        )

    def switch_model(self, model: str) -> TokenBudget:
        """Recompute the budget for a different model. Usage is reset."""
        logger.info(f"Switching budget model from {self.model} to {model}")
        self._select_model(model)
        return self.get_budget()

    def get_budget(self) -> TokenBudget:
        return self._budget.model_copy()

    def get_usage(self) -> TokenUsage:
        return self._usage.model_copy()

    def get_model_info(self) -> ModelLimits:
        return self._limits.model_copy()

    # ------------------------------------------------------------------ #
    # Estimation
    # ------------------------------------------------------------------ #

    def estimate_tokens(self, text: str | None) -> int:
        if not text:
            return 0
        return math.ceil(len(text) / CHARS_PER_TOKEN)

    def _estimate_part(self, part: Any) -> int:
        if isinstance(part, str):
            return self.estimate_tokens(part)
        if not isinstance(part, Mapping):
            return 0

        part_type = part.get("type")
        if part_type == ContentType.TEXT.value or (part_type is None and isinstance(part.get("text"), str)):
            return self.estimate_tokens(part.get("text"))
        if part_type in _IMAGE_TYPES:
            return IMAGE_TOKENS_LOW if _is_low_detail(part) else IMAGE_TOKENS_HIGH
        if part_type == ContentType.TOOL_USE.value:
            payload = {"name": part.get("name"), "input": part.get("input") or {}}
            return self.estimate_tokens(json.dumps(payload, separators=(",", ":"), default=str))
        if part_type == ContentType.TOOL_RESULT.value:
            content = part.get("content")
            if isinstance(content, str):
                return self.estimate_tokens(content)
            return self.estimate_tokens(json.dumps(content, separators=(",", ":"), default=str))
        return 0

    def estimate_messages_tokens(self, messages: Sequence[MessageLike]) -> int:
        """Estimate tokens for messages: 4 per message plus role plus content."""
        total = 0
        for message in messages:
            message = _as_dict(message)
            total += MESSAGE_OVERHEAD_TOKENS
            total += self.estimate_tokens(message.get("role", ""))

            content = message.get("content")
            if isinstance(content, str):
                total += self.estimate_tokens(content)
            elif isinstance(content, Sequence):
                total += sum(self._estimate_part(part) for part in content)
        return total

    def count_image_parts(self, messages: Sequence[MessageLike]) -> int:
        count = 0
        for message in messages:
            content = _as_dict(message).get("content")
            if isinstance(content, str) or not isinstance(content, Sequence):
                continue
            count += sum(1 for part in content if isinstance(part, Mapping) and part.get("type") in _IMAGE_TYPES)
        return count

    def estimate_tools_tokens(self, tools: Sequence[Any] | None) -> int:
        if not tools:
            return 0
        total = 0
        for tool in tools:
            if hasattr(tool, "model_dump"):
                tool = tool.model_dump(mode="json", exclude_none=True)
            total += self.estimate_tokens(json.dumps(tool, separators=(",", ":"), default=str))
        return total

    # ------------------------------------------------------------------ #
    # Usage tracking
    # ------------------------------------------------------------------ #

    def update_usage(
        self,
        component: BudgetComponent | str,
        tokens: int,
        image_parts: int = 0,
    ) -> TokenUsage:
        """
        Record the token count for one component and recompute totals.

        ``image_parts`` is the number of images counted into a conversation
        figure; ``budget_warning`` reports it. It is ignored for other
        components.
        """
        component = BudgetComponent(component)
        if component == BudgetComponent.CONVERSATION:
            self._image_parts = image_parts
        counts = self._usage.model_dump(include={c.value for c in BudgetComponent})
        counts[component.value] = tokens

        total = sum(counts.values())
        input_budget = self._budget.input_budget
        self._usage = TokenUsage(
            **counts,
            total=total,
            remaining=max(0, input_budget - total),
            utilization_percent=(total / input_budget * 100) if input_budget > 0 else 100.0,
        )
        return self.get_usage()

    def get_available_for_component(self, component: BudgetComponent | str) -> int:
        component = BudgetComponent(component)
        return max(0, self._budget[component.value] - self._usage[component.value])

    def would_exceed_budget(self, additional_tokens: int) -> bool:
        return self._usage.total + additional_tokens > self._budget.input_budget

    def is_approaching_limit(self) -> bool:
        return self._usage.utilization_percent > APPROACHING_LIMIT_PERCENT

    def is_critical(self) -> bool:
        return self._usage.utilization_percent > CRITICAL_PERCENT

    # ------------------------------------------------------------------ #
    # Fitting
    # ------------------------------------------------------------------ #

    def prune_messages_to_fit(
        self,
        messages: Sequence[MessageLike],
        target_tokens: int | None = None,
    ) -> list[MessageLike]:
        """
        Drop the oldest non-system messages until ``messages`` fits.

        System messages are always kept, and so are the last two non-system
        messages even if they alone exceed the target. ``target_tokens``
        defaults to the conversation slice.
        """
        target = self._budget.conversation if target_tokens is None else target_tokens
        current = self.estimate_messages_tokens(messages)
        if current <= target:
            return list(messages)

        logger.info(f"Pruning messages: {current} tokens over target {target} ({len(messages)} messages)")

        system_messages = [m for m in messages if _as_dict(m).get("role") == MessageRole.SYSTEM.value]
        conversation = [m for m in messages if _as_dict(m).get("role") != MessageRole.SYSTEM.value]

        available = target - self.estimate_messages_tokens(system_messages)
        while len(conversation) > MIN_KEPT_MESSAGES and self.estimate_messages_tokens(conversation) > available:
            conversation.pop(0)

        result = system_messages + conversation
        logger.info(
            "Pruning complete: kept %d of %d messages (%d tokens)",
            len(result),
            len(messages),
            self.estimate_messages_tokens(result),
        )
        return result

    def truncate_to_fit(self, text: str, max_tokens: int) -> str:
        if self.estimate_tokens(text) <= max_tokens:
            return text
        target_chars = max_tokens * CHARS_PER_TOKEN - TRUNCATION_RESERVE_CHARS
        if target_chars <= 0:
            return ""
        return text[:target_chars] + "..."

    # ------------------------------------------------------------------ #
    # Reporting
    # ------------------------------------------------------------------ #

    def get_summary(self) -> str:
        usage = self._usage
        return (
            f"Tokens: {usage.total}/{self._budget.input_budget} ({usage.utilization_percent:.1f}%) | "
            f"System: {usage.system} | Tools: {usage.tools} | Memory: {usage.memory} | "
            f"Retrieval: {usage.retrieval} | Conv: {usage.conversation}"
        )

    def budget_warning(self) -> str | None:
        """
        Operator-facing warning when usage is high, or None.

        Counts are character heuristics, and images use flat per-image
        costs, so the message labels every figure as an estimate.
        """
        if not self.is_approaching_limit():
            return None

        level = "critical" if self.is_critical() else "high"
        message = (
            f"Estimated context usage is {level}: ~{self._usage.total} of {self._budget.input_budget} "
            f"input tokens (~{self._usage.utilization_percent:.1f}%) for {self._limits.name}."
        )
        if self._image_parts:
            message += (
                f" Includes {self._image_parts} image part(s) at an estimated "
                f"{IMAGE_TOKENS_HIGH} tokens each ({IMAGE_TOKENS_LOW} for low detail)."
            )
        return message + " Token counts are estimates, not tokenizer output."
