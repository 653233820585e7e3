# ai_context_core/normalization/messages.py
"""
Message normalization.

Turns user/assistant/tool turns from any accepted shape (plain strings,
OpenAI ``tool_calls`` messages, Claude content-block messages, already
canonical messages) into ``CanonicalMessage`` instances.

Rules applied to a single message, in order:
1. A bare string becomes one text block with the default role.
2. ``tool_calls`` are rewritten into ``tool_use`` blocks (JSON-encoded
   ``arguments`` are decoded) and the ``tool_calls`` field is dropped.
3. A message with neither ``content`` nor ``tool_calls`` is rejected.
4. Non-list ``content`` is wrapped in a list.
5. String entries become text blocks; an object with a string ``text`` and
   no ``type`` is a text block.
6. ``text`` is stripped from ``tool_use`` blocks.

Inputs are never mutated.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from pydantic import ValidationError

from ai_context_core.exceptions import InvalidMessageShape, NonTextContent
from ai_context_core.models import CanonicalMessage, ContentType, MessageRole

MessageInput = str | Mapping[str, Any] | CanonicalMessage


def _decode_arguments(arguments: Any) -> dict[str, Any]:
    if arguments is None or arguments == "":
        return {}
    if isinstance(arguments, str):
        try:
            arguments = json.loads(arguments)
        except json.JSONDecodeError as e:
            raise InvalidMessageShape(f"tool call arguments are not valid JSON: {e}") from e
    if not isinstance(arguments, Mapping):
        raise InvalidMessageShape("tool call arguments must decode to an object")
    return dict(arguments)


def _tool_call_to_block(tool_call: Any) -> dict[str, Any]:
    if not isinstance(tool_call, Mapping):
        raise InvalidMessageShape("each tool call must be an object")
    function = tool_call.get("function") or {}
    return {
        "type": ContentType.TOOL_USE.value,
        "id": tool_call.get("id"),
        "name": function.get("name", tool_call.get("name")),
        "input": _decode_arguments(function.get("arguments", tool_call.get("arguments"))),
    }


def _coerce_block(block: Any) -> dict[str, Any]:
    if isinstance(block, str):
        return {"type": ContentType.TEXT.value, "text": block}
    if not isinstance(block, Mapping):
        raise InvalidMessageShape("each message content item must be a string or object")

    block = dict(block)
    if "type" not in block and isinstance(block.get("text"), str):
        block["type"] = ContentType.TEXT.value
    if block.get("type") == ContentType.TOOL_USE.value:
        block.pop("text", None)
    return block


def normalize_single_message(message: MessageInput, role: str = MessageRole.USER.value) -> CanonicalMessage:
    """
    Normalize one message into a ``CanonicalMessage``.

    Args:
        message: A string, a provider-shaped dict, or a canonical message
        role: Role used when the input does not carry one

    Raises:
        InvalidMessageShape: the input cannot be decoded
    """
    if isinstance(message, CanonicalMessage):
        raw: dict[str, Any] = message.model_dump(exclude_none=True)
    elif isinstance(message, str):
        raw = {"content": [message]}
    elif isinstance(message, Mapping):
        raw = dict(message)
    else:
        raise InvalidMessageShape("each message must be a string or object")

    if not raw.get("role"):
        raw["role"] = role

    content = raw.get("content")
    tool_calls = raw.pop("tool_calls", None) or []
    if not isinstance(tool_calls, Sequence) or isinstance(tool_calls, str | bytes):
        raise InvalidMessageShape("'tool_calls' must be a list")

    if content is None or content == "" or content == []:
        if not tool_calls:
            raise InvalidMessageShape("each message must have a 'content' property")
        blocks: list[Any] = []
    elif isinstance(content, list):
        blocks = list(content)
    else:
        blocks = [content]

    coerced = [_coerce_block(block) for block in blocks]
    coerced.extend(_tool_call_to_block(call) for call in tool_calls)
    raw["content"] = coerced

    try:
        return CanonicalMessage.model_validate(raw)
    except ValidationError as e:
        raise InvalidMessageShape(f"invalid message: {e}") from e


def normalize_messages(messages: Iterable[MessageInput], role: str = MessageRole.USER.value) -> list[CanonicalMessage]:
    """
    Normalize a message list.

    Each message is normalized, then split into one message per content
    block, then consecutive messages sharing a role are merged back into
    one. Applying this to its own output returns an equal list.
    """
    normalized = [normalize_single_message(message, role=role) for message in messages]

    separated: list[CanonicalMessage] = [
        message.model_copy(update={"content": [block]}) for message in normalized for block in message.content
    ]

    merged: list[CanonicalMessage] = []
    for message in separated:
        if merged and merged[-1].role == message.role:
            previous = merged[-1]
            merged[-1] = previous.model_copy(update={"content": [*previous.content, *message.content]})
        else:
            merged.append(message)

    return merged


def _role_of(message: Any) -> str | None:
    if isinstance(message, CanonicalMessage | Mapping):
        return message.get("role")
    return None


def extract_and_remove_system_messages(
    messages: Iterable[Any],
) -> tuple[list[Any], list[Any]]:
    """Split messages into (system messages, everything else), keeping order."""
    system_messages: list[Any] = []
    other_messages: list[Any] = []
    for message in messages:
        if _role_of(message) == MessageRole.SYSTEM.value:
            system_messages.append(message)
        else:
            other_messages.append(message)
    return system_messages, other_messages


def _is_text_block(block: Mapping[str, Any]) -> bool:
    return block.get("type", ContentType.TEXT.value) == ContentType.TEXT.value


def extract_text(messages: Iterable[Any]) -> str:
    """
    Flatten messages to a display string.

    Joins the text of every text block with single spaces. Non-text blocks
    (tool calls, tool results, images) contribute nothing.

    Raises:
        NonTextContent: a message's content is a single object that claims to
            be text (or has no type) but has no string ``text``
    """
    parts: list[str] = []
    for message in messages:
        if isinstance(message, str):
            parts.append(message)
            continue
        if isinstance(message, CanonicalMessage):
            parts.extend(block.text for block in message.text_blocks())
            continue
        if not isinstance(message, Mapping):
            continue

        content = message.get("content")
        if isinstance(content, str):
            parts.append(content)
        elif isinstance(content, list):
            for block in content:
                if isinstance(block, str):
                    parts.append(block)
                elif isinstance(block, Mapping) and _is_text_block(block) and isinstance(block.get("text"), str):
                    parts.append(block["text"])
        elif isinstance(content, Mapping) and _is_text_block(content):
            if not isinstance(content.get("text"), str):
                raise NonTextContent("text content must be a string")
            parts.append(content["text"])

    return " ".join(parts)


def to_openai_tool_calls(message: CanonicalMessage) -> list[dict[str, Any]]:
    """Re-serialize a message's ``tool_use`` blocks as OpenAI ``tool_calls``."""
    return [
        {
            "id": block.id,
            "type": "function",
            "function": {
                "name": block.name,
                "arguments": json.dumps(block.input),
            },
        }
        for block in message.tool_uses()
    ]
