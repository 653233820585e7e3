# ai_context_core/normalization/tools.py
"""
Tool schema normalization.

Accepts tool definitions in either provider convention and produces
``NormalizedTool`` instances that can be re-serialized for any provider.

Decode priority for a single tool (first match wins):
1. ``input_schema`` present: Claude convention, the object is the function.
2. ``type == "function"``: OpenAI convention, unwrap ``function``.
3. Otherwise the object itself is the function definition.

Everything here is pure: inputs are never mutated.
"""

from __future__ import annotations

import copy
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import ValidationError

from ai_context_core.exceptions import InvalidToolShape
from ai_context_core.models import (
    DEFAULT_ARRAY_ITEMS,
    DEFAULT_PARAMETERS,
    NormalizedTool,
    ToolFunction,
    ToolType,
)


def normalize_json_schema(schema: Mapping[str, Any] | None) -> dict[str, Any] | None:
    """
    Return a copy of ``schema`` where every array node has ``items``.

    Object schemas have each property normalized; array schemas get
    ``{"type": "string"}`` when ``items`` is missing and recurse otherwise.
    """
    if not schema:
        return None if schema is None else dict(schema)

    result = dict(schema)
    if result.get("type") == "object" and isinstance(result.get("properties"), Mapping):
        result["properties"] = {
            key: normalize_json_schema(value) if isinstance(value, Mapping) else value
            for key, value in result["properties"].items()
        }
    if result.get("type") == "array":
        items = result.get("items")
        if not items:
            result["items"] = dict(DEFAULT_ARRAY_ITEMS)
        elif isinstance(items, Mapping):
            result["items"] = normalize_json_schema(items)
    return result


def _select_function(tool: Mapping[str, Any]) -> Mapping[str, Any]:
    if tool.get("input_schema"):
        return tool
    if tool.get("type") == ToolType.FUNCTION.value:
        function = tool.get("function")
        if not isinstance(function, Mapping):
            raise InvalidToolShape("function tools must carry a 'function' object")
        return function
    return tool


def _normalize_tool(tool: Any) -> NormalizedTool:
    if isinstance(tool, NormalizedTool):
        return tool.model_copy(deep=True)
    if not isinstance(tool, Mapping):
        raise InvalidToolShape("each tool must be an object")

    function = _select_function(tool)
    parameters = function.get("parameters") or function.get("input_schema")
    if parameters is None:
        parameters = copy.deepcopy(DEFAULT_PARAMETERS)
    elif not isinstance(parameters, Mapping):
        raise InvalidToolShape("tool parameters must be an object schema")
    else:
        parameters = normalize_json_schema(copy.deepcopy(parameters))
        parameters.setdefault("type", "object")

    try:
        return NormalizedTool(
            function=ToolFunction(
                name=function.get("name") or "",
                description=function.get("description") or None,
                parameters=parameters,
            )
        )
    except ValidationError as e:
        raise InvalidToolShape(f"invalid tool definition: {e}") from e


def normalize_tools_object(tools: Iterable[Any]) -> list[NormalizedTool]:
    """
    Normalize a list of tool definitions.

    Returns a new list; the input list and its tools are left untouched.

    Raises:
        InvalidToolShape: a tool has no name, or its parameters are not an
            object schema
    """
    return [_normalize_tool(tool) for tool in tools]


def make_openai_tools(tools: list[NormalizedTool]) -> list[dict[str, Any]]:
    """OpenAI format: the canonical form itself, as plain dicts."""
    return [tool.to_dict() for tool in tools]


def make_claude_tools(tools: list[NormalizedTool] | None) -> list[dict[str, Any]] | None:
    """Claude format: ``{name, description, input_schema}``; ``None`` passes through."""
    if tools is None:
        return None
    return [
        {
            "name": tool.function.name,
            "description": tool.function.description,
            "input_schema": copy.deepcopy(tool.function.parameters),
        }
        for tool in tools
    ]


def make_gemini_tools(tools: list[NormalizedTool] | None) -> list[dict[str, Any]] | None:
    """Gemini format: one entry holding all function declarations."""
    if not tools:
        return None
    declarations = [
        {
            "name": tool.function.name,
            "description": tool.function.description,
            "parameters": copy.deepcopy(tool.function.parameters),
        }
        for tool in tools
    ]
    return [{"functionDeclarations": declarations}]
