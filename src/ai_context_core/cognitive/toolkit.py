# ai_context_core/cognitive/toolkit.py
"""
Cognitive Toolkit.

Scores how complex a request is and, for requests above a threshold, wraps
reasoning templates (UNDERSTAND, PLAN, EXECUTE, VERIFY, REFLECT) into a
scaffold block for the prompt. Simple requests get no scaffold at all.

The complexity score is an additive heuristic:

    start                                  1
    " and " / " then "                    +2
    " also " / " additionally "           +1
    each action verb (max 3)              +1
    "inside it" / "in that" / "that folder" +1
    "inside " / "within "                 +1
    each ~/ path (max 2)                  +1
    "how" / "why" / "explain"             +1
    length > 200, length > 400            +1 each

clamped to [1, 10].
"""

from __future__ import annotations

import logging
import re

from ai_context_core.models import (
    COGNITIVE_TOOL_ORDER,
    CognitiveMetadata,
    CognitiveResult,
    CognitiveToolConfig,
    CognitiveToolType,
    TaskContext,
)

from .templates import render_template

logger = logging.getLogger(__name__)

MIN_COMPLEXITY = 1
MAX_COMPLEXITY = 10
MAX_STEPS = 10

ACTION_VERBS: tuple[str, ...] = (
    "create", "make", "add", "delete", "move", "copy", "edit", "modify", "organize", "rename",
)  # fmt: skip

# Step estimation also counts read-style verbs
STEP_VERBS: tuple[str, ...] = ACTION_VERBS + ("read", "list")

PRIMARY_CONNECTORS = (" and ", " then ")
SECONDARY_CONNECTORS = (" also ", " additionally ")
ANAPHORIC_REFERENCES = ("inside it", "in that", "that folder")
RELATIVE_REFERENCES = ("inside ", "within ")
QUESTION_WORDS = ("how", "why", "explain")

_PATH_TOKEN = re.compile(r"~/[^\s]+")
_ENTITY_PATH = re.compile(r"~/[\w\-/.]+")
_QUOTED = re.compile(r"\"([^\"]+)\"|'([^']+)'")
_FOLDER_NAMED = re.compile(r"(?:folder|directory)\s+(?:called|named)?\s*(\w+)", re.IGNORECASE)
_FILE_NAMED = re.compile(r"file\s+(?:called|named)?\s*(\w+\.?\w*)", re.IGNORECASE)
_CONNECTOR_WORD = re.compile(r"\b(?:and|then)\b")


def _verb_pattern(verb: str) -> re.Pattern[str]:
    return re.compile(rf"\b{verb}")


_ACTION_PATTERNS = [_verb_pattern(verb) for verb in ACTION_VERBS]
_STEP_PATTERNS = [_verb_pattern(verb) for verb in STEP_VERBS]


class CognitiveToolkit:
    """
    Decides whether a request needs reasoning scaffolding and renders it.

    Examples:
        ```python
        toolkit = CognitiveToolkit(CognitiveToolConfig(verbosity=2))
        scaffold = toolkit.build_cognitive_prompt(TaskContext(user_message=text))
        if scaffold:
            system_prompt += "\\n\\n" + scaffold
        ```
    """

    def __init__(self, config: CognitiveToolConfig | None = None):
        self.config = config or CognitiveToolConfig()
        logger.info(f"CognitiveToolkit initialized with tools: {[t.value for t in self.config.enabled_tools]}")

    @property
    def ordered_tools(self) -> list[CognitiveToolType]:
        """Enabled tools in rendering order."""
        enabled = set(self.config.enabled_tools)
        return [tool for tool in COGNITIVE_TOOL_ORDER if tool in enabled]

    # ------------------------------------------------------------------ #
    # Complexity
    # ------------------------------------------------------------------ #

    def analyze_complexity(self, context: TaskContext) -> int:
        """Score the request from 1 (trivial) to 10 (many steps)."""
        msg = context.user_message.lower()
        score = MIN_COMPLEXITY

        if any(connector in msg for connector in PRIMARY_CONNECTORS):
            score += 2
        if any(connector in msg for connector in SECONDARY_CONNECTORS):
            score += 1

        action_count = sum(1 for pattern in _ACTION_PATTERNS if pattern.search(msg))
        score += min(action_count, 3)

        if any(ref in msg for ref in ANAPHORIC_REFERENCES):
            score += 1
        if any(ref in msg for ref in RELATIVE_REFERENCES):
            score += 1

        score += min(len(_PATH_TOKEN.findall(msg)), 2)

        if any(word in msg for word in QUESTION_WORDS):
            score += 1

        if len(msg) > 200:
            score += 1
        if len(msg) > 400:
            score += 1

        return max(MIN_COMPLEXITY, min(score, MAX_COMPLEXITY))

    def should_activate(self, context: TaskContext) -> bool:
        return self.analyze_complexity(context) >= self.config.complexity_threshold

    # ------------------------------------------------------------------ #
    # Prompt building
    # ------------------------------------------------------------------ #

    def build_cognitive_prompt(self, context: TaskContext) -> str:
        """
        Render the scaffold for a request.

        Returns an empty string when the request is below the complexity
        threshold or no tools are enabled.
        """
        complexity = self.analyze_complexity(context)
        if complexity < self.config.complexity_threshold:
            logger.debug(f"Complexity {complexity} below threshold, skipping cognitive tools")
            return ""

        sections = [render_template(tool, context, self.config.verbosity) for tool in self.ordered_tools]
        if not sections:
            return ""

        logger.info(f"Cognitive tools activated (complexity {complexity}): {[t.value for t in self.ordered_tools]}")

        body = "\n\n".join(sections)
        return f"""<COGNITIVE_FRAMEWORK>
This is a complex task (complexity: {complexity}/10). Use the following structured reasoning:

{body}

Apply these frameworks in order before and during task execution.
</COGNITIVE_FRAMEWORK>"""

    def build_minimal_cognitive_prompt(self, context: TaskContext) -> str:
        """One-line scaffold for token-constrained prompts."""
        if not self.should_activate(context):
            return ""
        return """<COGNITIVE>
For complex tasks: 1) UNDERSTAND the request 2) PLAN the steps 3) EXECUTE tools 4) VERIFY results
</COGNITIVE>"""

    # ------------------------------------------------------------------ #
    # Advisory analysis
    # ------------------------------------------------------------------ #

    def analyze_task(self, context: TaskContext) -> list[CognitiveResult]:
        """
        Run the advisory analysis phases for telemetry.

        Produces an UNDERSTAND result (entities) and a PLAN result (step
        estimate) when those tools are enabled. Has no effect on prompts.
        """
        results: list[CognitiveResult] = []
        complexity = self.analyze_complexity(context)
        enabled = set(self.config.enabled_tools)

        if CognitiveToolType.UNDERSTAND in enabled:
            entities = self.extract_entities(context.user_message)
            results.append(
                CognitiveResult(
                    tool=CognitiveToolType.UNDERSTAND,
                    output=f"Task complexity: {complexity}/10. {len(entities)} entities identified.",
                    metadata=CognitiveMetadata(complexity=complexity, entities_found=entities),
                )
            )

        if CognitiveToolType.PLAN in enabled:
            steps = self.estimate_steps(context.user_message)
            results.append(
                CognitiveResult(
                    tool=CognitiveToolType.PLAN,
                    output=f"Estimated {steps} steps required for this task.",
                    metadata=CognitiveMetadata(steps_identified=steps),
                )
            )

        return results

    @staticmethod
    def extract_entities(message: str) -> list[str]:
        """Pull paths, quoted names, and named folders/files out of a message."""
        entities: list[str] = []
        entities.extend(_ENTITY_PATH.findall(message))
        entities.extend(double or single for double, single in _QUOTED.findall(message))
        entities.extend(match.group(0) for match in _FOLDER_NAMED.finditer(message))
        entities.extend(match.group(0) for match in _FILE_NAMED.finditer(message))
        return list(dict.fromkeys(entities))

    @staticmethod
    def estimate_steps(message: str) -> int:
        """Estimate the number of steps from verb and connector counts."""
        msg = message.lower()
        steps = 1
        steps += sum(len(pattern.findall(msg)) for pattern in _STEP_PATTERNS)
        steps += len(_CONNECTOR_WORD.findall(msg))
        return min(steps, MAX_STEPS)
