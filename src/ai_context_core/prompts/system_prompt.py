# ai_context_core/prompts/system_prompt.py
"""
Structured system prompts.

Sections are wrapped in XML-like tags (``<ROLE>``, ``<CONTEXT_MEMORY>``,
``<REASONING_MODE>``, ``<AVAILABLE_TOOLS>``, ``<TOOL_RULES>``,
``<RESPONSE_GUIDELINES>``) so instructions stay separable and easy to trim
when the system budget is tight.
"""

from __future__ import annotations

import math

from pydantic import BaseModel, Field

# =============================================================================
# Section text
# =============================================================================

ROLE_TEMPLATE = """<ROLE>
You are {assistant_name}, a helpful AI assistant.

Your purpose is to help users manage their files, answer questions, and complete tasks.
You can create, read, modify, and organize the user's files through the tools you are given.

OUTPUT RULES:
1. NEVER repeat yourself - each statement appears ONCE only
2. Be concise - one sentence is better than three
3. After completing a task, give ONE brief confirmation
4. If clarification is needed, ask ONE question
</ROLE>"""

MEMORY_INSTRUCTIONS = """<MEMORY_INSTRUCTIONS>
Use the CONTEXT_MEMORY above to understand:
- Recently created files/folders (refer to them in follow-up requests)
- What actions were just performed (avoid repeating)
- The user's current intent
- When user says "inside it", "that folder", etc., refer to entities from memory
</MEMORY_INSTRUCTIONS>"""

REASONING_BASIC = """<REASONING_MODE>
Think and plan before acting. When performing tasks:
1. Understand what the user wants
2. Plan the steps needed
3. Execute the tools in sequence
4. Confirm what was done
</REASONING_MODE>"""

REASONING_EXAMPLES = """<REASONING_EXAMPLES>
Good reasoning patterns:
- "I'll create a folder called Projects on your desktop, then add a README.md file inside it."
- "Let me first check what PDFs you have in your Desktop, then I'll organize them into a PDFs folder."
- "I'll search for files containing 'hello' in your Documents folder, then show you the results."
</REASONING_EXAMPLES>"""

CAPABILITIES = """<PRIMARY_MODE>
For MOST user questions, respond directly with helpful text answers.
General knowledge questions and explanations need no tools.
</PRIMARY_MODE>

<SECONDARY_MODE>
Use tools for operations that require them, such as creating, editing, moving,
listing, or searching files. When a request needs a tool, you MUST call it.
DO NOT provide text-only responses for operations that require tools.
</SECONDARY_MODE>"""

TOOL_RULES = """<TOOL_RULES>
1. Use "~" for home directory, NOT "/~"
   CORRECT: ~/Desktop/Projects
   WRONG: /~Desktop/Projects

2. For editing files, ALWAYS:
   - First: read the file to get current content
   - Then: modify the content
   - Finally: write the COMPLETE content back to the same path

3. Context awareness:
   - "inside it" / "in that folder" refers to the most recently created folder
   - Use exact paths from conversation history

4. Multi-step tasks:
   - Break into individual tool calls
   - Execute in sequence
   - Do not skip steps
</TOOL_RULES>"""

CRITICAL_RULES = """<CRITICAL_RULES>
FORBIDDEN:
- Do not invent or hallucinate file names, paths, or content
- Do not create duplicate tool calls
- Do not use /~ prefix (use ~ prefix instead)
</CRITICAL_RULES>"""

RESPONSE_GUIDELINES = """<RESPONSE_GUIDELINES>
After tool execution:
- ALWAYS mention exact paths where files/folders were created
- If a tool returns empty results, say "No files found"
- If a tool returns an error, report the actual error
- Only use information explicitly provided in tool results

Formatting:
- Show code, folder structures and file contents in markdown code blocks
- Do NOT output empty bullet points
</RESPONSE_GUIDELINES>"""


# =============================================================================
# Config
# =============================================================================


class SystemPromptConfig(BaseModel):
    """Inputs for building a system prompt."""

    assistant_name: str = Field(default="Assistant")
    memory_context: str | None = Field(default=None, description="Consolidated memory from earlier turns")
    tool_descriptions: str | None = Field(default=None, description="Human-readable tool list")
    verbose_reasoning: bool = False


# =============================================================================
# Builders
# =============================================================================


def build_system_prompt(config: SystemPromptConfig | None = None) -> str:
    """Build the full tagged system prompt."""
    config = config or SystemPromptConfig()
    sections = [ROLE_TEMPLATE.format(assistant_name=config.assistant_name)]

    if config.memory_context:
        sections.append(f"<CONTEXT_MEMORY>\n{config.memory_context}\n</CONTEXT_MEMORY>\n\n{MEMORY_INSTRUCTIONS}")

    sections.append(f"{REASONING_BASIC}\n\n{REASONING_EXAMPLES}" if config.verbose_reasoning else REASONING_BASIC)
    sections.append(CAPABILITIES)

    if config.tool_descriptions:
        sections.append(f"<AVAILABLE_TOOLS>\n{config.tool_descriptions}\n</AVAILABLE_TOOLS>\n\n{TOOL_RULES}")

    sections.append(CRITICAL_RULES)
    sections.append(RESPONSE_GUIDELINES)
    return "\n\n".join(sections)


def build_minimal_system_prompt(config: SystemPromptConfig | None = None) -> str:
    """Compact prompt for token-constrained models."""
    config = config or SystemPromptConfig()
    sections = [
        f"<ROLE>{config.assistant_name}: a helpful AI assistant. Help manage files and answer questions. "
        "NEVER repeat yourself. Be direct and concise.</ROLE>"
    ]

    if config.memory_context:
        sections.append(f"<CONTEXT_MEMORY>{config.memory_context}</CONTEXT_MEMORY>")

    if config.tool_descriptions:
        sections.append(
            f"<TOOLS>\n{config.tool_descriptions}\n\n"
            "Paths: use ~ not /~. Edit files: read first, then write the complete content.\n</TOOLS>"
        )

    return "\n\n".join(sections)


def estimate_system_prompt_tokens(config: SystemPromptConfig | None = None) -> int:
    """Rough token count for the full prompt (about 4 characters per token)."""
    return math.ceil(len(build_system_prompt(config)) / 4)
