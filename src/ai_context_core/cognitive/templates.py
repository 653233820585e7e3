# ai_context_core/cognitive/templates.py
"""
Reasoning templates for the cognitive scaffold.

Each template renders at three verbosity levels:
1 - a single instruction line
2 - a structured checklist
3 - fully detailed, with tables where useful
"""

from __future__ import annotations

from collections.abc import Callable

from ai_context_core.models import CognitiveToolType, TaskContext


def _excerpt(text: str, limit: int) -> str:
    return text[:limit] + ("..." if len(text) > limit else "")


def render_understand(context: TaskContext, verbosity: int) -> str:
    if verbosity == 1:
        return """<UNDERSTAND>
Parse request: What does the user want? What entities are involved?
</UNDERSTAND>"""

    if verbosity == 2:
        return f"""<UNDERSTAND>
Before acting, parse the user's request:
1. GOAL: What is the primary objective?
2. ENTITIES: What files, folders, or paths are mentioned?
3. CONTEXT: Any references to previous actions ("inside it", "that folder")?
4. CONSTRAINTS: Any specific requirements or restrictions?

User message: "{_excerpt(context.user_message, 200)}"
</UNDERSTAND>"""

    if context.memory_context:
        memory_line = f"Memory context available: {_excerpt(context.memory_context, 200)}"
    else:
        memory_line = "No memory context available."

    return f"""<UNDERSTAND>
Carefully analyze the user's request before proceeding:

1. PRIMARY GOAL
   - What is the user trying to accomplish?
   - Is this a question, a task, or a combination?

2. ENTITY EXTRACTION
   - Files mentioned: [list any file names or types]
   - Folders mentioned: [list any folder names or paths]
   - Paths involved: [list explicit paths like ~/Desktop/...]

3. CONTEXTUAL REFERENCES
   - Does "it", "that", "this" refer to something from memory?
   - Any relative references ("inside", "within", "next to")?

4. IMPLICIT REQUIREMENTS
   - What isn't said but is expected?
   - Any common patterns or conventions to follow?

5. EDGE CASES
   - What could go wrong?
   - Any ambiguities to clarify?

User message: "{context.user_message}"

{memory_line}
</UNDERSTAND>"""


def render_plan(context: TaskContext, verbosity: int) -> str:
    if verbosity == 1:
        return """<PLAN>
Steps to complete this task:
1. [First action]
2. [Second action if needed]
3. [Final confirmation]
</PLAN>"""

    if verbosity == 2:
        return """<PLAN>
Based on understanding, create an execution plan:

STEPS:
1. [What to do first - usually read/understand current state]
2. [Main action - create, modify, or query]
3. [Follow-up actions if multi-step]
4. [Verify and confirm completion]

TOOLS NEEDED:
- [List tools that will be used]

DEPENDENCIES:
- [Any step that depends on another - e.g., can't write to a folder until it exists]
</PLAN>"""

    tools = ", ".join(context.available_tools) or "filesystem tools"
    return f"""<PLAN>
Create a detailed execution plan:

## STEP BREAKDOWN

| Step | Action | Tool | Path/Args | Depends On |
|------|--------|------|-----------|------------|
| 1    | [action] | [tool] | [path] | - |
| 2    | [action] | [tool] | [path] | Step 1 |
| ...  | ... | ... | ... | ... |

## VALIDATION CHECKPOINTS
- After Step 1: [What should be true?]
- After Step 2: [What should be true?]
- Final: [How to confirm success?]

## ROLLBACK PLAN
If any step fails:
- [What to do to recover?]
- [Any cleanup needed?]

## RESOURCE REQUIREMENTS
- Files to read: [list]
- Files to create: [list]
- Folders to create: [list]

Available tools: {tools}
</PLAN>"""


def render_execute(context: TaskContext, verbosity: int) -> str:
    if verbosity == 1:
        return """<EXECUTE>
Run one planned step at a time and check each tool result before continuing.
</EXECUTE>"""

    return """<EXECUTE>
Now executing the plan:

CURRENT STEP: [step number and description]
TOOL CALL: [tool name with arguments]
EXPECTED RESULT: [what should happen]

After each tool execution:
- Check if result matches expected
- Update plan if needed
- Proceed to next step
</EXECUTE>"""


def render_verify(context: TaskContext, verbosity: int) -> str:
    if verbosity == 1:
        return """<VERIFY>
Confirm: Did all actions complete successfully? Does the result match user's request?
</VERIFY>"""

    checklist = """<VERIFY>
Verification checklist:

1. COMPLETION CHECK
   [ ] All planned steps executed
   [ ] No errors in tool results
   [ ] All files/folders created as expected

2. REQUIREMENT CHECK
   [ ] Original request satisfied
   [ ] Paths are correct (using ~ not /~)
   [ ] Content matches expectations"""

    if verbosity == 3:
        checklist += """

3. STATE CHECK
   [ ] File system in expected state
   [ ] No unintended side effects
   [ ] User can find created items"""

    return f"""{checklist}

Original request: "{_excerpt(context.user_message, 150)}"
</VERIFY>"""


def render_reflect(context: TaskContext, verbosity: int) -> str:
    if verbosity == 1:
        return """<REFLECT>
Note what should be remembered for follow-up requests.
</REFLECT>"""

    return """<REFLECT>
Post-task reflection:

WHAT WORKED WELL:
- [Successful patterns to remember]

WHAT COULD IMPROVE:
- [Any inefficiencies or issues]

LEARNINGS:
- [Key insights for future similar tasks]

MEMORY UPDATE:
- [What should be remembered for follow-up requests]
</REFLECT>"""


TemplateRenderer = Callable[[TaskContext, int], str]

TEMPLATES: dict[CognitiveToolType, TemplateRenderer] = {
    CognitiveToolType.UNDERSTAND: render_understand,
    CognitiveToolType.PLAN: render_plan,
    CognitiveToolType.EXECUTE: render_execute,
    CognitiveToolType.VERIFY: render_verify,
    CognitiveToolType.REFLECT: render_reflect,
}


def render_template(tool: CognitiveToolType, context: TaskContext, verbosity: int) -> str:
    """Render one reasoning template at the given verbosity."""
    return TEMPLATES[tool](context, verbosity)
