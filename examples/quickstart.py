#!/usr/bin/env python3
# examples/quickstart.py
"""
Quickstart: one budgeted prompt per turn

Shows the context core end to end with the in-memory store:
normalization, retrieval, cognitive scaffolding and token budgeting.
No LLM calls are made; the prepared prompt is printed instead.

Run with: python examples/quickstart.py
"""

import asyncio
import logging

from dotenv import load_dotenv

from ai_context_core import (
    InMemoryContextStore,
    PromptOrchestrator,
    TokenBudgetManager,
)

# Load environment variables
load_dotenv()

logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

SCOPE = "0x1234567890abcdef1234567890abcdef12345678"

TOOLS = [
    {
        "type": "function",
        "function": {
            "name": "create_folder",
            "description": "Create a folder",
            "parameters": {"type": "object", "properties": {"path": {"type": "string"}}, "required": ["path"]},
        },
    },
    {
        "name": "write_file",
        "description": "Write a file",
        "input_schema": {
            "type": "object",
            "properties": {"path": {"type": "string"}, "content": {"type": "string"}, "tags": {"type": "array"}},
        },
    },
]


def build_store() -> InMemoryContextStore:
    store = InMemoryContextStore()
    store.add_file(SCOPE, "~/Documents/budget.md", "Quarterly budget: travel allowance is 12k, software 3k")
    store.add_file(SCOPE, "~/Documents/roadmap.txt", "Roadmap: ship the projects dashboard in March")
    store.set_recent_actions(
        SCOPE,
        [{"toolName": "create_folder", "summary": "Created Projects", "path": "~/Desktop/Projects"}],
    )
    return store


async def quickstart_demo():
    print("Context Core Quickstart")
    print("=" * 40)

    orchestrator = PromptOrchestrator("claude:claude-3-5-haiku-20241022", SCOPE, build_store(), provider="claude")

    # Turn 1: simple question, no scaffold
    prepared = await orchestrator.prepare_turn(
        [
            {"role": "user", "content": "What is the travel budget this quarter?"},
        ],
        tools=TOOLS,
    )
    print("\n--- Turn 1: simple question ---")
    print(f"Chunks: {[(c.source, round(c.score, 2)) for c in prepared.chunks]}")
    print(f"Retrieval context:\n{prepared.retrieval_context}")
    print(f"Cognitive scaffold: {prepared.cognitive_prompt or '(none)'}")
    print(f"Usage: {orchestrator.budget.get_summary()}")

    # Turn 2: multi-step request, scaffold injected
    prepared = await orchestrator.prepare_turn(
        [
            {"role": "user", "content": "What is the travel budget this quarter?"},
            {"role": "assistant", "content": "The travel allowance is 12k."},
            {
                "role": "user",
                "content": "Create a folder called Reports inside ~/Desktop/Projects and then "
                "add a README with the budget summary",
            },
        ],
        tools=TOOLS,
    )
    print("\n--- Turn 2: multi-step request ---")
    print(prepared.cognitive_prompt)
    print(f"Tools for claude: {[tool['name'] for tool in prepared.tools]}")
    print(f"Usage: {orchestrator.budget.get_summary()}")

    # Budget on a small local model
    print("\n--- Budget for a local model ---")
    budget = TokenBudgetManager("ollama:llama3.2")
    print(budget.get_budget())
    print(f"Unknown model fallback: {TokenBudgetManager('some-unreleased-model').get_model_info()}")


if __name__ == "__main__":
    asyncio.run(quickstart_demo())
