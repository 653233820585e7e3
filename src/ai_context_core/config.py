from __future__ import annotations

import os

from dotenv import load_dotenv

load_dotenv()

# Central defaults: each can be overridden by environment variable
DEFAULT_MODEL = os.getenv("AI_CONTEXT_DEFAULT_MODEL", "gpt-4o-mini")
DEFAULT_COMPLEXITY_THRESHOLD = int(os.getenv("AI_CONTEXT_COMPLEXITY_THRESHOLD", "4"))
DEFAULT_MAX_CHUNKS = int(os.getenv("AI_CONTEXT_MAX_CHUNKS", "5"))
DEFAULT_MIN_SCORE = float(os.getenv("AI_CONTEXT_MIN_SCORE", "0.3"))
