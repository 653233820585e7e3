# ai_context_core/retrieval/__init__.py
"""Keyword-based context retrieval over conversation, files, and actions."""

from .retriever import ContextRetriever
from .scoring import STOP_WORDS, extract_keywords, relevance_score, truncate_content
from .storage import ContextStore, InMemoryContextStore, StoredFile

__all__ = [
    "ContextRetriever",
    "ContextStore",
    "InMemoryContextStore",
    "StoredFile",
    "STOP_WORDS",
    "extract_keywords",
    "relevance_score",
    "truncate_content",
]
