# ai_context_core/retrieval/scoring.py
"""Keyword extraction, relevance scoring, and content truncation."""

from __future__ import annotations

import re

# Words with no topical signal, including generic file-assistant verbs
# fmt: off
STOP_WORDS: frozenset[str] = frozenset(
    {
        "a", "an", "the", "and", "or", "but", "is", "are", "was", "were",
        "be", "been", "being", "have", "has", "had", "do", "does", "did",
        "will", "would", "could", "should", "may", "might", "can", "to",
        "of", "in", "on", "at", "for", "with", "about", "from", "by",
        "this", "that", "these", "those", "it", "its", "my", "your",
        "what", "which", "who", "when", "where", "why", "how",
        "please", "thanks", "thank", "you", "me", "i", "we", "they",
        "create", "make", "add", "delete", "move", "copy", "file", "folder",
    }
)
# fmt: on

MIN_KEYWORD_LENGTH = 3

# Score weights
MATCH_RATIO_WEIGHT = 0.6
WHOLE_WORD_BONUS = 0.2
SUBSTRING_BONUS = 0.1

TRUNCATION_MARKER = "..."
# Cut on whitespace only when it keeps at least this share of the cap
WORD_BOUNDARY_RATIO = 0.8

_NON_ALNUM = re.compile(r"[^a-z0-9]")
_NUMERIC = re.compile(r"^\d+$")


def extract_keywords(query: str) -> list[str]:
    """
    Extract searchable keywords from a query.

    Lowercases, splits on whitespace, strips non-alphanumerics, then drops
    short words, stop words, and pure numbers. Order of first appearance is
    kept; duplicates are removed.
    """
    keywords: list[str] = []
    seen: set[str] = set()
    for word in query.lower().split():
        if word in STOP_WORDS:
            continue
        word = _NON_ALNUM.sub("", word)
        if len(word) < MIN_KEYWORD_LENGTH or word in STOP_WORDS or _NUMERIC.match(word):
            continue
        if word not in seen:
            seen.add(word)
            keywords.append(word)
    return keywords


def relevance_score(keywords: list[str], text: str) -> float:
    """
    Score ``text`` against ``keywords`` in [0, 1].

    Each keyword found as a substring counts as a match and adds a bonus:
    ``WHOLE_WORD_BONUS`` when it also appears as a whole word, otherwise
    ``SUBSTRING_BONUS``. The score is ``min(1, ratio * 0.6 + bonus)`` where
    ratio is matches over keywords; no matches scores exactly 0.
    """
    if not text or not keywords:
        return 0.0

    lower_text = text.lower()
    matches = 0
    bonus = 0.0
    for keyword in keywords:
        if keyword not in lower_text:
            continue
        matches += 1
        if re.search(rf"\b{re.escape(keyword)}\b", lower_text):
            bonus += WHOLE_WORD_BONUS
        else:
            bonus += SUBSTRING_BONUS

    if matches == 0:
        return 0.0

    ratio = matches / len(keywords)
    return min(1.0, ratio * MATCH_RATIO_WEIGHT + bonus)


def truncate_content(content: str, max_length: int) -> str:
    """Cut ``content`` to ``max_length`` chars, preferring a word boundary."""
    if len(content) <= max_length:
        return content

    truncated = content[:max_length]
    last_space = max(truncated.rfind(" "), truncated.rfind("\n"), truncated.rfind("\t"))
    if last_space > max_length * WORD_BOUNDARY_RATIO:
        return truncated[:last_space] + TRUNCATION_MARKER
    return truncated + TRUNCATION_MARKER
