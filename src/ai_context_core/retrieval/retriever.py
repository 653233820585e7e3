# ai_context_core/retrieval/retriever.py
"""
Context Retriever.

Finds context relevant to a query in three places:
- Conversation history (scored turn by turn)
- Files (delegated to the store's full-text search)
- Recent actions (the account's action log)

Scoring is keyword based and deliberately cheap; see ``scoring``.

Every retriever is bound to exactly one account scope, and every store call
carries that scope. File search and the action log are best-effort: a
failure there is logged and contributes no chunks.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from datetime import UTC, datetime, timedelta
from pathlib import PurePosixPath

from pydantic import ValidationError

from ai_context_core.exceptions import MissingIsolationScope
from ai_context_core.models import (
    ChunkMetadata,
    ChunkSource,
    ContextChunk,
    FileSearchResult,
    MemoryState,
    RecentAction,
    RetrievalConfig,
)

from .scoring import extract_keywords, relevance_score, truncate_content
from .storage import ContextStore

logger = logging.getLogger(__name__)

# Section tags used when rendering retrieved context into a prompt
CONVERSATION_TAG = "RELEVANT_CONVERSATION"
FILES_TAG = "RELEVANT_FILES"
ACTIONS_TAG = "RECENT_RELATED_ACTIONS"


def _short_scope(scope: str) -> str:
    return scope[:10] + "..." if len(scope) > 10 else scope


class ContextRetriever:
    """
    Retrieves relevant context for a query using keyword matching.

    Examples:
        ```python
        retriever = ContextRetriever(store, scope="0xabc...")
        chunks = await retriever.retrieve("quarterly budget", history)
        block = retriever.build_retrieval_context(chunks)
        ```
    """

    def __init__(
        self,
        store: ContextStore,
        scope: str,
        config: RetrievalConfig | None = None,
    ):
        if not scope or not scope.strip():
            raise MissingIsolationScope("ContextRetriever requires an account scope for isolation")

        self._store = store
        self._scope = scope
        self.config = config or RetrievalConfig()
        logger.info("ContextRetriever initialized for scope %s", _short_scope(scope))

    @property
    def scope(self) -> str:
        return self._scope

    async def retrieve(
        self,
        query: str,
        conversation_history: Sequence[str] | None = None,
    ) -> list[ContextChunk]:
        """
        Retrieve context chunks relevant to ``query``.

        Returns at most ``max_chunks`` chunks scoring at least ``min_score``,
        best first. A query with no usable keywords returns ``[]`` without
        touching the store.
        """
        keywords = extract_keywords(query)
        if not keywords:
            logger.debug("No keywords extracted from query")
            return []

        logger.debug(f"Retrieving context for keywords: {keywords}")
        chunks: list[ContextChunk] = []

        if conversation_history:
            chunks.extend(self._search_conversation(keywords, conversation_history))

        if self.config.search_files:
            chunks.extend(await self._search_files(keywords))

        chunks.extend(await self._search_recent_actions(keywords))

        selected = sorted(
            (chunk for chunk in chunks if chunk.score >= self.config.min_score),
            key=lambda chunk: chunk.score,
            reverse=True,
        )[: self.config.max_chunks]

        logger.info(
            f"Retrieved {len(selected)} of {len(chunks)} chunks "
            f"(sources: {[chunk.source for chunk in selected]})"
        )
        return selected

    # ------------------------------------------------------------------ #
    # Sources
    # ------------------------------------------------------------------ #

    def _search_conversation(self, keywords: list[str], history: Sequence[str]) -> list[ContextChunk]:
        now = datetime.now(UTC)
        spacing = timedelta(seconds=self.config.turn_spacing_seconds)
        last_index = len(history) - 1

        chunks: list[ContextChunk] = []
        for index, turn in enumerate(history):
            score = relevance_score(keywords, turn)
            if score <= 0:
                continue
            chunks.append(
                ContextChunk(
                    source=ChunkSource.CONVERSATION,
                    content=truncate_content(turn, self.config.max_chunk_chars),
                    score=score,
                    metadata=ChunkMetadata(
                        message_index=index,
                        timestamp=now - spacing * (last_index - index),
                    ),
                )
            )
        return chunks

    def _is_searchable(self, path: str, content: str) -> bool:
        extensions = {ext.lower() for ext in self.config.searchable_extensions}
        if extensions and PurePosixPath(path).suffix.lower() not in extensions:
            return False
        return len(content.encode("utf-8")) <= self.config.max_file_size

    async def _search_files(self, keywords: list[str]) -> list[ContextChunk]:
        try:
            results = await self._store.search_files(
                self._scope,
                " ".join(keywords),
                self.config.file_search_limit,
            )
        except Exception:
            logger.warning("File search failed for scope %s", _short_scope(self._scope), exc_info=True)
            return []

        chunks: list[ContextChunk] = []
        for raw in results or []:
            try:
                result = FileSearchResult.model_validate(raw)
            except ValidationError:
                logger.warning(f"Skipping malformed file search result: {raw!r}", exc_info=True)
                continue

            content = result.content_text or ""
            if not content or not self._is_searchable(result.path, content):
                continue
            chunks.append(
                ContextChunk(
                    source=ChunkSource.FILE,
                    content=truncate_content(content, self.config.max_chunk_chars),
                    score=self.config.file_match_score,
                    metadata=ChunkMetadata(file_path=result.path, timestamp=result.updated_at),
                )
            )
        return chunks

    async def _search_recent_actions(self, keywords: list[str]) -> list[ContextChunk]:
        try:
            raw_state = await self._store.get_memory_state(self._scope)
            state = MemoryState.model_validate(raw_state) if raw_state is not None else None
        except Exception:
            logger.warning("Memory state lookup failed for scope %s", _short_scope(self._scope), exc_info=True)
            return []

        if state is None or not state.last_actions_json:
            return []

        try:
            raw_actions = json.loads(state.last_actions_json)
        except json.JSONDecodeError:
            logger.warning("Recent actions log is not valid JSON", exc_info=True)
            return []
        if not isinstance(raw_actions, list):
            logger.warning("Recent actions log is not a list, ignoring it")
            return []

        chunks: list[ContextChunk] = []
        for raw in raw_actions:
            try:
                action = RecentAction.model_validate(raw)
            except ValidationError:
                logger.debug(f"Skipping malformed action entry: {raw!r}")
                continue

            text = action.render()
            score = relevance_score(keywords, text)
            if score <= 0:
                continue
            chunks.append(
                ContextChunk(
                    source=ChunkSource.ACTION,
                    content=truncate_content(text, self.config.max_chunk_chars),
                    score=score,
                    metadata=ChunkMetadata(
                        action_type=action.tool_name,
                        file_path=action.path,
                        timestamp=action.timestamp,
                    ),
                )
            )
        return chunks

    # ------------------------------------------------------------------ #
    # Rendering
    # ------------------------------------------------------------------ #

    @staticmethod
    def build_retrieval_context(chunks: Sequence[ContextChunk]) -> str:
        """
        Render chunks as tagged sections for prompt injection.

        Returns an empty string for no chunks; callers omit the section then.
        """
        if not chunks:
            return ""

        conversation = [c for c in chunks if c.source == ChunkSource.CONVERSATION]
        files = [c for c in chunks if c.source == ChunkSource.FILE]
        actions = [c for c in chunks if c.source == ChunkSource.ACTION]

        sections: list[str] = []
        if conversation:
            items = "\n".join(f"- [Message {c.metadata.message_index}]: {c.content}" for c in conversation)
            sections.append(f"<{CONVERSATION_TAG}>\n{items}\n</{CONVERSATION_TAG}>")
        if files:
            items = "\n".join(f"- [{c.metadata.file_path}]: {c.content}" for c in files)
            sections.append(f"<{FILES_TAG}>\n{items}\n</{FILES_TAG}>")
        if actions:
            items = "\n".join(f"- {c.content}" for c in actions)
            sections.append(f"<{ACTIONS_TAG}>\n{items}\n</{ACTIONS_TAG}>")

        return "\n\n".join(sections)
