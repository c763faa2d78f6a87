"""
ragpost - QueryPipeline
========================
Retrieval-augmented generation for a single query.  Flow:
    1. Embed the query.
    2. Ask the vector store for the closest stored chunk above the
       similarity threshold.
    3. No match → stop (normal termination, generator never called).
    4. Match → interpolate its content into the blog-post prompt and
       call the generation model once.

Every step is awaited before the next one starts.  Store errors end the
run with a ``"failed"`` summary; anything raised by the embedding or
generation model propagates to the caller.

Usage:
    from ragpost.src.core.rag_engine import QueryPipeline
    pipeline = QueryPipeline(vector_store, embedder, generator)
    summary  = await pipeline.run("life on distant planets")
"""

from __future__ import annotations

import time
from typing import Any

from ragpost.config.prompt_templates import NO_MATCH_MESSAGE, build_prompt
from ragpost.src.core.exceptions import VectorStoreError
from ragpost.src.core.protocols import Embedder, MatchResult, TextGenerator, VectorStore
from ragpost.src.utils.logger import get_logger
from ragpost.src.utils.text_utils import require_text

logger = get_logger(__name__)

DEFAULT_MATCH_THRESHOLD = 0.5
DEFAULT_MATCH_COUNT = 1

STATUS_GENERATED = "generated"
STATUS_NO_MATCH = "no_match"
STATUS_FAILED = "failed"


def _as_text(response: object) -> str:
    """Completion models return ``str``; chat models return a message."""
    if isinstance(response, str):
        return response
    content = getattr(response, "content", None)
    return content if isinstance(content, str) else str(response)


class QueryPipeline:
    """
    Embed → match → generate.

    Parameters
    ----------
    vector_store
        Anything with ``match_documents(embedding, threshold, count)``.
    embedder
        Embedding model exposing ``aembed_query``.  Must be the model
        used at ingestion time.
    generator
        LangChain runnable exposing ``ainvoke(prompt)``.
    match_threshold
        Minimum similarity passed to the store.
    match_count
        Maximum matches requested.  Only the first is used.
    """

    __slots__ = ("_store", "_embedder", "_llm", "_match_threshold", "_match_count")

    def __init__(self, vector_store: VectorStore, embedder: Embedder, generator: TextGenerator, match_threshold: float = DEFAULT_MATCH_THRESHOLD, match_count: int = DEFAULT_MATCH_COUNT) -> None:
        if match_count < 1:
            raise ValueError(f"match_count must be ≥ 1, got {match_count}")
        self._store = vector_store
        self._embedder = embedder
        self._llm = generator
        self._match_threshold = match_threshold
        self._match_count = match_count


    async def run(self, query: str) -> dict[str, Any]:
        """
        Generate a blog post from the stored chunk closest to *query*.

        Returns
        -------
        dict
            ``status`` is one of ``"generated"``, ``"no_match"`` or
            ``"failed"``.  Also ``query``, ``matched_content``,
            ``similarity``, ``prompt``, ``generation``, ``error`` and
            ``elapsed_seconds`` (unset fields are ``None``).

        Raises
        ------
        ValueError
            Blank query.
        """
        require_text(query, "query")
        t_start = time.perf_counter()

        # ── 1. Embed query ────────────────────────────────────────────
        embedding = await self._embedder.aembed_query(query)
        logger.info("Query embedding generated: %d dimensions", len(embedding))

        # ── 2. Search ─────────────────────────────────────────────────
        try:
            matches = self._store.match_documents(embedding, match_threshold=self._match_threshold, match_count=self._match_count)
        except VectorStoreError as exc:
            logger.error("Vector store error: %s", exc.message)
            return self._summary(STATUS_FAILED, query, t_start, error=exc.message)

        # ── 3. Branch ─────────────────────────────────────────────────
        if not matches:
            logger.info(NO_MATCH_MESSAGE)
            return self._summary(STATUS_NO_MATCH, query, t_start)

        best: MatchResult = matches[0]
        content = str(best["content"])
        similarity = best.get("similarity")
        logger.info("Matched content: %s", content)
        if similarity is not None:
            logger.debug("Similarity: %.4f", float(similarity))

        # ── 4. Generate ───────────────────────────────────────────────
        prompt = build_prompt(content)
        logger.debug("Prompt: %s", prompt)

        t_llm = time.perf_counter()
        generation = _as_text(await self._llm.ainvoke(prompt))
        llm_ms = (time.perf_counter() - t_llm) * 1000
        logger.info("LLM response: %.1fms (%d chars)", llm_ms, len(generation))

        return self._summary(STATUS_GENERATED, query, t_start, matched_content=content, similarity=similarity, prompt=prompt, generation=generation)

    # ── Summary helper ─────────────────────────────────────────────────

    @staticmethod
    def _summary(status: str, query: str, t_start: float, *, matched_content: str | None = None, similarity: float | None = None, prompt: str | None = None, generation: str | None = None, error: str | None = None) -> dict[str, Any]:
        return {
            "status": status,
            "query": query,
            "matched_content": matched_content,
            "similarity": similarity,
            "prompt": prompt,
            "generation": generation,
            "error": error,
            "elapsed_seconds": round(time.perf_counter() - t_start, 2),
        }
