"""
ragpost - IngestionPipeline
============================
Embeds an ordered batch of text chunks and persists them as
``{content, embedding}`` rows through the vector store.

Key design decisions:
    • **Dependency Injection** – receives the vector store + embedder.
    • **One embedding call** – the whole batch goes to
      ``aembed_documents`` at once; batching is the model's concern.
    • **One insert** – all records are written with a single request,
      so the store decides all-or-nothing.
    • **No retries** – a store error is logged and ends the run with a
      ``"failed"`` summary.

Usage:
    from ragpost.src.core.ingestor import IngestionPipeline
    pipeline = IngestionPipeline(vector_store, embedder)
    summary  = await pipeline.run(SEED_CONTENT)
"""

from __future__ import annotations

import time
from collections.abc import Sequence
from typing import Any

from ragpost.src.core.exceptions import EmbeddingError, VectorStoreError
from ragpost.src.core.protocols import DocumentRecord, Embedder, EmbeddingVector, VectorStore
from ragpost.src.utils.logger import get_logger
from ragpost.src.utils.text_utils import preview, validate_chunks

logger = get_logger(__name__)

STATUS_INSERTED = "inserted"
STATUS_FAILED = "failed"


def build_records(texts: Sequence[str], vectors: Sequence[EmbeddingVector]) -> list[DocumentRecord]:
    """
    Pair chunk *i* with vector *i*.

    Raises
    ------
    EmbeddingError
        The two sequences differ in length.
    """
    if len(texts) != len(vectors):
        raise EmbeddingError(f"Embedder returned {len(vectors)} vector(s) for {len(texts)} chunk(s).", context={"chunks": len(texts), "vectors": len(vectors)})
    return [{"content": text, "embedding": list(vector)} for text, vector in zip(texts, vectors)]


class IngestionPipeline:
    """
    Batch ingestion: validate → embed → pair → insert.

    Parameters
    ----------
    vector_store
        Anything with ``insert_documents(records) -> int``.
    embedder
        An embedding model exposing ``aembed_documents``
        (e.g. ``OllamaEmbeddings``).
    """

    __slots__ = ("_store", "_embedder")

    def __init__(self, vector_store: VectorStore, embedder: Embedder) -> None:
        self._store = vector_store
        self._embedder = embedder


    async def run(self, chunks: Sequence[str]) -> dict[str, Any]:
        """
        Embed *chunks* and store them in one batch.

        Returns
        -------
        dict
            Execution summary with keys ``status`` (``"inserted"`` or
            ``"failed"``), ``total_chunks``, ``records_inserted``,
            ``error`` and ``elapsed_seconds``.

        Raises
        ------
        ValueError
            Empty batch or blank / non-string chunk.
        EmbeddingError
            Vector count does not match chunk count.
        """
        texts = validate_chunks(chunks)
        t_start = time.perf_counter()
        logger.info("Starting ingestion: %d chunk(s).", len(texts))

        # ── Embedding (timed) ──────────────────────────────────────────
        t_embed = time.perf_counter()
        vectors = await self._embedder.aembed_documents(texts)
        embed_ms = (time.perf_counter() - t_embed) * 1000

        records = build_records(texts, vectors)
        logger.info("Embedded %d chunk(s) in %.1fms (%d dims).", len(records), embed_ms, len(records[0]["embedding"]))
        for idx, record in enumerate(records):
            logger.debug("  Record %d: %s", idx, preview(str(record["content"])))

        # ── Storage ────────────────────────────────────────────────────
        try:
            inserted = self._store.insert_documents(records)
        except VectorStoreError as exc:
            logger.error("Insert error: %s", exc.message)
            return self._summary(STATUS_FAILED, len(texts), 0, time.perf_counter() - t_start, error=exc.message)

        elapsed = time.perf_counter() - t_start
        logger.info("Embedding complete! %d record(s) stored in %.2fs.", inserted, elapsed)
        return self._summary(STATUS_INSERTED, len(texts), inserted, elapsed)

    # ── Summary helper ─────────────────────────────────────────────────

    @staticmethod
    def _summary(status: str, chunks: int, inserted: int, elapsed: float, error: str | None = None) -> dict[str, Any]:
        return {
            "status": status,
            "total_chunks": chunks,
            "records_inserted": inserted,
            "error": error,
            "elapsed_seconds": round(elapsed, 2),
        }
