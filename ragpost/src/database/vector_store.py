"""
ragpost - SupabaseVectorStore
==============================
Thin wrapper around a Supabase (Postgres + pgvector) project providing:
  • Batch insertion of ``{content, embedding}`` rows
  • Similarity search through the ``match_documents`` RPC

This is the only module that imports ``supabase`` / ``postgrest``.  All
other modules reach the database through this interface.

Design decisions:
  • **Injected client** – the ``supabase.Client`` is passed in, never
    created at import time.  ``from_settings`` is the one place that
    builds it, so tests can hand in a ``MagicMock``.
  • **Error surfacing** – ``postgrest`` raises ``APIError`` for any error
    body returned by the REST layer; it is logged here and re-raised as
    ``VectorStoreError`` so callers deal with a single error type.
  • **No embedding** – vectors arrive ready-made.  The store never talks
    to the embedding model.

Usage:
    from ragpost.src.database.vector_store import SupabaseVectorStore
    store = SupabaseVectorStore.from_settings(settings)
    store.insert_documents([{"content": "...", "embedding": [...]}])
    matches = store.match_documents(query_vector, match_threshold=0.5, match_count=1)
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from postgrest.exceptions import APIError
from supabase import Client, create_client

from ragpost.src.core.exceptions import VectorStoreError
from ragpost.src.core.protocols import DocumentRecord, EmbeddingVector, MatchResult
from ragpost.src.utils.logger import get_logger

if TYPE_CHECKING:
    from ragpost.config.settings import Settings

logger = get_logger(__name__)

# ── Defaults (mirror sql/setup_documents.sql) ─────────────────────────
DEFAULT_TABLE = "documents"
DEFAULT_MATCH_FUNCTION = "match_documents"


def _api_error_message(exc: APIError) -> str:
    """Best human-readable text from a ``postgrest`` error body."""
    message = getattr(exc, "message", None) or str(exc)
    code = getattr(exc, "code", None)
    return f"{message} (code {code})" if code else message


class SupabaseVectorStore:
    """
    High-level abstraction over the Supabase ``documents`` table.

    Parameters
    ----------
    client
        A connected ``supabase.Client``.
    table_name
        Table receiving inserted rows.
    match_function
        Postgres function implementing the similarity search.  It must
        accept ``query_embedding``, ``match_threshold`` and ``match_count``.
    """

    __slots__ = ("_client", "_table_name", "_match_function")

    def __init__(self, client: Client, table_name: str = DEFAULT_TABLE, match_function: str = DEFAULT_MATCH_FUNCTION) -> None:
        self._client = client
        self._table_name = table_name
        self._match_function = match_function


    @classmethod
    def from_settings(cls, settings: Settings) -> SupabaseVectorStore:
        """Create the Supabase client from validated settings."""
        logger.info("Connecting to Supabase project: %s", settings.SUPABASE_PROJECT_URL)
        client = create_client(settings.SUPABASE_PROJECT_URL, settings.SUPABASE_PRIVATE_KEY.get_secret_value())
        return cls(client, table_name=settings.DOCUMENTS_TABLE, match_function=settings.MATCH_FUNCTION)


    @property
    def table_name(self) -> str:
        return self._table_name


    @property
    def match_function(self) -> str:
        return self._match_function


    def insert_documents(self, records: Sequence[DocumentRecord]) -> int:
        """
        Insert all *records* with a single request.

        The batch is all-or-nothing as far as Postgres is concerned: a
        rejected row (e.g. wrong vector dimension) fails the whole insert.

        Parameters
        ----------
        records
            ``{"content": str, "embedding": list[float]}`` dicts.

        Returns
        -------
        int
            Number of rows the store reports as inserted.

        Raises
        ------
        ValueError
            ``records`` is empty.
        VectorStoreError
            Supabase returned an error body.
        """
        if not records:
            raise ValueError("records must not be empty.")

        payload = [dict(record) for record in records]
        logger.info("Inserting %d record(s) into '%s' …", len(payload), self._table_name)

        try:
            response = self._client.table(self._table_name).insert(payload).execute()
        except APIError as exc:
            message = _api_error_message(exc)
            logger.error("Insert into '%s' failed: %s", self._table_name, message)
            raise VectorStoreError(f"Insert into '{self._table_name}' failed: {message}", cause=exc, context={"table": self._table_name, "records": len(payload)}) from exc

        inserted = len(response.data) if response.data else len(payload)
        logger.info("Insert result: %d row(s) written to '%s'.", inserted, self._table_name)
        return inserted


    def match_documents(self, embedding: EmbeddingVector, match_threshold: float, match_count: int) -> list[MatchResult]:
        """
        Run the similarity-search RPC.

        Parameters
        ----------
        embedding
            Query vector, same dimensionality as the stored vectors.
        match_threshold
            Minimum similarity a row must exceed to be returned.
        match_count
            Maximum number of rows returned.

        Returns
        -------
        list[MatchResult]
            Rows ordered best-first (``content``, ``similarity``, …).
            Empty when nothing clears the threshold.

        Raises
        ------
        VectorStoreError
            Supabase returned an error body.
        """
        params = {"query_embedding": list(embedding), "match_threshold": match_threshold, "match_count": match_count}
        logger.debug("Calling %s (threshold=%.2f, count=%d, dims=%d).", self._match_function, match_threshold, match_count, len(embedding))

        try:
            response = self._client.rpc(self._match_function, params).execute()
        except APIError as exc:
            message = _api_error_message(exc)
            logger.error("RPC '%s' failed: %s", self._match_function, message)
            raise VectorStoreError(f"RPC '{self._match_function}' failed: {message}", cause=exc, context={"function": self._match_function}) from exc

        matches: list[MatchResult] = list(response.data or [])
        logger.info("%s returned %d match(es).", self._match_function, len(matches))
        return matches


    def __repr__(self) -> str:
        return f"SupabaseVectorStore(table='{self._table_name}', match_function='{self._match_function}')"
