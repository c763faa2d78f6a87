"""
ragpost - Collaborator Protocols
=================================
Structural types for the three external services.  The concrete
LangChain/Supabase objects satisfy them; tests substitute fakes.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol, runtime_checkable

# ── Type Aliases ──────────────────────────────────────────────────────
EmbeddingVector = list[float]
DocumentRecord = dict[str, str | list[float]]
MatchResult = dict[str, Any]


@runtime_checkable
class Embedder(Protocol):
    """Any LangChain-compatible embedding model (async side)."""

    async def aembed_documents(self, texts: list[str]) -> list[list[float]]: ...

    async def aembed_query(self, text: str) -> list[float]: ...


@runtime_checkable
class TextGenerator(Protocol):
    """A LangChain runnable turning a prompt into text (or a message)."""

    async def ainvoke(self, input: str, *args: Any, **kwargs: Any) -> Any: ...


@runtime_checkable
class VectorStore(Protocol):
    """Persistent table with batch insert and a similarity-search RPC."""

    def insert_documents(self, records: Sequence[DocumentRecord]) -> int: ...

    def match_documents(self, embedding: EmbeddingVector, match_threshold: float, match_count: int) -> list[MatchResult]: ...
