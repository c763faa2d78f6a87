"""
ragpost - Exception Hierarchy
==============================
Every error raised on purpose by ragpost derives from ``RagPostError``.
Each carries a short ``error_code``, the underlying ``cause`` (if any),
and a free-form ``context`` dict for structured logging.

Anything that is *not* a ``RagPostError`` (network failures inside the
Ollama client, for instance) is left to propagate and crash the run.
"""

from __future__ import annotations

from typing import Any


class RagPostError(Exception):
    """Base exception for all ragpost errors."""

    error_code: str = "RAG_ERR_001"

    def __init__(self, message: str, *, cause: Exception | None = None, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.context = context or {}


    def to_dict(self) -> dict[str, Any]:
        """Flatten the error for log output."""
        data: dict[str, Any] = {"error_code": self.error_code, "error_type": type(self).__name__, "message": self.message}
        if self.context:
            data["context"] = self.context
        if self.cause is not None:
            data["cause"] = {"type": type(self.cause).__name__, "message": str(self.cause)}
        return data


    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"


class ConfigurationError(RagPostError):
    """Required settings are missing or invalid at startup."""

    error_code = "RAG_CFG_001"


class VectorStoreError(RagPostError):
    """Supabase rejected an insert or a similarity-search RPC.

    Common causes:
    - Wrong project URL or key
    - Table or ``match_documents`` function not deployed
    - Embedding dimension does not match the ``vector(n)`` column
    """

    error_code = "RAG_VEC_001"


class EmbeddingError(RagPostError):
    """The embedding model returned an unexpected number of vectors."""

    error_code = "RAG_EMB_001"
