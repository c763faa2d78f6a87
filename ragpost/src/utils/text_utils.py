"""
ragpost - Text Utilities
=========================
Input guards and log-formatting helpers shared by both pipelines.

These helpers are stateless and side-effect-free.  They never rewrite a
chunk: what the caller passes in is exactly what gets embedded and stored.
"""

from __future__ import annotations

import re
from collections.abc import Sequence

_RE_WHITESPACE = re.compile(r"\s+")


def require_text(value: object, name: str = "text") -> str:
    """
    Return *value* unchanged if it is a non-blank string.

    Raises:
        ValueError: *value* is not a ``str`` or is empty after stripping.
    """
    if not isinstance(value, str):
        raise ValueError(f"{name} must be a string, got {type(value).__name__}")
    if not value.strip():
        raise ValueError(f"{name} must not be empty")
    return value


def validate_chunks(chunks: Sequence[str]) -> list[str]:
    """
    Check an ingestion batch and return it as a list, order preserved.

    Raises:
        ValueError: The batch is empty, is a bare string, or contains a
            non-string / blank entry.  The message names the first bad index.
    """
    if isinstance(chunks, str):
        raise ValueError("chunks must be a sequence of strings, not a single string")
    if not chunks:
        raise ValueError("chunks must contain at least one text chunk")
    return [require_text(chunk, f"chunks[{i}]") for i, chunk in enumerate(chunks)]


def preview(text: str, width: int = 60) -> str:
    """Single-line, width-limited rendering of *text* for log lines."""
    flat = _RE_WHITESPACE.sub(" ", text).strip()
    if len(flat) <= width:
        return flat
    return flat[: width - 1] + "…"


def mask_secret(value: str) -> str:
    """Keep only the last four characters of a secret."""
    return f"****{value[-4:]}" if len(value) > 8 else "****"
