"""
Pytest configuration and shared fixtures.

Nothing here touches the network: the embedder is a bag-of-words fake,
and the vector store is either a ``MagicMock`` Supabase client or an
in-memory cosine-similarity table.
"""

import math
import re
from collections.abc import Sequence
from unittest.mock import AsyncMock, MagicMock

import pytest

from ragpost.config.prompt_templates import DEFAULT_QUERY, SEED_CONTENT
from ragpost.config.settings import Settings

_TOKEN_RE = re.compile(r"[a-z']+")


def _tokens(text: str) -> list[str]:
    return _TOKEN_RE.findall(text.lower())


class BagOfWordsEmbedder:
    """Deterministic embedder over a fixed vocabulary (one dim per word)."""

    def __init__(self, corpus: Sequence[str]) -> None:
        vocab = sorted({tok for text in corpus for tok in _tokens(text)})
        self._index = {tok: i for i, tok in enumerate(vocab)}
        self.dimensions = len(vocab)
        self.document_calls = 0
        self.query_calls = 0

    def _embed(self, text: str) -> list[float]:
        vector = [0.0] * self.dimensions
        for tok in _tokens(text):
            if tok in self._index:
                vector[self._index[tok]] += 1.0
        return vector

    async def aembed_documents(self, texts: list[str]) -> list[list[float]]:
        self.document_calls += 1
        return [self._embed(t) for t in texts]

    async def aembed_query(self, text: str) -> list[float]:
        self.query_calls += 1
        return self._embed(text)


class InMemoryVectorStore:
    """Stands in for the ``documents`` table + ``match_documents`` RPC."""

    def __init__(self) -> None:
        self.rows: list[dict] = []
        self.insert_calls = 0

    def insert_documents(self, records):
        self.insert_calls += 1
        for record in records:
            self.rows.append({"id": len(self.rows) + 1, **record})
        return len(records)

    def match_documents(self, embedding, match_threshold, match_count):
        scored = []
        for row in self.rows:
            similarity = _cosine(row["embedding"], embedding)
            if similarity > match_threshold:
                scored.append({"id": row["id"], "content": row["content"], "similarity": similarity})
        scored.sort(key=lambda r: r["similarity"], reverse=True)
        return scored[:match_count]


def _cosine(a: Sequence[float], b: Sequence[float]) -> float:
    norm = math.sqrt(sum(x * x for x in a)) * math.sqrt(sum(y * y for y in b))
    if norm == 0:
        return 0.0
    return sum(x * y for x, y in zip(a, b)) / norm


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (no external dependencies)")


@pytest.fixture
def settings() -> Settings:
    """Valid settings built without reading ``.env``."""
    return Settings(
        _env_file=None,
        SUPABASE_PROJECT_URL="https://example-ref.supabase.co",
        SUPABASE_PRIVATE_KEY="service-role-key-1234",
        ENV="dev",
    )


@pytest.fixture
def bow_embedder() -> BagOfWordsEmbedder:
    return BagOfWordsEmbedder([*SEED_CONTENT, DEFAULT_QUERY])


@pytest.fixture
def memory_store() -> InMemoryVectorStore:
    return InMemoryVectorStore()


@pytest.fixture
def mock_embedder() -> MagicMock:
    """Embedder returning one 3-dim vector per input, order-tagged."""
    embedder = MagicMock()
    embedder.aembed_documents = AsyncMock(side_effect=lambda texts: [[float(i), 0.5, 1.0] for i in range(len(texts))])
    embedder.aembed_query = AsyncMock(return_value=[0.1, 0.2, 0.3])
    return embedder


@pytest.fixture
def mock_generator() -> MagicMock:
    generator = MagicMock()
    generator.ainvoke = AsyncMock(return_value="A generated blog post.")
    return generator


@pytest.fixture
def mock_store() -> MagicMock:
    store = MagicMock()
    store.insert_documents.side_effect = lambda records: len(records)
    store.match_documents.return_value = []
    return store
