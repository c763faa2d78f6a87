"""Tests for IngestionPipeline: cardinality, ordering and error handling."""

from unittest.mock import AsyncMock, MagicMock

import pytest

import ragpost.src.core.ingestor as ingestor
from ragpost.config.prompt_templates import SEED_CONTENT
from ragpost.src.core.exceptions import EmbeddingError, VectorStoreError
from ragpost.src.core.ingestor import STATUS_FAILED, STATUS_INSERTED, IngestionPipeline, build_records


@pytest.fixture
def spy_logger(monkeypatch):
    logger = MagicMock()
    monkeypatch.setattr(ingestor, "logger", logger)
    return logger


def _logged(mock_method) -> list[str]:
    return [call.args[0] % call.args[1:] if len(call.args) > 1 else call.args[0] for call in mock_method.call_args_list]


@pytest.mark.unit
@pytest.mark.asyncio
@pytest.mark.parametrize("n", [1, 2, 5, 17])
async def test_one_record_per_chunk_in_input_order(n, mock_store, mock_embedder):
    chunks = [f"chunk number {i}" for i in range(n)]
    pipeline = IngestionPipeline(mock_store, mock_embedder)

    summary = await pipeline.run(chunks)

    mock_embedder.aembed_documents.assert_awaited_once_with(chunks)
    mock_store.insert_documents.assert_called_once()
    records = mock_store.insert_documents.call_args.args[0]
    assert len(records) == n
    assert [r["content"] for r in records] == chunks
    # mock_embedder tags vector i with i in position 0
    assert [r["embedding"][0] for r in records] == [float(i) for i in range(n)]
    assert summary["status"] == STATUS_INSERTED
    assert summary["total_chunks"] == n
    assert summary["records_inserted"] == n
    assert summary["error"] is None


@pytest.mark.unit
@pytest.mark.asyncio
async def test_records_have_only_content_and_embedding(mock_store, mock_embedder):
    await IngestionPipeline(mock_store, mock_embedder).run(SEED_CONTENT)

    records = mock_store.insert_documents.call_args.args[0]
    assert all(set(r) == {"content", "embedding"} for r in records)
    assert tuple(r["content"] for r in records) == SEED_CONTENT


@pytest.mark.unit
@pytest.mark.asyncio
async def test_success_is_logged(mock_store, mock_embedder, spy_logger):
    await IngestionPipeline(mock_store, mock_embedder).run(["one", "two"])

    assert any("Embedding complete!" in line for line in _logged(spy_logger.info))
    spy_logger.error.assert_not_called()


@pytest.mark.unit
@pytest.mark.asyncio
async def test_store_error_is_logged_and_not_reported_as_success(mock_store, mock_embedder, spy_logger):
    mock_store.insert_documents.side_effect = VectorStoreError("Insert into 'documents' failed: permission denied")

    summary = await IngestionPipeline(mock_store, mock_embedder).run(["one", "two"])

    assert summary["status"] == STATUS_FAILED
    assert summary["records_inserted"] == 0
    assert "permission denied" in summary["error"]
    assert any("permission denied" in line for line in _logged(spy_logger.error))
    assert not any("Embedding complete!" in line for line in _logged(spy_logger.info))
    mock_store.insert_documents.assert_called_once()


@pytest.mark.unit
@pytest.mark.asyncio
@pytest.mark.parametrize("chunks", [[], ["ok", ""], ["ok", "   "]])
async def test_invalid_input_rejected_before_any_call(chunks, mock_store, mock_embedder):
    with pytest.raises(ValueError):
        await IngestionPipeline(mock_store, mock_embedder).run(chunks)

    mock_embedder.aembed_documents.assert_not_awaited()
    mock_store.insert_documents.assert_not_called()


@pytest.mark.unit
@pytest.mark.asyncio
async def test_vector_count_mismatch_writes_nothing(mock_store):
    embedder = MagicMock()
    embedder.aembed_documents = AsyncMock(return_value=[[0.1, 0.2]])

    with pytest.raises(EmbeddingError):
        await IngestionPipeline(mock_store, embedder).run(["one", "two"])

    mock_store.insert_documents.assert_not_called()


@pytest.mark.unit
@pytest.mark.asyncio
async def test_embedder_failure_propagates(mock_store):
    embedder = MagicMock()
    embedder.aembed_documents = AsyncMock(side_effect=ConnectionError("ollama unreachable"))

    with pytest.raises(ConnectionError):
        await IngestionPipeline(mock_store, embedder).run(["one"])

    mock_store.insert_documents.assert_not_called()


@pytest.mark.unit
@pytest.mark.asyncio
async def test_seeds_in_memory_store(memory_store, bow_embedder):
    summary = await IngestionPipeline(memory_store, bow_embedder).run(SEED_CONTENT)

    assert summary["status"] == STATUS_INSERTED
    assert memory_store.insert_calls == 1
    assert bow_embedder.document_calls == 1
    assert [row["content"] for row in memory_store.rows] == list(SEED_CONTENT)
    assert {len(row["embedding"]) for row in memory_store.rows} == {bow_embedder.dimensions}


@pytest.mark.unit
def test_build_records_pairs_by_position():
    records = build_records(["a", "b"], [[1.0], [2.0]])
    assert records == [{"content": "a", "embedding": [1.0]}, {"content": "b", "embedding": [2.0]}]
