"""
ragpost - Ollama Model Factories
=================================
Builds the LangChain wrappers for the local Ollama server.  Called once
by each entry script; the returned objects are injected into the
pipelines.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from langchain_ollama import OllamaEmbeddings, OllamaLLM

from ragpost.src.utils.logger import get_logger

if TYPE_CHECKING:
    from ragpost.config.settings import Settings

logger = get_logger(__name__)


def create_embedder(settings: Settings) -> OllamaEmbeddings:
    """Embedding model used for both documents and queries."""
    embedder = OllamaEmbeddings(model=settings.EMBEDDING_MODEL, base_url=settings.OLLAMA_BASE_URL)
    logger.info("Embedder initialised: %s @ %s", settings.EMBEDDING_MODEL, settings.OLLAMA_BASE_URL)
    return embedder


def create_generator(settings: Settings) -> OllamaLLM:
    """Plain completion model (not chat) used to write the blog post."""
    llm = OllamaLLM(model=settings.LLM_MODEL, base_url=settings.OLLAMA_BASE_URL, temperature=settings.LLM_TEMPERATURE)
    logger.info("LLM initialised: %s (temperature=%.1f)", settings.LLM_MODEL, settings.LLM_TEMPERATURE)
    return llm
