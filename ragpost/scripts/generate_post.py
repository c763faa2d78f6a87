"""
ragpost - Blog Post Generation Script
======================================
CLI entry point for the query pipeline:
    1. Load and validate settings.
    2. Initialise the Ollama embedder + LLM and the Supabase vector store.
    3. Embed the query, fetch the closest seeded chunk, and ask the LLM
       to write a blog post about it.
    4. Print the post, or the no-match message.

Arguments:
    query        Text to search for (default: "life on distant planets").

Exit status is 1 when settings are invalid or Supabase rejects the RPC;
a query with no match above the threshold exits 0.

Usage:
    python -m ragpost.scripts.generate_post
    ragpost-generate "mysteries of the ocean"
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from collections.abc import Sequence
from pathlib import Path

# ── Ensure project root is importable when run directly ────────────────
_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))

from ragpost.config.prompt_templates import DEFAULT_QUERY, NO_MATCH_MESSAGE  # noqa: E402
from ragpost.config.settings import load_settings  # noqa: E402
from ragpost.src.core.exceptions import ConfigurationError  # noqa: E402
from ragpost.src.core.rag_engine import STATUS_FAILED, STATUS_NO_MATCH, QueryPipeline  # noqa: E402
from ragpost.src.database.vector_store import SupabaseVectorStore  # noqa: E402
from ragpost.src.services.ollama_models import create_embedder, create_generator  # noqa: E402
from ragpost.src.utils.logger import configure_logging, get_logger  # noqa: E402

logger = get_logger(__name__)


# ── CLI Argument Parsing ───────────────────────────────────────────────

def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="generate_post", description="ragpost: write a blog post about the stored snippet closest to a query.")
    parser.add_argument("query", nargs="?", default=DEFAULT_QUERY, help=f"Text to search for (default: {DEFAULT_QUERY!r}).")
    return parser.parse_args(argv)


# ── Main Orchestration ─────────────────────────────────────────────────

def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)

    try:
        settings = load_settings()
    except ConfigurationError as exc:
        print("\n[FATAL] Configuration error:\n")
        print(f"  {exc.message}")
        print()
        return 1

    configure_logging(settings.ENV)
    logger.info("Query: %s", args.query)

    pipeline = QueryPipeline(
        vector_store=SupabaseVectorStore.from_settings(settings),
        embedder=create_embedder(settings),
        generator=create_generator(settings),
        match_threshold=settings.MATCH_THRESHOLD,
        match_count=settings.MATCH_COUNT,
    )
    summary = asyncio.run(pipeline.run(args.query))

    if summary["status"] == STATUS_FAILED:
        print(f"\n[ERROR] {summary['error']}\n")
        return 1
    if summary["status"] == STATUS_NO_MATCH:
        print(f"\n{NO_MATCH_MESSAGE}\n")
        return 0

    print()
    print("=" * 60)
    print(f"  Matched content: {summary['matched_content']}")
    print("=" * 60)
    print()
    print(summary["generation"])
    print()
    return 0


# ── Entry point ────────────────────────────────────────────────────────

def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
