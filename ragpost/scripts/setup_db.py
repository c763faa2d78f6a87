"""
ragpost - Database Seeding Script
==================================
CLI entry point that orchestrates:
    1. Load and validate settings (fail-fast on missing Supabase credentials).
    2. Initialise the Ollama embedder and the Supabase vector store.
    3. Run the ``IngestionPipeline`` over ``SEED_CONTENT``.
    4. Print an execution summary.

The target table and ``match_documents`` function must already exist;
see ``sql/setup_documents.sql``.

Exit status is 1 when settings are invalid or the insert is rejected.

Usage:
    python -m ragpost.scripts.setup_db
    ragpost-ingest
"""

from __future__ import annotations

import asyncio
import sys
import time
from pathlib import Path

# ── Ensure project root is importable when run directly ────────────────
_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))

from ragpost.config.prompt_templates import SEED_CONTENT  # noqa: E402
from ragpost.config.settings import Settings, load_settings  # noqa: E402
from ragpost.src.core.exceptions import ConfigurationError  # noqa: E402
from ragpost.src.core.ingestor import STATUS_FAILED, IngestionPipeline  # noqa: E402
from ragpost.src.database.vector_store import SupabaseVectorStore  # noqa: E402
from ragpost.src.services.ollama_models import create_embedder  # noqa: E402
from ragpost.src.utils.logger import configure_logging, get_logger  # noqa: E402
from ragpost.src.utils.text_utils import mask_secret  # noqa: E402

logger = get_logger(__name__)


# ── Main Orchestration ─────────────────────────────────────────────────

def main() -> int:
    t_start = time.perf_counter()

    # ── 0. Load settings + .env ────────────────────────────────────────
    try:
        settings = load_settings()
    except ConfigurationError as exc:
        print("\n[FATAL] Configuration error:\n")
        print(f"  {exc.message}")
        print()
        return 1

    configure_logging(settings.ENV)
    _print_header(settings)

    # ── 1. Clients ─────────────────────────────────────────────────────
    embedder = create_embedder(settings)
    store = SupabaseVectorStore.from_settings(settings)

    # ── 2. Run IngestionPipeline ───────────────────────────────────────
    pipeline = IngestionPipeline(vector_store=store, embedder=embedder)
    summary = asyncio.run(pipeline.run(SEED_CONTENT))

    # ── 3. Print execution summary ─────────────────────────────────────
    _print_footer(summary, time.perf_counter() - t_start)
    return 1 if summary["status"] == STATUS_FAILED else 0


# ── Pretty-print helpers ──────────────────────────────────────────────

def _print_header(settings: Settings) -> None:
    print()
    print("=" * 60)
    print("  RAGPOST: Seed Vector Table")
    print("=" * 60)
    print(f"  Environment  : {settings.ENV}")
    print(f"  Embedding    : {settings.EMBEDDING_MODEL} @ {settings.OLLAMA_BASE_URL}")
    print(f"  Supabase     : {settings.SUPABASE_PROJECT_URL}")
    print(f"  Table        : {settings.DOCUMENTS_TABLE}")
    print(f"  Private key  : {mask_secret(settings.SUPABASE_PRIVATE_KEY.get_secret_value())}")
    print(f"  Chunks       : {len(SEED_CONTENT)}")
    print("=" * 60)
    print()


def _print_footer(summary: dict, elapsed: float) -> None:
    print()
    print("=" * 60)
    print("  EXECUTION SUMMARY")
    print("-" * 60)
    print(f"  Status               : {summary['status']}")
    print(f"  Chunks embedded      : {summary['total_chunks']}")
    print(f"  Records inserted     : {summary['records_inserted']}")
    if summary.get("error"):
        print(f"  Error                : {summary['error']}")
    print(f"  Total elapsed        : {elapsed:>8.2f}s")
    print("=" * 60)
    print()


# ── Entry point ────────────────────────────────────────────────────────

def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
