"""
ragpost - Centralized Configuration
====================================
Uses ``pydantic-settings`` (``BaseSettings``) to load *all* configuration
from environment variables and the project-level ``.env`` file.

Security
--------
- ``SUPABASE_PRIVATE_KEY`` is typed as ``SecretStr`` and has **no default
  value**.  The raw value is never exposed in repr, logs, or tracebacks.
- ``SUPABASE_PROJECT_URL`` is also required; both are validated before any
  network client is constructed.

Lifecycle
---------
There is no module-level ``settings`` instance.  Each entry script calls
``load_settings()`` exactly once at startup and passes the result down to
the factories that build the Supabase and Ollama clients.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import SecretStr, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ragpost.src.core.exceptions import ConfigurationError

DEFAULT_ENV_FILE: Path = Path(__file__).resolve().parent.parent.parent / ".env"


class Settings(BaseSettings):
    """
    Application-wide settings.

    Fields *without* a default are **required**.  ``load_settings()``
    refuses to return until they are provided.

    Attributes
    ----------
    SUPABASE_PROJECT_URL : str
        Base URL of the Supabase project (``https://<ref>.supabase.co``).
    SUPABASE_PRIVATE_KEY : SecretStr
        Service-role key for the project.  Access the raw value with
        ``settings.SUPABASE_PRIVATE_KEY.get_secret_value()``.
    OLLAMA_BASE_URL : str
        Ollama server serving both the embedding and the generation model.
    EMBEDDING_MODEL : str
        Ollama embedding model (``all-minilm`` yields 384-dim vectors).
    LLM_MODEL : str
        Ollama completion model used to write the blog post.
    LLM_TEMPERATURE : float
        Sampling temperature for the completion model.
    DOCUMENTS_TABLE : str
        Table receiving ``{content, embedding}`` rows.
    MATCH_FUNCTION : str
        Name of the similarity-search RPC deployed in the project.
    MATCH_THRESHOLD : float
        Minimum similarity a stored vector must exceed to be returned.
    MATCH_COUNT : int
        Maximum number of matches requested from the RPC.
    ENV : Literal["dev", "prod"]
        Environment mode controlling logging verbosity.
    """

    # ── Supabase (required, no default) ────────────────────────────────
    SUPABASE_PROJECT_URL: str
    SUPABASE_PRIVATE_KEY: SecretStr

    # ── Environment Mode ───────────────────────────────────────────────
    ENV: Literal["dev", "prod"] = "dev"

    # ── Model Configuration ────────────────────────────────────────────
    OLLAMA_BASE_URL: str = "http://localhost:11434"
    EMBEDDING_MODEL: str = "all-minilm:latest"
    LLM_MODEL: str = "smollm:135m-base-v0.2-q3_K_S"
    LLM_TEMPERATURE: float = 0.8

    # ── Vector Store ───────────────────────────────────────────────────
    DOCUMENTS_TABLE: str = "documents"
    MATCH_FUNCTION: str = "match_documents"
    MATCH_THRESHOLD: float = 0.5
    MATCH_COUNT: int = 1

    # ── Validators ─────────────────────────────────────────────────────

    @field_validator("SUPABASE_PROJECT_URL", "OLLAMA_BASE_URL")
    @classmethod
    def _http_url(cls, v: str) -> str:
        v = v.lstrip("\ufeff").strip().rstrip("/")
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"must start with http:// or https://, got {v!r}")
        return v


    @field_validator("SUPABASE_PRIVATE_KEY")
    @classmethod
    def _key_not_blank(cls, v: SecretStr) -> SecretStr:
        raw = v.get_secret_value().lstrip("\ufeff").strip()
        if not raw:
            raise ValueError("must not be empty")
        return SecretStr(raw)


    @field_validator("LLM_TEMPERATURE")
    @classmethod
    def _temperature_range(cls, v: float) -> float:
        if not 0.0 <= v <= 2.0:
            raise ValueError(f"LLM_TEMPERATURE must be 0–2, got {v}")
        return v


    @field_validator("MATCH_THRESHOLD")
    @classmethod
    def _threshold_range(cls, v: float) -> float:
        if not -1.0 <= v <= 1.0:
            raise ValueError(f"MATCH_THRESHOLD must be between -1 and 1, got {v}")
        return v


    @field_validator("MATCH_COUNT")
    @classmethod
    def _count_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"MATCH_COUNT must be ≥ 1, got {v}")
        return v

    # ── Pydantic Settings Configuration ────────────────────────────────
    model_config = SettingsConfigDict(env_file=DEFAULT_ENV_FILE, env_file_encoding="utf-8", extra="ignore")


def load_settings(env_file: Path | None = DEFAULT_ENV_FILE) -> Settings:
    """
    Build and validate ``Settings`` once, at process start.

    Args:
        env_file: ``.env`` file to read in addition to the process
                  environment.  ``None`` reads the environment only.

    Returns:
        A validated ``Settings`` instance.

    Raises:
        ConfigurationError: One or more fields are missing or invalid.
            The message names every offending field.
    """
    try:
        return Settings(_env_file=env_file)  # type: ignore[call-arg]
    except ValidationError as exc:
        problems = []
        for err in exc.errors():
            field = ".".join(str(part) for part in err["loc"]) or "<settings>"
            problems.append(f"{field}: {err['msg']}")
        raise ConfigurationError(
            "Invalid configuration, check your environment or .env file:\n  " + "\n  ".join(problems),
            cause=exc,
            context={"fields": [str(err["loc"][0]) for err in exc.errors() if err["loc"]]},
        ) from exc
