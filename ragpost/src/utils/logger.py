"""
ragpost - Logging
==================
Pre-configured logger factory for consistent console output across all
ragpost modules.

All loggers are children of the ``ragpost`` package logger, which owns
the single stdout handler.  Verbosity follows the ``ENV`` setting once
``configure_logging()`` has been called by an entry script:
  • ``"dev"``  → DEBUG level  (records, prompts, timings)
  • ``"prod"`` → WARNING level (errors & warnings only)

Usage:
    from ragpost.src.utils.logger import get_logger
    logger = get_logger(__name__)
    logger.info("Something happened")
"""

import logging
import sys

_ROOT_LOGGER_NAME = "ragpost"

# ── Resolve level from environment mode ───────────────────────────────
_ENV_LEVEL_MAP = {
    "dev": logging.DEBUG,
    "prod": logging.WARNING,
}
_DEFAULT_LEVEL = logging.INFO


def _root_logger() -> logging.Logger:
    root = logging.getLogger(_ROOT_LOGGER_NAME)

    # Avoid adding duplicate handlers on repeated imports
    if not root.handlers:
        root.setLevel(_DEFAULT_LEVEL)

        console_handler = logging.StreamHandler(sys.stdout)
        formatter = logging.Formatter(
            fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        console_handler.setFormatter(formatter)
        root.addHandler(console_handler)

        root.propagate = False

    return root


def get_logger(name: str) -> logging.Logger:
    """
    Return a named logger routed through the ``ragpost`` handler.

    Args:
        name: Typically ``__name__`` of the calling module.  Names outside
              the ``ragpost`` namespace are nested under it.
    """
    root = _root_logger()
    if name == _ROOT_LOGGER_NAME:
        return root
    if not name.startswith(_ROOT_LOGGER_NAME + "."):
        name = f"{_ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def configure_logging(env: str, level: int | None = None) -> logging.Logger:
    """
    Set the package-wide level from the environment mode.

    Args:
        env:   ``"dev"`` or ``"prod"``; anything else falls back to INFO.
        level: Explicit override, wins over *env*.
    """
    resolved = level if level is not None else _ENV_LEVEL_MAP.get(env, _DEFAULT_LEVEL)
    root = _root_logger()
    root.setLevel(resolved)
    return root
