"""Process-wide logging setup for the ``callorder`` command.

Diagnostics go to stdout; log records go to stderr through the root
logger. setup_logging() configures that logger once per process, so the
CLI and embedding callers may both invoke it without stacking handlers.
"""

import logging

LOG_FORMAT = "%(asctime)s - %(levelname)s - [%(name)s] - %(message)s"
LOG_DATEFMT = "%Y-%m-%dT%H:%M:%S"

# Parser and event-loop chatter stays at WARNING even under --verbose
_SUPPRESSED_LOGGERS = (
    "tree_sitter",
    "asyncio",
)

_configured = False


def resolve_level(level: str, *, verbose: bool = False) -> int:
    """Map a level name to its numeric value; ``verbose`` forces DEBUG.

    Raises:
        ValueError: If ``level`` is not a standard logging level name.
    """
    if verbose:
        return logging.DEBUG
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return numeric


def setup_logging(level: str = "WARNING", *, verbose: bool = False) -> None:
    """Configure the root logger for a check run.

    Args:
        level: Level name from ``CALLORDER_LOG_LEVEL``.
        verbose: Set by ``--verbose``; overrides ``level`` with DEBUG so
            per-scope constraint summaries are shown.

    Only the first call has any effect.
    """
    global _configured  # noqa: PLW0603
    if _configured:
        return
    _configured = True

    logging.basicConfig(
        level=resolve_level(level, verbose=verbose),
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT,
    )

    for name in _SUPPRESSED_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
