"""Shared constants: single source of truth for cross-module values.

StrEnum members are str-compatible, so downstream code (JSON, argparse
choices) works unchanged.
"""

from __future__ import annotations

from enum import StrEnum

# ── String Enums ─────────────────────────────────────────


class ReportFormat(StrEnum):
    """Output formats supported by the CLI renderer."""

    TEXT = "text"
    JSON = "json"


class DiagnosticLevel(StrEnum):
    """Severity attached to emitted diagnostics."""

    WARNING = "warning"
    ERROR = "error"


# ── Diagnostics ──────────────────────────────────────────

LINT_NAME = "non_topologically_sorted_functions"

DIAGNOSTIC_MESSAGE = (
    "function `{before_name}` should be defined before `{after_name}`"
)
DIAGNOSTIC_NOTE = (
    "move the function earlier in the module so callers and callee "
    "ordering is respected"
)

# ── Exit codes ───────────────────────────────────────────

EXIT_CLEAN = 0
EXIT_VIOLATIONS = 1
EXIT_USAGE = 2

# ── Ingestion ────────────────────────────────────────────

BINARY_DETECTION_BUFFER = 8192
