"""Turn violations into diagnostics and render them as text or JSON."""

from __future__ import annotations

import json
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel

from callorder.constants import (
    DIAGNOSTIC_MESSAGE,
    DIAGNOSTIC_NOTE,
    LINT_NAME,
    DiagnosticLevel,
)
from callorder.ordering.schemas import SourceSpan, Violation

if TYPE_CHECKING:
    from callorder.services.check_service import CheckResult, FileReport


class Diagnostic(BaseModel):
    """A user-facing warning anchored at a source span."""

    lint: str = LINT_NAME
    level: DiagnosticLevel = DiagnosticLevel.WARNING
    message: str
    note: str = DIAGNOSTIC_NOTE
    span: SourceSpan


def to_diagnostic(violation: Violation) -> Diagnostic:
    return Diagnostic(
        message=DIAGNOSTIC_MESSAGE.format(
            before_name=violation.before_name,
            after_name=violation.after_name,
        ),
        span=violation.before_span,
    )


def render_text(result: CheckResult) -> str:
    """Compiler-style output, one block per diagnostic."""
    lines: list[str] = []
    for report in result.files:
        if report.error:
            lines.append(
                f"{report.display_path}: {DiagnosticLevel.ERROR}: "
                f"{report.error}"
            )
        for diag in report.diagnostics:
            lines.append(
                f"{report.display_path}:{diag.span.line_start}:"
                f"{diag.span.col_start}: {diag.level}: {diag.message} "
                f"[{diag.lint}]"
            )
            lines.append(f"  = help: {diag.note}")

    count = result.violation_count
    noun = "warning" if count == 1 else "warnings"
    lines.append(
        f"{count} {noun} in {len(result.files)} files "
        f"({result.duration_ms:.0f}ms)"
    )
    return "\n".join(lines)


def render_json(result: CheckResult) -> str:
    """Structured JSON envelope."""
    payload: dict[str, Any] = {
        "generated_at": datetime.now(UTC).isoformat(),
        "file_count": len(result.files),
        "violation_count": result.violation_count,
        "error_count": result.error_count,
        "files": [_report_to_dict(r) for r in result.files],
    }
    return json.dumps(payload, indent=2, ensure_ascii=False)


def _report_to_dict(report: FileReport) -> dict[str, Any]:
    return {
        "path": report.display_path,
        "language": report.language,
        "scope_count": report.scope_count,
        "error": report.error,
        "diagnostics": [
            {
                "lint": d.lint,
                "level": str(d.level),
                "message": d.message,
                "note": d.note,
                "line": d.span.line_start,
                "column": d.span.col_start,
                "end_line": d.span.line_end,
                "end_column": d.span.col_end,
            }
            for d in report.diagnostics
        ],
    }
