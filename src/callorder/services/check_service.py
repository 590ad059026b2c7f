"""Check orchestration: discover files, analyze every scope, collect reports."""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from callorder.config import Settings
from callorder.diagnostics import Diagnostic, to_diagnostic
from callorder.frontends.treesitter import parse_scopes
from callorder.ingestion.schemas import SourceFile
from callorder.ingestion.source_finder import find_sources
from callorder.ordering.analyzer import analyze

logger = logging.getLogger(__name__)


@dataclass
class FileReport:
    """Diagnostics (or the read error) for one file."""

    display_path: str
    language: str
    scope_count: int = 0
    diagnostics: list[Diagnostic] = field(
        default_factory=lambda: list[Diagnostic]()
    )
    error: str | None = None


@dataclass
class CheckResult:
    """Full result of a check run."""

    files: list[FileReport] = field(
        default_factory=lambda: list[FileReport]()
    )
    duration_ms: float = 0.0

    @property
    def violation_count(self) -> int:
        return sum(len(f.diagnostics) for f in self.files)

    @property
    def error_count(self) -> int:
        return sum(1 for f in self.files if f.error)


def check_file(source_file: SourceFile) -> FileReport:
    """Parse one file and analyze each of its scopes in order.

    Read errors are recorded on the report instead of raised.
    """
    report = FileReport(
        display_path=source_file.display_path,
        language=source_file.language,
    )
    try:
        source = source_file.path.read_bytes()
    except OSError as exc:
        logger.warning("Cannot read %s: %s", source_file.display_path, exc)
        report.error = f"cannot read file: {exc.strerror or exc}"
        return report

    scopes = parse_scopes(
        source, source_file.language, source_file.display_path
    )
    report.scope_count = len(scopes)
    for scope in scopes:
        report.diagnostics.extend(to_diagnostic(v) for v in analyze(scope))
    return report


async def run_check(
    paths: Iterable[Path],
    settings: Settings | None = None,
) -> CheckResult:
    """Check every source file under ``paths``.

    Files are independent, so they are analyzed concurrently in worker
    threads bounded by ``settings.max_concurrency``. A file whose check
    raises gets a report with ``error`` set; the other files still
    complete. Reports come back sorted by path regardless of completion
    order.
    """
    cfg = settings if settings is not None else Settings()
    start = time.monotonic()
    sources = find_sources(paths, cfg)
    logger.info("Checking %d files", len(sources))

    semaphore = asyncio.Semaphore(cfg.max_concurrency)

    async def _check(source_file: SourceFile) -> FileReport:
        async with semaphore:
            try:
                return await asyncio.to_thread(check_file, source_file)
            except Exception as exc:  # noqa: BLE001
                logger.warning(
                    "Check failed for %s",
                    source_file.display_path,
                    exc_info=True,
                )
                return FileReport(
                    display_path=source_file.display_path,
                    language=source_file.language,
                    error=f"analysis failed: {exc}",
                )

    reports = await asyncio.gather(*(_check(s) for s in sources))

    return CheckResult(
        files=sorted(reports, key=lambda r: r.display_path),
        duration_ms=(time.monotonic() - start) * 1000,
    )
