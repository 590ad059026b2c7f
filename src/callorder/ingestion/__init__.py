"""Source discovery: resolve paths to checkable source files."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import TYPE_CHECKING

from callorder.constants import BINARY_DETECTION_BUFFER
from callorder.ingestion.schemas import SourceFile

if TYPE_CHECKING:
    from callorder.config import Settings

__all__ = [
    "SourceFile",
    "find_sources",
    "is_binary",
]


def is_binary(path: Path) -> bool:
    """Return True if the file appears to be binary (null byte in first N bytes)."""
    try:
        with open(path, "rb") as f:
            chunk = f.read(BINARY_DETECTION_BUFFER)
        return b"\x00" in chunk
    except OSError:
        return True


def find_sources(
    paths: Iterable[Path], settings: Settings | None = None
) -> list[SourceFile]:
    """Find checkable source files under ``paths``."""
    from callorder.ingestion.source_finder import find_sources as _impl

    return _impl(paths, settings)
