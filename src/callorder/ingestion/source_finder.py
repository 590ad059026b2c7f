"""Find checkable source files under the paths given on the command line."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

import pathspec

from callorder.config import EXTENSION_MAP, Settings
from callorder.ingestion import is_binary
from callorder.ingestion.schemas import SourceFile


def find_sources(
    paths: Iterable[Path],
    settings: Settings | None = None,
) -> list[SourceFile]:
    """Return the source files to check, de-duplicated, in sorted order.

    * Files passed directly are kept when their extension maps to an
      enabled language, even inside skipped directories.
    * Directories are walked skipping hidden directories, directories
      listed in ``settings.skip_directories`` and ``.gitignore`` matches.
    * Binary files and symlinks resolving outside the root are skipped.
    """
    cfg = settings if settings is not None else Settings()
    languages = set(cfg.languages)
    skip_dirs = set(cfg.skip_directories)

    found: dict[Path, SourceFile] = {}
    for raw in paths:
        root = Path(raw)
        if root.is_file():
            candidates = [(root, str(root))]
        elif root.is_dir():
            gitignore_spec = _load_gitignore(root)
            candidates = [
                (item, str(item))
                for item in _walk_files(root, skip_dirs, gitignore_spec)
            ]
        else:
            continue

        for file_path, display in candidates:
            language = _language_for(file_path)
            if language is None or language not in languages:
                continue
            resolved = file_path.resolve()
            if resolved in found or is_binary(file_path):
                continue
            found[resolved] = SourceFile(
                path=file_path, language=language, display_path=display
            )

    return sorted(found.values(), key=lambda s: s.display_path)


def _language_for(path: Path) -> str | None:
    return EXTENSION_MAP.get(path.suffix.lower())


def _walk_files(
    root: Path,
    skip_dirs: set[str],
    gitignore_spec: pathspec.PathSpec,
) -> list[Path]:
    """Collect all regular files, skipping hidden and excluded directories.

    Symlinks (both directory and file) that resolve outside the root
    are skipped.
    """
    resolved_root = root.resolve()
    return _walk_files_inner(
        root, root, skip_dirs, gitignore_spec, resolved_root
    )


def _walk_files_inner(
    current: Path,
    root: Path,
    skip_dirs: set[str],
    gitignore_spec: pathspec.PathSpec,
    resolved_root: Path,
) -> list[Path]:
    """Recursive walk helper with symlink protection."""
    files: list[Path] = []
    for item in sorted(current.iterdir()):
        if item.is_symlink():
            resolved = item.resolve()
            if not resolved.is_relative_to(resolved_root):
                continue
        rel = item.relative_to(root).as_posix()
        if item.is_dir():
            if item.name.startswith(".") or item.name in skip_dirs:
                continue
            if gitignore_spec.match_file(rel + "/"):
                continue
            files.extend(
                _walk_files_inner(
                    item, root, skip_dirs, gitignore_spec,
                    resolved_root,
                )
            )
        elif item.is_file():
            if not gitignore_spec.match_file(rel):
                files.append(item)
    return files


def _load_gitignore(root: Path) -> pathspec.PathSpec:
    """Load .gitignore patterns using pathspec."""
    gitignore = root / ".gitignore"
    if not gitignore.exists():
        return pathspec.PathSpec.from_lines("gitignore", [])
    try:
        with open(gitignore, encoding="utf-8") as f:
            return pathspec.PathSpec.from_lines("gitignore", f)
    except OSError:
        return pathspec.PathSpec.from_lines("gitignore", [])
