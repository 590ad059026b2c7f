"""Environment-based configuration and language tables."""

from __future__ import annotations

import logging
from typing import Annotated, Any

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode

logger = logging.getLogger(__name__)

# File extension → language name mapping
EXTENSION_MAP: dict[str, str] = {
    # Python
    ".py": "python",
    ".pyi": "python",
    ".pyw": "python",
    # JavaScript
    ".js": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
    ".jsx": "javascript",
    # TypeScript
    ".ts": "typescript",
    ".mts": "typescript",
    ".cts": "typescript",
    # Go
    ".go": "go",
    # Rust
    ".rs": "rust",
    # C
    ".c": "c",
    ".h": "c",
}

# Language → "module" or "module:factory" for tree-sitter grammars.
# The factory defaults to ``language``.
GRAMMAR_MODULES: dict[str, str] = {
    "python": "tree_sitter_python",
    "javascript": "tree_sitter_javascript",
    "typescript": "tree_sitter_typescript:language_typescript",
    "go": "tree_sitter_go",
    "rust": "tree_sitter_rust",
    "c": "tree_sitter_c",
}

SUPPORTED_LANGUAGES: tuple[str, ...] = tuple(GRAMMAR_MODULES)


class Settings(BaseSettings):
    """Reads from .env file and CALLORDER_* environment variables."""

    # Logging
    log_level: str = "WARNING"

    # Checking
    max_concurrency: int = 4
    languages: Annotated[list[str], NoDecode] = list(SUPPORTED_LANGUAGES)

    # Discovery
    skip_directories: list[str] = [
        "node_modules",
        "vendor",
        ".venv",
        "venv",
        "__pycache__",
        "build",
        "dist",
        "target",
        ".git",
        ".svn",
        ".hg",
    ]

    @field_validator("languages", mode="before")
    @classmethod
    def _parse_languages(cls, v: Any) -> Any:
        """Accept comma-separated string or JSON array."""
        if isinstance(v, str):
            return [s.strip().lower() for s in v.split(",") if s.strip()]
        return v

    @field_validator("languages")
    @classmethod
    def _validate_languages(cls, v: list[str]) -> list[str]:
        if not v:
            raise ValueError("languages must contain at least one language")
        unknown = [lang for lang in v if lang not in GRAMMAR_MODULES]
        if unknown:
            raise ValueError(
                f"unsupported languages: {', '.join(unknown)} "
                f"(supported: {', '.join(SUPPORTED_LANGUAGES)})"
            )
        seen: set[str] = set()
        dupes: list[str] = []
        for lang in v:
            if lang in seen:
                dupes.append(lang)
            seen.add(lang)
        if dupes:
            logger.warning(
                "Duplicate languages in CALLORDER_LANGUAGES: %s",
                ", ".join(dupes),
            )
        return v

    @field_validator("max_concurrency")
    @classmethod
    def _validate_concurrency(cls, v: int) -> int:
        if v < 1:
            raise ValueError("max_concurrency must be at least 1")
        return v

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "CALLORDER_",
        "extra": "ignore",
    }
