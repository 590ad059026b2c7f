"""Pydantic models for the source discovery flow."""

from pathlib import Path

from pydantic import BaseModel


class SourceFile(BaseModel):
    """A file selected for checking."""

    path: Path
    language: str
    display_path: str
