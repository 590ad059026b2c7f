"""Pydantic models for ordering analysis output."""

from collections.abc import Hashable

from pydantic import BaseModel


class SourceSpan(BaseModel):
    """A source location range (1-based lines and columns)."""

    file: str
    line_start: int
    col_start: int
    line_end: int
    col_end: int

    model_config = {"frozen": True}


class FunctionMeta(BaseModel):
    """Per-function facts recorded once by the scope collector."""

    name: str
    position: int  # zero-based, dense over functions only
    span: SourceSpan

    model_config = {"frozen": True}


class Violation(BaseModel):
    """A constraint ``(before, after)`` inverted by actual placement."""

    before: Hashable
    after: Hashable
    before_position: int
    after_position: int
    before_name: str
    after_name: str
    before_span: SourceSpan

    model_config = {"frozen": True}

    @property
    def offending_pair(self) -> tuple[Hashable, Hashable]:
        return self.before, self.after
