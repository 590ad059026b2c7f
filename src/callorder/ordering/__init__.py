"""Ordering analysis: callers before callees, callees in call order."""

from callorder.ordering.analyzer import analyze
from callorder.ordering.constraints import (
    ConstraintSet,
    apply_caller_constraints,
    build_constraints,
)
from callorder.ordering.schemas import FunctionMeta, SourceSpan, Violation

__all__ = [
    "ConstraintSet",
    "FunctionMeta",
    "SourceSpan",
    "Violation",
    "analyze",
    "apply_caller_constraints",
    "build_constraints",
]
