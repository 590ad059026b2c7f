"""Run the ordering check over one scope."""

from __future__ import annotations

import logging

from callorder.ordering.call_extractor import extract_calls
from callorder.ordering.constraints import CallSequence, build_constraints
from callorder.ordering.protocols import Scope
from callorder.ordering.schemas import Violation
from callorder.ordering.scope_collector import collect_scope
from callorder.ordering.violations import select_violations

logger = logging.getLogger(__name__)


def analyze(scope: Scope) -> list[Violation]:
    """Return ordering violations for one scope, deterministically sorted.

    Pipeline: collect functions → extract each caller's sibling calls
    (in declaration order) → fold constraints → select violations.
    Scopes with fewer than two functions are conformant.
    """
    collected = collect_scope(scope)
    if collected.is_trivial:
        return []

    siblings = frozenset(collected.order)
    call_sequences: list[CallSequence] = [
        (fn.identity, extract_calls(fn, siblings, scope))
        for fn in collected.functions
    ]
    constraints = build_constraints(call_sequences)
    violations = select_violations(constraints, collected.metadata)

    logger.debug(
        "Scope with %d functions: %d constraints, %d violations",
        len(collected.order),
        len(constraints),
        len(violations),
    )
    return violations
