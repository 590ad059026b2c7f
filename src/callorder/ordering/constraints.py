"""Fold per-caller call sequences into "declare before" constraints.

Two kinds of constraint are produced for each caller, in this order:

1. caller-before-callee: ``(caller, callee)`` for every callee;
2. sibling order: ``(callees[i], callees[j])`` for every ``i < j``.

Callers are folded in declaration order and a pair is dropped when its
reverse is already recorded, so the first caller to relate two
functions decides their direction. Contradictory or cyclic call graphs
are arbitrated this way rather than rejected.
"""

from __future__ import annotations

import functools
from collections.abc import Hashable, Iterable, Iterator, Sequence

CallSequence = tuple[Hashable, Sequence[Hashable]]


class ConstraintSet:
    """Directed pairs that never contain both ``(x, y)`` and ``(y, x)``.

    No transitive closure is computed: ``(a, b)`` and ``(b, c)`` do not
    imply ``(a, c)``.
    """

    def __init__(self) -> None:
        self._pairs: set[tuple[Hashable, Hashable]] = set()

    def add(self, before: Hashable, after: Hashable) -> bool:
        """Record ``(before, after)`` unless it is a self pair or reversed.

        Returns True when the pair was newly added.
        """
        if before == after:
            return False
        if (after, before) in self._pairs or (before, after) in self._pairs:
            return False
        self._pairs.add((before, after))
        return True

    def __contains__(self, pair: object) -> bool:
        return pair in self._pairs

    def __iter__(self) -> Iterator[tuple[Hashable, Hashable]]:
        return iter(self._pairs)

    def __len__(self) -> int:
        return len(self._pairs)

    def __repr__(self) -> str:
        return f"ConstraintSet({len(self._pairs)} pairs)"


def apply_caller_constraints(
    constraints: ConstraintSet,
    call_sequence: CallSequence,
) -> ConstraintSet:
    """Add one caller's constraints; returns the same set for folding."""
    caller, callees = call_sequence

    for callee in callees:
        constraints.add(caller, callee)

    for i, earlier in enumerate(callees):
        for later in callees[i + 1:]:
            constraints.add(earlier, later)

    return constraints


def build_constraints(
    call_sequences: Iterable[CallSequence],
) -> ConstraintSet:
    """Fold call sequences (in caller declaration order) into one set."""
    return functools.reduce(
        apply_caller_constraints, call_sequences, ConstraintSet()
    )
