"""Compare constraints with declaration positions and pick what to report."""

from __future__ import annotations

from collections.abc import Hashable, Iterable, Mapping

from callorder.ordering.schemas import FunctionMeta, Violation


def select_violations(
    constraints: Iterable[tuple[Hashable, Hashable]],
    metadata: Mapping[Hashable, FunctionMeta],
) -> list[Violation]:
    """Return at most one violation per offending function.

    Candidates are sorted by ``before_position``, then
    ``after_position``, then ``before_name``; the first candidate for a
    given ``before`` is reported and the rest are suppressed.
    """
    candidates = find_violations(constraints, metadata)
    candidates.sort(key=_sort_key)

    warned: set[Hashable] = set()
    selected: list[Violation] = []
    for violation in candidates:
        if violation.before in warned:
            continue
        warned.add(violation.before)
        selected.append(violation)
    return selected


def find_violations(
    constraints: Iterable[tuple[Hashable, Hashable]],
    metadata: Mapping[Hashable, FunctionMeta],
) -> list[Violation]:
    """Every constraint whose ``before`` is declared after its ``after``.

    Pairs naming an identity without metadata are skipped.
    """
    found: list[Violation] = []
    for before, after in constraints:
        before_meta = metadata.get(before)
        after_meta = metadata.get(after)
        if before_meta is None or after_meta is None:
            continue
        if before_meta.position <= after_meta.position:
            continue
        found.append(
            Violation(
                before=before,
                after=after,
                before_position=before_meta.position,
                after_position=after_meta.position,
                before_name=before_meta.name,
                after_name=after_meta.name,
                before_span=before_meta.span,
            )
        )
    return found


def _sort_key(violation: Violation) -> tuple[int, int, str]:
    return (
        violation.before_position,
        violation.after_position,
        violation.before_name,
    )
