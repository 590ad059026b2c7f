"""End-to-end tests for analyze() over fake scopes."""

from __future__ import annotations

import logging
import random

import pytest

from callorder.ordering import analyze
from callorder.ordering.fakes import (
    FakeFunction,
    FakeOther,
    FakeScope,
    calls,
    fake_scope,
)


def _pairs(scope: FakeScope) -> list[tuple[str, str]]:
    return [(v.before_name, v.after_name) for v in analyze(scope)]


class TestScenarios:
    def test_caller_before_callee_is_clean(self) -> None:
        scope = fake_scope(("foo", ["bar"]), ("bar", []))
        assert analyze(scope) == []

    def test_caller_after_callee_reported(self) -> None:
        scope = fake_scope(("bar", []), ("foo", ["bar"]))
        [v] = analyze(scope)

        assert (v.before_name, v.after_name) == ("foo", "bar")
        assert v.before_position == 1
        assert v.after_position == 0
        assert v.before_span.line_start == 2

    def test_helpers_before_main(self) -> None:
        """main calls helper1 then helper2, both declared above it."""
        scope = fake_scope(
            ("helper2", []),
            ("helper1", []),
            ("main", ["helper1", "helper2"]),
        )
        assert _pairs(scope) == [
            ("helper1", "helper2"),
            ("main", "helper2"),
        ]

    def test_unrelated_functions_never_reported(self) -> None:
        assert analyze(fake_scope(("b", []), ("a", []))) == []
        assert analyze(fake_scope(("a", []), ("b", []))) == []


class TestConflictResolution:
    def test_first_caller_decides_sibling_order(self) -> None:
        """A calls X, Y and B calls Y, X; X declared before Y is fine."""
        scope = fake_scope(
            ("A", ["X", "Y"]),
            ("B", ["Y", "X"]),
            ("X", []),
            ("Y", []),
        )
        assert analyze(scope) == []

    def test_first_caller_order_enforced(self) -> None:
        scope = fake_scope(
            ("A", ["X", "Y"]),
            ("B", ["Y", "X"]),
            ("Y", []),
            ("X", []),
        )
        assert _pairs(scope) == [("X", "Y")]

    def test_mutual_recursion_is_clean(self) -> None:
        assert analyze(fake_scope(("foo", ["bar"]), ("bar", ["foo"]))) == []

    def test_self_recursion_is_clean(self) -> None:
        assert analyze(fake_scope(("loop", ["loop"]), ("other", []))) == []


def test_non_function_declarations_ignored() -> None:
    scope = FakeScope(
        declarations=[
            FakeOther("CONST"),
            FakeFunction("helper", line=3),
            FakeOther("Type"),
            FakeFunction("main", body=calls("helper", "print"), line=7),
        ]
    )
    [v] = analyze(scope)
    assert v.before_position == 1
    assert v.after_position == 0


def test_debug_log_summarizes_scope(caplog: pytest.LogCaptureFixture) -> None:
    scope = fake_scope(("bar", []), ("foo", ["bar"]))
    with caplog.at_level(logging.DEBUG, logger="callorder.ordering.analyzer"):
        analyze(scope)
    assert "2 functions" in caplog.text
    assert "1 violations" in caplog.text


# ---------------------------------------------------------------------------
# Properties over generated scopes
# ---------------------------------------------------------------------------


def _random_scope(seed: int) -> FakeScope:
    rng = random.Random(seed)
    names = [f"f{i}" for i in range(rng.randint(0, 8))]
    rng.shuffle(names)
    pool = names + ["external"]
    functions = [
        (name, rng.sample(pool, rng.randint(0, min(4, len(pool)))))
        for name in names
    ]
    return fake_scope(*functions)


@pytest.mark.parametrize("seed", range(40))
def test_at_most_one_violation_per_function(seed: int) -> None:
    scope = _random_scope(seed)
    violations = analyze(scope)

    offenders = [v.before for v in violations]
    assert len(offenders) == len(set(offenders))
    assert len(violations) <= len(scope.declarations)


@pytest.mark.parametrize("seed", range(40))
def test_repeated_runs_are_identical(seed: int) -> None:
    scope = _random_scope(seed)
    assert analyze(scope) == analyze(scope)


@pytest.mark.parametrize("seed", range(40))
def test_output_sorted_by_positions(seed: int) -> None:
    violations = analyze(_random_scope(seed))
    keys = [(v.before_position, v.after_position) for v in violations]
    assert keys == sorted(keys)
    for v in violations:
        assert v.before_position > v.after_position


@pytest.mark.parametrize("count", [0, 1])
def test_fewer_than_two_functions_is_conformant(count: int) -> None:
    scope = fake_scope(*[("solo", ["solo", "other"])][:count])
    assert analyze(scope) == []
