"""Tests for the call extractor."""

from __future__ import annotations

from callorder.ordering.call_extractor import extract_calls
from callorder.ordering.fakes import FakeFunction, FakeNode, FakeScope, calls

SIBLINGS = frozenset({"main", "a", "b", "c", "d"})


def _extract(body: FakeNode | None) -> list[object]:
    fn = FakeFunction("main", body=body)
    return extract_calls(fn, SIBLINGS, FakeScope(declarations=[fn]))


def test_flat_calls_in_order() -> None:
    assert _extract(calls("c", "a", "b")) == ["c", "a", "b"]


def test_only_first_occurrence_counts() -> None:
    assert _extract(calls("b", "a", "b", "a", "c")) == ["b", "a", "c"]


def test_foreign_and_unresolved_calls_ignored() -> None:
    """Calls outside the sibling set never enter the sequence."""
    body = FakeNode(
        children=[
            FakeNode(call_target="os.getcwd"),
            FakeNode(call_target=None),
            FakeNode(call_target="a"),
            FakeNode(call_target="print"),
        ]
    )
    assert _extract(body) == ["a"]


def test_self_call_dropped() -> None:
    assert _extract(calls("main", "a", "main")) == ["a"]


def test_missing_body_yields_nothing() -> None:
    assert _extract(None) == []


def test_outer_call_precedes_nested_argument_calls() -> None:
    """``a(b(c()))`` followed by ``d()`` is discovered as a, b, c, d."""
    body = FakeNode(
        children=[
            FakeNode(
                call_target="a",
                children=[
                    FakeNode(
                        call_target="b",
                        children=[FakeNode(call_target="c")],
                    )
                ],
            ),
            FakeNode(call_target="d"),
        ]
    )
    assert _extract(body) == ["a", "b", "c", "d"]


def test_deep_calls_found_left_to_right() -> None:
    """A call buried in an earlier statement beats a later shallow one."""
    body = FakeNode(
        children=[
            FakeNode(
                children=[
                    FakeNode(children=[FakeNode(call_target="c")]),
                ]
            ),
            FakeNode(call_target="a"),
        ]
    )
    assert _extract(body) == ["c", "a"]


def test_nested_declarations_not_entered() -> None:
    body = FakeNode(
        children=[
            FakeNode(nested=True, children=[FakeNode(call_target="b")]),
            FakeNode(call_target="a"),
        ]
    )
    assert _extract(body) == ["a"]


def test_deeply_nested_body_does_not_recurse() -> None:
    node = FakeNode(call_target="a")
    for _ in range(5000):
        node = FakeNode(children=[node])
    assert _extract(node) == ["a"]
