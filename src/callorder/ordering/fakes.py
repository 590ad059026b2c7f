"""In-memory fake scopes for testing.

Plain-object implementations of the scope protocols. Identities are
the function names; no parser, no I/O.
"""

from __future__ import annotations

from collections.abc import Hashable, Sequence
from dataclasses import dataclass, field

from callorder.ordering.schemas import SourceSpan


@dataclass
class FakeNode:
    """A syntax node; ``call_target`` marks it as a resolved call."""

    children: list[FakeNode] = field(default_factory=lambda: list[FakeNode]())
    call_target: Hashable | None = None
    nested: bool = False


@dataclass
class FakeFunction:
    name: str
    body: FakeNode | None = None
    line: int = 1
    is_function: bool = True

    @property
    def identity(self) -> Hashable:
        return self.name

    @property
    def span(self) -> SourceSpan:
        return SourceSpan(
            file="fake.py",
            line_start=self.line,
            col_start=1,
            line_end=self.line,
            col_end=1,
        )


@dataclass
class FakeOther:
    """A non-function declaration (constant, type, import...)."""

    name: str
    is_function: bool = False


@dataclass
class FakeScope:
    declarations: list[FakeFunction | FakeOther] = field(
        default_factory=lambda: list[FakeFunction | FakeOther]()
    )

    def resolve_call(self, node: FakeNode) -> Hashable | None:
        return node.call_target

    def is_nested_declaration(self, node: FakeNode) -> bool:
        return node.nested


def calls(*targets: Hashable) -> FakeNode:
    """A flat body calling ``targets`` left to right."""
    return FakeNode(children=[FakeNode(call_target=t) for t in targets])


def fake_scope(*functions: tuple[str, Sequence[Hashable]]) -> FakeScope:
    """Build a scope from ``(name, callees)`` tuples in declaration order."""
    return FakeScope(
        declarations=[
            FakeFunction(name=name, body=calls(*callees), line=i + 1)
            for i, (name, callees) in enumerate(functions)
        ]
    )
