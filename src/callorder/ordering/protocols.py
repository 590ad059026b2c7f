"""Protocol-based interfaces for resolved scopes.

Front ends satisfy these protocols structurally (no inheritance).
Test doubles can be plain classes matching the same attributes.
"""

from collections.abc import Hashable, Sequence
from typing import Protocol

from callorder.ordering.schemas import SourceSpan


class SyntaxNode(Protocol):
    @property
    def children(self) -> Sequence["SyntaxNode"]: ...


class Declaration(Protocol):
    @property
    def is_function(self) -> bool: ...


class FunctionDecl(Declaration, Protocol):
    @property
    def identity(self) -> Hashable: ...
    @property
    def name(self) -> str: ...
    @property
    def span(self) -> SourceSpan: ...
    @property
    def body(self) -> SyntaxNode | None: ...


class Scope(Protocol):
    """A flat list of declarations plus call resolution for their bodies."""

    @property
    def declarations(self) -> Sequence[Declaration]: ...
    def resolve_call(self, node: SyntaxNode) -> Hashable | None: ...
    def is_nested_declaration(self, node: SyntaxNode) -> bool: ...
