"""Extract the ordered sibling calls made by one function body."""

from __future__ import annotations

from collections.abc import Hashable, Set

from callorder.ordering.protocols import FunctionDecl, Scope, SyntaxNode


def extract_calls(
    function: FunctionDecl,
    siblings: Set[Hashable],
    scope: Scope,
) -> list[Hashable]:
    """Return distinct sibling callees in first-mention order.

    The body is walked pre-order, left to right, so an outer call is
    seen before the calls nested in its arguments. Calls that do not
    resolve, resolve outside ``siblings``, or target the function
    itself are ignored. Nested declarations are not entered.
    """
    body = function.body
    if body is None:
        return []

    caller = function.identity
    seen: set[Hashable] = set()
    callees: list[Hashable] = []

    stack: list[SyntaxNode] = [body]
    while stack:
        node = stack.pop()
        target = scope.resolve_call(node)
        if (
            target is not None
            and target != caller
            and target in siblings
            and target not in seen
        ):
            seen.add(target)
            callees.append(target)

        # Reversed so the leftmost child is popped first
        for child in reversed(node.children):
            if not scope.is_nested_declaration(child):
                stack.append(child)

    return callees
