"""Record each function's identity, position and span in one pass."""

from __future__ import annotations

import logging
from collections.abc import Hashable
from dataclasses import dataclass, field
from typing import cast

from callorder.ordering.protocols import FunctionDecl, Scope
from callorder.ordering.schemas import FunctionMeta

logger = logging.getLogger(__name__)


@dataclass
class CollectedScope:
    """Declaration order plus metadata for every function in a scope."""

    order: list[Hashable] = field(default_factory=lambda: list[Hashable]())
    metadata: dict[Hashable, FunctionMeta] = field(
        default_factory=lambda: dict[Hashable, FunctionMeta]()
    )
    functions: list[FunctionDecl] = field(
        default_factory=lambda: list[FunctionDecl]()
    )

    @property
    def is_trivial(self) -> bool:
        """Fewer than two functions: no constraint can exist."""
        return len(self.order) < 2


def collect_scope(scope: Scope) -> CollectedScope:
    """Enumerate function declarations in source order.

    Non-function declarations are skipped without consuming a
    position, so positions are dense over functions only.
    """
    collected = CollectedScope()

    for decl in scope.declarations:
        if not decl.is_function:
            continue
        fn = cast(FunctionDecl, decl)
        if fn.identity in collected.metadata:
            logger.debug("Skipping repeated identity %r", fn.identity)
            continue

        collected.metadata[fn.identity] = FunctionMeta(
            name=fn.name,
            position=len(collected.order),
            span=fn.span,
        )
        collected.order.append(fn.identity)
        collected.functions.append(fn)

    return collected
