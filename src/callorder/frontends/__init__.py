"""Front ends: parse source files into resolved scopes."""

from callorder.frontends.treesitter import (
    FunctionKey,
    OtherDeclaration,
    SourceFunction,
    SourceScope,
    parse_scopes,
)

__all__ = [
    "FunctionKey",
    "OtherDeclaration",
    "SourceFunction",
    "SourceScope",
    "parse_scopes",
]
