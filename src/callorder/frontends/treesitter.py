"""Turn tree-sitter syntax trees into resolved scopes."""

from __future__ import annotations

import importlib
import logging
import threading
from dataclasses import dataclass, field

import tree_sitter

from callorder.config import GRAMMAR_MODULES
from callorder.ordering.schemas import SourceSpan

logger = logging.getLogger(__name__)

# Function declarations that are members of a scope, per language.
_FUNCTION_NODE_TYPES: dict[str, set[str]] = {
    "python": {"function_definition"},
    "javascript": {"function_declaration", "generator_function_declaration"},
    "typescript": {"function_declaration", "generator_function_declaration"},
    "go": {"function_declaration"},
    "rust": {"function_item"},
    "c": {"function_definition"},
}

# Wrappers around a declaration (decorators, exports).
_WRAPPER_NODE_TYPES: dict[str, set[str]] = {
    "python": {"decorated_definition"},
    "javascript": {"export_statement"},
    "typescript": {"export_statement"},
}

# Call expression node types per language
_CALL_NODE_TYPES: dict[str, set[str]] = {
    "python": {"call"},
    "javascript": {"call_expression"},
    "typescript": {"call_expression"},
    "go": {"call_expression"},
    "rust": {"call_expression"},
    "c": {"call_expression"},
}

# Declarations nested in a body; their contents are not walked.
_NESTED_DECLARATION_TYPES: dict[str, set[str]] = {
    "python": {"function_definition", "class_definition", "decorated_definition"},
    "javascript": {
        "function_declaration",
        "generator_function_declaration",
        "class_declaration",
    },
    "typescript": {
        "function_declaration",
        "generator_function_declaration",
        "class_declaration",
    },
    "go": {"function_declaration", "method_declaration"},
    "rust": {"function_item", "impl_item", "trait_item", "mod_item"},
    "c": {"function_definition"},
}


@dataclass(frozen=True)
class FunctionKey:
    """Identity of a function: its scope path and name."""

    scope: str
    name: str

    def __str__(self) -> str:
        return f"{self.scope}::{self.name}" if self.scope else self.name


@dataclass
class SourceFunction:
    """A function declared directly in a scope."""

    identity: FunctionKey
    name: str
    span: SourceSpan
    body: tree_sitter.Node | None
    is_function: bool = True


@dataclass
class OtherDeclaration:
    """Any non-function item; never assigned a position."""

    kind: str
    is_function: bool = False


@dataclass
class SourceScope:
    """One module-level scope of a parsed file.

    ``path`` is empty for the file itself and ``a::b`` for inline
    Rust modules.
    """

    path: str
    language: str
    file_path: str
    declarations: list[SourceFunction | OtherDeclaration] = field(
        default_factory=lambda: list[SourceFunction | OtherDeclaration]()
    )
    _by_name: dict[str, FunctionKey] = field(
        default_factory=lambda: dict[str, FunctionKey](), repr=False
    )

    def add_function(
        self,
        name: str,
        node: tree_sitter.Node,
        body: tree_sitter.Node | None,
    ) -> None:
        if name in self._by_name:
            logger.debug(
                "%s: duplicate function %s at line %d ignored",
                self.file_path,
                name,
                node.start_point[0] + 1,
            )
            self.declarations.append(OtherDeclaration(kind="duplicate"))
            return
        key = FunctionKey(scope=self.path, name=name)
        self._by_name[name] = key
        self.declarations.append(
            SourceFunction(
                identity=key,
                name=name,
                span=_span(node, self.file_path),
                body=body,
            )
        )

    def resolve_call(self, node: tree_sitter.Node) -> FunctionKey | None:
        """Resolve a bare-identifier call to a sibling by name."""
        if self.language == "rust" and node.type == "identifier":
            callee = _get_macro_argument_callee(node)
        elif node.type in _CALL_NODE_TYPES.get(self.language, set()):
            callee = _get_callee_name(node)
        else:
            return None
        if callee is None:
            return None
        return self._by_name.get(callee)

    def is_nested_declaration(self, node: tree_sitter.Node) -> bool:
        return node.type in _NESTED_DECLARATION_TYPES.get(self.language, set())


def parse_scopes(
    source: bytes,
    language: str,
    file_path: str,
) -> list[SourceScope]:
    """Parse ``source`` and return its scopes, outermost first.

    Languages without a loadable grammar produce no scopes.
    """
    parser = _get_parser(language)
    if parser is None:
        logger.info("No grammar for %s, skipping %s", language, file_path)
        return []

    tree = parser.parse(source)
    scopes: list[SourceScope] = []
    _collect_scope(tree.root_node, "", language, file_path, scopes)
    return scopes


def _collect_scope(
    container: tree_sitter.Node,
    path: str,
    language: str,
    file_path: str,
    scopes: list[SourceScope],
) -> None:
    """Build the scope for ``container`` and recurse into inline modules."""
    scope = SourceScope(path=path, language=language, file_path=file_path)
    scopes.append(scope)
    function_types = _FUNCTION_NODE_TYPES.get(language, set())
    wrapper_types = _WRAPPER_NODE_TYPES.get(language, set())

    for child in container.named_children:
        decl = child
        if child.type in wrapper_types:
            decl = _unwrap(child, function_types) or child

        if decl.type in function_types:
            name = _get_name(decl)
            if name is not None:
                scope.add_function(
                    name, child, decl.child_by_field_name("body")
                )
                continue

        scope.declarations.append(OtherDeclaration(kind=child.type))

        if language == "rust" and child.type == "mod_item":
            body = child.child_by_field_name("body")
            name = _get_name(child)
            if body is not None and name is not None:
                inner = f"{path}::{name}" if path else name
                _collect_scope(body, inner, language, file_path, scopes)


def _unwrap(
    node: tree_sitter.Node, function_types: set[str]
) -> tree_sitter.Node | None:
    """Return the function inside a decorator/export wrapper, if any."""
    for child in node.named_children:
        if child.type in function_types:
            return child
    return None


def _get_name(node: tree_sitter.Node) -> str | None:
    """Extract the declared name, following C declarator chains."""
    name_node = node.child_by_field_name("name")
    if name_node is not None:
        return _text(name_node)

    declarator = node.child_by_field_name("declarator")
    while declarator is not None:
        if declarator.type == "identifier":
            return _text(declarator)
        declarator = declarator.child_by_field_name("declarator")
    return None


def _get_callee_name(node: tree_sitter.Node) -> str | None:
    """Return the callee for ``foo()`` style calls, else None.

    Method calls (``obj.foo()``) and qualified paths (``a::foo()``)
    never name a sibling.
    """
    func_node = node.child_by_field_name("function")
    if func_node is None:
        if not node.children:
            return None
        func_node = node.children[0]

    # Rust turbofish: foo::<T>()
    if func_node.type == "generic_function":
        inner = func_node.child_by_field_name("function")
        if inner is None:
            return None
        func_node = inner

    if func_node.type == "identifier":
        return _text(func_node)
    return None


def _get_macro_argument_callee(node: tree_sitter.Node) -> str | None:
    """Return ``foo`` for a ``foo(...)`` call inside Rust macro arguments.

    Macro arguments are an unparsed ``token_tree``: a call shows up as an
    identifier immediately followed by a parenthesised token tree. The
    macro name itself (``name!``), ``x.foo(...)`` and ``a::foo(...)``
    are not calls of a sibling.
    """
    parent = node.parent
    if parent is None or parent.type != "token_tree":
        return None

    args = node.next_sibling
    if args is None or args.type != "token_tree":
        return None
    if not args.children or args.children[0].type != "(":
        return None

    prev = node.prev_sibling
    if prev is not None and prev.type in (".", "::"):
        return None
    return _text(node)


def _text(node: tree_sitter.Node) -> str | None:
    return node.text.decode("utf-8") if node.text else None


def _span(node: tree_sitter.Node, file_path: str) -> SourceSpan:
    return SourceSpan(
        file=file_path,
        line_start=node.start_point[0] + 1,
        col_start=node.start_point[1] + 1,
        line_end=node.end_point[0] + 1,
        col_end=node.end_point[1] + 1,
    )


# ---------------------------------------------------------------------------
# Parser cache
# ---------------------------------------------------------------------------

# Parsers are not safe to share across threads, so each thread keeps its own.
_local = threading.local()


def _get_parser(language: str) -> tree_sitter.Parser | None:
    """Get or create a cached tree-sitter parser for this thread."""
    cache: dict[str, tree_sitter.Parser] = getattr(_local, "parsers", None) or {}
    _local.parsers = cache
    if language in cache:
        return cache[language]

    grammar = GRAMMAR_MODULES.get(language)
    if grammar is None:
        return None
    module_name, _, factory = grammar.partition(":")

    try:
        mod = importlib.import_module(module_name)
        capsule: object = getattr(mod, factory or "language")()
        lang = tree_sitter.Language(capsule)
        parser = tree_sitter.Parser(lang)
        cache[language] = parser
        return parser
    except (ImportError, AttributeError):
        return None
