"""
Exact Lookup and Filters

Name lookup plus the module and kind filters over an index.
"""

from typing import Iterable, Optional

from tsindex.ast.models import DECLARATION_KINDS, ExtractedDeclaration
from tsindex.exceptions import InvalidKindError


def search_declaration(
    declarations: Iterable[ExtractedDeclaration],
    name: str,
) -> Optional[ExtractedDeclaration]:
    """
    Find a declaration by name, case-insensitively.

    An exact name match wins; otherwise the first declaration whose name
    contains the query is returned.

    Returns:
        The matching declaration, or None
    """
    declarations = list(declarations)
    query = name.lower()

    for decl in declarations:
        if decl.name.lower() == query:
            return decl

    for decl in declarations:
        if query in decl.name.lower():
            return decl

    return None


def filter_by_module(
    declarations: Iterable[ExtractedDeclaration],
    module: str,
) -> list[ExtractedDeclaration]:
    """Declarations whose module equals `module` (any case) or whose file path contains it."""
    query = module.lower()
    return [
        decl
        for decl in declarations
        if decl.module.lower() == query or query in decl.file.lower()
    ]


def validate_kind(kind: str) -> str:
    """Raise InvalidKindError unless kind is one of DECLARATION_KINDS."""
    if kind not in DECLARATION_KINDS:
        raise InvalidKindError(kind, DECLARATION_KINDS)
    return kind


def filter_by_kind(
    declarations: Iterable[ExtractedDeclaration],
    kind: str,
) -> list[ExtractedDeclaration]:
    """Declarations of exactly the given kind."""
    validate_kind(kind)
    return [decl for decl in declarations if decl.kind == kind]
