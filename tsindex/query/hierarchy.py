"""
Type Hierarchy

Infers the extends/implements neighbourhood of a declaration from the raw
supertype text recorded on each declaration.

Children are found by substring containment: a declaration is a child of
`Base` when any of its extends/implements entries contains the text `Base`.
This is a textual approximation. It catches generic instantiations such as
`Base<string>`, but also over-matches: `Base` is "contained" in
`DatabaseRow`, and aliased imports are missed entirely.

The queried declaration is never its own child, even when one of its own
supertypes mentions its name. A child is listed once even if both its
extends and implements entries match.
"""

from typing import Iterable, Optional

from tsindex.ast.models import ExtractedDeclaration, TypeHierarchy


def supertypes(decl: ExtractedDeclaration) -> list[str]:
    """extends followed by implements, for kinds that have them."""
    parents = list(getattr(decl, "extends", None) or [])
    parents.extend(getattr(decl, "implements", None) or [])
    return parents


def find_hierarchy(
    declarations: Iterable[ExtractedDeclaration],
    name: str,
) -> Optional[TypeHierarchy]:
    """
    Build the hierarchy of the declaration named `name` (case-insensitive).

    Args:
        declarations: Declarations in index order
        name: Declaration name to look up

    Returns:
        TypeHierarchy, or None when no declaration has that name
    """
    declarations = list(declarations)
    query = name.lower()

    target = next((d for d in declarations if d.name.lower() == query), None)
    if target is None:
        return None

    children = []
    for decl in declarations:
        if decl is target:
            continue
        if any(target.name in parent for parent in supertypes(decl)):
            children.append(decl.name)

    return TypeHierarchy(declaration=target, parents=supertypes(target), children=children)
