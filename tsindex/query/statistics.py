"""
Index Statistics and Dependencies

Aggregations over the whole index: per-kind and per-module counts, and the
exports and re-export sources of each module.
"""

from typing import Iterable

from tsindex.ast.models import (
    DECLARATION_KINDS,
    DependencyInfo,
    ExtractedDeclaration,
    LibraryStatistics,
    ModuleStatistics,
    ReExportDecl,
)
from tsindex.configs.constants import TOP_LIST_LIMIT

# Kind -> ModuleStatistics counter attribute
_KIND_COUNTERS = {
    "interface": "interfaces",
    "type": "types",
    "enum": "enums",
    "function": "functions",
    "class": "classes",
    "variable": "variables",
    "namespace": "namespaces",
    "re-export": "re_exports",
}


def compute_statistics(declarations: Iterable[ExtractedDeclaration]) -> LibraryStatistics:
    """
    Count declarations by kind and by module.

    byModule is sorted by descending total; modules with equal totals keep
    the order in which they first appear. The top lists are the first
    TOP_LIST_LIMIT names of each kind in index order, not a ranking.
    """
    declarations = list(declarations)

    by_kind = {kind: 0 for kind in DECLARATION_KINDS}
    modules: dict[str, ModuleStatistics] = {}

    for decl in declarations:
        by_kind[decl.kind] += 1

        stats = modules.get(decl.module)
        if stats is None:
            stats = ModuleStatistics(module=decl.module)
            modules[decl.module] = stats
        counter = _KIND_COUNTERS[decl.kind]
        setattr(stats, counter, getattr(stats, counter) + 1)
        stats.total += 1

    by_module = sorted(modules.values(), key=lambda m: m.total, reverse=True)

    def first_names(kind: str) -> list[str]:
        return [d.name for d in declarations if d.kind == kind][:TOP_LIST_LIMIT]

    return LibraryStatistics(
        total_declarations=len(declarations),
        by_kind=by_kind,
        by_module=by_module,
        top_interfaces=first_names("interface"),
        top_types=first_names("type"),
        top_functions=first_names("function"),
    )


def analyze_dependencies(declarations: Iterable[ExtractedDeclaration]) -> list[DependencyInfo]:
    """
    Exports and re-export sources per module, modules in first-seen order.

    Import edges are not computed; only outward exports and re-export
    specifiers are aggregated.
    """
    modules: dict[str, DependencyInfo] = {}

    for decl in declarations:
        info = modules.get(decl.module)
        if info is None:
            info = DependencyInfo(module=decl.module)
            modules[decl.module] = info
        info.exports.append(decl.name)
        if isinstance(decl, ReExportDecl) and decl.re_export_source:
            info.re_exports_from.append(decl.re_export_source)

    return list(modules.values())
