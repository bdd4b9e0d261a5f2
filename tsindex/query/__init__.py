"""
Declaration Queries

Lookup, fuzzy ranking, hierarchy inference, statistics and dependency
aggregation over a built index.
"""

from tsindex.query.engine import TypeIndex
from tsindex.query.fuzzy import fuzzy_search, score_declaration
from tsindex.query.hierarchy import find_hierarchy
from tsindex.query.lookup import filter_by_kind, filter_by_module, search_declaration, validate_kind
from tsindex.query.statistics import analyze_dependencies, compute_statistics

__all__ = [
    "TypeIndex",
    "fuzzy_search",
    "score_declaration",
    "find_hierarchy",
    "search_declaration",
    "filter_by_module",
    "filter_by_kind",
    "validate_kind",
    "compute_statistics",
    "analyze_dependencies",
]
