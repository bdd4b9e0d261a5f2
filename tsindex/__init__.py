"""
tsindex - TypeScript Declaration Index

Indexes the exported declarations of a TypeScript source tree and answers
lookup, fuzzy search, hierarchy, statistics and dependency queries.
"""

from tsindex.ast.models import (
    DECLARATION_KINDS,
    ClassDecl,
    DependencyInfo,
    EnumDecl,
    ExtractedDeclaration,
    FunctionDecl,
    InterfaceDecl,
    LibraryStatistics,
    ModuleStatistics,
    NamespaceDecl,
    PropertyInfo,
    ReExportDecl,
    TypeAliasDecl,
    TypeHierarchy,
    TypeParameter,
    VariableDecl,
)
from tsindex.configs.settings import IndexConfig, load_config, resolve_source_root
from tsindex.ingest.corpus import CorpusIndex, build_corpus
from tsindex.query.engine import TypeIndex

__version__ = "0.1.0"

__all__ = [
    "TypeIndex",
    "CorpusIndex",
    "build_corpus",
    "IndexConfig",
    "load_config",
    "resolve_source_root",
    "DECLARATION_KINDS",
    "ExtractedDeclaration",
    "InterfaceDecl",
    "TypeAliasDecl",
    "EnumDecl",
    "FunctionDecl",
    "ClassDecl",
    "VariableDecl",
    "NamespaceDecl",
    "ReExportDecl",
    "PropertyInfo",
    "TypeParameter",
    "TypeHierarchy",
    "ModuleStatistics",
    "LibraryStatistics",
    "DependencyInfo",
]
