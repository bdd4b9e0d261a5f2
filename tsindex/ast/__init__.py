"""
AST-Based Declaration Extraction

Tree-sitter based extraction of the exported declarations of TypeScript
source files into normalized, queryable records.
"""

from tsindex.ast.models import (
    DECLARATION_KINDS,
    DECLARATION_TYPES,
    ClassDecl,
    DependencyInfo,
    EnumDecl,
    ExtractedDeclaration,
    FunctionDecl,
    InterfaceDecl,
    LibraryStatistics,
    ModuleStatistics,
    NamespaceDecl,
    ParameterInfo,
    PropertyInfo,
    ReExportDecl,
    TypeAliasDecl,
    TypeHierarchy,
    TypeParameter,
    VariableDecl,
)
from tsindex.ast.parser import ASTParser, get_parser
from tsindex.ast.jsdoc import DocExtractor, extract_jsdoc
from tsindex.ast.extractors import TypeScriptExtractor, get_extractor

__all__ = [
    # Models
    "DECLARATION_KINDS",
    "DECLARATION_TYPES",
    "ExtractedDeclaration",
    "InterfaceDecl",
    "TypeAliasDecl",
    "EnumDecl",
    "FunctionDecl",
    "ClassDecl",
    "VariableDecl",
    "NamespaceDecl",
    "ReExportDecl",
    "ParameterInfo",
    "PropertyInfo",
    "TypeParameter",
    "TypeHierarchy",
    "ModuleStatistics",
    "LibraryStatistics",
    "DependencyInfo",
    # Parser
    "ASTParser",
    "get_parser",
    # Extraction
    "DocExtractor",
    "extract_jsdoc",
    "TypeScriptExtractor",
    "get_extractor",
]
