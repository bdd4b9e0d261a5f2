"""
Base Extractor Interface

Abstract base class that declaration extractors implement, plus the
tree-walking helpers they share.
"""

from abc import ABC, abstractmethod
from typing import Optional

from tree_sitter import Node, Tree

from tsindex.ast.models import ExtractedDeclaration


class LanguageExtractor(ABC):
    """
    Abstract base class for declaration extractors.

    An extractor turns one parsed source file into the normalized
    ExtractedDeclaration records of its exported surface.
    """

    @property
    @abstractmethod
    def language(self) -> str:
        """Return the language name (e.g., 'typescript')."""
        pass

    @property
    def dialects(self) -> tuple[str, ...]:
        """Parser dialects this extractor handles. Defaults to the language itself."""
        return (self.language,)

    @abstractmethod
    def extract_declarations(
        self,
        tree: Tree,
        source: bytes,
        file_path: str,
        module: str,
    ) -> list[ExtractedDeclaration]:
        """
        Extract one record per exported declaration from the AST.

        Args:
            tree: Parsed AST tree
            source: Original source code as bytes
            file_path: Path relative to the source root (forward slashes)
            module: Module the file belongs to

        Returns:
            List of ExtractedDeclaration records
        """
        pass

    # Helper methods for AST traversal

    def get_node_text(self, node: Node, source: bytes) -> str:
        """Extract the text content of an AST node."""
        return source[node.start_byte:node.end_byte].decode("utf-8", errors="replace")

    def find_children(self, node: Node, type_name: str) -> list[Node]:
        """Find all direct children of a specific type."""
        return [child for child in node.children if child.type == type_name]

    def find_child(self, node: Node, type_name: str) -> Optional[Node]:
        """Find the first direct child of a specific type."""
        for child in node.children:
            if child.type == type_name:
                return child
        return None

    def has_token(self, node: Node, token: str) -> bool:
        """Check whether a direct child is the given (usually anonymous) token."""
        return any(child.type == token for child in node.children)

    def line_number(self, node: Node) -> int:
        """1-based line on which a node starts."""
        return node.start_point[0] + 1


# Registry of extractors by parser dialect
_extractors: dict[str, LanguageExtractor] = {}


def register_extractor(extractor: LanguageExtractor) -> None:
    """Register an extractor for every dialect it handles."""
    for dialect in extractor.dialects:
        _extractors[dialect] = extractor


def get_extractor(language: str) -> Optional[LanguageExtractor]:
    """
    Get the extractor for a parser dialect.

    Args:
        language: Dialect name (typescript, tsx)

    Returns:
        LanguageExtractor or None if unsupported
    """
    return _extractors.get(language)
