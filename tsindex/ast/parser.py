"""
Tree-sitter Parser Wrapper

Handles dialect detection and tree-sitter parsing for TypeScript sources.
"""

from pathlib import Path
from typing import Optional

import tree_sitter_typescript
from tree_sitter import Language, Parser, Tree

from tsindex.configs.logging import get_logger
from tsindex.exceptions import ParseError

logger = get_logger("ast.parser")


# Supported dialects and their tree-sitter language getters
LANGUAGE_MODULES = {
    "typescript": tree_sitter_typescript.language_typescript,
    "tsx": tree_sitter_typescript.language_tsx,
}

# File extension to dialect mapping
EXTENSION_TO_LANGUAGE = {
    ".ts": "typescript",
    ".mts": "typescript",
    ".cts": "typescript",
    ".tsx": "tsx",
}


class ASTParser:
    """
    Tree-sitter based parser for TypeScript dialects.

    Lazily initializes parsers for each dialect on first use.
    """

    def __init__(self):
        self._parsers: dict[str, Parser] = {}
        self._languages: dict[str, Language] = {}

    def _get_language(self, lang_name: str) -> Optional[Language]:
        """Get or create Language object for a dialect."""
        if lang_name in self._languages:
            return self._languages[lang_name]

        getter = LANGUAGE_MODULES.get(lang_name)
        if getter is None:
            logger.warning(f"Unsupported language: {lang_name}")
            return None

        language = Language(getter())
        self._languages[lang_name] = language
        return language

    def _get_parser(self, lang_name: str) -> Optional[Parser]:
        """Get or create Parser for a dialect."""
        if lang_name in self._parsers:
            return self._parsers[lang_name]

        language = self._get_language(lang_name)
        if language is None:
            return None

        parser = Parser(language)
        self._parsers[lang_name] = parser
        return parser

    def detect_language(self, file_path: str) -> Optional[str]:
        """
        Detect dialect from file extension.

        Args:
            file_path: Path to the source file

        Returns:
            Dialect name or None if unsupported
        """
        ext = Path(file_path).suffix.lower()
        return EXTENSION_TO_LANGUAGE.get(ext)

    def parse(self, source: bytes, language: str = "typescript") -> Tree:
        """
        Parse source code into an AST.

        tree-sitter recovers from syntax errors; callers check
        `tree.root_node.has_error` to decide whether to trust the result.

        Args:
            source: Source code as UTF-8 bytes
            language: Dialect name (typescript, tsx)

        Returns:
            Tree-sitter Tree

        Raises:
            ParseError: If the dialect is unsupported
        """
        parser = self._get_parser(language)
        if parser is None:
            raise ParseError(f"Unsupported language: {language}")
        return parser.parse(source)

    def parse_file(self, file_path: str) -> tuple[Tree, bytes]:
        """
        Read and parse a file into an AST.

        Args:
            file_path: Path to the source file

        Returns:
            Tuple of (Tree, source bytes)

        Raises:
            ParseError: If the file is unsupported, unreadable, or not UTF-8
        """
        language = self.detect_language(file_path)
        if language is None:
            raise ParseError("Unsupported file type", str(file_path))

        try:
            source = Path(file_path).read_bytes()
            source.decode("utf-8")
        except OSError as e:
            raise ParseError(f"Failed to read file: {e}", str(file_path)) from e
        except UnicodeDecodeError as e:
            raise ParseError(f"File is not valid UTF-8: {e}", str(file_path)) from e

        return self.parse(source, language), source

    def is_supported(self, file_path: str) -> bool:
        """Check if a file's dialect is supported."""
        return self.detect_language(file_path) is not None


# Global parser instance (lazy singleton)
_parser: Optional[ASTParser] = None


def get_parser() -> ASTParser:
    """Get the global ASTParser instance."""
    global _parser
    if _parser is None:
        _parser = ASTParser()
    return _parser
