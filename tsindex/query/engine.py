"""
Query Engine

TypeIndex owns the corpus index of one source root. It builds the index
lazily on first use, caches it for its lifetime, and answers every query
from the cached index.
"""

import threading
from pathlib import Path
from typing import Optional

from tsindex.ast.extractors import TypeScriptExtractor
from tsindex.ast.extractors.base import LanguageExtractor
from tsindex.ast.jsdoc import DocExtractor
from tsindex.ast.models import (
    ClassDecl,
    DependencyInfo,
    EnumDecl,
    ExtractedDeclaration,
    FunctionDecl,
    InterfaceDecl,
    LibraryStatistics,
    NamespaceDecl,
    ReExportDecl,
    TypeAliasDecl,
    TypeHierarchy,
    VariableDecl,
)
from tsindex.ast.parser import ASTParser, get_parser
from tsindex.configs.logging import get_logger
from tsindex.configs.settings import IndexConfig
from tsindex.exceptions import IngestFileNotFoundError
from tsindex.ingest.corpus import CorpusIndex, build_corpus, extract_file
from tsindex.query.fuzzy import fuzzy_search
from tsindex.query.hierarchy import find_hierarchy
from tsindex.query.lookup import filter_by_kind, filter_by_module, search_declaration
from tsindex.query.statistics import analyze_dependencies, compute_statistics

logger = get_logger("query.engine")


class TypeIndex:
    """
    Queryable index of the exported declarations under a source root.

    The host must pass an existing directory (see resolve_source_root).
    Building is serialized by a lock; readers never take it. rebuild()
    replaces the cached CorpusIndex in a single assignment, so a reader sees
    either the old index or the new one.
    """

    def __init__(
        self,
        source_root: str | Path,
        config: Optional[IndexConfig] = None,
        parser: Optional[ASTParser] = None,
        doc_extractor: Optional[DocExtractor] = None,
        extractor: Optional[LanguageExtractor] = None,
    ):
        self.source_root = Path(source_root)
        self.config = config or IndexConfig()
        self.parser = parser or get_parser()
        self.extractor = extractor or TypeScriptExtractor(doc_extractor)
        self._index: Optional[CorpusIndex] = None
        self._build_lock = threading.Lock()

    # -------------------------------------------------------------------------
    # Index lifecycle
    # -------------------------------------------------------------------------

    @property
    def index(self) -> CorpusIndex:
        """The cached index, built on first access."""
        index = self._index
        if index is not None:
            return index

        with self._build_lock:
            # Another thread may have finished the build while we waited
            if self._index is None:
                self._index = self._build()
            return self._index

    @property
    def is_built(self) -> bool:
        return self._index is not None

    def _build(self) -> CorpusIndex:
        logger.debug(f"Building index for {self.source_root}")
        return build_corpus(str(self.source_root), self.config, self.parser, self.extractor)

    def rebuild(self) -> CorpusIndex:
        """Re-scan the source root and swap in a fresh index."""
        with self._build_lock:
            index = self._build()
            self._index = index
        logger.info(f"Rebuilt index: {len(index)} declarations")
        return index

    # -------------------------------------------------------------------------
    # Extraction
    # -------------------------------------------------------------------------

    def extract_all(self) -> tuple[ExtractedDeclaration, ...]:
        """Every declaration, in index order. Same object until rebuild()."""
        return self.index.declarations

    def extract_from_file(self, relative_path: str) -> list[ExtractedDeclaration]:
        """
        Normalize a single file without touching the cached index.

        Args:
            relative_path: Path relative to the source root

        Returns:
            The file's declarations (empty when the file cannot be parsed)

        Raises:
            IngestFileNotFoundError: If the file does not exist
        """
        file_path = self.source_root / relative_path
        if not file_path.is_file():
            raise IngestFileNotFoundError(
                f"File not found: {relative_path}", {"root": str(self.source_root)}
            )

        result = extract_file(file_path, self.source_root, self.config, self.parser, self.extractor)
        if result.skipped:
            logger.warning(f"Skipped {result.file}: {result.reason}")
        return result.declarations

    def extract_from_module(self, module: str) -> list[ExtractedDeclaration]:
        return filter_by_module(self.extract_all(), module)

    def extract_by_kind(self, kind: str) -> list[ExtractedDeclaration]:
        """Declarations of one kind. Raises InvalidKindError for unknown kinds."""
        return filter_by_kind(self.extract_all(), kind)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def search(self, name: str) -> Optional[ExtractedDeclaration]:
        return search_declaration(self.extract_all(), name)

    def fuzzy_search(self, query: str, limit: Optional[int] = None) -> list[ExtractedDeclaration]:
        if limit is None:
            limit = self.config.fuzzy_limit
        return fuzzy_search(self.extract_all(), query, limit)

    def hierarchy(self, name: str) -> Optional[TypeHierarchy]:
        return find_hierarchy(self.extract_all(), name)

    def statistics(self) -> LibraryStatistics:
        return compute_statistics(self.extract_all())

    def dependencies(self) -> list[DependencyInfo]:
        return analyze_dependencies(self.extract_all())

    # -------------------------------------------------------------------------
    # Kind shortcuts
    # -------------------------------------------------------------------------

    def interfaces(self) -> list[InterfaceDecl]:
        return self.extract_by_kind("interface")

    def type_aliases(self) -> list[TypeAliasDecl]:
        return self.extract_by_kind("type")

    def enums(self) -> list[EnumDecl]:
        return self.extract_by_kind("enum")

    def functions(self) -> list[FunctionDecl]:
        return self.extract_by_kind("function")

    def classes(self) -> list[ClassDecl]:
        return self.extract_by_kind("class")

    def variables(self) -> list[VariableDecl]:
        return self.extract_by_kind("variable")

    def constants(self) -> list[VariableDecl]:
        """Variables declared with `const`."""
        return [v for v in self.variables() if v.declaration_kind == "const"]

    def namespaces(self) -> list[NamespaceDecl]:
        return self.extract_by_kind("namespace")

    def re_exports(self) -> list[ReExportDecl]:
        return self.extract_by_kind("re-export")
