"""
Corpus Index

Builds the immutable index of every exported declaration under a source root.
"""

import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from tsindex.ast.extractors import TypeScriptExtractor
from tsindex.ast.extractors.base import LanguageExtractor
from tsindex.ast.models import ExtractedDeclaration
from tsindex.ast.parser import ASTParser, get_parser
from tsindex.configs.logging import get_logger
from tsindex.configs.settings import IndexConfig
from tsindex.exceptions import ParseError
from tsindex.ingest.walker import module_name, relative_file, walk_source_tree

logger = get_logger("ingest.corpus")


@dataclass(frozen=True)
class CorpusIndex:
    """Every exported declaration of a source tree, in walk order."""

    source_root: str
    declarations: tuple[ExtractedDeclaration, ...] = ()
    files_indexed: int = 0
    skipped_files: tuple[str, ...] = ()
    build_ms: float = 0.0

    def __len__(self) -> int:
        return len(self.declarations)


@dataclass
class FileResult:
    """Outcome of normalizing a single file."""

    file: str
    declarations: list[ExtractedDeclaration] = field(default_factory=list)
    skipped: bool = False
    reason: Optional[str] = None


def extract_file(
    file_path: Path,
    root: Path,
    config: Optional[IndexConfig] = None,
    parser: Optional[ASTParser] = None,
    extractor: Optional[LanguageExtractor] = None,
) -> FileResult:
    """
    Parse one file and normalize its exported declarations.

    Unreadable files and files with syntax errors are reported as skipped
    rather than raised.

    Args:
        file_path: Absolute path of the file
        root: Source root the file lives under
        config: Index settings
        parser: Parser to use (default: global parser)
        extractor: Normalizer to use (default: TypeScriptExtractor)

    Returns:
        FileResult
    """
    config = config or IndexConfig()
    parser = parser or get_parser()
    extractor = extractor or TypeScriptExtractor()

    rel_path = relative_file(file_path, root)

    try:
        tree, source = parser.parse_file(str(file_path))
    except ParseError as e:
        return FileResult(file=rel_path, skipped=True, reason=str(e))

    if tree.root_node.has_error and not config.tolerate_syntax_errors:
        return FileResult(file=rel_path, skipped=True, reason="syntax errors")

    declarations = extractor.extract_declarations(tree, source, rel_path, module_name(rel_path))
    return FileResult(file=rel_path, declarations=declarations)


def build_corpus(
    root_path: str,
    config: Optional[IndexConfig] = None,
    parser: Optional[ASTParser] = None,
    extractor: Optional[LanguageExtractor] = None,
) -> CorpusIndex:
    """
    Build the index of a source tree in one sequential pass.

    Args:
        root_path: Source root
        config: Index settings
        parser: Parser to use (default: global parser)
        extractor: Normalizer to use (default: TypeScriptExtractor)

    Returns:
        CorpusIndex
    """
    config = config or IndexConfig()
    parser = parser or get_parser()
    extractor = extractor or TypeScriptExtractor()

    root = Path(root_path)
    start_time = time.time()

    files = walk_source_tree(str(root), config)
    logger.debug(f"Walk found {len(files)} files in {(time.time() - start_time) * 1000:.1f}ms")

    declarations: list[ExtractedDeclaration] = []
    skipped: list[str] = []
    indexed = 0

    for file_path in files:
        result = extract_file(file_path, root, config, parser, extractor)
        if result.skipped:
            logger.warning(f"Skipped {result.file}: {result.reason}")
            skipped.append(result.file)
            continue
        indexed += 1
        declarations.extend(result.declarations)
        logger.debug(f"File: {result.file} -> {len(result.declarations)} declarations")

    build_ms = (time.time() - start_time) * 1000
    logger.info(
        f"Indexed {len(declarations)} declarations from {indexed} files "
        f"({len(skipped)} skipped) in {build_ms:.0f}ms"
    )

    return CorpusIndex(
        source_root=str(root),
        declarations=tuple(declarations),
        files_indexed=indexed,
        skipped_files=tuple(skipped),
        build_ms=build_ms,
    )
