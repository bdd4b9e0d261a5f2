"""
Source Ingestion

Walks a TypeScript source tree and builds the declaration index.
"""

from tsindex.ingest.corpus import CorpusIndex, FileResult, build_corpus, extract_file
from tsindex.ingest.walker import module_name, relative_file, walk_source_tree

__all__ = [
    "CorpusIndex",
    "FileResult",
    "build_corpus",
    "extract_file",
    "module_name",
    "relative_file",
    "walk_source_tree",
]
