"""
Source Tree Walker

File system traversal with filtering for TypeScript source files.
"""

import fnmatch
import os
from pathlib import Path, PurePosixPath
from typing import Optional

from tsindex.configs.constants import DECLARATION_FILE_SUFFIXES
from tsindex.configs.settings import IndexConfig


def is_declaration_file(filename: str) -> bool:
    """Check for declaration-only files (.d.ts and friends)."""
    return filename.lower().endswith(DECLARATION_FILE_SUFFIXES)


def in_test_directory(rel_path: str, test_dir_names: set[str]) -> bool:
    """Check whether any directory segment of a relative path is a test directory."""
    segments = PurePosixPath(rel_path).parts[:-1]
    return any(segment.lower() in test_dir_names for segment in segments)


def walk_source_tree(root_path: str, config: Optional[IndexConfig] = None) -> list[Path]:
    """
    Walk a source tree collecting files to index.

    Args:
        root_path: Root directory to walk
        config: Index settings (extensions, ignore patterns, size limit).
                Defaults to IndexConfig().

    Returns:
        Sorted, de-duplicated list of file paths
    """
    config = config or IndexConfig()
    ignore = config.ignore_patterns
    extensions = {ext.lower() for ext in config.extensions}
    test_dirs = {name.lower() for name in config.test_dir_names}

    root = Path(root_path)
    found: set[Path] = set()

    for dirpath, dirnames, filenames in os.walk(root):
        # Filter out ignored directories (in-place modification)
        dirnames[:] = [d for d in dirnames if d not in ignore]

        for filename in filenames:
            file_path = Path(dirpath) / filename

            if file_path.suffix.lower() not in extensions:
                continue

            if is_declaration_file(filename):
                continue

            rel_path = relative_file(file_path, root)
            if in_test_directory(rel_path, test_dirs):
                continue

            # Check if file matches any ignore pattern
            if any(fnmatch.fnmatch(filename, p) or fnmatch.fnmatch(rel_path, p) for p in ignore):
                continue

            # Check file size
            try:
                if file_path.stat().st_size > config.max_file_size:
                    continue
            except OSError:
                continue

            found.add(file_path)

    return sorted(found, key=lambda p: relative_file(p, root))


def relative_file(file_path: Path, root: Path) -> str:
    """Path of a file relative to the root, with forward slashes."""
    return Path(file_path).relative_to(root).as_posix()


def module_name(rel_path: str) -> str:
    """
    Module a file belongs to: its first directory segment.

    Files directly under the root belong to the "root" module.
    """
    parts = PurePosixPath(rel_path).parts
    if len(parts) <= 1:
        return "root"
    return parts[0]
