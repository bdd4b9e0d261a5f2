"""
tsindex Runtime Configuration

Combines defaults, YAML config, and environment variables into an
IndexConfig, and resolves the source root for hosts.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from tsindex.configs.constants import (
    DEFAULT_EXTENSIONS,
    DEFAULT_FUZZY_LIMIT,
    DEFAULT_IGNORE_PATTERNS,
    MAX_FILE_SIZE,
    TEST_DIR_NAMES,
)
from tsindex.configs.yaml_config import load_yaml_config
from tsindex.exceptions import ConfigurationError, InvalidSourceRootError, MissingConfigError


@dataclass
class IndexConfig:
    """Settings for walking and indexing a TypeScript source tree."""

    source_root: Optional[str] = None
    extensions: set[str] = field(default_factory=lambda: set(DEFAULT_EXTENSIONS))
    test_dir_names: set[str] = field(default_factory=lambda: set(TEST_DIR_NAMES))
    ignore_patterns: set[str] = field(default_factory=lambda: set(DEFAULT_IGNORE_PATTERNS))
    max_file_size: int = MAX_FILE_SIZE
    tolerate_syntax_errors: bool = False
    fuzzy_limit: int = DEFAULT_FUZZY_LIMIT


def _normalize_extensions(values) -> set[str]:
    extensions = set()
    for value in values:
        value = str(value).strip().lower()
        if not value:
            continue
        extensions.add(value if value.startswith(".") else f".{value}")
    return extensions


def load_config(config_path: Optional[Path] = None) -> IndexConfig:
    """
    Build the effective configuration.

    Priority (highest last):
    1. Defaults
    2. `index:` and `query:` sections of config.yaml
    3. TSINDEX_SOURCE_ROOT and TSINDEX_EXTENSIONS env vars

    Args:
        config_path: Optional explicit config file

    Returns:
        IndexConfig
    """
    config = IndexConfig()
    yaml_config = load_yaml_config(config_path)

    index_section = yaml_config.get("index") or {}
    if not isinstance(index_section, dict):
        raise ConfigurationError("'index' section must be a mapping")

    if index_section.get("source_root"):
        config.source_root = str(index_section["source_root"])
    if index_section.get("extensions"):
        config.extensions = _normalize_extensions(index_section["extensions"])
    if index_section.get("test_dir_names") is not None:
        config.test_dir_names = {str(n).lower() for n in index_section["test_dir_names"]}
    if index_section.get("ignore_patterns"):
        config.ignore_patterns |= {str(p) for p in index_section["ignore_patterns"]}
    if "max_file_size" in index_section:
        config.max_file_size = int(index_section["max_file_size"])
    if "tolerate_syntax_errors" in index_section:
        config.tolerate_syntax_errors = bool(index_section["tolerate_syntax_errors"])

    query_section = yaml_config.get("query") or {}
    if "fuzzy_limit" in query_section:
        config.fuzzy_limit = int(query_section["fuzzy_limit"])

    env_root = os.environ.get("TSINDEX_SOURCE_ROOT")
    if env_root:
        config.source_root = env_root
    env_extensions = os.environ.get("TSINDEX_EXTENSIONS")
    if env_extensions:
        config.extensions = _normalize_extensions(env_extensions.split(","))

    return config


def resolve_source_root(path: Optional[str]) -> Path:
    """
    Validate and resolve the source root a host wants to index.

    Args:
        path: Candidate path (may contain ~)

    Returns:
        Absolute, resolved Path

    Raises:
        MissingConfigError: If no path was configured
        InvalidSourceRootError: If the path is not an existing directory
    """
    if not path:
        raise MissingConfigError(
            "No source root configured (use --root, TSINDEX_SOURCE_ROOT or index.source_root)"
        )

    root = Path(path).expanduser().resolve()
    if not root.exists():
        raise InvalidSourceRootError("Source root does not exist", str(root))
    if not root.is_dir():
        raise InvalidSourceRootError("Source root is not a directory", str(root))
    return root
