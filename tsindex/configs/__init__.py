"""
tsindex Configuration Module

Re-exports commonly used functions for cleaner imports across the codebase.
"""

# Logging (most commonly used)
from tsindex.configs.logging import get_logger, setup_logging

# Paths
from tsindex.configs.paths import ensure_data_dir, get_data_path

# Constants
from tsindex.configs.constants import (
    DECLARATION_FILE_SUFFIXES,
    DEFAULT_EXTENSIONS,
    DEFAULT_FUZZY_LIMIT,
    DEFAULT_IGNORE_PATTERNS,
    MAX_FILE_SIZE,
    TEST_DIR_NAMES,
)

# YAML config
from tsindex.configs.yaml_config import (
    DEFAULT_CONFIG_YAML,
    create_default_config,
    get_config_path,
    load_yaml_config,
    save_yaml_config,
)

# Runtime settings
from tsindex.configs.settings import IndexConfig, load_config, resolve_source_root

__all__ = [
    # Logging
    "get_logger",
    "setup_logging",
    # Paths
    "get_data_path",
    "ensure_data_dir",
    # Constants
    "DECLARATION_FILE_SUFFIXES",
    "DEFAULT_EXTENSIONS",
    "DEFAULT_FUZZY_LIMIT",
    "DEFAULT_IGNORE_PATTERNS",
    "MAX_FILE_SIZE",
    "TEST_DIR_NAMES",
    # YAML config
    "DEFAULT_CONFIG_YAML",
    "get_config_path",
    "load_yaml_config",
    "save_yaml_config",
    "create_default_config",
    # Runtime settings
    "IndexConfig",
    "load_config",
    "resolve_source_root",
]
