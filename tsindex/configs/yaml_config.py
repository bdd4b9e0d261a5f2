"""
tsindex YAML Configuration

Loading, saving, and defaults for ~/.tsindex/config.yaml.
"""

from pathlib import Path
from typing import Optional

import yaml

from tsindex.configs.paths import ensure_data_dir, get_data_path
from tsindex.exceptions import ConfigurationError

# --- Default Config Template ---

DEFAULT_CONFIG_YAML = """\
# tsindex Configuration
# Edit this file to customize indexing behavior.

index:
  # TypeScript source root to index (overridden by TSINDEX_SOURCE_ROOT or --root)
  # source_root: ~/Projects/my-lib/src

  # File extensions to index
  extensions:
    - ".ts"

  # Path segments that mark test trees (files below them are skipped)
  test_dir_names:
    - "tests"
    - "test"
    - "__tests__"

  # Extra directory/file patterns to ignore (merged with the built-in
  # node_modules and VCS defaults). Build outputs are indexed unless listed:
  # ignore_patterns: [dist, build, out, coverage]
  ignore_patterns: []

  # Keep declarations from files that contain syntax errors
  tolerate_syntax_errors: false

# Query defaults
query:
  fuzzy_limit: 20
"""


def get_config_path() -> Path:
    """Get the path to config.yaml."""
    return get_data_path() / "config.yaml"


def load_yaml_config(config_path: Optional[Path] = None) -> dict:
    """
    Load configuration from a YAML file.

    Args:
        config_path: File to read. Defaults to ~/.tsindex/config.yaml.

    Returns:
        Configuration dictionary (empty if file doesn't exist)

    Raises:
        ConfigurationError: If the file exists but is not valid YAML mapping
    """
    config_path = Path(config_path) if config_path else get_config_path()
    if not config_path.exists():
        return {}

    try:
        data = yaml.safe_load(config_path.read_text())
    except yaml.YAMLError as e:
        raise ConfigurationError(
            "Invalid YAML in config file", {"path": str(config_path), "error": str(e)}
        ) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(
            "Config file must contain a mapping", {"path": str(config_path)}
        )
    return data


def save_yaml_config(config: dict, config_path: Optional[Path] = None) -> Path:
    """
    Save configuration to a YAML file.

    Args:
        config: Configuration dictionary to save
        config_path: Destination. Defaults to ~/.tsindex/config.yaml.

    Returns:
        Path that was written
    """
    if config_path is None:
        ensure_data_dir()
        config_path = get_config_path()
    config_path = Path(config_path)
    config_path.write_text(yaml.safe_dump(config, default_flow_style=False, sort_keys=False))
    return config_path


def create_default_config() -> bool:
    """
    Create default config.yaml if it doesn't exist.

    Returns:
        True if file was created, False if it already exists
    """
    config_path = get_config_path()
    if config_path.exists():
        return False

    ensure_data_dir()
    config_path.write_text(DEFAULT_CONFIG_YAML)
    return True
