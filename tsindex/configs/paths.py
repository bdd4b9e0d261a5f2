"""
tsindex Data Paths

Manages the data directory used for the config file and log file.
"""

import os
from pathlib import Path

DEFAULT_DATA_PATH = Path.home() / ".tsindex"


def get_data_path() -> Path:
    """Get the tsindex data directory path.

    Resolution:
    - TSINDEX_DATA_PATH env var, if set
    - ~/.tsindex otherwise

    Returns:
        Path to the data directory
    """
    data_path = os.environ.get("TSINDEX_DATA_PATH")
    if data_path:
        return Path(data_path).expanduser()
    return DEFAULT_DATA_PATH


def ensure_data_dir() -> Path:
    """Ensure the data directory exists.

    Returns:
        Path to data directory
    """
    data_path = get_data_path()
    data_path.mkdir(parents=True, exist_ok=True)
    return data_path
