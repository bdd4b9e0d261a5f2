"""
tsindex Logging Configuration

stdout belongs to the JSON query results, so every log record goes to
stderr or to a log file. Configured from environment variables:
- TSINDEX_DEBUG: Enable debug logging (default: false)
- TSINDEX_LOG_FILE: Log file path (default: $TSINDEX_DATA_PATH/tsindex.log)

Console lines are short (`tsindex WARNING [ingest.corpus] ...`) because the
CLI is a one-shot process. The log file keeps timestamps so successive index
builds can be told apart.
"""

import logging
import os
import sys
from pathlib import Path
from typing import Optional, TextIO

from tsindex.configs.paths import get_data_path

ROOT_LOGGER = "tsindex"

CONSOLE_FORMAT = "tsindex %(levelname)s [%(component)s] %(message)s"
FILE_FORMAT = "%(asctime)s %(levelname)-5s [%(component)s] %(message)s"
FILE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class ComponentFormatter(logging.Formatter):
    """Formatter that tags records with the component, i.e. the logger name without `tsindex.`."""

    def format(self, record: logging.LogRecord) -> str:
        name = record.name
        if name.startswith(ROOT_LOGGER + "."):
            name = name[len(ROOT_LOGGER) + 1:]
        record.component = name
        return super().format(record)


def setup_logging(
    debug: Optional[bool] = None,
    log_file: Optional[str] = None,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """
    Configure the tsindex logger.

    Args:
        debug: Enable debug level. Defaults to TSINDEX_DEBUG env var.
        log_file: Log file path. Defaults to TSINDEX_LOG_FILE env var,
                  or $TSINDEX_DATA_PATH/tsindex.log if not set.
                  Pass an empty string to log to the console only.
        stream: Console stream (default: sys.stderr)

    Returns:
        Root logger for tsindex
    """
    if debug is None:
        debug = os.environ.get("TSINDEX_DEBUG", "").lower() in ("true", "1", "yes")
    if log_file is None:
        log_file = os.environ.get("TSINDEX_LOG_FILE")
        if log_file is None:
            log_file = str(get_data_path() / "tsindex.log")

    level = logging.DEBUG if debug else logging.INFO

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
    # Records must never reach a root handler that could print to stdout
    logger.propagate = False

    console = logging.StreamHandler(stream or sys.stderr)
    console.setFormatter(ComponentFormatter(CONSOLE_FORMAT))
    # With a file, the console only shows skipped files and errors
    console.setLevel(logging.WARNING if log_file else level)
    logger.addHandler(console)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path)
        file_handler.setFormatter(ComponentFormatter(FILE_FORMAT, datefmt=FILE_DATE_FORMAT))
        file_handler.setLevel(level)
        logger.addHandler(file_handler)
        logger.debug(f"Logging to file: {log_file}")

    return logger


def get_logger(component: str) -> logging.Logger:
    """
    Get a logger for a specific component.

    Args:
        component: Component name (e.g., "ast.parser", "ingest.corpus", "query")

    Returns:
        Logger instance for the component
    """
    return logging.getLogger(f"{ROOT_LOGGER}.{component}")
