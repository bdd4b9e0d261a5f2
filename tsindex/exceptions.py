"""
tsindex Exception Hierarchy

Centralized exception classes for structured error handling across the codebase.
All tsindex-specific exceptions inherit from TsIndexError.

Usage:
    from tsindex.exceptions import InvalidSourceRootError, InvalidKindError

    try:
        root = resolve_source_root(path)
    except InvalidSourceRootError as e:
        logger.error(f"Cannot index: {e}")

Negative query outcomes (no match, empty module) are never raised; they are
returned as None or empty sequences.
"""


class TsIndexError(Exception):
    """Base exception for all tsindex errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} ({self.details})"
        return self.message


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(TsIndexError):
    """Error in tsindex configuration."""

    pass


class MissingConfigError(ConfigurationError):
    """Required configuration value is missing."""

    pass


class InvalidSourceRootError(ConfigurationError):
    """Source root does not exist or is not a directory."""

    def __init__(self, message: str, path: str | None = None):
        details = {"path": path} if path else {}
        super().__init__(message, details)
        self.path = path


# =============================================================================
# Ingest Errors
# =============================================================================


class IngestError(TsIndexError):
    """Base class for indexing errors."""

    pass


class IngestFileNotFoundError(IngestError):
    """File to index was not found."""

    pass


class ParseError(IngestError):
    """Source file could not be read or parsed."""

    def __init__(self, message: str, file_path: str | None = None):
        details = {"file": file_path} if file_path else {}
        super().__init__(message, details)
        self.file_path = file_path


# =============================================================================
# Query Errors
# =============================================================================


class QueryError(TsIndexError):
    """Base class for query contract violations."""

    pass


class InvalidKindError(QueryError, ValueError):
    """Declaration kind filter is not one of the known kinds."""

    def __init__(self, kind: str, valid: tuple[str, ...] = ()):
        details = {"valid": ", ".join(valid)} if valid else {}
        super().__init__(f"Unknown declaration kind: {kind!r}", details)
        self.kind = kind
