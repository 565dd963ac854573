"""Custom exception hierarchy for the achievement catalog sync.

All application exceptions inherit from :class:`CatalogSyncError`, which
carries an optional ``provider_name`` so error handlers can identify which
source (e.g. "http", "file") caused the failure.

The hierarchy is organized by pipeline stage:

    CatalogSyncError  (base -- catch-all for any sync error)
    +-- FetchError               (source document retrieval)
    +-- ParseError               (one embedded payload failed to parse)
    +-- NoDataExtractedError     (every extraction strategy came up empty)
    +-- IndexCorruptError        (existing index.json unreadable)
    +-- CatalogWriteError        (catalog file could not be written)
    +-- ProgressValidationError  (malformed progress file)
    +-- ConfigurationError       (startup / invalid config)

Only FetchError, NoDataExtractedError and CatalogWriteError abort a sync.
ParseError and IndexCorruptError are absorbed where they are raised with a
safe fallback.
"""


class CatalogSyncError(Exception):
    """Base exception for all catalog sync errors.

    Every subclass carries a human-readable ``message`` and an optional
    ``provider_name`` identifying which source triggered the error.  The
    ``__str__`` method prefixes the provider name in brackets, e.g.
    ``[http] HTTP 404 for https://...``.
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        provider_name: str | None = None,
    ) -> None:
        self._message = message
        self._provider_name = provider_name
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def provider_name(self) -> str | None:
        return self._provider_name

    def __str__(self) -> str:
        if self._provider_name:
            return f"[{self._provider_name}] {self._message}"
        return self._message


# ---------------------------------------------------------------------------
# Source retrieval
# ---------------------------------------------------------------------------

class FetchError(CatalogSyncError):
    """Raised when the source document cannot be fetched or read.

    For HTTP sources the message always includes the response status code
    when one was received.
    """

    def __init__(
        self,
        message: str = "Failed to fetch source document",
        provider_name: str | None = None,
        status_code: int | None = None,
    ) -> None:
        self._status_code = status_code
        super().__init__(message=message, provider_name=provider_name)

    @property
    def status_code(self) -> int | None:
        return self._status_code


# ---------------------------------------------------------------------------
# Extraction
# ---------------------------------------------------------------------------

class ParseError(CatalogSyncError):
    """Raised when an embedded payload is not valid JSON / JSON5.

    Recoverable: the structured-data extractor skips the payload and moves on.
    """

    def __init__(
        self,
        message: str = "Embedded payload could not be parsed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class NoDataExtractedError(CatalogSyncError):
    """Raised when neither structured nor heuristic extraction found anything.

    Signals that the source page structure changed and the extraction
    heuristics need updating.  Not retried automatically.
    """

    def __init__(
        self,
        message: str = (
            "No achievements detected. Please inspect source page structure "
            "and update parser."
        ),
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# Output files
# ---------------------------------------------------------------------------

class IndexCorruptError(CatalogSyncError):
    """Raised when an existing index file is not valid JSON or has the wrong shape.

    The catalog writer catches this and substitutes a default index.
    """

    def __init__(
        self,
        message: str = "Index file is corrupt",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class CatalogWriteError(CatalogSyncError):
    """Raised when the catalog file cannot be written.

    Also raised when the target path already holds a catalog of a different
    version, since catalog files are immutable once created.
    """

    def __init__(
        self,
        message: str = "Failed to write catalog file",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# Progress / configuration
# ---------------------------------------------------------------------------

class ProgressValidationError(CatalogSyncError):
    """Raised when a progress file does not match the progress schema."""

    def __init__(
        self,
        message: str = "Progress file is invalid",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class ConfigurationError(CatalogSyncError):
    """Raised when configuration is invalid or missing at startup."""

    def __init__(
        self,
        message: str = "Invalid or missing configuration",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)
