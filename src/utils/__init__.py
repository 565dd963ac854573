"""Utility modules for the achievement catalog sync.

Available utility modules (all re-exported here for convenience):

- **errors** -- Domain-specific exception hierarchy rooted at
  CatalogSyncError; each pipeline stage raises its own subclass so callers
  can tell fatal failures from recoverable ones.
- **identifiers** -- Deterministic ``<prefix>_<slug>`` identifiers for
  categories and items.
- **logging** -- structlog setup with a dual-renderer pattern: coloured
  console output in development, structured JSON in production.
- **text_normalizer** -- Tag stripping, entity decoding and whitespace
  collapsing for scraped markup.
"""

# -- Domain exception hierarchy --------------------------------------------
from src.utils.errors import (
    CatalogSyncError,
    CatalogWriteError,
    ConfigurationError,
    FetchError,
    IndexCorruptError,
    NoDataExtractedError,
    ParseError,
    ProgressValidationError,
)

# -- Identifier builder ----------------------------------------------------
from src.utils.identifiers import build_identifier, slugify

# -- Structured logging setup ----------------------------------------------
from src.utils.logging import LOG_LEVELS, configure_logging, get_logger, normalize_log_level

# -- Text normalization ----------------------------------------------------
from src.utils.text_normalizer import normalize_text

__all__ = [
    "LOG_LEVELS",
    "CatalogSyncError",
    "CatalogWriteError",
    "ConfigurationError",
    "FetchError",
    "IndexCorruptError",
    "NoDataExtractedError",
    "ParseError",
    "ProgressValidationError",
    "build_identifier",
    "configure_logging",
    "get_logger",
    "normalize_log_level",
    "normalize_text",
    "slugify",
]
