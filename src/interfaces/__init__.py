"""Public interface definitions for pluggable pipeline components.

The sync pipeline talks to its collaborators only through the abstract base
classes defined in this package.  Concrete adapters are constructed in
``src/main.py`` and injected into the pipeline, so tests can swap in fakes
without touching the network or the filesystem.

CONCRETE IMPLEMENTATION MAP:
    Interface              →  Concrete implementations
    ─────────────────────────────────────────────────────────────────────
    ISourceProvider        →  HttpSourceProvider, FileSourceProvider
                              (src/providers/source/)
    IExtractionStrategy    →  StructuredTreeStrategy, StructuredFlatStrategy,
                              TableStrategy, HeadingListStrategy
                              (src/services/extraction/)
"""

from src.interfaces.extraction_strategy import IExtractionStrategy
from src.interfaces.source_provider import ISourceProvider, SourceDocument

__all__ = [
    "IExtractionStrategy",
    "ISourceProvider",
    "SourceDocument",
]
