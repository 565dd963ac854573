"""Source-document providers: HTTP fetch and local file read."""

from src.providers.source.file_source_provider import FileSourceProvider
from src.providers.source.http_source_provider import HttpSourceProvider

__all__ = ["FileSourceProvider", "HttpSourceProvider"]
