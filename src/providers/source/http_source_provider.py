"""HTTP source provider backed by httpx.

Sends a descriptive User-Agent and an Accept-Language preference.  The
headers only influence which localisation of the page the wiki serves;
parsing does not depend on them.
"""

from __future__ import annotations

import httpx
import structlog

from src.interfaces.source_provider import ISourceProvider, SourceDocument
from src.utils.errors import FetchError

logger = structlog.get_logger(logger_name=__name__)

DEFAULT_USER_AGENT = "Mozilla/5.0 (compatible; achievement-sync/1.0)"
DEFAULT_ACCEPT_LANGUAGE = "en-US,en;q=0.9,zh-CN;q=0.8"
_DEFAULT_TIMEOUT = 20.0
_ACCEPT = "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"


class HttpSourceProvider(ISourceProvider):
    """Fetches the source page over HTTP(S).

    The ``httpx.AsyncClient`` is injected via the constructor for
    testability; when omitted the provider creates and owns one.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient | None = None,
        user_agent: str = DEFAULT_USER_AGENT,
        accept_language: str = DEFAULT_ACCEPT_LANGUAGE,
        timeout: float = _DEFAULT_TIMEOUT,
    ) -> None:
        self._headers = {
            "User-Agent": user_agent,
            "Accept-Language": accept_language,
            "Accept": _ACCEPT,
        }
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            timeout=httpx.Timeout(timeout),
            follow_redirects=True,
        )

    @property
    def headers(self) -> dict[str, str]:
        return dict(self._headers)

    async def fetch_document(self, location: str) -> SourceDocument:
        """GET *location* and return its body.

        Raises:
            FetchError: On a non-2xx status (message carries the code) or any
                transport failure.
        """
        try:
            response = await self._client.get(location, headers=self._headers)
        except httpx.TimeoutException as exc:
            raise FetchError(
                message=f"Timeout fetching {location}: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc
        except httpx.HTTPError as exc:
            raise FetchError(
                message=f"HTTP error fetching {location}: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc

        if not response.is_success:
            raise FetchError(
                message=(
                    f"Failed to fetch source page ({response.status_code} "
                    f"{response.reason_phrase}) from {location}"
                ),
                provider_name=self.get_provider_name(),
                status_code=response.status_code,
            )

        logger.info(
            "source_fetched",
            url=location,
            status=response.status_code,
            length=len(response.text),
        )
        return SourceDocument(location=location, html=response.text, status_code=response.status_code)

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    def get_provider_name(self) -> str:
        return "http"
