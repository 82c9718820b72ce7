import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Protocol, runtime_checkable

import httpx

from roxinho_shop.core.config import Settings
from roxinho_shop.core.exceptions import ExtractionError
from roxinho_shop.integrations.marketplaces.models import PlatformTag, RawProductFields

logger = logging.getLogger(__name__)


@runtime_checkable
class ProductExtractorProtocol(Protocol):
    platform: PlatformTag

    async def extract(self, url: str) -> RawProductFields: ...


class HttpExtractor:
    """Shared HTTP plumbing for extractors.

    A fresh ``httpx.AsyncClient`` is opened per call unless one is injected.
    Every request carries the configured timeout either way.
    """

    platform: PlatformTag

    def __init__(self, settings: Settings, client: httpx.AsyncClient | None = None):
        self._settings = settings
        self._client = client

    @property
    def timeout(self) -> float:
        return self._settings.scraper_timeout_seconds

    @asynccontextmanager
    async def _http(self) -> AsyncIterator[httpx.AsyncClient]:
        if self._client is not None:
            yield self._client
            return
        async with httpx.AsyncClient(timeout=self.timeout, follow_redirects=True) as client:
            yield client

    async def _get(self, url: str, headers: dict[str, str] | None = None) -> httpx.Response:
        try:
            async with self._http() as client:
                return await client.get(url, headers=headers, timeout=self.timeout)
        except httpx.TimeoutException as e:
            logger.warning("Timed out after %.1fs fetching %s", self.timeout, url)
            raise ExtractionError(f"Timed out fetching {url}") from e
        except httpx.HTTPError as e:
            logger.warning("Request to %s failed: %s", url, e)
            raise ExtractionError(f"Request to {url} failed: {e}") from e

    def _browser_headers(self) -> dict[str, str]:
        return {
            "User-Agent": self._settings.scraper_user_agent,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
            "Accept-Language": "pt-BR,pt;q=0.9,en;q=0.8",
        }

    async def _fetch_html(self, url: str) -> str:
        resp = await self._get(url, headers=self._browser_headers())
        if not resp.is_success:
            logger.warning(
                "%s page fetch returned HTTP %d for %s",
                self.platform.value, resp.status_code, url,
            )
            raise ExtractionError("Failed to fetch product page", resp.status_code)
        return resp.text
