"""Network edge: the scraping proxy and the PDF download.

The archive listing is rendered client-side, so its HTML is obtained through
an external rendering proxy rather than a local headless browser.  The proxy
sits behind the :class:`PageFetcher` interface so tests (and alternative
renderers) can replace it.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Optional

import httpx

from digilaw.bulletin.models import DocumentReference
from digilaw.config import settings
from digilaw.errors import NetworkError

logger = logging.getLogger(__name__)


def build_client() -> httpx.AsyncClient:
    """Return the shared async HTTP client used by the API and the CLI."""
    return httpx.AsyncClient(timeout=settings.request_timeout, follow_redirects=True)


# ---------------------------------------------------------------------------
# Abstract base
# ---------------------------------------------------------------------------

class PageFetcher(ABC):
    """Capability that returns the rendered HTML of a URL."""

    @abstractmethod
    async def fetch_html(self, url: str) -> str:
        """Return the rendered markup of *url*.

        Raises:
            NetworkError: If the page could not be rendered.
        """


# ---------------------------------------------------------------------------
# Scraping proxy
# ---------------------------------------------------------------------------

class ScrapingProxyFetcher(PageFetcher):
    """Render pages through the scraping proxy (``GET ?url=...`` -> ``{"html": ...}``)."""

    def __init__(self, client: httpx.AsyncClient, proxy_url: Optional[str] = None) -> None:
        self._client = client
        self._proxy_url = proxy_url or settings.scraper_proxy_url

    async def fetch_html(self, url: str) -> str:
        try:
            response = await self._client.get(self._proxy_url, params={"url": url})
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise NetworkError(
                f"Failed to scrape {url} (proxy answered HTTP "
                f"{exc.response.status_code}). Make sure the URL is correct."
            ) from exc
        except httpx.HTTPError as exc:
            raise NetworkError(f"Scraping proxy unreachable: {exc}") from exc

        try:
            payload = response.json()
        except ValueError as exc:
            raise NetworkError("Scraping proxy returned a non-JSON body.") from exc

        if not isinstance(payload, dict):
            raise NetworkError("Scraping proxy returned an unexpected payload.")
        html = payload.get("html") or ""
        if not isinstance(html, str):
            raise NetworkError("Scraping proxy returned an unexpected payload.")
        return html


# ---------------------------------------------------------------------------
# PDF download
# ---------------------------------------------------------------------------

async def download_document(client: httpx.AsyncClient, reference: DocumentReference) -> bytes:
    """Fetch the PDF bytes behind *reference*.

    A browser-like User-Agent is sent because some hosts reject default
    client identifiers.

    Raises:
        NetworkError: If the host is unreachable or answers with 4xx/5xx.
    """
    try:
        response = await client.get(
            reference.url,
            headers={"User-Agent": settings.user_agent},
        )
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise NetworkError(
            f"Download of {reference.url} failed with HTTP {exc.response.status_code}."
        ) from exc
    except httpx.HTTPError as exc:
        raise NetworkError(f"Download of {reference.url} failed: {exc}") from exc

    data = response.content
    logger.info("Downloaded %d bytes from %s", len(data), reference.url)
    return data
