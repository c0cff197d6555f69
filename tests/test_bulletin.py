"""Tests for bulletin discovery: periods, listing lookup, locator fallback.

Mocking strategy:
- ``FakeFetcher`` stands in for the scraping proxy and serves canned HTML per
  archive URL, recording every URL it was asked for.
- ``respx`` patches ``httpx`` at the transport layer for the
  ``ScrapingProxyFetcher`` / ``download_document`` tests, so no real network
  calls are made.

pytest-asyncio runs in ``auto`` mode (see pyproject.toml).
"""

from __future__ import annotations

from datetime import date
from typing import Dict, List

import httpx
import pytest
import respx

from digilaw.bulletin.fetcher import PageFetcher, ScrapingProxyFetcher, download_document
from digilaw.bulletin.locator import locate_latest
from digilaw.bulletin.lookup import archive_url, find_last_pdf_href, lookup
from digilaw.bulletin.models import DocumentReference, Found, NotFound, PublicationPeriod
from digilaw.config import settings
from digilaw.errors import NetworkError


# ---------------------------------------------------------------------------
# Fixtures / constants
# ---------------------------------------------------------------------------

BASE = "https://bulletinofficiel.com/wp-content/uploads"
PROXY = "https://proxy.example.com/api/scrape"

_LISTING_HTML = """\
<html>
<head>
  <style>a[href$=".pdf"] { color: red; }</style>
  <script>var fake = '<a href="script.pdf">x</a>';</script>
</head>
<body>
  <h1>Index of /wp-content/uploads</h1>
  <a href="?C=N;O=D">Name</a>
  <a href="BO_7300_Fr.pdf">BO_7300_Fr.pdf</a>
  <a href="BO_7301_Fr.pdf">BO_7301_Fr.pdf</a>
  <a href="cover.jpg">cover.jpg</a>
  <a href="BO_7302_Fr.pdf">BO_7302_Fr.pdf</a>
</body>
</html>
"""

_EMPTY_LISTING_HTML = "<html><body><a href='image.png'>image</a></body></html>"


class FakeFetcher(PageFetcher):
    """Serve canned HTML keyed by archive URL; unknown URLs get an empty listing."""

    def __init__(self, pages: Dict[str, str] | None = None) -> None:
        self.pages = pages or {}
        self.calls: List[str] = []

    async def fetch_html(self, url: str) -> str:
        self.calls.append(url)
        return self.pages.get(url, _EMPTY_LISTING_HTML)


class FailingFetcher(PageFetcher):
    async def fetch_html(self, url: str) -> str:
        raise NetworkError("Failed to scrape the website.")


@pytest.fixture(autouse=True)
def _settings(monkeypatch):
    monkeypatch.setattr(settings, "archive_base_url", BASE)
    monkeypatch.setattr(settings, "scraper_proxy_url", PROXY)
    monkeypatch.setattr(settings, "lookup_attempts", 3)


# ---------------------------------------------------------------------------
# PublicationPeriod
# ---------------------------------------------------------------------------

class TestPublicationPeriod:
    def test_current_uses_given_date(self) -> None:
        assert PublicationPeriod.current(date(2024, 5, 17)) == PublicationPeriod(2024, 5)

    def test_zero_padded_rendering(self) -> None:
        period = PublicationPeriod(2024, 3)
        assert period.month_str == "03"
        assert str(period) == "2024/03"

    def test_previous_within_year(self) -> None:
        assert PublicationPeriod(2024, 5).previous() == PublicationPeriod(2024, 4)

    def test_previous_rolls_back_to_december(self) -> None:
        assert PublicationPeriod(2024, 1).previous() == PublicationPeriod(2023, 12)

    def test_invalid_month_rejected(self) -> None:
        with pytest.raises(ValueError):
            PublicationPeriod(2024, 0)


# ---------------------------------------------------------------------------
# Listing parsing
# ---------------------------------------------------------------------------

class TestArchiveUrl:
    def test_builds_year_month_path(self) -> None:
        assert archive_url(PublicationPeriod(2024, 5)) == f"{BASE}/2024/05/"

    def test_trailing_slash_on_base_is_ignored(self) -> None:
        url = archive_url(PublicationPeriod(2024, 5), base_url=BASE + "/")
        assert url == f"{BASE}/2024/05/"


class TestFindLastPdfHref:
    def test_returns_last_pdf_anchor(self) -> None:
        assert find_last_pdf_href(_LISTING_HTML) == "BO_7302_Fr.pdf"

    def test_ignores_script_and_style_content(self) -> None:
        html = "<html><body><script>'<a href=\"x.pdf\">'</script></body></html>"
        assert find_last_pdf_href(html) is None

    def test_no_pdf_anchor_returns_none(self) -> None:
        assert find_last_pdf_href(_EMPTY_LISTING_HTML) is None

    def test_empty_html_returns_none(self) -> None:
        assert find_last_pdf_href("") is None

    def test_body_less_fragment(self) -> None:
        assert find_last_pdf_href('<a href="a.pdf">a</a>\n\n<a href="b.pdf">b</a>') == "b.pdf"


class TestLookup:
    async def test_builds_url_from_last_anchor(self) -> None:
        period = PublicationPeriod(2024, 5)
        fetcher = FakeFetcher({f"{BASE}/2024/05/": _LISTING_HTML})

        reference = await lookup(fetcher, period)

        assert reference == DocumentReference(
            url=f"{BASE}/2024/05/BO_7302_Fr.pdf", period=period
        )
        assert fetcher.calls == [f"{BASE}/2024/05/"]

    async def test_no_pdf_returns_none(self) -> None:
        assert await lookup(FakeFetcher(), PublicationPeriod(2024, 5)) is None

    async def test_fetch_failure_propagates(self) -> None:
        with pytest.raises(NetworkError):
            await lookup(FailingFetcher(), PublicationPeriod(2024, 5))


# ---------------------------------------------------------------------------
# Locator
# ---------------------------------------------------------------------------

class TestLocateLatest:
    async def test_current_month_found_first(self) -> None:
        fetcher = FakeFetcher({f"{BASE}/2024/05/": _LISTING_HTML})

        result = await locate_latest(fetcher, today=date(2024, 5, 2))

        assert isinstance(result, Found)
        assert result.reference.period == PublicationPeriod(2024, 5)
        assert len(fetcher.calls) == 1

    async def test_falls_back_to_previous_month(self) -> None:
        fetcher = FakeFetcher({f"{BASE}/2024/04/": _LISTING_HTML})

        result = await locate_latest(fetcher, today=date(2024, 5, 2))

        assert isinstance(result, Found)
        assert result.reference.url == f"{BASE}/2024/04/BO_7302_Fr.pdf"
        assert fetcher.calls == [f"{BASE}/2024/05/", f"{BASE}/2024/04/"]

    async def test_not_found_after_three_months(self) -> None:
        fetcher = FakeFetcher()

        result = await locate_latest(fetcher, today=date(2024, 5, 2))

        assert isinstance(result, NotFound)
        assert result.tried == (
            PublicationPeriod(2024, 5),
            PublicationPeriod(2024, 4),
            PublicationPeriod(2024, 3),
        )
        assert fetcher.calls == [
            f"{BASE}/2024/05/",
            f"{BASE}/2024/04/",
            f"{BASE}/2024/03/",
        ]

    async def test_fallback_crosses_year_boundary(self) -> None:
        fetcher = FakeFetcher({f"{BASE}/2023/12/": _LISTING_HTML})

        result = await locate_latest(fetcher, today=date(2024, 1, 10))

        assert isinstance(result, Found)
        assert result.reference.period == PublicationPeriod(2023, 12)
        assert fetcher.calls == [f"{BASE}/2024/01/", f"{BASE}/2023/12/"]

    async def test_attempts_is_configurable(self) -> None:
        fetcher = FakeFetcher()
        result = await locate_latest(fetcher, today=date(2024, 5, 2), attempts=1)
        assert isinstance(result, NotFound)
        assert len(fetcher.calls) == 1

    async def test_fetch_failure_is_not_caught(self) -> None:
        with pytest.raises(NetworkError):
            await locate_latest(FailingFetcher(), today=date(2024, 5, 2))


# ---------------------------------------------------------------------------
# ScrapingProxyFetcher / download_document
# ---------------------------------------------------------------------------

class TestScrapingProxyFetcher:
    @respx.mock
    async def test_returns_html_field(self) -> None:
        route = respx.get(PROXY).mock(
            return_value=httpx.Response(200, json={"html": _LISTING_HTML})
        )
        async with httpx.AsyncClient() as client:
            html = await ScrapingProxyFetcher(client).fetch_html(f"{BASE}/2024/05/")

        assert html == _LISTING_HTML
        assert route.called
        assert route.calls.last.request.url.params["url"] == f"{BASE}/2024/05/"

    @respx.mock
    async def test_non_success_status_raises_network_error(self) -> None:
        respx.get(PROXY).mock(return_value=httpx.Response(502, text="Bad Gateway"))
        async with httpx.AsyncClient() as client:
            with pytest.raises(NetworkError, match="HTTP 502"):
                await ScrapingProxyFetcher(client).fetch_html(f"{BASE}/2024/05/")

    @respx.mock
    async def test_connection_error_raises_network_error(self) -> None:
        respx.get(PROXY).mock(side_effect=httpx.ConnectError("refused"))
        async with httpx.AsyncClient() as client:
            with pytest.raises(NetworkError):
                await ScrapingProxyFetcher(client).fetch_html(f"{BASE}/2024/05/")

    @respx.mock
    async def test_non_json_body_raises_network_error(self) -> None:
        respx.get(PROXY).mock(return_value=httpx.Response(200, text="<html></html>"))
        async with httpx.AsyncClient() as client:
            with pytest.raises(NetworkError):
                await ScrapingProxyFetcher(client).fetch_html(f"{BASE}/2024/05/")

    @respx.mock
    async def test_missing_html_field_is_empty(self) -> None:
        respx.get(PROXY).mock(return_value=httpx.Response(200, json={}))
        async with httpx.AsyncClient() as client:
            assert await ScrapingProxyFetcher(client).fetch_html("https://x.test/") == ""

    @pytest.mark.parametrize("html", [123, ["<a>"], {"body": "x"}])
    @respx.mock
    async def test_non_string_html_raises_network_error(self, html) -> None:
        respx.get(PROXY).mock(return_value=httpx.Response(200, json={"html": html}))
        async with httpx.AsyncClient() as client:
            with pytest.raises(NetworkError, match="unexpected payload"):
                await ScrapingProxyFetcher(client).fetch_html("https://x.test/")


class TestDownloadDocument:
    _REF = DocumentReference(
        url=f"{BASE}/2024/05/BO_7302_Fr.pdf", period=PublicationPeriod(2024, 5)
    )

    @respx.mock
    async def test_sends_browser_user_agent(self) -> None:
        route = respx.get(self._REF.url).mock(
            return_value=httpx.Response(200, content=b"%PDF-1.4 fake")
        )
        async with httpx.AsyncClient() as client:
            data = await download_document(client, self._REF)

        assert data == b"%PDF-1.4 fake"
        assert route.calls.last.request.headers["User-Agent"] == settings.user_agent

    @respx.mock
    async def test_http_error_raises_network_error(self) -> None:
        respx.get(self._REF.url).mock(return_value=httpx.Response(404))
        async with httpx.AsyncClient() as client:
            with pytest.raises(NetworkError, match="HTTP 404"):
                await download_document(client, self._REF)
