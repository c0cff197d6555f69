"""Archive-listing lookup: find the newest PDF link for one publication period."""

from __future__ import annotations

import logging
import re
from typing import Optional

from bs4 import BeautifulSoup

from digilaw.bulletin.fetcher import PageFetcher
from digilaw.bulletin.models import DocumentReference, PublicationPeriod
from digilaw.config import settings

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")


def archive_url(period: PublicationPeriod, base_url: Optional[str] = None) -> str:
    """Return the listing URL for *period*, e.g. ``.../uploads/2024/05/``."""
    base = (base_url or settings.archive_base_url).rstrip("/")
    return f"{base}/{period.year_str}/{period.month_str}/"


def _clean_markup(html: str) -> BeautifulSoup:
    """Parse *html*, drop script/style elements and collapse whitespace in the body."""
    soup = BeautifulSoup(html, "html.parser")
    for tag in soup(["script", "style"]):
        tag.decompose()

    body = soup.body or soup
    collapsed = _WHITESPACE.sub(" ", body.decode_contents())
    return BeautifulSoup(collapsed, "html.parser")


def find_last_pdf_href(html: str) -> Optional[str]:
    """Return the raw ``href`` of the last ``.pdf`` anchor in *html*, or ``None``.

    Listings append the newest file last, so document order decides.
    """
    anchors = _clean_markup(html).select('a[href$=".pdf"]')
    if not anchors:
        return None
    return anchors[-1]["href"]


async def lookup(fetcher: PageFetcher, period: PublicationPeriod) -> Optional[DocumentReference]:
    """Resolve the bulletin PDF published in *period*.

    Returns ``None`` when the listing holds no PDF link.

    Raises:
        NetworkError: Propagated from *fetcher* when the proxy fails.
    """
    url = archive_url(period)
    logger.info("Scraping %s for period %s", url, period)

    html = await fetcher.fetch_html(url)
    href = find_last_pdf_href(html)
    if href is None:
        logger.info("No PDF listed for %s", period)
        return None

    reference = DocumentReference(url=url + href, period=period)
    logger.info("PDF URL: %s", reference.url)
    return reference
