"""Per-request pipeline: locate → download → extract.

Every call re-resolves the latest bulletin and re-downloads it; nothing is
shared between concurrent requests apart from the HTTP client.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Tuple

import httpx

from digilaw.bulletin.fetcher import PageFetcher, download_document
from digilaw.bulletin.locator import locate_latest
from digilaw.bulletin.models import DocumentReference, NotFound
from digilaw.errors import PublicationNotFoundError
from digilaw.pdf.extractor import ExtractionRequest, ExtractionResult, extract_text

logger = logging.getLogger(__name__)


async def resolve_latest(fetcher: PageFetcher) -> DocumentReference:
    """Return the newest bulletin reference or raise :class:`PublicationNotFoundError`."""
    result = await locate_latest(fetcher)
    if isinstance(result, NotFound):
        searched = ", ".join(str(p) for p in result.tried)
        raise PublicationNotFoundError(f"No Bulletin Officiel PDF found for {searched}.")
    return result.reference


async def fetch_latest_document(
    client: httpx.AsyncClient, fetcher: PageFetcher
) -> Tuple[DocumentReference, bytes]:
    reference = await resolve_latest(fetcher)
    data = await download_document(client, reference)
    return reference, data


async def extract_latest(
    client: httpx.AsyncClient,
    fetcher: PageFetcher,
    request: ExtractionRequest,
) -> ExtractionResult:
    """Run the whole pipeline for *request* against the latest bulletin."""
    reference, data = await fetch_latest_document(client, fetcher)
    # pypdf is synchronous; keep decoding off the event loop.
    result = await asyncio.to_thread(extract_text, data, request)
    logger.info(
        "Extracted %d chars from %s (%d page(s) read)",
        len(result.text),
        reference.url,
        result.pages_read,
    )
    return result
