"""Bulletin text endpoints.

Routes
------
GET /api/Digilaw/Page?page=<n>   Text of page n of the latest bulletin
GET /api/Digilaw/Companies       Text of the first pages of the latest bulletin
GET /api/Digilaw/health          Liveness check (never touches upstream)
"""

from __future__ import annotations

from typing import Optional

import httpx
from fastapi import APIRouter, Depends
from pydantic import BaseModel

from digilaw.api.deps import get_http_client, get_page_fetcher
from digilaw.bulletin.fetcher import PageFetcher
from digilaw.config import settings
from digilaw.errors import ValidationError
from digilaw.pdf.extractor import ExtractionRequest
from digilaw.pipeline import extract_latest

router = APIRouter()


# ---------------------------------------------------------------------------
# Schemas
# ---------------------------------------------------------------------------

class TextResponse(BaseModel):
    text: str


class HealthResponse(BaseModel):
    status: str


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def parse_page(raw: Optional[str]) -> int:
    """Validate the ``page`` query parameter as a positive integer.

    Raises:
        ValidationError: If *raw* is missing, not an integer, or below 1.
    """
    if raw is None or not raw.strip():
        raise ValidationError("Missing page parameter")
    try:
        page = int(raw)
    except ValueError as exc:
        raise ValidationError(f"Invalid page parameter: {raw!r}") from exc
    if page < 1:
        raise ValidationError(f"Invalid page parameter: {raw!r}")
    return page


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.get("/Page", response_model=TextResponse)
async def page_text(
    page: Optional[str] = None,
    client: httpx.AsyncClient = Depends(get_http_client),
    fetcher: PageFetcher = Depends(get_page_fetcher),
) -> dict[str, str]:
    """Return the text of one page of the latest Bulletin Officiel.

    The ``page`` parameter is checked before any network call is made.
    """
    target = parse_page(page)
    result = await extract_latest(client, fetcher, ExtractionRequest.single_page(target))
    return {"text": result.text}


@router.get("/Companies", response_model=TextResponse)
async def companies_text(
    client: httpx.AsyncClient = Depends(get_http_client),
    fetcher: PageFetcher = Depends(get_page_fetcher),
) -> dict[str, str]:
    """Return the text of the first pages (50 by default) of the latest bulletin."""
    request = ExtractionRequest.first_pages(settings.companies_max_pages)
    result = await extract_latest(client, fetcher, request)
    return {"text": result.text}


@router.get("/health", response_model=HealthResponse)
def health() -> dict[str, str]:
    return {"status": "ok"}
