"""FastAPI dependencies shared by the routers.

Tests swap the scraping proxy out through ``app.dependency_overrides``.
"""

from __future__ import annotations

import httpx
from fastapi import Depends, Request

from digilaw.bulletin.fetcher import PageFetcher, ScrapingProxyFetcher


def get_http_client(request: Request) -> httpx.AsyncClient:
    return request.app.state.http_client


def get_page_fetcher(client: httpx.AsyncClient = Depends(get_http_client)) -> PageFetcher:
    return ScrapingProxyFetcher(client)
