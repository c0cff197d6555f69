"""Bulletin package — locating and downloading the latest Bulletin Officiel."""

from digilaw.bulletin.fetcher import PageFetcher, ScrapingProxyFetcher, download_document
from digilaw.bulletin.locator import locate_latest
from digilaw.bulletin.lookup import lookup
from digilaw.bulletin.models import (
    DocumentReference,
    Found,
    LocateResult,
    NotFound,
    PublicationPeriod,
)

__all__ = [
    "PageFetcher",
    "ScrapingProxyFetcher",
    "download_document",
    "locate_latest",
    "lookup",
    "DocumentReference",
    "Found",
    "LocateResult",
    "NotFound",
    "PublicationPeriod",
]
