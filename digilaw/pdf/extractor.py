"""Bounded-page text extraction from PDF bytes using ``pypdf``.

Two modes, selected by :class:`ExtractionRequest`:

* **single page**: pages before the target are skipped without being
  text-extracted, and decoding stops at the target page;
* **first N pages**: every page up to ``max_page`` is extracted in order.

Within a page, text runs are stripped and joined with one space; page texts
are joined the same way, so pages ``"A"``, ``"B"``, ``"C"`` give ``"A B C"``.
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from typing import List, Optional

from pypdf import PageObject, PdfReader

from digilaw.errors import DecodeError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExtractionRequest:
    """How many pages to visit and, optionally, the single page to emit."""

    max_page: int
    target_page: Optional[int] = None

    def __post_init__(self) -> None:
        if self.max_page < 1:
            raise ValueError(f"max_page must be >= 1, got {self.max_page}")
        if self.target_page is not None and self.target_page < 1:
            raise ValueError(f"target_page must be >= 1, got {self.target_page}")

    @classmethod
    def single_page(cls, page: int) -> "ExtractionRequest":
        return cls(max_page=page, target_page=page)

    @classmethod
    def first_pages(cls, count: int) -> "ExtractionRequest":
        return cls(max_page=count)

    @property
    def last_page(self) -> int:
        """Highest page number that needs decoding."""
        if self.target_page is None:
            return self.max_page
        return min(self.max_page, self.target_page)


@dataclass(frozen=True)
class ExtractionResult:
    text: str
    pages_read: int = 0


def _page_text(page: PageObject) -> str:
    """Join the text runs of *page* with single spaces."""
    runs: List[str] = []

    def _collect(text, cm, tm, font_dict, font_size) -> None:
        run = text.strip()
        if run:
            runs.append(run)

    page.extract_text(visitor_text=_collect)
    return " ".join(runs)


def extract_text(data: bytes, request: ExtractionRequest) -> ExtractionResult:
    """Extract text from *data* according to *request*.

    A target page past the end of the document yields an empty string.

    Raises:
        DecodeError: If *data* is not a readable PDF.
    """
    texts: List[str] = []
    pages_read = 0
    try:
        reader = PdfReader(io.BytesIO(data))
        last = min(request.last_page, len(reader.pages))
        for number in range(1, last + 1):
            pages_read += 1
            if request.target_page is not None and number < request.target_page:
                continue
            text = _page_text(reader.pages[number - 1])
            if text:
                texts.append(text)
    except Exception as exc:
        raise DecodeError(f"Unable to decode PDF: {exc}") from exc

    logger.info("Read %d page(s), extracted %d non-empty", pages_read, len(texts))
    return ExtractionResult(text=" ".join(texts).strip(), pages_read=pages_read)
