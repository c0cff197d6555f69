"""Shared fixtures: in-memory PDF documents with one text run per page."""

from __future__ import annotations

import io
from typing import Callable, List

import pytest
from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas


def build_pdf(pages: List[str]) -> bytes:
    """Return a PDF whose page *i* shows the string ``pages[i]`` in Helvetica."""
    buffer = io.BytesIO()
    pdf = canvas.Canvas(buffer, pagesize=A4)
    for text in pages:
        pdf.setFont("Helvetica", 12)
        pdf.drawString(72, 720, text)
        pdf.showPage()
    pdf.save()
    return buffer.getvalue()


@pytest.fixture()
def make_pdf() -> Callable[[List[str]], bytes]:
    return build_pdf
