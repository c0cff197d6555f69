"""PDF package — bounded-page text extraction."""

from digilaw.pdf.extractor import ExtractionRequest, ExtractionResult, extract_text

__all__ = ["ExtractionRequest", "ExtractionResult", "extract_text"]
