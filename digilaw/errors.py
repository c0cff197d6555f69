"""Exception hierarchy shared by the locator, extractor and HTTP layer."""

from __future__ import annotations


class DigilawError(Exception):
    """Base class for every failure raised by the Digilaw pipeline."""


class ValidationError(DigilawError):
    """A request parameter is missing or malformed (client error)."""


class NetworkError(DigilawError):
    """The scraping proxy or the PDF host failed or answered with an error."""


class PublicationNotFoundError(DigilawError):
    """No bulletin could be located in any of the periods searched."""


class DecodeError(DigilawError):
    """The downloaded bytes could not be decoded as a PDF document."""
