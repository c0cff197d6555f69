"""Data models for bulletin discovery."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional, Tuple, Union


@dataclass(frozen=True)
class PublicationPeriod:
    """A (year, month) pair identifying one edition of the bulletin."""

    year: int
    month: int

    def __post_init__(self) -> None:
        if not 1 <= self.month <= 12:
            raise ValueError(f"month must be in 1..12, got {self.month}")

    @classmethod
    def current(cls, today: Optional[date] = None) -> "PublicationPeriod":
        today = today or date.today()
        return cls(year=today.year, month=today.month)

    def previous(self) -> "PublicationPeriod":
        """Return the period one month earlier, rolling January back to December."""
        if self.month == 1:
            return PublicationPeriod(year=self.year - 1, month=12)
        return PublicationPeriod(year=self.year, month=self.month - 1)

    @property
    def year_str(self) -> str:
        return f"{self.year:04d}"

    @property
    def month_str(self) -> str:
        return f"{self.month:02d}"

    def __str__(self) -> str:
        return f"{self.year_str}/{self.month_str}"


@dataclass(frozen=True)
class DocumentReference:
    """Download location of one bulletin PDF."""

    url: str
    period: PublicationPeriod


@dataclass(frozen=True)
class Found:
    reference: DocumentReference


@dataclass(frozen=True)
class NotFound:
    tried: Tuple[PublicationPeriod, ...]


# Outcome of ``locate_latest``; callers must branch on it before downloading.
LocateResult = Union[Found, NotFound]
