"""Runtime settings for Digilaw: archive and proxy endpoints, HTTP client,
extraction limits and server binding.

Every field reads an environment variable with a fallback default.  A `.env`
file at the repository root is read once at import; variables already set in
the environment win over it.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# digilaw/config.py -> parent is digilaw/, parent.parent is the repository root
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Bulletin Officiel archive
    # ------------------------------------------------------------------
    archive_base_url: str = field(
        default_factory=lambda: os.environ.get(
            "DIGILAW_ARCHIVE_BASE_URL",
            "https://bulletinofficiel.com/wp-content/uploads",
        )
    )
    lookup_attempts: int = field(
        default_factory=lambda: int(os.environ.get("DIGILAW_LOOKUP_ATTEMPTS", "3"))
    )

    # ------------------------------------------------------------------
    # Scraping proxy / HTTP client
    # ------------------------------------------------------------------
    scraper_proxy_url: str = field(
        default_factory=lambda: os.environ.get(
            "DIGILAW_SCRAPER_PROXY_URL",
            "https://api-scraper-nine.vercel.app/api/scrape",
        )
    )
    user_agent: str = field(
        default_factory=lambda: os.environ.get(
            "DIGILAW_USER_AGENT",
            "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36",
        )
    )
    request_timeout: float = field(
        default_factory=lambda: float(os.environ.get("REQUEST_TIMEOUT", "30.0"))
    )

    # ------------------------------------------------------------------
    # Extraction
    # ------------------------------------------------------------------
    companies_max_pages: int = field(
        default_factory=lambda: int(os.environ.get("DIGILAW_COMPANIES_MAX_PAGES", "50"))
    )

    # ------------------------------------------------------------------
    # Server
    # ------------------------------------------------------------------
    host: str = field(default_factory=lambda: os.environ.get("HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: int(os.environ.get("PORT", "3000")))
    log_level: str = field(
        default_factory=lambda: os.environ.get("LOG_LEVEL", "INFO").upper()
    )


def configure_logging(level: str | None = None) -> None:
    """Install the root logging configuration (no-op if already configured)."""
    logging.basicConfig(level=level or settings.log_level, format=_LOG_FORMAT)


# Shared instance; tests monkeypatch its attributes:
#   from digilaw.config import settings
settings = Settings()
