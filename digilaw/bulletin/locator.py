"""Latest-bulletin discovery with a calendar fallback."""

from __future__ import annotations

import logging
from datetime import date
from typing import List, Optional

from digilaw.bulletin.fetcher import PageFetcher
from digilaw.bulletin.lookup import lookup
from digilaw.bulletin.models import Found, LocateResult, NotFound, PublicationPeriod
from digilaw.config import settings

logger = logging.getLogger(__name__)


async def locate_latest(
    fetcher: PageFetcher,
    today: Optional[date] = None,
    attempts: Optional[int] = None,
) -> LocateResult:
    """Find the most recent bulletin, walking back one month per attempt.

    The current month is tried first, then each preceding month until
    *attempts* periods have been scraped (``settings.lookup_attempts`` by
    default).  Fetch failures are not caught here.

    Returns:
        :class:`Found` with the reference, or :class:`NotFound` listing the
        periods that were searched.
    """
    attempts = attempts if attempts is not None else settings.lookup_attempts
    period = PublicationPeriod.current(today)
    tried: List[PublicationPeriod] = []

    for _ in range(attempts):
        tried.append(period)
        reference = await lookup(fetcher, period)
        if reference is not None:
            return Found(reference=reference)
        period = period.previous()

    logger.warning("No bulletin found in %s", ", ".join(str(p) for p in tried))
    return NotFound(tried=tuple(tried))
