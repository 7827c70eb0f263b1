"""Async pending updates scraper."""

from typing import Any, Dict, List, Optional

from ..utils.metrics import ScrapeResult
from .base import BaseScraper, number


class AsyncScraper(BaseScraper):
    """Scrape recon/async: number of pending container updates."""

    def resource(self, subsystem: Optional[str]) -> str:
        return "async"

    def parse(self, data: Dict[str, Any], subsystem: Optional[str]) -> List[ScrapeResult]:
        pending = number(data, "async_pending")
        if pending is None:
            return []
        return [ScrapeResult(name="async", value=pending, status="pending")]
