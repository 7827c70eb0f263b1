"""Quarantined items scraper."""

from typing import Any, Dict, List, Optional

from ..utils.metrics import ScrapeResult
from .base import BaseScraper, number


class QuarantinedScraper(BaseScraper):
    """Scrape recon/quarantined: one resource keyed by pluralized type."""

    TYPES = ("container", "account", "object")

    def resource(self, subsystem: Optional[str]) -> str:
        return "quarantined"

    def parse(self, data: Dict[str, Any], subsystem: Optional[str]) -> List[ScrapeResult]:
        results = []
        for t in self.TYPES:
            value = number(data, f"{t}s")
            if value is not None:
                results.append(ScrapeResult(name="quarantined", value=value, type=t))
        return results
