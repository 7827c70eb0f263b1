"""Updater sweep time scraper."""

from typing import Any, Dict, List, Optional

from ..utils.metrics import ScrapeResult
from .base import BaseScraper, number


class UpdaterScraper(BaseScraper):
    """Scrape recon/updater/<type>: duration of the last updater sweep."""

    subsystems = ("container", "object")

    def resource(self, subsystem: Optional[str]) -> str:
        return f"updater/{subsystem}"

    def parse(self, data: Dict[str, Any], subsystem: Optional[str]) -> List[ScrapeResult]:
        sweep = number(data, f"{subsystem}_updater_sweep")
        if sweep is None:
            return []
        return [ScrapeResult(name="updater_sweep", value=sweep, type=subsystem)]
