"""Object expirer scraper."""

from typing import Any, Dict, List, Optional

from ..utils.metrics import ScrapeResult
from .base import BaseScraper, number


class ExpirerScraper(BaseScraper):
    """Scrape recon/expirer/object: last pass duration and objects expired."""

    subsystems = ("object",)

    def resource(self, subsystem: Optional[str]) -> str:
        return f"expirer/{subsystem}"

    def parse(self, data: Dict[str, Any], subsystem: Optional[str]) -> List[ScrapeResult]:
        results = []

        expiration_pass = number(data, f"{subsystem}_expiration_pass")
        if expiration_pass is not None:
            results.append(ScrapeResult(
                name="expirer_expiration_pass", value=expiration_pass, type=subsystem
            ))

        expired_last_pass = number(data, "expired_last_pass")
        if expired_last_pass is not None:
            results.append(ScrapeResult(
                name="expirer_expired_last_pass", value=expired_last_pass, type=subsystem
            ))

        return results
