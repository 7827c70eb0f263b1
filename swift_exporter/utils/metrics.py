"""Metric data structures for scrapers."""

from dataclasses import dataclass


@dataclass
class ScrapeResult:
    """Single observation produced by a sub-scrape."""

    name: str
    value: float
    type: str = ""  # Subsystem qualifier: object, container, account
    status: str = ""  # Outcome qualifier: pending, success, failure...

    def labels(self) -> dict:
        """Return only the labels that are actually set."""
        labels = {}
        if self.type:
            labels["type"] = self.type
        if self.status:
            labels["status"] = self.status
        return labels
