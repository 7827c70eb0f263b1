"""Replication statistics scraper."""

from typing import Any, Dict, List, Optional

from ..utils.metrics import ScrapeResult
from .base import BaseScraper, number


class ReplicationScraper(BaseScraper):
    """
    Scrape recon/replication/<type> for each ring.

    Emits replication_time and replication_last per type, plus one
    replication_stats sample per numeric key of the nested stats object.
    """

    subsystems = ("container", "account", "object")

    # Nested per-node breakdown, not a counter
    SKIPPED_STATS = frozenset({"failure_nodes"})

    def resource(self, subsystem: Optional[str]) -> str:
        return f"replication/{subsystem}"

    def parse(self, data: Dict[str, Any], subsystem: Optional[str]) -> List[ScrapeResult]:
        results = []

        for key in ("replication_time", "replication_last"):
            value = number(data, key)
            if value is not None:
                results.append(ScrapeResult(name=key, value=value, type=subsystem))

        stats = data.get("replication_stats")
        if isinstance(stats, dict):
            for status in stats:
                if status in self.SKIPPED_STATS:
                    continue
                value = number(stats, status)
                if value is not None:
                    results.append(ScrapeResult(
                        name="replication_stats",
                        value=value,
                        type=subsystem,
                        status=status
                    ))

        return results
