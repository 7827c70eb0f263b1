"""Scrape coordinator exposing Swift recon data to prometheus_client."""

import asyncio
import logging
import threading
import time
from typing import Iterator, List, Optional, Sequence

from prometheus_client import CollectorRegistry, Gauge
from prometheus_client.core import CounterMetricFamily, GaugeMetricFamily, Metric
from prometheus_client.registry import Collector

from .collectors.base import BaseScraper
from .collectors.async_scraper import AsyncScraper
from .collectors.replication_scraper import ReplicationScraper
from .collectors.updater_scraper import UpdaterScraper
from .collectors.expirer_scraper import ExpirerScraper
from .collectors.quarantined_scraper import QuarantinedScraper
from .errors import PingError
from .services.metric_registry import MetricRegistry
from .services.recon_client import ReconClient
from .utils.metrics import ScrapeResult
from .version import BUILD_DATE, COMMIT_SHA1, PYTHON_VERSION, VERSION


def default_scrapers(logger: logging.Logger) -> List[BaseScraper]:
    """The fixed recon sub-scrape sequence run on every cycle."""
    return [
        AsyncScraper(logger),
        ReplicationScraper(logger),
        UpdaterScraper(logger),
        ExpirerScraper(logger),
        QuarantinedScraper(logger),
    ]


class SwiftExporter(Collector):
    """
    prometheus_client collector driving one recon scrape per collect().

    A full cycle (reset the registry, run every sub-scrape, fold the
    results) runs under a single lock so that concurrent /metrics requests
    serialize instead of interleaving. The pipeline health values
    (duration, scrape count, last error) live here and survive registry
    resets.
    """

    def __init__(
        self,
        recon: ReconClient,
        registry: Optional[MetricRegistry] = None,
        logger: logging.Logger = None,
        scrapers: Optional[Sequence[BaseScraper]] = None,
        namespace: str = "swift"
    ):
        """
        Initialize exporter.

        Args:
            recon: Client for the recon endpoint
            registry: Metric registry; a fresh one is created when None
            logger: Optional logger instance
            scrapers: Sub-scrapes to run; defaults to the full recon set
            namespace: Metric name prefix
        """
        self.logger = logger or logging.getLogger(__name__)
        self.logger.debug("Creating exporter")

        self.recon = recon
        self.namespace = namespace
        self.registry = registry or MetricRegistry(namespace=namespace, logger=self.logger)
        self.scrapers = list(scrapers) if scrapers is not None else default_scrapers(self.logger)

        self._lock = threading.Lock()
        self.last_scrape_duration = 0.0
        self.total_scrapes = 0
        self.last_scrape_error = 0

    def ping(self) -> None:
        """
        Startup check of the source address.

        Raises:
            PingError: If the source is unusable
        """
        if not self.recon.address:
            raise PingError("Swift address is empty")

    def collect(self) -> Iterator[Metric]:
        """Run one collection cycle and yield every metric family."""
        with self._lock:
            self.registry.initialize()
            results = self._run_cycle()
            self._fold(results)
            families = self._health_families() + list(self.registry.collect())
        yield from families

    def describe(self) -> Iterator[Metric]:
        """Yield metric families without running a scrape."""
        yield from self._health_families()
        yield from self.registry.describe()

    async def scrape(self) -> List[ScrapeResult]:
        """Run every sub-scrape sequentially over one HTTP session."""
        results = []
        async with self.recon.session() as recon:
            for scraper in self.scrapers:
                results.extend(await scraper.collect(recon))
        return results

    def _run_cycle(self) -> List[ScrapeResult]:
        start_time = time.time()
        self.total_scrapes += 1

        results = asyncio.run(self.scrape())

        errors = sum(scraper.errors for scraper in self.scrapers)
        self.last_scrape_error = 1 if errors else 0
        self.last_scrape_duration = time.time() - start_time

        self.logger.debug(
            f"Scrape finished in {self.last_scrape_duration:.3f}s: "
            f"{len(results)} samples, {errors} failed resources"
        )
        return results

    def _fold(self, results: List[ScrapeResult]) -> None:
        for result in results:
            try:
                self.registry.fold(result)
            except ValueError as e:
                self.logger.warning(f"Dropping sample {result.name}: {e}")

    def _health_families(self) -> List[Metric]:
        duration = GaugeMetricFamily(
            self._name("exporter_last_scrape_duration_seconds"),
            "The last scrape duration",
            value=self.last_scrape_duration
        )
        scrapes = CounterMetricFamily(
            self._name("exporter_scrapes_total"),
            "Current total swift scrapes",
            value=self.total_scrapes
        )
        error = GaugeMetricFamily(
            self._name("exporter_last_scrape_error"),
            "The last scrape error status",
            value=self.last_scrape_error
        )
        return [duration, scrapes, error]

    def _name(self, name: str) -> str:
        return f"{self.namespace}_{name}" if self.namespace else name


def register_build_info(registry: CollectorRegistry) -> Gauge:
    """Register the constant swift_exporter_build_info gauge."""
    build_info = Gauge(
        "swift_exporter_build_info",
        "swift exporter build_info",
        ["version", "commit_sha", "build_date", "python_version"],
        registry=registry
    )
    build_info.labels(VERSION, COMMIT_SHA1, BUILD_DATE, PYTHON_VERSION).set(1)
    return build_info
