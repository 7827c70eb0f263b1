"""Growable registry of labeled gauge families."""

import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple

from prometheus_client.core import GaugeMetricFamily

from ..utils.metrics import ScrapeResult


# Metric name -> (label names, help text)
KNOWN_METRICS: Dict[str, Tuple[Tuple[str, ...], str]] = {
    "async": (("status",), "async metric"),
    "replication_time": (("type",), "replication_time metric"),
    "replication_last": (("type",), "replication_last metric"),
    "replication_stats": (("type", "status"), "replication_stats metric"),
    "updater_sweep": (("type",), "updater_sweep metric"),
    "expirer_expiration_pass": (("type",), "expirer_expiration_pass metric"),
    "expirer_expired_last_pass": (("type",), "expirer_expired_last_pass metric"),
    "quarantined": (("type",), "quarantined metric"),
}

# Label schema given to names outside the known catalog
DYNAMIC_LABELS = ("type", "status")


class ReadWriteLock:
    """Many concurrent readers or one exclusive writer; waiting writers go first."""

    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    @contextmanager
    def read(self) -> Iterator[None]:
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write(self) -> Iterator[None]:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


@dataclass
class MetricEntry:
    """A named gauge family: label tuple -> current value."""

    name: str
    help: str
    labelnames: Tuple[str, ...]
    values: Dict[Tuple[str, ...], float] = field(default_factory=dict)

    def label_key(self, labels: Dict[str, str]) -> Tuple[str, ...]:
        """
        Resolve a label map against this entry's schema.

        Labels the entry declares but the map lacks resolve to "".

        Raises:
            ValueError: If the map carries a label the entry does not declare
        """
        unknown = set(labels) - set(self.labelnames)
        if unknown:
            raise ValueError(
                f"{self.name}: unexpected label(s) {sorted(unknown)}, "
                f"expected {list(self.labelnames)}"
            )
        return tuple(labels.get(name, "") for name in self.labelnames)

    def set(self, labels: Dict[str, str], value: float) -> None:
        self.values[self.label_key(labels)] = float(value)

    def to_family(self, namespace: str = "") -> GaugeMetricFamily:
        full_name = f"{namespace}_{self.name}" if namespace else self.name
        family = GaugeMetricFamily(full_name, self.help, labels=list(self.labelnames))
        for key, value in self.values.items():
            family.add_metric(list(key), value)
        return family


class MetricRegistry:
    """
    Mapping from metric name to MetricEntry.

    Seeded with the known recon catalog and grown on demand when a scrape
    reports a name outside it. The entry map is guarded by a read/write
    lock: collect/describe share it, fold/initialize hold it exclusively.
    """

    def __init__(self, namespace: str = "swift", logger: logging.Logger = None):
        self.namespace = namespace
        self.logger = logger or logging.getLogger(__name__)
        self._lock = ReadWriteLock()
        self._entries: Dict[str, MetricEntry] = {}
        self.initialize()

    def initialize(self) -> None:
        """Drop every entry, including dynamic ones, and re-create the catalog."""
        with self._lock.write():
            self._entries = {
                name: MetricEntry(name=name, help=help_text, labelnames=labelnames)
                for name, (labelnames, help_text) in KNOWN_METRICS.items()
            }

    def fold(self, result: ScrapeResult) -> None:
        """
        Set the value of one sample, registering its name if unseen.

        Raises:
            ValueError: If the sample's labels don't fit the entry's schema
        """
        with self._lock.write():
            entry = self._entries.get(result.name)
            if entry is None:
                self.logger.debug(f"Registering dynamic metric {result.name}")
                entry = MetricEntry(
                    name=result.name,
                    help=f"{result.name} metric",
                    labelnames=DYNAMIC_LABELS
                )
                self._entries[result.name] = entry
            entry.set(result.labels(), result.value)

    def get(self, name: str) -> Optional[MetricEntry]:
        with self._lock.read():
            return self._entries.get(name)

    def names(self) -> List[str]:
        with self._lock.read():
            return list(self._entries)

    def describe(self) -> Iterator[GaugeMetricFamily]:
        """Yield every family without samples."""
        with self._lock.read():
            families = [
                GaugeMetricFamily(self._full_name(e.name), e.help, labels=list(e.labelnames))
                for e in self._entries.values()
            ]
        yield from families

    def collect(self) -> Iterator[GaugeMetricFamily]:
        """Yield every family with its current values."""
        with self._lock.read():
            families = [e.to_family(self.namespace) for e in self._entries.values()]
        yield from families

    def _full_name(self, name: str) -> str:
        return f"{self.namespace}_{name}" if self.namespace else name
