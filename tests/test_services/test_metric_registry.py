"""Tests for MetricRegistry."""

import threading
import time

import pytest

from swift_exporter.services.metric_registry import (
    DYNAMIC_LABELS,
    KNOWN_METRICS,
    MetricEntry,
    MetricRegistry,
    ReadWriteLock,
)
from swift_exporter.utils.metrics import ScrapeResult


@pytest.fixture
def registry():
    return MetricRegistry(namespace="swift")


def samples_of(registry, name):
    """Return {labels-dict-as-tuple: value} for one family."""
    family = next(f for f in registry.collect() if f.name == f"swift_{name}")
    return {tuple(sorted(s.labels.items())): s.value for s in family.samples}


class TestCatalog:
    def test_known_catalog_seeded(self, registry):
        assert sorted(registry.names()) == sorted(KNOWN_METRICS)
        assert len(registry.names()) == 8

    def test_label_schemas(self, registry):
        assert registry.get("async").labelnames == ("status",)
        assert registry.get("replication_stats").labelnames == ("type", "status")
        assert registry.get("quarantined").labelnames == ("type",)

    def test_entries_start_empty(self, registry):
        assert all(not registry.get(name).values for name in registry.names())


class TestFold:
    def test_fold_sets_value(self, registry):
        registry.fold(ScrapeResult(name="async", value=3.0, status="pending"))

        assert registry.get("async").values == {("pending",): 3.0}

    def test_fold_overwrites(self, registry):
        registry.fold(ScrapeResult(name="quarantined", value=1, type="object"))
        registry.fold(ScrapeResult(name="quarantined", value=9, type="object"))

        assert registry.get("quarantined").values == {("object",): 9.0}

    def test_fold_distinct_label_tuples(self, registry):
        registry.fold(ScrapeResult(name="replication_stats", value=10, type="object", status="success"))
        registry.fold(ScrapeResult(name="replication_stats", value=2, type="object", status="failure"))

        assert registry.get("replication_stats").values == {
            ("object", "success"): 10.0,
            ("object", "failure"): 2.0,
        }

    def test_unseen_name_registers_once(self, registry):
        registry.fold(ScrapeResult(name="auditor_pass", value=1, type="object"))
        entry = registry.get("auditor_pass")
        registry.fold(ScrapeResult(name="auditor_pass", value=2, type="object"))

        assert len(registry.names()) == len(KNOWN_METRICS) + 1
        assert registry.get("auditor_pass") is entry
        assert entry.labelnames == DYNAMIC_LABELS
        assert entry.help == "auditor_pass metric"
        assert entry.values == {("object", ""): 2.0}

    def test_dynamic_absent_labels_are_empty_strings(self, registry):
        registry.fold(ScrapeResult(name="dyn", value=1, status="ok"))
        registry.fold(ScrapeResult(name="dyn", value=2))

        assert registry.get("dyn").values == {("", "ok"): 1.0, ("", ""): 2.0}

    def test_undeclared_label_rejected(self, registry):
        with pytest.raises(ValueError, match="unexpected label"):
            registry.fold(ScrapeResult(name="async", value=1, type="object", status="pending"))

        assert registry.get("async").values == {}


class TestInitialize:
    def test_initialize_drops_values_and_dynamic_entries(self, registry):
        registry.fold(ScrapeResult(name="async", value=3.0, status="pending"))
        registry.fold(ScrapeResult(name="dyn", value=1))

        registry.initialize()

        assert sorted(registry.names()) == sorted(KNOWN_METRICS)
        assert registry.get("async").values == {}


class TestExposition:
    def test_collect_yields_namespaced_gauges(self, registry):
        registry.fold(ScrapeResult(name="replication_time", value=1.5, type="object"))

        families = {f.name: f for f in registry.collect()}

        assert set(families) == {f"swift_{name}" for name in KNOWN_METRICS}
        family = families["swift_replication_time"]
        assert family.type == "gauge"
        assert family.documentation == "replication_time metric"
        assert samples_of(registry, "replication_time") == {(("type", "object"),): 1.5}

    def test_collect_includes_dynamic(self, registry):
        registry.fold(ScrapeResult(name="dyn", value=4, type="object"))

        assert samples_of(registry, "dyn") == {(("status", ""), ("type", "object")): 4.0}

    def test_describe_has_no_samples(self, registry):
        registry.fold(ScrapeResult(name="async", value=3.0, status="pending"))

        families = list(registry.describe())

        assert len(families) == len(KNOWN_METRICS)
        assert all(f.samples == [] for f in families)

    def test_empty_namespace(self):
        entry = MetricEntry(name="async", help="h", labelnames=("status",))
        assert entry.to_family().name == "async"


class TestConcurrency:
    def test_concurrent_folds_of_unseen_names(self, registry):
        def worker(n):
            for i in range(50):
                registry.fold(ScrapeResult(name=f"dyn_{i}", value=n, type=str(n)))

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(registry.names()) == len(KNOWN_METRICS) + 50
        assert all(len(registry.get(f"dyn_{i}").values) == 8 for i in range(50))

    def test_read_write_lock_excludes_writer_while_reading(self):
        lock = ReadWriteLock()
        acquired = threading.Event()

        def writer():
            with lock.write():
                acquired.set()

        with lock.read():
            with lock.read():
                t = threading.Thread(target=writer)
                t.start()
                assert not acquired.wait(0.1)
        t.join(timeout=2)

        assert acquired.is_set()

    def test_waiting_writer_blocks_new_readers(self):
        lock = ReadWriteLock()
        order = []
        reader_entered = threading.Event()

        def writer():
            with lock.write():
                order.append("writer")

        def late_reader():
            with lock.read():
                reader_entered.set()
                order.append("reader")

        with lock.read():
            w = threading.Thread(target=writer)
            w.start()
            deadline = time.time() + 2
            while lock._writers_waiting == 0 and time.time() < deadline:
                time.sleep(0.001)
            assert lock._writers_waiting == 1

            r = threading.Thread(target=late_reader)
            r.start()
            assert not reader_entered.wait(0.1)

        w.join(timeout=2)
        r.join(timeout=2)

        assert order == ["writer", "reader"]
