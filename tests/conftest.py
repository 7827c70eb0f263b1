"""Shared pytest configuration and fixtures."""

import json

import httpx
import pytest

from swift_exporter.services.recon_client import ReconClient
from swift_exporter.utils.logger import setup_logger


SWIFT_ADDR = "http://swift.test:6000"


def recon_transport(payloads, requests=None):
    """
    Build an httpx MockTransport serving recon resources.

    Args:
        payloads: resource -> JSON-serializable body, raw str body,
                  int status code, or Exception to raise
        requests: Optional list collecting requested resource names
    """
    def handler(request: httpx.Request) -> httpx.Response:
        resource = request.url.path.removeprefix("/recon/")
        if requests is not None:
            requests.append(resource)

        if resource not in payloads:
            return httpx.Response(404, text="Not Found")

        body = payloads[resource]
        if isinstance(body, Exception):
            raise body
        if isinstance(body, int):
            return httpx.Response(body)
        if isinstance(body, str):
            return httpx.Response(200, text=body)
        return httpx.Response(200, content=json.dumps(body).encode())

    return httpx.MockTransport(handler)


@pytest.fixture
def logger():
    """Create logger for tests."""
    return setup_logger("test")


@pytest.fixture
def make_recon(logger):
    """Factory for a ReconClient backed by canned recon payloads."""
    def factory(payloads, requests=None):
        return ReconClient(
            SWIFT_ADDR,
            timeout_seconds=1.0,
            logger=logger,
            transport=recon_transport(payloads, requests)
        )
    return factory


@pytest.fixture
def full_payloads():
    """Recon responses for every resource the exporter scrapes."""
    return {
        "async": {"async_pending": 3.0},
        "replication/container": {"replication_time": 0.5, "replication_last": 1700000000.0},
        "replication/account": {"replication_time": 0.25},
        "replication/object": {
            "replication_time": 1.5,
            "replication_stats": {"success": 10, "failure": 2, "failure_nodes": {"n1": 1}},
        },
        "updater/container": {"container_updater_sweep": 4.2},
        "updater/object": {"object_updater_sweep": 7.0},
        "expirer/object": {"object_expiration_pass": 12.5, "expired_last_pass": 8},
        "quarantined": {"objects": 5, "accounts": 0, "containers": 2},
    }
