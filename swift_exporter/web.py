"""WSGI front end: landing page plus the Prometheus telemetry path."""

import logging
from socketserver import ThreadingMixIn
from typing import Callable, Iterable, List, Tuple
from wsgiref.simple_server import WSGIRequestHandler, WSGIServer, make_server

from prometheus_client import CollectorRegistry, make_wsgi_app

from .version import VERSION


LANDING_PAGE = """<html>
<head><title>Swift Exporter v{version}</title></head>
<body>
<h1>Swift Exporter {version}</h1>
<p><a href='{path}'>Metrics</a></p>
</body>
</html>
"""


class ThreadingWSGIServer(ThreadingMixIn, WSGIServer):
    """Serve each scrape request on its own thread."""

    daemon_threads = True


class _QuietHandler(WSGIRequestHandler):
    """Route per-request access lines to debug logging instead of stderr."""

    logger = logging.getLogger("swift_exporter.web")

    def log_message(self, format, *args):
        self.logger.debug(format % args)


def _http_response(start_response, status: str, headers: List[Tuple[str, str]], body: bytes):
    start_response(status, headers)
    return [body]


def create_app(registry: CollectorRegistry, telemetry_path: str = "/metrics") -> Callable:
    """
    Build the exporter WSGI application.

    Args:
        registry: Registry holding the exporter and build info collectors
        telemetry_path: Path serving the metrics exposition

    Returns:
        WSGI callable
    """
    metrics_app = make_wsgi_app(registry)
    landing = LANDING_PAGE.format(version=VERSION, path=telemetry_path).encode("utf-8")

    def app(environ, start_response) -> Iterable[bytes]:
        path = environ.get("PATH_INFO", "/")

        if path == telemetry_path:
            return metrics_app(environ, start_response)

        if path == "/":
            return _http_response(
                start_response,
                "200 OK",
                [("Content-Type", "text/html; charset=utf-8")],
                landing,
            )

        return _http_response(
            start_response,
            "404 Not Found",
            [("Content-Type", "text/plain; charset=utf-8")],
            b"not found\n",
        )

    return app


def serve(app: Callable, host: str, port: int) -> WSGIServer:
    """Create a threading WSGI server bound to host:port (not yet serving)."""
    return make_server(host, port, app, ThreadingWSGIServer, handler_class=_QuietHandler)
