"""Main application entry point for the Swift recon exporter."""

import argparse
import logging
import signal
import sys
from typing import Optional

from prometheus_client import CollectorRegistry

from .config.loader import ConfigLoader
from .config.models import ExporterConfig
from .config.settings import Settings
from .errors import SwiftExporterError
from .exporter import SwiftExporter, register_build_info
from .services.metric_registry import MetricRegistry
from .services.recon_client import ReconClient
from .utils.logger import setup_logger
from .version import version_line
from .web import create_app, serve


class ExporterApp:
    """
    Main exporter application.

    Wires configuration, the recon client, the exporter and the HTTP
    listener together, and handles graceful shutdown.
    """

    def __init__(self, config: ExporterConfig):
        """
        Initialize exporter application.

        Args:
            config: Validated exporter configuration

        Raises:
            SwiftExporterError: If the startup check of the Swift address fails
        """
        self.config = config
        self.logger = setup_logger("swift_exporter", config.log_level)
        self.server = None

        signal.signal(signal.SIGTERM, self._signal_handler)

        self.logger.info(version_line())
        if config.log_level == "DEBUG":
            self.logger.debug("Enabling debug output")

        recon = ReconClient(
            config.swift.address,
            timeout_seconds=config.swift.timeout_seconds,
            logger=self.logger.getChild("recon")
        )
        self.exporter = SwiftExporter(
            recon,
            registry=MetricRegistry(namespace=config.swift.namespace, logger=self.logger),
            logger=self.logger,
            namespace=config.swift.namespace
        )
        self.exporter.ping()

        self.registry = CollectorRegistry()
        self.registry.register(self.exporter)
        register_build_info(self.registry)

    def _signal_handler(self, signum, frame):
        """
        Handle shutdown signals.

        Args:
            signum: Signal number
            frame: Current stack frame
        """
        signal_name = signal.Signals(signum).name
        self.logger.info(f"Received {signal_name}, shutting down...")
        raise KeyboardInterrupt

    def run(self) -> None:
        """Serve metrics until interrupted."""
        web = self.config.web
        app = create_app(self.registry, web.telemetry_path)
        self.server = serve(app, web.host, web.port)

        self.logger.info(f"Providing metrics at {web.listen_address}{web.telemetry_path}")
        self.logger.info(f"Connecting to swift host: {self.config.swift.address}")

        try:
            self.server.serve_forever()
        except KeyboardInterrupt:
            self.logger.info("Received keyboard interrupt")
        finally:
            self.server.server_close()
            self.logger.info("Server stopped")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Prometheus exporter for OpenStack Swift recon metrics',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Scrape a local object server
  swift-exporter --swift.addr http://127.0.0.1:6000

  # Use a config file and verbose logging
  swift-exporter --config /etc/swift-exporter.yaml --debug
        """
    )

    parser.add_argument(
        '--config',
        default=None,
        help='Optional path to a YAML configuration file'
    )

    parser.add_argument(
        '--swift.addr',
        dest='swift_addr',
        default=Settings().SWIFT_ADDR or None,
        help='Address of swift API (default: http://127.0.0.1:6000 or SWIFT_ADDR env var)'
    )

    parser.add_argument(
        '--swift.timeout',
        dest='swift_timeout',
        type=float,
        default=None,
        help='Per-request timeout in seconds (default: 10)'
    )

    parser.add_argument(
        '--web.listen-address',
        dest='listen_address',
        default=None,
        help='Address to listen on for web interface and telemetry (default: :9500)'
    )

    parser.add_argument(
        '--web.telemetry-path',
        dest='telemetry_path',
        default=None,
        help='Path under which to expose metrics (default: /metrics)'
    )

    parser.add_argument(
        '--debug',
        action='store_true',
        help='Output verbose debug information'
    )

    parser.add_argument(
        '--version',
        action='store_true',
        help='Show version information and exit'
    )

    return parser


def load_config(args: argparse.Namespace) -> ExporterConfig:
    """Merge the config file, environment and command-line flags."""
    log_level = "DEBUG" if args.debug else (Settings().LOG_LEVEL or None)
    return ConfigLoader.load(
        args.config,
        overrides={
            "swift": {
                "address": args.swift_addr,
                "timeout_seconds": args.swift_timeout,
            },
            "web": {
                "listen_address": args.listen_address,
                "telemetry_path": args.telemetry_path,
            },
            "log_level": log_level,
        }
    )


def main(argv: Optional[list] = None):
    """
    CLI entry point.

    Parses command-line arguments and starts the exporter.
    """
    args = build_parser().parse_args(argv)

    if args.version:
        print(version_line())
        return

    try:
        config = load_config(args)
    except Exception as e:
        logging.error(f"Invalid configuration: {e}")
        sys.exit(1)

    try:
        app = ExporterApp(config)
    except SwiftExporterError as e:
        logging.error(f"Exporter startup failed: {e}")
        sys.exit(1)

    app.run()


if __name__ == '__main__':
    main()
