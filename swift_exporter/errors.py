"""Exception hierarchy for the Swift exporter."""


class SwiftExporterError(Exception):
    """Base class for all exporter errors."""


class ReconError(SwiftExporterError):
    """A recon resource could not be fetched or decoded."""

    def __init__(self, resource: str, message: str):
        self.resource = resource
        super().__init__(f"recon/{resource}: {message}")


class PingError(SwiftExporterError):
    """The Swift source address failed the startup check."""
