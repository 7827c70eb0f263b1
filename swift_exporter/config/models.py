"""Pydantic configuration models for the Swift exporter."""

from pydantic import BaseModel, Field, field_validator


class SwiftConfig(BaseModel):
    """Connection settings for the Swift recon endpoint."""
    address: str = "http://127.0.0.1:6000"
    timeout_seconds: float = Field(default=10.0, gt=0)
    namespace: str = "swift"

    @field_validator('address')
    @classmethod
    def validate_address(cls, v: str) -> str:
        """Validate the source address and strip any trailing slash."""
        v = v.strip()
        if not v:
            raise ValueError('Swift address must not be empty')
        if not v.startswith(('http://', 'https://')):
            raise ValueError('Swift address must start with http:// or https://')
        return v.rstrip('/')


class WebConfig(BaseModel):
    """Metrics HTTP listener configuration."""
    listen_address: str = ":9500"
    telemetry_path: str = "/metrics"

    @field_validator('telemetry_path')
    @classmethod
    def validate_path(cls, v: str) -> str:
        """Telemetry path must be absolute and cannot shadow the landing page."""
        if not v.startswith('/') or v == '/':
            raise ValueError('Telemetry path must start with / and not be the root')
        return v

    @field_validator('listen_address')
    @classmethod
    def validate_listen_address(cls, v: str) -> str:
        """Require host:port, host may be empty."""
        host, sep, port = v.rpartition(':')
        if not sep or not port.isdigit():
            raise ValueError('Listen address must be in host:port form')
        return v

    @property
    def host(self) -> str:
        return self.listen_address.rpartition(':')[0] or "0.0.0.0"

    @property
    def port(self) -> int:
        return int(self.listen_address.rpartition(':')[2])


class ExporterConfig(BaseModel):
    """Root configuration model for the exporter."""
    swift: SwiftConfig = Field(default_factory=SwiftConfig)
    web: WebConfig = Field(default_factory=WebConfig)
    log_level: str = "INFO"

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        v = v.upper()
        if v not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f'Unknown log level: {v}')
        return v
