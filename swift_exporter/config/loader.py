"""Configuration loader with YAML parsing and environment variable substitution."""

import yaml
import os
import re
from pathlib import Path
from typing import Any, Dict, Optional
from .models import ExporterConfig


class ConfigLoader:
    """Load and validate exporter configuration."""

    @staticmethod
    def load_from_file(config_path: str) -> ExporterConfig:
        """
        Load configuration from YAML file with environment variable substitution.

        Args:
            config_path: Path to YAML configuration file

        Returns:
            ExporterConfig: Validated configuration object

        Raises:
            FileNotFoundError: If config file doesn't exist
            yaml.YAMLError: If YAML parsing fails
            pydantic.ValidationError: If configuration validation fails
        """
        config_file = Path(config_path)
        if not config_file.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_file, 'r') as f:
            raw_config = yaml.safe_load(f) or {}

        raw_config = ConfigLoader._substitute_env_vars(raw_config)

        return ExporterConfig(**raw_config)

    @staticmethod
    def load(
        config_path: Optional[str] = None,
        overrides: Optional[Dict[str, Dict[str, Any]]] = None
    ) -> ExporterConfig:
        """
        Build configuration from an optional file plus command-line overrides.

        Args:
            config_path: Optional YAML file; defaults are used when None
            overrides: Section -> {field: value}; None values are ignored

        Returns:
            ExporterConfig: Validated configuration object
        """
        if config_path:
            raw_config = ConfigLoader.load_from_file(config_path).model_dump()
        else:
            raw_config = {}

        for section, values in (overrides or {}).items():
            if isinstance(values, dict):
                current = raw_config.setdefault(section, {})
                current.update({k: v for k, v in values.items() if v is not None})
            elif values is not None:
                raw_config[section] = values

        return ExporterConfig(**raw_config)

    @staticmethod
    def _substitute_env_vars(obj: Any) -> Any:
        """
        Recursively substitute ${ENV_VAR} placeholders with environment values.

        Args:
            obj: Object to process (str, dict, list, or primitive)

        Returns:
            Object with environment variables substituted
        """
        if isinstance(obj, str):
            pattern = r'\$\{(\w+)\}'
            return re.sub(pattern, lambda m: os.getenv(m.group(1), ''), obj)

        elif isinstance(obj, dict):
            return {k: ConfigLoader._substitute_env_vars(v) for k, v in obj.items()}

        elif isinstance(obj, list):
            return [ConfigLoader._substitute_env_vars(item) for item in obj]

        return obj
