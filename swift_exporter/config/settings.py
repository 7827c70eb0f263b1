"""Environment settings."""

import os
from typing import Optional


class Settings:
    """Application settings from environment variables."""

    @staticmethod
    def get(key: str, default: Optional[str] = None) -> str:
        """
        Get environment variable value.

        Args:
            key: Environment variable name
            default: Default value if not set

        Returns:
            str: Environment variable value, "" when unset
        """
        return os.getenv(key, default) or ""

    # Convenience accessors; "" means not set, so file/defaults apply
    SWIFT_ADDR = property(lambda self: Settings.get("SWIFT_ADDR"))
    LOG_LEVEL = property(lambda self: Settings.get("LOG_LEVEL"))
