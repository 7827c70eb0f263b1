"""Build metadata, filled in by the container build through the environment."""

import os
import platform
from importlib.metadata import PackageNotFoundError, version as _dist_version

try:
    VERSION = _dist_version("swift-exporter")
except PackageNotFoundError:
    VERSION = "0.0.0+unknown"

BUILD_DATE = os.getenv("SWIFT_EXPORTER_BUILD_DATE", "unknown")
COMMIT_SHA1 = os.getenv("SWIFT_EXPORTER_COMMIT_SHA1", "unknown")
PYTHON_VERSION = platform.python_version()


def version_line() -> str:
    return (
        f"Swift Metrics Exporter {VERSION}    build date: {BUILD_DATE}    "
        f"sha1: {COMMIT_SHA1}    Python: {PYTHON_VERSION}"
    )
