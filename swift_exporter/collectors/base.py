"""Base scraper abstract class for all recon sub-scrapes."""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence
import logging
from functools import wraps

from ..errors import ReconError
from ..services.recon_client import ReconClient
from ..utils.metrics import ScrapeResult


def safe_scrape(func):
    """
    Decorator turning a recon failure into a logged ``None`` result.

    The failure is counted on ``self.errors``; callers stop the sub-scrape
    when they see ``None``. Other exceptions propagate.

    Args:
        func: Scraper method to wrap

    Returns:
        Wrapped function that catches recon errors
    """
    @wraps(func)
    async def wrapper(self, *args, **kwargs):
        try:
            return await func(self, *args, **kwargs)
        except ReconError as e:
            self.errors += 1
            self.logger.error(f"Scrape failed: {e}")
            return None
    return wrapper


class BaseScraper(ABC):
    """
    Abstract base class for recon sub-scrapes.

    Subclasses list the subsystems they cover in ``subsystems`` and turn one
    decoded resource into ScrapeResults in ``parse``.
    """

    # Subsystems fetched one resource each; empty means a single resource
    subsystems: Sequence[str] = ()

    def __init__(self, logger: logging.Logger):
        self.logger = logger.getChild(self.__class__.__name__)
        self.errors = 0

    @abstractmethod
    def resource(self, subsystem: Optional[str]) -> str:
        """Return the recon resource path for a subsystem."""

    @abstractmethod
    def parse(self, data: Dict[str, Any], subsystem: Optional[str]) -> List[ScrapeResult]:
        """Extract samples from one decoded resource."""

    async def collect(self, recon: ReconClient) -> List[ScrapeResult]:
        """
        Fetch the resources of this sub-scrape in order and extract samples.

        The first failed resource aborts the rest of the sub-scrape; samples
        from resources fetched before it are kept.

        Returns:
            List[ScrapeResult]: Samples gathered before any failure
        """
        self.errors = 0
        results = []
        for subsystem in (self.subsystems or (None,)):
            samples = await self._scrape(recon, subsystem)
            if samples is None:
                break
            results.extend(samples)
        return results

    @safe_scrape
    async def _scrape(self, recon: ReconClient, subsystem: Optional[str]) -> List[ScrapeResult]:
        data = await recon.fetch(self.resource(subsystem))
        return self.parse(data, subsystem)


def number(data: Dict[str, Any], key: str) -> Optional[float]:
    """
    Return ``data[key]`` as float, or None when absent or not numeric.

    JSON booleans are not numbers here, nor are integers too large for a float.
    """
    value = data.get(key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    try:
        return float(value)
    except OverflowError:
        return None
