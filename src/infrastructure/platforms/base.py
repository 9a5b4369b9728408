"""Shared behaviour for platform adapters."""

from abc import ABCMeta, abstractmethod
from datetime import datetime, timedelta, timezone

from loguru import logger

from domain.exceptions import AdapterFailure
from domain.models import Contest, Platform
from infrastructure.errors import HTTPClientError
from infrastructure.parsers.interfaces import HTTPClientProtocol

DEFAULT_LOOKBACK = timedelta(days=60)


class PlatformAdapter(metaclass=ABCMeta):
    """Fetches one platform's contest list and normalizes it."""

    platform: Platform

    def __init__(self, http_client: HTTPClientProtocol, lookback: timedelta = DEFAULT_LOOKBACK):
        """
        Args:
            http_client: Async HTTP client
            lookback: Contests that ended longer ago than this are dropped
        """
        self.http_client = http_client
        self.lookback = lookback

    async def fetch_contests(self) -> list[Contest]:
        """Fetch contests, surfacing any failure as AdapterFailure."""
        logger.debug(f"Fetching {self.platform.value} contests")
        try:
            contests = await self._fetch()
        except AdapterFailure:
            raise
        except (HTTPClientError, AttributeError, KeyError, TypeError, ValueError) as e:
            logger.error(f"{self.platform.value} adapter failed: {e}")
            raise AdapterFailure(self.platform, str(e)) from e

        cutoff = datetime.now(timezone.utc) - self.lookback
        recent = [contest for contest in contests if contest.end_time >= cutoff]
        logger.info(f"Fetched {len(recent)} {self.platform.value} contests")
        return recent

    @abstractmethod
    async def _fetch(self) -> list[Contest]:
        """Return every contest the platform lists."""

    def _fail(self, reason: str) -> AdapterFailure:
        return AdapterFailure(self.platform, reason)
