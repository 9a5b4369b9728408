"""Service for aggregating contests across platforms."""

import asyncio
from collections.abc import Callable, Iterable, Sequence
from datetime import datetime, timezone

from loguru import logger

from domain.exceptions import AdapterFailure
from domain.models import AggregationResult, Contest, ContestStatus, Platform
from infrastructure.parsers import PlatformAdapterProtocol, SolutionLinkStoreProtocol
from infrastructure.settings import AggregationPolicy


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def classify_contests(contests: Iterable[Contest], now: datetime) -> list[Contest]:
    """Attach status to every contest using one shared ``now``."""
    return [contest.classified(now) for contest in contests]


def sort_contests(contests: Iterable[Contest], now: datetime | None = None) -> list[Contest]:
    """
    Order contests: ongoing, then upcoming, then past.

    Within a status group the most recent start comes first. The sort is
    stable, so ties keep their input order. Contests without a status are
    ranked by their status at ``now`` (the current time when omitted).
    """
    now = now or _utc_now()
    return sorted(
        contests,
        key=lambda contest: (
            (contest.status or contest.status_at(now)).rank,
            -contest.start_time.timestamp(),
        ),
    )


def filter_contests(
    contests: Iterable[Contest],
    platform: Platform | None = None,
    status: ContestStatus | None = None,
) -> list[Contest]:
    """Keep contests matching the given platform and status."""
    return [
        contest
        for contest in contests
        if (platform is None or contest.platform == platform)
        and (status is None or contest.status == status)
    ]


class ContestService:
    """Merges platform adapters into one classified, ordered contest list."""

    def __init__(
        self,
        *,
        adapters: Sequence[PlatformAdapterProtocol],
        link_store: SolutionLinkStoreProtocol,
        policy: AggregationPolicy = AggregationPolicy.ABORT,
        clock: Callable[[], datetime] = _utc_now,
    ):
        """Initialize service with dependencies."""
        self.adapters = list(adapters)
        self.link_store = link_store
        self.policy = policy
        self.clock = clock

    async def fetch_all_contests(self) -> list[Contest]:
        """
        Fetch, merge, classify and sort contests from all platforms.

        Raises:
            AdapterFailure: If any adapter fails under the abort policy
        """
        result = await self.aggregate()
        return result.contests

    async def aggregate(self) -> AggregationResult:
        """Run the aggregation and report which platforms failed, if any."""
        logger.debug(f"Fetching contests from {len(self.adapters)} platform(s)")

        results = await asyncio.gather(
            *(adapter.fetch_contests() for adapter in self.adapters),
            return_exceptions=True,
        )

        merged: list[Contest] = []
        failed: list[Platform] = []
        for adapter, result in zip(self.adapters, results):
            if isinstance(result, BaseException):
                if not isinstance(result, Exception):
                    raise result
                failure = self._as_adapter_failure(adapter, result)
                if self.policy is AggregationPolicy.ABORT:
                    logger.error(f"Aggregation aborted: {failure}")
                    if failure is result:
                        raise failure
                    raise failure from result
                logger.warning(f"Skipping {adapter.platform.value}: {failure}")
                failed.append(adapter.platform)
                continue
            merged.extend(result)

        links = await self._load_solution_links()
        if links:
            merged = [
                contest.with_solution_link(links[contest.id]) if contest.id in links else contest
                for contest in merged
            ]

        now = self.clock()
        contests = sort_contests(classify_contests(merged, now), now)

        logger.info(
            f"Aggregated {len(contests)} contests "
            f"({sum(1 for c in contests if c.solution_link)} with solution links)"
        )
        return AggregationResult(contests=contests, generated_at=now, failed_platforms=failed)

    async def close(self) -> None:
        await self.link_store.close()

    async def _load_solution_links(self) -> dict[str, str]:
        try:
            return await self.link_store.get_all() or {}
        except Exception as e:
            logger.warning(f"Failed to read solution links, continuing without them: {e}")
            return {}

    @staticmethod
    def _as_adapter_failure(adapter: PlatformAdapterProtocol, error: BaseException) -> AdapterFailure:
        if isinstance(error, AdapterFailure):
            return error
        return AdapterFailure(adapter.platform, str(error) or type(error).__name__)
