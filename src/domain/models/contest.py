"""Contest records and lifecycle classification."""

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum


class Platform(str, Enum):
    """Supported contest platforms."""

    CODEFORCES = "codeforces"
    CODECHEF = "codechef"
    LEETCODE = "leetcode"


class ContestStatus(str, Enum):
    """Lifecycle state of a contest relative to a point in time."""

    UPCOMING = "upcoming"
    ONGOING = "ongoing"
    PAST = "past"

    @property
    def rank(self) -> int:
        """Sort rank: live contests first, then future ones, then history."""
        return _STATUS_RANK[self]


_STATUS_RANK = {
    ContestStatus.ONGOING: 0,
    ContestStatus.UPCOMING: 1,
    ContestStatus.PAST: 2,
}


def to_utc(value: datetime) -> datetime:
    """Normalize a timestamp to aware UTC. Naive values are taken as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def classify_status(start_time: datetime, end_time: datetime, now: datetime) -> ContestStatus:
    """Derive contest status from its window and the given instant."""
    now = to_utc(now)
    if now < to_utc(start_time):
        return ContestStatus.UPCOMING
    if now < to_utc(end_time):
        return ContestStatus.ONGOING
    return ContestStatus.PAST


@dataclass(frozen=True)
class Contest:
    """A normalized contest listing from one platform."""

    id: str
    name: str
    platform: Platform
    start_time: datetime
    end_time: datetime
    url: str
    solution_link: str | None = None
    status: ContestStatus | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "platform", Platform(self.platform))
        object.__setattr__(self, "start_time", to_utc(self.start_time))
        object.__setattr__(self, "end_time", to_utc(self.end_time))

    def status_at(self, now: datetime) -> ContestStatus:
        return classify_status(self.start_time, self.end_time, now)

    def classified(self, now: datetime) -> "Contest":
        """Return a copy carrying the status computed for ``now``."""
        return replace(self, status=self.status_at(now))

    def with_solution_link(self, url: str) -> "Contest":
        return replace(self, solution_link=url)


@dataclass
class AggregationResult:
    """Merged, classified and sorted contests from all platforms."""

    contests: list[Contest]
    generated_at: datetime
    failed_platforms: list[Platform] = field(default_factory=list)

    @property
    def is_partial(self) -> bool:
        return bool(self.failed_platforms)
