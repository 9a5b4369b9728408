from datetime import datetime, timedelta, timezone

from domain.models import Contest, Platform
from .base import PlatformAdapter

LEETCODE_GRAPHQL_URL = "https://leetcode.com/graphql"
LEETCODE_CONTEST_URL = "https://leetcode.com/contest/{slug}"

ALL_CONTESTS_QUERY = "{ allContests { title titleSlug startTime duration } }"


class LeetCodeAdapter(PlatformAdapter):
    """Weekly and biweekly contests from the LeetCode GraphQL API."""

    platform = Platform.LEETCODE

    async def _fetch(self) -> list[Contest]:
        payload = await self.http_client.post_json(
            LEETCODE_GRAPHQL_URL, {"query": ALL_CONTESTS_QUERY}
        )
        if payload.get("errors"):
            raise self._fail(str(payload["errors"][0].get("message", "GraphQL error")))

        contests = []
        for item in (payload.get("data") or {}).get("allContests") or []:
            slug = item.get("titleSlug")
            if not slug or not item.get("startTime"):
                continue
            start_time = datetime.fromtimestamp(item["startTime"], tz=timezone.utc)
            contests.append(
                Contest(
                    id=f"leetcode-{slug}",
                    name=item.get("title") or slug,
                    platform=self.platform,
                    start_time=start_time,
                    end_time=start_time + timedelta(seconds=item.get("duration") or 0),
                    url=LEETCODE_CONTEST_URL.format(slug=slug),
                )
            )
        return contests
