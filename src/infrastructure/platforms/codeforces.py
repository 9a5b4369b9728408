from datetime import datetime, timedelta, timezone

from domain.models import Contest, Platform
from .base import PlatformAdapter

CF_CONTEST_LIST_URL = "https://codeforces.com/api/contest.list"
CF_CONTEST_URL = "https://codeforces.com/contest/{contest_id}"


class CodeforcesAdapter(PlatformAdapter):
    """Contests from the Codeforces ``contest.list`` API method."""

    platform = Platform.CODEFORCES

    async def _fetch(self) -> list[Contest]:
        payload = await self.http_client.get_json(CF_CONTEST_LIST_URL, params={"gym": "false"})
        if payload.get("status") != "OK":
            raise self._fail(payload.get("comment") or "Codeforces API returned an error")

        contests = []
        for item in payload.get("result") or []:
            start_ts = item.get("startTimeSeconds")
            if not start_ts or item.get("id") is None:
                continue
            start_time = datetime.fromtimestamp(start_ts, tz=timezone.utc)
            contests.append(
                Contest(
                    id=f"codeforces-{item['id']}",
                    name=item.get("name") or f"Contest {item['id']}",
                    platform=self.platform,
                    start_time=start_time,
                    end_time=start_time + timedelta(seconds=item.get("durationSeconds") or 0),
                    url=CF_CONTEST_URL.format(contest_id=item["id"]),
                )
            )
        return contests
