from datetime import datetime

from domain.models import Contest, Platform
from .base import PlatformAdapter

CODECHEF_CONTESTS_URL = "https://www.codechef.com/api/list/contests/all"
CODECHEF_CONTEST_URL = "https://www.codechef.com/{code}"

# Response sections in the order they are merged
SECTIONS = ("present_contests", "future_contests", "past_contests")


class CodeChefAdapter(PlatformAdapter):
    """Contests from the CodeChef contest list API."""

    platform = Platform.CODECHEF

    async def _fetch(self) -> list[Contest]:
        payload = await self.http_client.get_json(
            CODECHEF_CONTESTS_URL,
            params={"sort_by": "START", "sorting_order": "asc", "offset": 0, "mode": "all"},
        )
        if payload.get("status") != "success":
            raise self._fail(payload.get("message") or "CodeChef API returned an error")

        contests = []
        seen = set()
        for section in SECTIONS:
            for item in payload.get(section) or []:
                code = item.get("contest_code")
                if not code or code in seen:
                    continue
                seen.add(code)
                contests.append(
                    Contest(
                        id=f"codechef-{code}",
                        name=item.get("contest_name") or code,
                        platform=self.platform,
                        start_time=datetime.fromisoformat(item["contest_start_date_iso"]),
                        end_time=datetime.fromisoformat(item["contest_end_date_iso"]),
                        url=CODECHEF_CONTEST_URL.format(code=code),
                    )
                )
        return contests
