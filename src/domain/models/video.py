from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

YOUTUBE_WATCH_URL = "https://www.youtube.com/watch?v={video_id}"


@dataclass(frozen=True)
class YouTubeVideo:
    """A playlist entry as returned by the YouTube Data API."""

    video_id: str
    title: str
    playlist_id: str
    description: str = ""
    thumbnail_url: str = ""
    published_at: datetime | None = None

    @property
    def watch_url(self) -> str:
        return YOUTUBE_WATCH_URL.format(video_id=self.video_id)


class MatchKind(str, Enum):
    VIDEO = "video"
    PLAYLIST = "playlist"
    NONE = "none"


@dataclass(frozen=True)
class VideoMatch:
    """Outcome of resolving a contest to a solution video."""

    kind: MatchKind
    url: str | None = None

    @classmethod
    def video(cls, url: str) -> VideoMatch:
        return cls(kind=MatchKind.VIDEO, url=url)

    @classmethod
    def playlist(cls, url: str | None) -> VideoMatch:
        if not url:
            return cls.none()
        return cls(kind=MatchKind.PLAYLIST, url=url)

    @classmethod
    def none(cls) -> VideoMatch:
        return cls(kind=MatchKind.NONE)

    @property
    def found(self) -> bool:
        return self.kind is not MatchKind.NONE
