"""Pydantic schemas for video API endpoints."""

from datetime import datetime

from pydantic import BaseModel

from domain.models import MatchKind


class VideoResponse(BaseModel):
    """A playlist video."""

    video_id: str
    title: str
    description: str
    thumbnail_url: str
    published_at: datetime | None = None
    playlist_id: str
    watch_url: str

    class Config:
        from_attributes = True


class VideoListResponse(BaseModel):
    videos: list[VideoResponse]


class VideoMatchResponse(BaseModel):
    """Result of matching a contest name against a playlist."""

    kind: MatchKind
    url: str | None = None

    class Config:
        from_attributes = True
