"""Pydantic schemas for settings API endpoints."""

from pydantic import BaseModel


class SettingsRequest(BaseModel):
    """User-supplied YouTube settings; omitted fields are left unchanged."""

    youtube_api_key: str | None = None
    youtube_playlist_url: str | None = None


class SettingsResponse(BaseModel):
    """Current YouTube settings with the API key masked."""

    youtube_api_key_set: bool
    youtube_api_key_hint: str | None = None
    youtube_playlist_url: str
    playlists: dict[str, str]
