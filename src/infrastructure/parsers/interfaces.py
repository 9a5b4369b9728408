"""Protocol interfaces for external collaborators."""

from typing import Any, Protocol

from domain.models import Contest, Platform, YouTubeVideo


class URLParserProtocol(Protocol):
    """Protocol for playlist URL parsing."""

    @classmethod
    def extract_playlist_id(cls, url: str | None) -> str | None:
        """Extract playlist identifier from URL."""
        ...


class HTTPClientProtocol(Protocol):
    """Protocol for HTTP client."""

    async def get(self, url: str, params: dict[str, Any] | None = None) -> Any:
        """Send GET request and return the response."""
        ...

    async def get_json(self, url: str, params: dict[str, Any] | None = None) -> Any:
        """Get decoded JSON from URL."""
        ...

    async def post_json(self, url: str, payload: dict[str, Any]) -> Any:
        """Post JSON and return decoded JSON."""
        ...


class PlatformAdapterProtocol(Protocol):
    """Protocol for a per-platform contest source."""

    platform: Platform

    async def fetch_contests(self) -> list[Contest]:
        """Return normalized contests for the platform."""
        ...


class PlaylistClientProtocol(Protocol):
    """Protocol for fetching playlist videos."""

    async def fetch_playlist_videos(self, playlist_url: str, api_key: str) -> list[YouTubeVideo]:
        """Fetch the first page of videos of a playlist."""
        ...


class SolutionLinkStoreProtocol(Protocol):
    """Protocol for the contest id to solution URL mapping."""

    async def get(self, contest_id: str) -> str | None: ...

    async def get_all(self) -> dict[str, str]: ...

    async def set(self, contest_id: str, url: str) -> bool: ...

    async def remove(self, contest_id: str) -> bool: ...

    async def close(self) -> None:
        """Release any connection held by the store."""
        ...
