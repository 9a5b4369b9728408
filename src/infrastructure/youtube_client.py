"""Client for the YouTube Data API playlist items endpoint."""

from datetime import datetime
from typing import Any

from loguru import logger

from domain.exceptions import InvalidPlaylistUrlError, MissingInputError, UpstreamError
from domain.models import YouTubeVideo, to_utc
from infrastructure.errors import HTTPClientError
from infrastructure.parsers.interfaces import HTTPClientProtocol
from infrastructure.parsers.url_parser import PlaylistURLParser

PLAYLIST_ITEMS_URL = "https://www.googleapis.com/youtube/v3/playlistItems"

# Only the first page is fetched; longer playlists are truncated.
MAX_RESULTS = 50

ITEM_FIELDS = "items(snippet(title,description,thumbnails,publishedAt,resourceId/videoId))"

THUMBNAIL_PREFERENCE = ("high", "medium", "default")


class YouTubeClient:
    """Fetches playlist contents from the YouTube Data API."""

    def __init__(
        self,
        http_client: HTTPClientProtocol,
        url_parser: type[PlaylistURLParser] = PlaylistURLParser,
    ):
        self.http_client = http_client
        self.url_parser = url_parser

    async def fetch_playlist_videos(self, playlist_url: str, api_key: str) -> list[YouTubeVideo]:
        """
        Fetch up to MAX_RESULTS videos of a playlist.

        Args:
            playlist_url: Any recognized playlist, watch or short link
            api_key: YouTube Data API key

        Returns:
            Videos in playlist order, empty when the playlist has no items

        Raises:
            MissingInputError: If URL or key is absent
            InvalidPlaylistUrlError: If no playlist id can be extracted
            UpstreamError: If the API answers with a non-success status
        """
        if not playlist_url:
            raise MissingInputError("No playlist URL provided")
        if not api_key:
            raise MissingInputError("YouTube API key is required")

        playlist_id = self.url_parser.extract_playlist_id(playlist_url)
        if not playlist_id:
            raise InvalidPlaylistUrlError(playlist_url)

        logger.info(f"Fetching videos for playlist {playlist_id}")

        params = {
            "part": "snippet",
            "maxResults": MAX_RESULTS,
            "playlistId": playlist_id,
            "key": api_key,
            "fields": ITEM_FIELDS,
        }

        try:
            response = await self.http_client.get(PLAYLIST_ITEMS_URL, params=params)
        except HTTPClientError as e:
            logger.error(f"YouTube API request failed for playlist {playlist_id}: {e}")
            raise UpstreamError(f"YouTube API request failed: {e}") from e

        if not response.ok:
            message = _upstream_message(response.data) or (
                f"API request failed with status {response.status_code}"
            )
            logger.error(f"YouTube API error for playlist {playlist_id}: {message}")
            raise UpstreamError(message, status_code=response.status_code)

        data = response.data if isinstance(response.data, dict) else {}
        items = data.get("items")
        if not items or not isinstance(items, list):
            logger.info(f"Playlist {playlist_id} returned no items")
            return []

        videos = []
        for item in items:
            video = _to_video(item, playlist_id)
            if video is not None:
                videos.append(video)

        logger.info(f"Fetched {len(videos)} videos from playlist {playlist_id}")
        return videos


def _upstream_message(data: Any) -> str | None:
    if not isinstance(data, dict):
        return None
    error = data.get("error")
    if isinstance(error, dict):
        return error.get("message") or None
    return None


def best_thumbnail_url(thumbnails: dict[str, Any] | None) -> str:
    """Pick the best available thumbnail, falling back to an empty string."""
    for key in THUMBNAIL_PREFERENCE:
        entry = (thumbnails or {}).get(key) or {}
        if entry.get("url"):
            return entry["url"]
    return ""


def _parse_published_at(value: str | None) -> datetime | None:
    if not value:
        return None
    try:
        return to_utc(datetime.fromisoformat(value.replace("Z", "+00:00")))
    except ValueError:
        logger.debug(f"Unparseable publishedAt: {value}")
        return None


def _to_video(item: dict[str, Any], playlist_id: str) -> YouTubeVideo | None:
    snippet = item.get("snippet") or {}
    video_id = (snippet.get("resourceId") or {}).get("videoId")
    if not video_id:
        logger.debug(f"Skipping playlist item without video id in {playlist_id}")
        return None

    return YouTubeVideo(
        video_id=video_id,
        title=snippet.get("title") or "",
        description=snippet.get("description") or "",
        thumbnail_url=best_thumbnail_url(snippet.get("thumbnails")),
        published_at=_parse_published_at(snippet.get("publishedAt")),
        playlist_id=playlist_id,
    )
