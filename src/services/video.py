"""Service for resolving contests to solution videos."""

from collections.abc import Iterable

from loguru import logger

from domain.exceptions import MissingInputError
from domain.models import Platform, VideoMatch, YouTubeVideo
from infrastructure.parsers import PlaylistClientProtocol
from infrastructure.settings import ConfigProvider


def contest_terms(contest_name: str) -> list[str]:
    """Lowercase whitespace-delimited terms; punctuation is kept."""
    return contest_name.lower().split()


def title_matches(title: str, terms: Iterable[str]) -> bool:
    """True if every term occurs somewhere in the title, ignoring case."""
    lowered = title.lower()
    return all(term in lowered for term in terms)


def match_video(videos: Iterable[YouTubeVideo], contest_name: str) -> YouTubeVideo | None:
    """First video, in playlist order, whose title contains every contest term."""
    terms = contest_terms(contest_name)
    for video in videos:
        if title_matches(video.title, terms):
            return video
    return None


def search_videos(videos: Iterable[YouTubeVideo], term: str | None) -> list[YouTubeVideo]:
    """Filter videos whose title or description contains ``term``."""
    videos = list(videos)
    if not term or not term.strip():
        return videos

    needle = term.strip().lower()
    return [
        video
        for video in videos
        if needle in video.title.lower() or needle in video.description.lower()
    ]


class VideoService:
    """Looks up solution videos in YouTube playlists."""

    def __init__(self, *, youtube_client: PlaylistClientProtocol, config: ConfigProvider):
        self.youtube_client = youtube_client
        self.config = config

    async def list_playlist_videos(
        self,
        playlist_url: str | None = None,
        platform: Platform | None = None,
    ) -> list[YouTubeVideo]:
        """
        Fetch the videos of a playlist using the configured API key.

        The playlist defaults to the configured one for ``platform``.

        Raises:
            MissingInputError, InvalidPlaylistUrlError, UpstreamError
        """
        settings = self.config.get()
        url = playlist_url or settings.playlist_for(platform)
        if not url:
            raise MissingInputError("No playlist URL provided")
        return await self.youtube_client.fetch_playlist_videos(url, settings.youtube_api_key)

    async def find_video_for_contest(
        self,
        contest_name: str,
        playlist_url: str | None = None,
        platform: Platform | None = None,
    ) -> VideoMatch:
        """
        Resolve a contest name to a video, the playlist, or nothing.

        Never raises: fetch failures fall back to the supplied playlist URL.
        """
        # A blank name has no terms and would match every title; treat it as empty.
        if not contest_name or not contest_name.strip():
            return VideoMatch.playlist(playlist_url)

        try:
            settings = self.config.get()
        except Exception as e:
            logger.warning(f"Could not load settings for video lookup: {e}")
            return VideoMatch.playlist(playlist_url)

        effective_url = playlist_url or settings.playlist_for(platform)
        if not effective_url or not settings.youtube_api_key:
            logger.debug("Video lookup skipped: playlist URL or API key missing")
            return VideoMatch.none()

        try:
            videos = await self.youtube_client.fetch_playlist_videos(
                effective_url, settings.youtube_api_key
            )
        except Exception as e:
            logger.warning(f"Error finding video for contest '{contest_name}': {e}")
            return VideoMatch.playlist(playlist_url)

        video = match_video(videos, contest_name)
        if video is None:
            logger.info(f"No video matched '{contest_name}', falling back to playlist")
            return VideoMatch.playlist(effective_url)

        logger.info(f"Matched '{contest_name}' to video {video.video_id}")
        return VideoMatch.video(video.watch_url)
