"""Parser for YouTube playlist URLs."""

import re

from loguru import logger

from domain.models.video import YOUTUBE_WATCH_URL
from .interfaces import URLParserProtocol


class PlaylistURLParser(URLParserProtocol):
    """Extracts playlist identifiers from the URL shapes YouTube hands out."""

    # Tried in order; the first capture wins.
    PATTERNS = (
        re.compile(r"youtube\.com/playlist\?list=([^&]+)", re.IGNORECASE),
        re.compile(r"youtube\.com/watch\?v=[^&]+&list=([^&]+)", re.IGNORECASE),
        re.compile(r"youtu\.be/[^&]+\?list=([^&]+)", re.IGNORECASE),
    )

    PLAYLIST_URL = "https://www.youtube.com/playlist?list={playlist_id}"

    @classmethod
    def extract_playlist_id(cls, url: str | None) -> str | None:
        """
        Extract the playlist identifier from a playlist, watch or short link.

        Returns None for empty input or an unrecognized shape.
        """
        if not url:
            return None

        for pattern in cls.PATTERNS:
            match = pattern.search(url)
            if match and match.group(1):
                playlist_id = match.group(1)
                logger.debug(f"Parsed playlist id {playlist_id} from {url}")
                return playlist_id

        logger.debug(f"No playlist id found in URL: {url}")
        return None

    @classmethod
    def build_playlist_url(cls, playlist_id: str) -> str:
        return cls.PLAYLIST_URL.format(playlist_id=playlist_id)

    @classmethod
    def build_watch_url(cls, video_id: str) -> str:
        return YOUTUBE_WATCH_URL.format(video_id=video_id)


def extract_playlist_id(url: str | None) -> str | None:
    """Convenience wrapper around PlaylistURLParser.extract_playlist_id."""
    return PlaylistURLParser.extract_playlist_id(url)
