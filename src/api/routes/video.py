"""API routes for playlist videos and contest video matching."""

from litestar import Controller, get
from litestar.status_codes import HTTP_200_OK
from loguru import logger

from api.schemas.video import VideoListResponse, VideoMatchResponse, VideoResponse
from domain.models import Platform
from services import create_video_service
from services.video import search_videos


class VideoController(Controller):
    """Controller for YouTube playlist endpoints."""

    path = "/videos"

    @get("/", status_code=HTTP_200_OK)
    async def list_videos(
        self,
        playlist_url: str | None = None,
        platform: Platform | None = None,
        search: str | None = None,
    ) -> VideoListResponse:
        """
        List the first page of a playlist's videos.

        Query parameters:
        - playlist_url: playlist to read (defaults to the configured one)
        - platform: pick the configured default playlist for this platform
        - search: filter by title or description
        """
        logger.debug(f"API request for videos: playlist_url={playlist_url}, platform={platform}")

        service = create_video_service()
        videos = await service.list_playlist_videos(playlist_url=playlist_url, platform=platform)
        videos = search_videos(videos, search)

        return VideoListResponse(videos=[VideoResponse.model_validate(video) for video in videos])

    @get("/match", status_code=HTTP_200_OK)
    async def match_video(
        self,
        contest_name: str = "",
        playlist_url: str | None = None,
        platform: Platform | None = None,
    ) -> VideoMatchResponse:
        """Find the solution video for a contest name; never fails."""
        logger.debug(f"API request to match video for contest '{contest_name}'")

        service = create_video_service()
        match = await service.find_video_for_contest(
            contest_name, playlist_url=playlist_url, platform=platform
        )
        return VideoMatchResponse.model_validate(match)
