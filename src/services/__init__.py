from infrastructure.settings import ConfigProvider, get_settings
from services.contest import ContestService
from services.solution import SolutionLinkService
from services.video import VideoService


def create_config_provider() -> ConfigProvider:
    """Factory for settings backed by the on-disk override store."""
    from infrastructure.storage import JsonFileStore

    settings = get_settings()
    return ConfigProvider(store=JsonFileStore(settings.storage_path))


def create_link_store():
    """
    Redis-backed store when REDIS_URL is set, JSON file otherwise.

    The caller owns the store and must await its close().
    """
    from infrastructure.storage import (
        JsonFileSolutionLinkStore,
        JsonFileStore,
        RedisSolutionLinkStore,
    )

    settings = get_settings()
    if settings.redis_url:
        return RedisSolutionLinkStore.from_url(settings.redis_url)
    return JsonFileSolutionLinkStore(JsonFileStore(settings.storage_path))


def create_contest_service() -> ContestService:
    """Factory function to create contest service with all dependencies."""
    from infrastructure.http_client import AsyncHTTPClient
    from infrastructure.platforms import CodeChefAdapter, CodeforcesAdapter, LeetCodeAdapter

    settings = get_settings()
    http_client = AsyncHTTPClient(timeout=settings.http_timeout)

    return ContestService(
        adapters=[
            CodeforcesAdapter(http_client),
            CodeChefAdapter(http_client),
            LeetCodeAdapter(http_client),
        ],
        link_store=create_link_store(),
        policy=settings.aggregation_policy,
    )


def create_solution_service() -> SolutionLinkService:
    """Factory for link edits; needs only the link store."""
    return SolutionLinkService(link_store=create_link_store())


def create_video_service() -> VideoService:
    """Factory function to create video service with all dependencies."""
    from infrastructure.http_client import AsyncHTTPClient
    from infrastructure.youtube_client import YouTubeClient

    settings = get_settings()
    return VideoService(
        youtube_client=YouTubeClient(AsyncHTTPClient(timeout=settings.http_timeout)),
        config=create_config_provider(),
    )


__all__ = [
    "ContestService",
    "SolutionLinkService",
    "VideoService",
    "create_config_provider",
    "create_contest_service",
    "create_link_store",
    "create_solution_service",
    "create_video_service",
]
