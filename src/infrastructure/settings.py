"""Runtime configuration read from the environment and saved overrides."""

import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from dotenv import load_dotenv
from loguru import logger

from domain.exceptions import StoreError
from domain.models import Platform
from infrastructure.storage import JsonFileStore

ENVIRONMENT_CONFIG_NAMESPACE = "environment_config"
DEFAULT_STORAGE_PATH = Path.home() / ".contest-tracker" / "store.json"

PLAYLIST_ENV_VARS = {
    Platform.CODEFORCES: "YOUTUBE_PLAYLIST_CODEFORCES",
    Platform.CODECHEF: "YOUTUBE_PLAYLIST_CODECHEF",
    Platform.LEETCODE: "YOUTUBE_PLAYLIST_LEETCODE",
}


class AggregationPolicy(str, Enum):
    """What to do when one platform adapter fails."""

    ABORT = "abort"
    DEGRADE = "degrade"


@dataclass
class Settings:
    """Contest tracker settings."""

    youtube_api_key: str = ""
    youtube_playlist_url: str = ""
    playlists: dict[Platform, str] = field(default_factory=dict)
    aggregation_policy: AggregationPolicy = AggregationPolicy.ABORT
    storage_path: Path = DEFAULT_STORAGE_PATH
    redis_url: str = ""
    http_timeout: float = 15.0
    log_level: str = "INFO"

    def playlist_for(self, platform: Platform | None) -> str:
        """Default playlist for a platform, falling back to the global one."""
        if platform is not None and self.playlists.get(platform):
            return self.playlists[platform]
        return self.youtube_playlist_url


def _parse_policy(value: str | None) -> AggregationPolicy:
    try:
        return AggregationPolicy((value or AggregationPolicy.ABORT.value).strip().lower())
    except ValueError:
        logger.warning(f"Unknown AGGREGATION_POLICY '{value}', using 'abort'")
        return AggregationPolicy.ABORT


def _parse_timeout(value: str | None) -> float:
    try:
        return float(value) if value else 15.0
    except ValueError:
        logger.warning(f"Invalid HTTP_TIMEOUT '{value}', using 15 seconds")
        return 15.0


def get_settings() -> Settings:
    """Read settings from the environment. Not cached; call at use time."""
    load_dotenv()

    playlists = {
        platform: os.getenv(env_var, "").strip()
        for platform, env_var in PLAYLIST_ENV_VARS.items()
        if os.getenv(env_var, "").strip()
    }

    return Settings(
        youtube_api_key=os.getenv("YOUTUBE_API_KEY", "").strip(),
        youtube_playlist_url=os.getenv("YOUTUBE_PLAYLIST_URL", "").strip(),
        playlists=playlists,
        aggregation_policy=_parse_policy(os.getenv("AGGREGATION_POLICY")),
        storage_path=Path(os.getenv("CONTEST_TRACKER_STORAGE") or DEFAULT_STORAGE_PATH),
        redis_url=os.getenv("REDIS_URL", "").strip(),
        http_timeout=_parse_timeout(os.getenv("HTTP_TIMEOUT")),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )


class ConfigProvider:
    """
    Settings with user-saved overrides layered over the environment.

    Overrides for the API key and playlist URL live in the
    ``environment_config`` namespace of a JsonFileStore.
    """

    def __init__(self, store: JsonFileStore | None = None, loader=get_settings):
        self.store = store
        self.loader = loader

    def get(self) -> Settings:
        settings = self.loader()
        overrides = self._overrides()
        if overrides.get("youtube_api_key"):
            settings.youtube_api_key = overrides["youtube_api_key"]
        if overrides.get("youtube_playlist_url"):
            settings.youtube_playlist_url = overrides["youtube_playlist_url"]
        return settings

    def save(self, youtube_api_key: str | None = None, youtube_playlist_url: str | None = None) -> None:
        """Persist overrides; None leaves a value unchanged, "" clears it."""
        if self.store is None:
            raise StoreError("No store configured for saving settings")

        overrides = self._overrides()
        if youtube_api_key is not None:
            overrides["youtube_api_key"] = youtube_api_key.strip()
        if youtube_playlist_url is not None:
            overrides["youtube_playlist_url"] = youtube_playlist_url.strip()

        self.store.write(ENVIRONMENT_CONFIG_NAMESPACE, overrides)
        logger.info("Saved YouTube settings overrides")

    def _overrides(self) -> dict[str, str]:
        if self.store is None:
            return {}
        try:
            return self.store.read(ENVIRONMENT_CONFIG_NAMESPACE)
        except StoreError as e:
            logger.warning(f"Ignoring unreadable settings overrides: {e}")
            return {}
