"""API routes for YouTube settings."""

from litestar import Controller, get, put
from litestar.status_codes import HTTP_200_OK
from loguru import logger

from api.schemas.settings import SettingsRequest, SettingsResponse
from infrastructure.settings import Settings
from services import create_config_provider


def _to_response(settings: Settings) -> SettingsResponse:
    key = settings.youtube_api_key
    return SettingsResponse(
        youtube_api_key_set=bool(key),
        youtube_api_key_hint=f"...{key[-4:]}" if len(key) > 4 else None,
        youtube_playlist_url=settings.youtube_playlist_url,
        playlists={platform.value: url for platform, url in settings.playlists.items()},
    )


class SettingsController(Controller):
    """Controller for reading and saving YouTube settings."""

    path = "/settings"

    @get("/", status_code=HTTP_200_OK)
    async def read_settings(self) -> SettingsResponse:
        return _to_response(create_config_provider().get())

    @put("/", status_code=HTTP_200_OK)
    async def save_settings(self, data: SettingsRequest) -> SettingsResponse:
        logger.debug("API request to save YouTube settings")

        provider = create_config_provider()
        provider.save(
            youtube_api_key=data.youtube_api_key,
            youtube_playlist_url=data.youtube_playlist_url,
        )
        return _to_response(provider.get())
