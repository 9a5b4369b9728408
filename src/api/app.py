"""Litestar application exposing the contest tracker."""

from litestar import Litestar, get
from loguru import logger

from api.errors import tracker_error_handler
from api.routes import ContestController, SettingsController, SolutionController, VideoController
from domain.exceptions import ContestTrackerError
from infrastructure.log_config import configure_logging
from infrastructure.settings import get_settings


def _on_startup() -> None:
    configure_logging(get_settings().log_level)
    logger.info("Contest tracker API started")


@get("/health", sync_to_thread=False)
def health() -> dict[str, str]:
    return {"status": "ok"}


def create_app() -> Litestar:
    return Litestar(
        route_handlers=[
            health,
            ContestController,
            SolutionController,
            VideoController,
            SettingsController,
        ],
        exception_handlers={ContestTrackerError: tracker_error_handler},
        on_startup=[_on_startup],
    )


app = create_app()
