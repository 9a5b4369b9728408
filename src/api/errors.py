"""Map tracker errors to HTTP responses."""

from litestar import Request, Response
from litestar.status_codes import (
    HTTP_400_BAD_REQUEST,
    HTTP_500_INTERNAL_SERVER_ERROR,
    HTTP_502_BAD_GATEWAY,
)
from loguru import logger

from domain.exceptions import (
    AdapterFailure,
    ContestTrackerError,
    InvalidPlaylistUrlError,
    MissingInputError,
    UpstreamError,
)

STATUS_BY_ERROR: dict[type[ContestTrackerError], int] = {
    MissingInputError: HTTP_400_BAD_REQUEST,
    InvalidPlaylistUrlError: HTTP_400_BAD_REQUEST,
    UpstreamError: HTTP_502_BAD_GATEWAY,
    AdapterFailure: HTTP_502_BAD_GATEWAY,
}


def status_for(exc: ContestTrackerError) -> int:
    for error_type, status_code in STATUS_BY_ERROR.items():
        if isinstance(exc, error_type):
            return status_code
    return HTTP_500_INTERNAL_SERVER_ERROR


def tracker_error_handler(request: Request, exc: ContestTrackerError) -> Response:
    status_code = status_for(exc)
    logger.warning(f"{request.method} {request.url.path} failed with {exc.kind}: {exc.message}")
    return Response(
        content={"error": exc.kind, "detail": exc.message},
        status_code=status_code,
    )
