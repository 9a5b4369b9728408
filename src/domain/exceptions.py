"""Errors raised by the contest tracker."""

from domain.models.contest import Platform


class ContestTrackerError(Exception):
    """Base error for the contest tracker."""

    kind = "error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MissingInputError(ContestTrackerError):
    """A required playlist URL or API key was not provided."""

    kind = "missing_input"


class InvalidPlaylistUrlError(ContestTrackerError):
    """Playlist URL does not match any recognized YouTube shape."""

    kind = "invalid_playlist_url"

    def __init__(self, url: str):
        super().__init__(f"Invalid playlist URL: {url}")
        self.url = url


class UpstreamError(ContestTrackerError):
    """The external video API answered with a non-success response."""

    kind = "upstream_error"

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class AdapterFailure(ContestTrackerError):
    """A platform adapter could not produce contest data."""

    kind = "adapter_failure"

    def __init__(self, platform: Platform, reason: str):
        super().__init__(f"Failed to fetch {platform.value} contests: {reason}")
        self.platform = platform
        self.reason = reason


class StoreError(ContestTrackerError):
    """A key-value store could not be read or written."""

    kind = "store_error"
