"""Transport-level errors."""


class HTTPClientError(Exception):
    """HTTP request failed or returned a non-success status."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code
