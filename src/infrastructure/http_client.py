"""Async HTTP client built on curl_cffi."""

from dataclasses import dataclass
from typing import Any

from curl_cffi.requests import AsyncSession
from curl_cffi.requests.exceptions import RequestException
from loguru import logger

from infrastructure.errors import HTTPClientError

DEFAULT_TIMEOUT = 15.0


@dataclass
class HTTPResponse:
    """Status code plus decoded body of a response."""

    status_code: int
    data: Any = None
    text: str = ""

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class AsyncHTTPClient:
    """Thin async wrapper over a curl_cffi session.

    A fresh session is opened per request so that the client can be shared
    between concurrent tasks without lifecycle management.
    """

    def __init__(self, timeout: float = DEFAULT_TIMEOUT, impersonate: str = "chrome"):
        self.timeout = timeout
        self.impersonate = impersonate

    async def get(self, url: str, params: dict[str, Any] | None = None) -> HTTPResponse:
        """Send a GET request and return the response without raising on status."""
        return await self._request("GET", url, params=params)

    async def get_json(self, url: str, params: dict[str, Any] | None = None) -> Any:
        """GET a JSON document, raising HTTPClientError on non-success status."""
        response = await self._request("GET", url, params=params)
        return self._require_ok(url, response)

    async def post_json(self, url: str, payload: dict[str, Any]) -> Any:
        """POST a JSON body and return the decoded JSON response."""
        response = await self._request("POST", url, json=payload)
        return self._require_ok(url, response)

    async def _request(self, method: str, url: str, **kwargs: Any) -> HTTPResponse:
        logger.debug(f"{method} {url}")
        try:
            async with AsyncSession(impersonate=self.impersonate) as session:
                response = await session.request(method, url, timeout=self.timeout, **kwargs)
        except RequestException as e:
            logger.warning(f"{method} {url} failed: {e}")
            raise HTTPClientError(f"Request to {url} failed: {e}") from e

        text = response.text
        try:
            data = response.json() if text else None
        except ValueError:
            data = None

        return HTTPResponse(status_code=response.status_code, data=data, text=text)

    @staticmethod
    def _require_ok(url: str, response: HTTPResponse) -> Any:
        if not response.ok:
            raise HTTPClientError(
                f"Request to {url} returned status {response.status_code}",
                status_code=response.status_code,
            )
        if response.data is None:
            raise HTTPClientError(f"Response from {url} is not valid JSON")
        return response.data
