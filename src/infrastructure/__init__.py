from .http_client import AsyncHTTPClient, HTTPResponse
from .youtube_client import YouTubeClient

__all__ = [
    "AsyncHTTPClient",
    "HTTPResponse",
    "YouTubeClient",
]
