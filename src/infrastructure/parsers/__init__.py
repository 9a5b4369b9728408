"""Parsers and collaborator protocols."""

from .url_parser import PlaylistURLParser, extract_playlist_id
from .interfaces import (
    HTTPClientProtocol,
    PlatformAdapterProtocol,
    PlaylistClientProtocol,
    SolutionLinkStoreProtocol,
    URLParserProtocol,
)

__all__ = [
    "HTTPClientProtocol",
    "PlatformAdapterProtocol",
    "PlaylistClientProtocol",
    "PlaylistURLParser",
    "SolutionLinkStoreProtocol",
    "URLParserProtocol",
    "extract_playlist_id",
]
