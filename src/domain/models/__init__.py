"""Domain models package."""

from .contest import (
    AggregationResult,
    Contest,
    ContestStatus,
    Platform,
    classify_status,
    to_utc,
)
from .video import MatchKind, VideoMatch, YouTubeVideo

__all__ = [
    "AggregationResult",
    "Contest",
    "ContestStatus",
    "MatchKind",
    "Platform",
    "VideoMatch",
    "YouTubeVideo",
    "classify_status",
    "to_utc",
]
