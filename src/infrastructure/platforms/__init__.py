"""Contest sources, one adapter per platform."""

from .base import PlatformAdapter
from .codechef import CodeChefAdapter
from .codeforces import CodeforcesAdapter
from .leetcode import LeetCodeAdapter

__all__ = [
    "CodeChefAdapter",
    "CodeforcesAdapter",
    "LeetCodeAdapter",
    "PlatformAdapter",
]
