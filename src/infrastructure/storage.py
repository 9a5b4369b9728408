"""Key-value stores for solution links and saved settings."""

import asyncio
import json
import os
import tempfile
from pathlib import Path
from typing import Any

import redis
from loguru import logger
from redis import asyncio as aioredis

from domain.exceptions import StoreError

SOLUTION_LINKS_NAMESPACE = "solution_links"
SOLUTION_LINKS_REDIS_KEY = "contest-tracker:solution-links"


class JsonFileStore:
    """
    A JSON document on disk holding one flat mapping per namespace.

    Every read goes to disk, so writes are visible to the next read.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def read(self, namespace: str) -> dict[str, Any]:
        """Return the namespace mapping; a missing file reads as empty."""
        document = self._load()
        section = document.get(namespace, {})
        if not isinstance(section, dict):
            raise StoreError(f"Stored data for '{namespace}' is not a mapping")
        return dict(section)

    def write(self, namespace: str, values: dict[str, Any]) -> None:
        """Replace the namespace mapping atomically."""
        document = self._load()
        document[namespace] = values
        self._dump(document)

    def _load(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with self.path.open("r", encoding="utf-8") as f:
                document = json.load(f)
        except (OSError, ValueError) as e:
            raise StoreError(f"Failed to read store {self.path}: {e}") from e
        if not isinstance(document, dict):
            raise StoreError(f"Store {self.path} does not contain a JSON object")
        return document

    def _dump(self, document: dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(document, f, indent=2, sort_keys=True)
            os.replace(tmp_path, self.path)
        except OSError as e:
            Path(tmp_path).unlink(missing_ok=True)
            raise StoreError(f"Failed to write store {self.path}: {e}") from e


class InMemorySolutionLinkStore:
    """Process-local solution link store."""

    def __init__(self, links: dict[str, str] | None = None):
        self._links = dict(links or {})

    async def get(self, contest_id: str) -> str | None:
        return self._links.get(contest_id)

    async def get_all(self) -> dict[str, str]:
        return dict(self._links)

    async def set(self, contest_id: str, url: str) -> bool:
        self._links[contest_id] = url
        return True

    async def remove(self, contest_id: str) -> bool:
        self._links.pop(contest_id, None)
        return True

    async def close(self) -> None:
        pass


class JsonFileSolutionLinkStore:
    """
    Solution links persisted in a JsonFileStore namespace.

    File access runs in a worker thread so the event loop keeps serving.
    """

    def __init__(self, store: JsonFileStore, namespace: str = SOLUTION_LINKS_NAMESPACE):
        self.store = store
        self.namespace = namespace

    async def get(self, contest_id: str) -> str | None:
        return (await self.get_all()).get(contest_id)

    async def get_all(self) -> dict[str, str]:
        return await asyncio.to_thread(self._read_links)

    async def set(self, contest_id: str, url: str) -> bool:
        try:
            await asyncio.to_thread(self._update, contest_id, url)
        except StoreError as e:
            logger.error(f"Failed to save solution link for {contest_id}: {e}")
            return False

        logger.info(f"Solution link saved for contest {contest_id}: {url}")
        return True

    async def remove(self, contest_id: str) -> bool:
        try:
            await asyncio.to_thread(self._update, contest_id, None)
        except StoreError as e:
            logger.error(f"Failed to remove solution link for {contest_id}: {e}")
            return False
        return True

    async def close(self) -> None:
        pass

    def _read_links(self) -> dict[str, str]:
        return {str(k): str(v) for k, v in self.store.read(self.namespace).items()}

    def _update(self, contest_id: str, url: str | None) -> None:
        """Set or, when url is None, delete one link."""
        links = self._read_links()
        if url is not None:
            links[contest_id] = url
        elif contest_id in links:
            del links[contest_id]
            logger.info(f"Solution link removed for contest {contest_id}")
        else:
            return
        self.store.write(self.namespace, links)


class RedisSolutionLinkStore:
    """Solution links kept in a single Redis hash."""

    def __init__(self, client, key: str = SOLUTION_LINKS_REDIS_KEY):
        """
        Args:
            client: redis.asyncio.Redis instance created with decode_responses=True
            key: Hash key holding the links
        """
        self.client = client
        self.key = key

    @classmethod
    def from_url(cls, url: str, key: str = SOLUTION_LINKS_REDIS_KEY) -> "RedisSolutionLinkStore":
        return cls(aioredis.Redis.from_url(url, decode_responses=True), key=key)

    async def get(self, contest_id: str) -> str | None:
        try:
            return await self.client.hget(self.key, contest_id)
        except redis.RedisError as e:
            raise StoreError(f"Failed to read solution link {contest_id}: {e}") from e

    async def get_all(self) -> dict[str, str]:
        try:
            return dict(await self.client.hgetall(self.key))
        except redis.RedisError as e:
            raise StoreError(f"Failed to read solution links: {e}") from e

    async def set(self, contest_id: str, url: str) -> bool:
        try:
            await self.client.hset(self.key, contest_id, url)
        except redis.RedisError as e:
            logger.error(f"Failed to save solution link for {contest_id}: {e}")
            return False
        return True

    async def remove(self, contest_id: str) -> bool:
        try:
            await self.client.hdel(self.key, contest_id)
        except redis.RedisError as e:
            logger.error(f"Failed to remove solution link for {contest_id}: {e}")
            return False
        return True

    async def close(self) -> None:
        await self.client.aclose()
        logger.debug("Redis connection closed")
