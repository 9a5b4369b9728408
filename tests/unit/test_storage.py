"""Unit tests for solution link stores and saved settings."""

import asyncio
import json
import time
from unittest.mock import AsyncMock, patch

import pytest
import redis

from domain.exceptions import StoreError
from domain.models import Platform
from infrastructure.settings import (
    AggregationPolicy,
    ConfigProvider,
    Settings,
    get_settings,
)
from infrastructure.storage import (
    InMemorySolutionLinkStore,
    JsonFileSolutionLinkStore,
    JsonFileStore,
    RedisSolutionLinkStore,
)


@pytest.fixture
def json_store(tmp_path):
    return JsonFileStore(tmp_path / "nested" / "store.json")


async def max_loop_gap(coro, interval=0.02):
    """Run coro next to a ticker and return the longest gap between ticks."""
    loop = asyncio.get_running_loop()
    gaps = []
    done = asyncio.Event()

    async def ticker():
        last = loop.time()
        while not done.is_set():
            await asyncio.sleep(interval)
            now = loop.time()
            gaps.append(now - last)
            last = now

    task = asyncio.create_task(ticker())
    try:
        result = await coro
    finally:
        done.set()
        await task
    return result, max(gaps)


@pytest.mark.asyncio
async def test_json_link_store_read_after_write(json_store):
    store = JsonFileSolutionLinkStore(json_store)

    assert await store.get_all() == {}
    assert await store.set("codeforces-1900", "https://youtu.be/a")
    assert await store.set("codeforces-1900", "https://youtu.be/b")
    assert await store.set("leetcode-w1", "https://youtu.be/c")

    assert await store.get("codeforces-1900") == "https://youtu.be/b"
    assert await store.get_all() == {
        "codeforces-1900": "https://youtu.be/b",
        "leetcode-w1": "https://youtu.be/c",
    }

    assert await store.remove("codeforces-1900")
    assert await store.get("codeforces-1900") is None
    assert await store.remove("missing-id")


@pytest.mark.asyncio
async def test_json_link_store_persists_across_instances(json_store):
    await JsonFileSolutionLinkStore(json_store).set("codechef-START1", "https://youtu.be/s1")

    reopened = JsonFileSolutionLinkStore(JsonFileStore(json_store.path))

    assert await reopened.get("codechef-START1") == "https://youtu.be/s1"


@pytest.mark.asyncio
async def test_namespaces_are_independent(json_store):
    links = JsonFileSolutionLinkStore(json_store)
    await links.set("codeforces-1", "https://youtu.be/x")
    json_store.write("environment_config", {"youtube_api_key": "secret"})

    assert await links.get_all() == {"codeforces-1": "https://youtu.be/x"}
    assert json_store.read("environment_config") == {"youtube_api_key": "secret"}


@pytest.mark.asyncio
async def test_corrupt_file_raises_store_error_on_read(tmp_path):
    path = tmp_path / "store.json"
    path.write_text("{not json")
    store = JsonFileSolutionLinkStore(JsonFileStore(path))

    with pytest.raises(StoreError):
        await store.get_all()
    assert await store.set("codeforces-1", "https://youtu.be/x") is False
    assert await store.remove("codeforces-1") is False


@pytest.mark.asyncio
async def test_non_mapping_namespace_raises_store_error(tmp_path):
    path = tmp_path / "store.json"
    path.write_text(json.dumps({"solution_links": ["a", "b"]}))

    with pytest.raises(StoreError):
        await JsonFileSolutionLinkStore(JsonFileStore(path)).get_all()


@pytest.mark.asyncio
async def test_json_link_store_reads_off_the_event_loop(json_store):
    """A slow disk read must not stall other coroutines."""
    real_read = JsonFileStore.read

    def slow_read(self, namespace):
        time.sleep(0.3)
        return real_read(self, namespace)

    store = JsonFileSolutionLinkStore(json_store)
    with patch.object(JsonFileStore, "read", slow_read):
        links, gap = await max_loop_gap(store.get_all())

    assert links == {}
    assert gap < 0.2


@pytest.mark.asyncio
async def test_in_memory_store():
    store = InMemorySolutionLinkStore({"a": "1"})

    assert await store.set("b", "2")
    assert await store.get_all() == {"a": "1", "b": "2"}
    assert await store.remove("a")
    assert await store.remove("a")
    assert await store.get("a") is None
    await store.close()


@pytest.mark.asyncio
async def test_redis_store_uses_single_hash():
    client = AsyncMock()
    client.hgetall.return_value = {"codeforces-1": "https://youtu.be/x"}
    client.hget.return_value = "https://youtu.be/x"
    store = RedisSolutionLinkStore(client, key="links")

    assert await store.get_all() == {"codeforces-1": "https://youtu.be/x"}
    assert await store.get("codeforces-1") == "https://youtu.be/x"
    assert await store.set("codeforces-2", "https://youtu.be/y")
    assert await store.remove("codeforces-1")
    await store.close()

    client.hgetall.assert_awaited_once_with("links")
    client.hset.assert_awaited_once_with("links", "codeforces-2", "https://youtu.be/y")
    client.hdel.assert_awaited_once_with("links", "codeforces-1")
    client.aclose.assert_awaited_once()


@pytest.mark.asyncio
async def test_redis_store_errors():
    client = AsyncMock()
    client.hgetall.side_effect = redis.ConnectionError("down")
    client.hset.side_effect = redis.ConnectionError("down")
    store = RedisSolutionLinkStore(client)

    with pytest.raises(StoreError):
        await store.get_all()
    assert await store.set("codeforces-1", "https://youtu.be/x") is False


@pytest.mark.asyncio
async def test_redis_store_read_does_not_block_event_loop():
    """A slow Redis round trip yields to other coroutines."""

    async def slow_hgetall(key):
        await asyncio.sleep(0.3)
        return {"codeforces-1": "https://youtu.be/x"}

    client = AsyncMock()
    client.hgetall.side_effect = slow_hgetall
    store = RedisSolutionLinkStore(client)

    links, gap = await max_loop_gap(store.get_all())

    assert links == {"codeforces-1": "https://youtu.be/x"}
    assert gap < 0.2


def test_redis_store_from_url_uses_asyncio_client():
    store = RedisSolutionLinkStore.from_url("redis://localhost:6379/0", key="links")

    assert isinstance(store.client, redis.asyncio.Redis)
    assert store.key == "links"


def test_get_settings_reads_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("YOUTUBE_API_KEY", "env-key")
    monkeypatch.setenv("YOUTUBE_PLAYLIST_URL", "https://www.youtube.com/playlist?list=PLall")
    monkeypatch.setenv("YOUTUBE_PLAYLIST_LEETCODE", "https://www.youtube.com/playlist?list=PLlc")
    monkeypatch.delenv("YOUTUBE_PLAYLIST_CODEFORCES", raising=False)
    monkeypatch.delenv("YOUTUBE_PLAYLIST_CODECHEF", raising=False)
    monkeypatch.setenv("AGGREGATION_POLICY", "Degrade")
    monkeypatch.setenv("CONTEST_TRACKER_STORAGE", str(tmp_path / "s.json"))
    monkeypatch.setenv("HTTP_TIMEOUT", "not-a-number")

    settings = get_settings()

    assert settings.youtube_api_key == "env-key"
    assert settings.aggregation_policy is AggregationPolicy.DEGRADE
    assert settings.playlists == {Platform.LEETCODE: "https://www.youtube.com/playlist?list=PLlc"}
    assert settings.playlist_for(Platform.LEETCODE).endswith("PLlc")
    assert settings.playlist_for(Platform.CODEFORCES).endswith("PLall")
    assert settings.playlist_for(None).endswith("PLall")
    assert settings.storage_path == tmp_path / "s.json"
    assert settings.http_timeout == 15.0


def test_unknown_policy_defaults_to_abort(monkeypatch):
    monkeypatch.setenv("AGGREGATION_POLICY", "sometimes")

    assert get_settings().aggregation_policy is AggregationPolicy.ABORT


def test_config_provider_overrides_environment(json_store):
    provider = ConfigProvider(
        store=json_store,
        loader=lambda: Settings(youtube_api_key="env-key", youtube_playlist_url="env-playlist"),
    )

    assert provider.get().youtube_api_key == "env-key"

    provider.save(youtube_api_key=" saved-key ")
    settings = provider.get()
    assert settings.youtube_api_key == "saved-key"
    assert settings.youtube_playlist_url == "env-playlist"

    provider.save(youtube_playlist_url="saved-playlist")
    settings = provider.get()
    assert settings.youtube_api_key == "saved-key"
    assert settings.youtube_playlist_url == "saved-playlist"


def test_config_provider_without_store_cannot_save():
    with pytest.raises(StoreError):
        ConfigProvider(loader=Settings).save(youtube_api_key="k")


def test_solution_service_factory_picks_link_store(monkeypatch, tmp_path):
    from services import create_solution_service

    monkeypatch.setenv("CONTEST_TRACKER_STORAGE", str(tmp_path / "s.json"))
    monkeypatch.setenv("REDIS_URL", "")
    assert isinstance(create_solution_service().link_store, JsonFileSolutionLinkStore)

    monkeypatch.setenv("REDIS_URL", "redis://localhost:6379/0")
    assert isinstance(create_solution_service().link_store, RedisSolutionLinkStore)
