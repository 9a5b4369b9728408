"""Tests for the HTTP API surface."""

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
from litestar.testing import TestClient

from api.app import create_app
from domain.exceptions import AdapterFailure, MissingInputError, UpstreamError
from domain.models import AggregationResult, Contest, Platform, VideoMatch, YouTubeVideo
from infrastructure.settings import ConfigProvider, Settings
from infrastructure.storage import JsonFileStore

NOW = datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)


def make_contest(contest_id, platform, start_offset_hours, solution_link=None):
    start = NOW + timedelta(hours=start_offset_hours)
    return Contest(
        id=contest_id,
        name=contest_id,
        platform=platform,
        start_time=start,
        end_time=start + timedelta(hours=2),
        url=f"https://example.com/{contest_id}",
        solution_link=solution_link,
    ).classified(NOW)


@pytest.fixture
def contest_service(monkeypatch):
    service = MagicMock()
    service.aggregate = AsyncMock(
        return_value=AggregationResult(
            contests=[
                make_contest("leetcode-w1", Platform.LEETCODE, 10),
                make_contest("codeforces-1", Platform.CODEFORCES, -30, "https://youtu.be/cf1"),
            ],
            generated_at=NOW,
        )
    )
    service.close = AsyncMock()
    monkeypatch.setattr("api.routes.contest.create_contest_service", lambda: service)
    return service


@pytest.fixture
def solution_service(monkeypatch):
    service = MagicMock()
    service.save_solution_link = AsyncMock(return_value=True)
    service.remove_solution_link = AsyncMock(return_value=True)
    service.close = AsyncMock()
    monkeypatch.setattr("api.routes.contest.create_solution_service", lambda: service)
    return service


@pytest.fixture
def video_service(monkeypatch):
    service = MagicMock()
    service.list_playlist_videos = AsyncMock()
    service.find_video_for_contest = AsyncMock()
    monkeypatch.setattr("api.routes.video.create_video_service", lambda: service)
    return service


@pytest.fixture
def client():
    with TestClient(app=create_app()) as test_client:
        yield test_client


def test_list_contests(client, contest_service):
    response = client.get("/contests")

    assert response.status_code == 200
    body = response.json()
    assert [c["id"] for c in body["contests"]] == ["leetcode-w1", "codeforces-1"]
    assert body["contests"][0]["status"] == "upcoming"
    assert body["contests"][1]["solution_link"] == "https://youtu.be/cf1"
    assert body["failed_platforms"] == []
    contest_service.close.assert_awaited_once()


def test_list_contests_filters(client, contest_service):
    response = client.get("/contests", params={"platform": "codeforces", "status": "past"})

    assert response.status_code == 200
    assert [c["id"] for c in response.json()["contests"]] == ["codeforces-1"]


def test_adapter_failure_maps_to_bad_gateway(client, contest_service):
    contest_service.aggregate.side_effect = AdapterFailure(Platform.CODECHEF, "timeout")

    response = client.get("/contests")

    assert response.status_code == 502
    assert response.json()["error"] == "adapter_failure"
    assert "codechef" in response.json()["detail"]
    contest_service.close.assert_awaited_once()


def test_save_and_remove_solution(client, solution_service, monkeypatch):
    monkeypatch.setattr(
        "api.routes.contest.create_contest_service", MagicMock(side_effect=AssertionError)
    )

    response = client.put("/solutions/codeforces-1", json={"url": " https://youtu.be/x "})
    assert response.status_code == 200
    assert response.json() == {"contest_id": "codeforces-1", "url": "https://youtu.be/x"}
    solution_service.save_solution_link.assert_awaited_once_with("codeforces-1", "https://youtu.be/x")

    response = client.delete("/solutions/codeforces-1")
    assert response.status_code == 204
    solution_service.remove_solution_link.assert_awaited_once_with("codeforces-1")
    assert solution_service.close.await_count == 2


def test_save_solution_failure_is_server_error(client, solution_service):
    solution_service.save_solution_link.return_value = False

    response = client.put("/solutions/codeforces-1", json={"url": "https://youtu.be/x"})

    assert response.status_code == 500
    assert response.json()["error"] == "store_error"


def test_save_solution_missing_url_is_bad_request(client, solution_service):
    solution_service.save_solution_link.side_effect = MissingInputError(
        "Contest id and solution link are required"
    )

    response = client.put("/solutions/codeforces-1", json={"url": ""})

    assert response.status_code == 400
    assert response.json()["error"] == "missing_input"
    solution_service.close.assert_awaited_once()


def test_list_videos_with_search(client, video_service):
    video_service.list_playlist_videos.return_value = [
        YouTubeVideo(video_id="a", title="Weekly Contest 350", playlist_id="PL1"),
        YouTubeVideo(video_id="b", title="Starters 120", playlist_id="PL1"),
    ]

    response = client.get("/videos", params={"search": "weekly", "platform": "leetcode"})

    assert response.status_code == 200
    videos = response.json()["videos"]
    assert [v["video_id"] for v in videos] == ["a"]
    assert videos[0]["watch_url"] == "https://www.youtube.com/watch?v=a"
    video_service.list_playlist_videos.assert_awaited_once_with(
        playlist_url=None, platform=Platform.LEETCODE
    )


def test_list_videos_upstream_error(client, video_service):
    video_service.list_playlist_videos.side_effect = UpstreamError("quota exceeded", status_code=403)

    response = client.get("/videos")

    assert response.status_code == 502
    assert response.json() == {"error": "upstream_error", "detail": "quota exceeded"}


def test_list_videos_missing_key(client, video_service):
    video_service.list_playlist_videos.side_effect = MissingInputError("YouTube API key is required")

    response = client.get("/videos")

    assert response.status_code == 400
    assert response.json()["detail"] == "YouTube API key is required"


def test_match_video(client, video_service):
    video_service.find_video_for_contest.return_value = VideoMatch.video(
        "https://www.youtube.com/watch?v=a"
    )

    response = client.get("/videos/match", params={"contest_name": "weekly 350"})

    assert response.status_code == 200
    assert response.json() == {"kind": "video", "url": "https://www.youtube.com/watch?v=a"}


def test_settings_roundtrip(client, monkeypatch, tmp_path):
    provider = ConfigProvider(
        store=JsonFileStore(tmp_path / "store.json"),
        loader=lambda: Settings(youtube_playlist_url="env-playlist"),
    )
    monkeypatch.setattr("api.routes.settings.create_config_provider", lambda: provider)

    response = client.get("/settings")
    assert response.json()["youtube_api_key_set"] is False

    response = client.put("/settings", json={"youtube_api_key": "AIzaSyExample1234"})
    body = response.json()
    assert response.status_code == 200
    assert body["youtube_api_key_set"] is True
    assert body["youtube_api_key_hint"] == "...1234"
    assert body["youtube_playlist_url"] == "env-playlist"
    assert "AIzaSyExample1234" not in response.text


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}
