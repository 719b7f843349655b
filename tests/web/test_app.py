"""Tests for the FastAPI surface."""

from pathlib import Path
from unittest.mock import Mock

import pytest
from fastapi.testclient import TestClient

from tunetalk.context import AppServices
from tunetalk.core.config import Config
from tunetalk.domain.ai.client import AIError
from tunetalk.web.app import create_app

SPOTIFY_TRACK = {
    "source": "spotify",
    "id": "2DjPkzR89MSYPGaWhK8uKQ",
    "name": "Hurt",
    "artist": "Johnny Cash",
    "album": "American IV: The Man Comes Around",
}


@pytest.fixture
def ai() -> Mock:
    ai = Mock()
    ai.generate_response.side_effect = AIError("offline")
    return ai


@pytest.fixture
def services(tmp_path: Path, ai: Mock) -> AppServices:
    config = Config()
    config.mood_history.data_dir = str(tmp_path)
    return AppServices.create(config, ai=ai, lyrics_provider=Mock())


@pytest.fixture
def client(services: AppServices) -> TestClient:
    return TestClient(create_app(services=services))


class TestHealth:
    def test_health(self, client: TestClient) -> None:
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}


class TestNowPlaying:
    """Tests for /api/now-playing and /api/history."""

    def test_nothing_playing_is_404(self, client: TestClient) -> None:
        response = client.get("/api/now-playing")

        assert response.status_code == 404
        assert response.json()["detail"] == "No song is currently playing"

    def test_spotify_update(self, client: TestClient, services: AppServices) -> None:
        response = client.post("/api/now-playing", json=SPOTIFY_TRACK)

        assert response.status_code == 200
        assert response.json()["track_name"] == "Hurt"
        assert services.state.current_song_info() == "Hurt by Johnny Cash"

        current = client.get("/api/now-playing").json()
        assert current["track_id"] == "2DjPkzR89MSYPGaWhK8uKQ"
        assert current["source"] == "spotify"

    def test_youtube_update(self, client: TestClient, services: AppServices) -> None:
        response = client.post(
            "/api/now-playing",
            json={"source": "youtube", "id": "abc123", "name": "Mad World", "artist": "Gary Jules"},
        )

        assert response.status_code == 200
        assert services.state.get().track.external_url == "https://music.youtube.com/watch?v=abc123"

    @pytest.mark.parametrize(
        "payload",
        [
            {"id": "1", "name": "Hurt", "artist": "Johnny Cash"},
            {"source": "soundcloud", "id": "1", "name": "Hurt"},
            {"source": "spotify", "id": "", "name": "Hurt"},
            {"source": "spotify", "id": "1", "name": ""},
        ],
    )
    def test_invalid_payload_rejected(self, client: TestClient, services: AppServices, payload: dict) -> None:
        """Payloads without a known source or with empty identity are rejected."""
        response = client.post("/api/now-playing", json=payload)

        assert response.status_code == 422
        assert not services.state.is_playing()

    def test_history_most_recent_first(self, client: TestClient) -> None:
        client.post("/api/now-playing", json=SPOTIFY_TRACK)
        client.post("/api/now-playing", json={**SPOTIFY_TRACK, "id": "other", "name": "The Night We Met"})

        history = client.get("/api/history").json()

        assert [h["track_name"] for h in history] == ["The Night We Met", "Hurt"]
        assert "played_at" in history[0]


class TestChat:
    """Tests for /api/chat and /api/mood-history."""

    def test_empty_query_is_400(self, client: TestClient) -> None:
        response = client.post("/api/chat", json={"query": "  "})

        assert response.status_code == 400

    def test_non_music_question(self, client: TestClient) -> None:
        response = client.post("/api/chat", json={"query": "What is artificial intelligence?"})

        assert response.status_code == 200
        assert response.json() == {
            "type": "text",
            "answer": "I can only help with questions about music, songs, lyrics, and artists. "
            "Please ask me something related to music!",
        }

    def test_ai_failure_is_reported_in_body(self, client: TestClient) -> None:
        response = client.post("/api/chat", json={"query": "What is jazz music?"})

        assert response.status_code == 200
        assert response.json()["error"] == "Error generating response: offline"

    def test_mood_query_is_recorded(self, client: TestClient) -> None:
        response = client.post("/api/chat", json={"query": "I'm feeling lonely, nobody calls, I'm isolated and forgotten"})

        body = response.json()
        assert body["type"] == "mood_recommendation"
        assert body["mood_analysis"]["primary_mood"] == "lonely"

        history = client.get("/api/mood-history/default_user").json()
        assert [h["detected_mood"] for h in history] == ["lonely"]
        assert history[0]["played_songs"] == []

    def test_mood_history_for_unknown_user_is_empty(self, client: TestClient) -> None:
        assert client.get("/api/mood-history/nobody").json() == []

    def test_mood_history_rejects_unsafe_user_id(self, client: TestClient) -> None:
        response = client.get("/api/mood-history/bad..id")

        assert response.status_code == 400
