"""Tests for the AI collaborators."""

from unittest.mock import Mock, patch

import httpx
import openai
import pytest
import requests

from tunetalk.core.config import AIConfig
from tunetalk.domain.ai.client import (
    AIError,
    OllamaResponder,
    OpenAIResponder,
    build_ai_responder,
    build_lyrics_prompt,
    parse_json_object,
)


def ollama_response(status_code: int = 200, payload=None, text: str = "") -> Mock:
    response = Mock(status_code=status_code, text=text)
    response.json.return_value = payload if payload is not None else {}
    return response


class TestParseJsonObject:
    """Tests for parse_json_object."""

    def test_plain_json(self) -> None:
        assert parse_json_object('{"primary_mood": "sad"}') == {"primary_mood": "sad"}

    def test_json_in_markdown_fence(self) -> None:
        """Models often wrap JSON in a code block."""
        text = 'Here you go:\n```json\n{"primary_mood": "calm", "mood_score": 0.4}\n```'

        assert parse_json_object(text) == {"primary_mood": "calm", "mood_score": 0.4}

    def test_no_json_raises(self) -> None:
        with pytest.raises(ValueError):
            parse_json_object("I am not sure what mood that is.")

    def test_broken_json_raises(self) -> None:
        with pytest.raises(ValueError):
            parse_json_object('{"primary_mood": "sad",')

    def test_non_object_raises(self) -> None:
        with pytest.raises(ValueError, match="Expected a JSON object"):
            parse_json_object("[1, 2, 3]")


class TestLyricsPrompt:
    def test_prompt_includes_song_question_and_lyrics(self) -> None:
        prompt = build_lyrics_prompt("What is it about?", "la la la", "Hurt by Johnny Cash")

        assert 'You are analyzing "Hurt by Johnny Cash"' in prompt
        assert "EXACTLY 2 short paragraphs" in prompt
        assert "Question: What is it about?" in prompt
        assert "la la la" in prompt


class TestOllamaResponder:
    """Tests for OllamaResponder with a mocked HTTP session."""

    def test_generate_response_posts_non_streaming_request(self) -> None:
        session = Mock()
        session.post.return_value = ollama_response(payload={"response": "  Jazz is great.  "})
        responder = OllamaResponder(AIConfig(provider="ollama"), session=session)

        assert responder.generate_response("What is jazz?") == "Jazz is great."

        url = session.post.call_args.args[0]
        payload = session.post.call_args.kwargs["json"]
        assert url == "http://localhost:11434/api/generate"
        assert payload["model"] == "llama3.2:3b"
        assert payload["stream"] is False
        assert payload["options"] == {"temperature": 0.7, "top_p": 0.9, "top_k": 40}
        assert session.post.call_args.kwargs["timeout"] == 30.0

    def test_analyze_lyrics_uses_lyrics_prompt(self) -> None:
        session = Mock()
        session.post.return_value = ollama_response(payload={"response": "It is about loss."})
        responder = OllamaResponder(AIConfig(provider="ollama"), session=session)

        assert responder.analyze_lyrics("Meaning?", "words", "Hurt by Johnny Cash") == "It is about loss."
        assert "Hurt by Johnny Cash" in session.post.call_args.kwargs["json"]["prompt"]

    def test_http_error_raises_ai_error(self) -> None:
        session = Mock()
        session.post.return_value = ollama_response(status_code=500, text="model not loaded")
        responder = OllamaResponder(AIConfig(provider="ollama"), session=session)

        with pytest.raises(AIError, match="status 500"):
            responder.generate_response("hi")

    def test_transport_error_raises_ai_error(self) -> None:
        session = Mock()
        session.post.side_effect = requests.ConnectionError("refused")
        responder = OllamaResponder(AIConfig(provider="ollama"), session=session)

        with pytest.raises(AIError):
            responder.generate_response("hi")

    def test_error_field_raises_ai_error(self) -> None:
        session = Mock()
        session.post.return_value = ollama_response(payload={"error": "model not found"})
        responder = OllamaResponder(AIConfig(provider="ollama"), session=session)

        with pytest.raises(AIError, match="model not found"):
            responder.generate_response("hi")

    def test_is_available(self) -> None:
        session = Mock()
        session.get.return_value = ollama_response(status_code=200)
        responder = OllamaResponder(AIConfig(provider="ollama"), session=session)

        responder.is_available()

        assert session.get.call_args.args[0] == "http://localhost:11434/api/tags"

    def test_is_available_raises_when_unhealthy(self) -> None:
        session = Mock()
        session.get.return_value = ollama_response(status_code=503)
        responder = OllamaResponder(AIConfig(provider="ollama"), session=session)

        with pytest.raises(AIError):
            responder.is_available()


class TestOpenAIResponder:
    """Tests for OpenAIResponder with a patched OpenAI client."""

    def test_missing_api_key_raises(self) -> None:
        responder = OpenAIResponder(AIConfig())

        with patch("tunetalk.domain.ai.client.get_api_key", return_value=None):
            with pytest.raises(AIError, match="No OpenAI API key"):
                responder.generate_response("hi")

    def test_generate_response_returns_message_content(self) -> None:
        client = Mock()
        client.chat.completions.create.return_value = Mock(
            choices=[Mock(message=Mock(content="  Blues came first.  "))]
        )

        with patch("tunetalk.domain.ai.client.openai.OpenAI", return_value=client) as mock_cls:
            responder = OpenAIResponder(AIConfig(openai_api_key="sk-test"))
            answer = responder.generate_response("History of blues?")

        assert answer == "Blues came first."
        assert mock_cls.call_args.kwargs["api_key"] == "sk-test"
        assert mock_cls.call_args.kwargs["timeout"] == 30.0
        create_kwargs = client.chat.completions.create.call_args.kwargs
        assert create_kwargs["model"] == "gpt-4o-mini"
        assert create_kwargs["max_tokens"] == 500
        assert create_kwargs["messages"] == [{"role": "user", "content": "History of blues?"}]

    def test_api_error_raises_ai_error(self) -> None:
        client = Mock()
        client.chat.completions.create.side_effect = openai.APIConnectionError(
            request=httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
        )

        with patch("tunetalk.domain.ai.client.openai.OpenAI", return_value=client):
            responder = OpenAIResponder(AIConfig(openai_api_key="sk-test"))
            with pytest.raises(AIError, match="OpenAI API error"):
                responder.generate_response("hi")

    def test_empty_choices_raises(self) -> None:
        client = Mock()
        client.chat.completions.create.return_value = Mock(choices=[])

        with patch("tunetalk.domain.ai.client.openai.OpenAI", return_value=client):
            responder = OpenAIResponder(AIConfig(openai_api_key="sk-test"))
            with pytest.raises(AIError):
                responder.generate_response("hi")


class TestBuildAIResponder:
    def test_selects_provider(self) -> None:
        assert isinstance(build_ai_responder(AIConfig(provider="ollama")), OllamaResponder)
        assert isinstance(build_ai_responder(AIConfig(provider="openai")), OpenAIResponder)
