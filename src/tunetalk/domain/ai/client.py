"""
AI integration for TuneTalk using OpenAI chat completions or a local Ollama server
"""

import json
import os
import time
from pathlib import Path
from typing import Any, Dict, Optional, Protocol

import openai
import requests
from loguru import logger

from tunetalk.core.config import AIConfig, get_config_dir


class AIError(Exception):
    """Custom exception for AI-related errors."""

    pass


class AIResponder(Protocol):
    """Text-generation collaborator used by the chat core.

    Implementations raise AIError on any failure; the core performs no retries.
    """

    def generate_response(self, prompt: str) -> str:
        ...

    def analyze_lyrics(self, query: str, lyrics: str, song_info: str) -> str:
        ...

    def is_available(self) -> None:
        ...


def get_api_key() -> Optional[str]:
    """Get OpenAI API key from environment variable or .env file."""
    api_key = os.getenv("OPENAI_API_KEY")
    if api_key:
        return api_key

    from dotenv import load_dotenv

    # Check project root .env file first, then the config directory
    for env_file in (Path.cwd() / ".env", get_config_dir() / ".env"):
        if env_file.exists():
            load_dotenv(env_file)
            api_key = os.getenv("OPENAI_API_KEY")
            if api_key:
                return api_key

    return None


def build_lyrics_prompt(query: str, lyrics: str, song_info: str) -> str:
    """Build the prompt for answering a question about the current song."""
    return f"""You are analyzing "{song_info}". Answer in EXACTLY 2 short paragraphs only. Be concise.

Question: {query}

Lyrics:
{lyrics}

Keep it brief - maximum 4-5 sentences per paragraph. Focus only on the most important points."""


def parse_json_object(output_text: str) -> Dict[str, Any]:
    """Parse a JSON object out of model output.

    Models sometimes wrap JSON in a markdown code block, so after a strict
    parse fails the outermost ``{...}`` span is tried.

    Raises:
        ValueError: If no JSON object can be parsed
    """
    text = output_text.strip()
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        json_start = text.find("{")
        json_end = text.rfind("}") + 1
        if json_start == -1 or json_end <= json_start:
            raise ValueError(f"Failed to parse JSON from AI response: {text[:200]}")
        try:
            data = json.loads(text[json_start:json_end])
        except json.JSONDecodeError as e:
            raise ValueError(f"Failed to parse JSON from AI response: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object, got {type(data).__name__}")
    return data


class OpenAIResponder:
    """AIResponder backed by the OpenAI chat completions API."""

    def __init__(self, config: AIConfig):
        self.config = config
        self._client: Optional[openai.OpenAI] = None

    def _get_client(self) -> openai.OpenAI:
        if self._client is None:
            api_key = self.config.openai_api_key or get_api_key()
            if not api_key:
                raise AIError("No OpenAI API key found. Set OPENAI_API_KEY to configure.")
            self._client = openai.OpenAI(
                api_key=api_key,
                base_url=self.config.openai_base_url,
                timeout=self.config.timeout_seconds,
                max_retries=0,
            )
        return self._client

    def generate_response(self, prompt: str) -> str:
        return self._complete(prompt)

    def analyze_lyrics(self, query: str, lyrics: str, song_info: str) -> str:
        return self._complete(build_lyrics_prompt(query, lyrics, song_info))

    def is_available(self) -> None:
        """Send a one-token request to verify the key and model.

        Raises:
            AIError: If the API cannot be reached
        """
        self._complete("Test", max_tokens=1)

    def _complete(self, prompt: str, max_tokens: Optional[int] = None) -> str:
        client = self._get_client()
        start_time = time.time()

        try:
            response = client.chat.completions.create(
                model=self.config.model,
                messages=[{"role": "user", "content": prompt}],
                temperature=self.config.temperature,
                max_tokens=max_tokens or self.config.max_tokens,
                top_p=self.config.top_p,
            )
        except openai.APIError as e:
            raise AIError(f"OpenAI API error: {e}") from e

        response_time_ms = int((time.time() - start_time) * 1000)
        logger.debug(f"OpenAI {self.config.model} responded in {response_time_ms}ms")

        if not response.choices:
            raise AIError("No response choices returned from OpenAI")
        return (response.choices[0].message.content or "").strip()


class OllamaResponder:
    """AIResponder backed by a local Ollama server."""

    def __init__(self, config: AIConfig, session: Optional[requests.Session] = None):
        self.config = config
        self.base_url = config.ollama_base_url.rstrip("/")
        self.session = session or requests.Session()

    def generate_response(self, prompt: str) -> str:
        return self._generate(prompt)

    def analyze_lyrics(self, query: str, lyrics: str, song_info: str) -> str:
        return self._generate(build_lyrics_prompt(query, lyrics, song_info))

    def is_available(self) -> None:
        """Check the Ollama server answers on /api/tags.

        Raises:
            AIError: If the server is unreachable or unhealthy
        """
        try:
            r = self.session.get(f"{self.base_url}/api/tags", timeout=self.config.timeout_seconds)
        except requests.RequestException as e:
            raise AIError(f"Ollama server not available at {self.base_url}: {e}") from e
        if r.status_code != 200:
            raise AIError(f"Ollama server not responding correctly, status: {r.status_code}")

    def _generate(self, prompt: str) -> str:
        payload = {
            "model": self.config.ollama_model,
            "prompt": prompt,
            "stream": False,
            "options": {
                "temperature": self.config.temperature,
                "top_p": self.config.top_p,
                "top_k": self.config.top_k,
            },
        }

        try:
            r = self.session.post(
                f"{self.base_url}/api/generate",
                json=payload,
                timeout=self.config.timeout_seconds,
            )
        except requests.RequestException as e:
            raise AIError(f"Failed to send request to Ollama: {e}") from e

        if r.status_code != 200:
            raise AIError(f"Ollama API failed with status {r.status_code}: {r.text}")

        try:
            data = r.json()
        except ValueError as e:
            raise AIError(f"Failed to decode Ollama response: {e}") from e

        if data.get("error"):
            raise AIError(f"Ollama error: {data['error']}")
        return (data.get("response") or "").strip()


def build_ai_responder(config: AIConfig) -> AIResponder:
    """Create the responder selected by ``config.provider``."""
    if config.provider == "ollama":
        logger.info(f"AI Service: Ollama ({config.ollama_model}) at {config.ollama_base_url}")
        return OllamaResponder(config)
    logger.info(f"AI Service: OpenAI API ({config.model})")
    return OpenAIResponder(config)
