"""AI domain - text-generation collaborators (OpenAI, Ollama).

This domain handles:
- OpenAI API key lookup
- Prompt construction for lyric questions
- Tolerant JSON extraction from model output
"""

from .client import (
    AIError,
    AIResponder,
    OllamaResponder,
    OpenAIResponder,
    build_ai_responder,
    build_lyrics_prompt,
    get_api_key,
    parse_json_object,
)

__all__ = [
    "AIError",
    "AIResponder",
    "OllamaResponder",
    "OpenAIResponder",
    "build_ai_responder",
    "build_lyrics_prompt",
    "get_api_key",
    "parse_json_object",
]
