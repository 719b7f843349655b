"""
Mood detection for chat messages.

Asks the AI collaborator for a structured answer first and degrades to
deterministic keyword scoring when the collaborator fails or answers with
something unparsable. Detection itself never raises.
"""

from typing import Dict, Optional, Tuple

from loguru import logger

from tunetalk.domain.ai.client import AIError, AIResponder, parse_json_object

from .keywords import MOOD_EMOTION_TAGS, MOOD_KEYWORDS
from .models import MOOD_ORDER, Mood, MoodAnalysis, parse_mood_payload

# Share of a mood's keywords that must appear before it is trusted
KEYWORD_SCORE_THRESHOLD = 0.2

NEUTRAL_ANALYSIS = MoodAnalysis(
    primary_mood=Mood.CALM,
    mood_score=0.3,
    emotion_tags=("neutral", "uncertain"),
)

MOOD_LIST = ", ".join(mood.value for mood in MOOD_ORDER)


def build_mood_prompt(message: str) -> str:
    """Prompt asking for a strict-JSON mood analysis of a user message."""
    return f"""Analyze the following message for emotional content and mood. Return a JSON response with:
- primary_mood: The main emotion detected (must be one of: {MOOD_LIST})
- mood_score: Confidence score between 0 and 1
- emotion_tags: Array of related emotions/themes

Important: Respond ONLY with valid JSON, no additional text.

User message: "{message}"
"""


def keyword_scores(
    text: str, keywords: Dict[Mood, Tuple[str, ...]] = MOOD_KEYWORDS
) -> Dict[Mood, float]:
    """Fraction of each mood's keywords found in text, in MOOD_ORDER."""
    lowered = text.lower()
    scores = {}
    for mood in MOOD_ORDER:
        mood_keywords = keywords.get(mood, ())
        if not mood_keywords:
            continue
        hits = sum(1 for keyword in mood_keywords if keyword in lowered)
        scores[mood] = hits / len(mood_keywords)
    return scores


def fallback_mood_detection(text: str) -> MoodAnalysis:
    """Deterministic keyword-overlap mood detection.

    The highest-scoring mood wins if it clears KEYWORD_SCORE_THRESHOLD; ties go
    to the mood declared first in MOOD_ORDER. Otherwise a neutral ``calm``
    analysis is returned.
    """
    best_mood: Optional[Mood] = None
    best_score = 0.0
    for mood, score in keyword_scores(text).items():
        if score > best_score:
            best_mood, best_score = mood, score

    if best_mood is None or best_score <= KEYWORD_SCORE_THRESHOLD:
        return NEUTRAL_ANALYSIS

    return MoodAnalysis(
        primary_mood=best_mood,
        mood_score=best_score,
        emotion_tags=MOOD_EMOTION_TAGS[best_mood],
    )


class MoodDetector:
    """Derives a MoodAnalysis from free text."""

    def __init__(self, ai: Optional[AIResponder] = None):
        self.ai = ai

    def detect(self, message: str) -> MoodAnalysis:
        if self.ai is None:
            return fallback_mood_detection(message)

        try:
            response = self.ai.generate_response(build_mood_prompt(message))
        except AIError as e:
            logger.warning(f"Mood detection AI call failed, using keywords: {e}")
            return fallback_mood_detection(message)

        try:
            analysis, _ = parse_mood_payload(parse_json_object(response))
        except ValueError as e:
            logger.warning(f"Unparsable mood analysis, using keywords: {e}")
            return fallback_mood_detection(message)

        logger.debug(f"AI mood: {analysis.primary_mood.value} ({analysis.mood_score:.2f})")
        return analysis
