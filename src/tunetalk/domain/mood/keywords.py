"""
Mood keyword and relationship tables (heuristics, not user data).

Every table is keyed in MOOD_ORDER so iteration order is fixed.
"""

from typing import Dict, Tuple

from .models import Mood

# Keywords whose presence in text votes for a mood
MOOD_KEYWORDS: Dict[Mood, Tuple[str, ...]] = {
    Mood.SAD: ("cry", "tears", "broken", "hurt", "pain", "lost", "miss", "gone", "alone", "empty"),
    Mood.HAPPY: ("joy", "smile", "laugh", "bright", "sunshine", "celebrate", "love", "wonderful", "amazing", "blessed"),
    Mood.ANGRY: ("rage", "fury", "hate", "mad", "pissed", "scream", "fight", "burn", "destroy", "revenge"),
    Mood.LONELY: ("alone", "nobody", "isolated", "forgotten", "abandoned", "solitary", "empty", "belong", "disconnected"),
    Mood.ANXIOUS: ("worry", "fear", "nervous", "panic", "stress", "overwhelmed", "restless", "uncertain", "doubt"),
    Mood.NOSTALGIC: ("remember", "memories", "past", "used to", "once", "old days", "reminisce", "looking back", "childhood"),
    Mood.ENERGETIC: ("pump", "hype", "energy", "power", "strength", "unstoppable", "fire", "ready", "go", "motivation"),
    Mood.CALM: ("peace", "quiet", "serene", "tranquil", "relax", "breathe", "gentle", "soft", "still", "harmony"),
}

# Emotion tags attached to a keyword-detected mood
MOOD_EMOTION_TAGS: Dict[Mood, Tuple[str, ...]] = {
    Mood.SAD: ("melancholic", "depressed", "sorrowful", "grief"),
    Mood.HAPPY: ("joyful", "excited", "cheerful", "elated"),
    Mood.ANGRY: ("frustrated", "bitter", "defiant", "aggressive"),
    Mood.LONELY: ("isolated", "disconnected", "yearning", "longing"),
    Mood.ANXIOUS: ("worried", "tense", "uneasy", "stressed"),
    Mood.NOSTALGIC: ("sentimental", "wistful", "reflective", "bittersweet"),
    Mood.ENERGETIC: ("pumped", "motivated", "dynamic", "vigorous"),
    Mood.CALM: ("peaceful", "relaxed", "meditative", "zen"),
}

# Primary moods that count as a partial match for each other
RELATED_MOODS: Dict[Mood, Tuple[Mood, ...]] = {
    Mood.SAD: (Mood.LONELY, Mood.NOSTALGIC),
    Mood.HAPPY: (Mood.ENERGETIC, Mood.CALM),
    Mood.ANGRY: (Mood.ENERGETIC, Mood.ANXIOUS),
    Mood.LONELY: (Mood.SAD, Mood.NOSTALGIC),
    Mood.ANXIOUS: (Mood.ANGRY, Mood.SAD),
    Mood.NOSTALGIC: (Mood.SAD, Mood.LONELY, Mood.CALM),
    Mood.ENERGETIC: (Mood.HAPPY, Mood.ANGRY),
    Mood.CALM: (Mood.HAPPY, Mood.NOSTALGIC),
}

MATCH_REASONS: Dict[Mood, str] = {
    Mood.SAD: "This song captures feelings of sadness and melancholy",
    Mood.HAPPY: "This uplifting song matches your positive energy",
    Mood.ANGRY: "This song channels frustration and intensity",
    Mood.LONELY: "This song explores themes of isolation and longing",
    Mood.ANXIOUS: "This song reflects feelings of uncertainty and tension",
    Mood.NOSTALGIC: "This song brings back memories and reflection",
    Mood.ENERGETIC: "This high-energy track matches your motivated mood",
    Mood.CALM: "This peaceful song promotes relaxation and tranquility",
}

EMPATHETIC_RESPONSES: Dict[Mood, str] = {
    Mood.LONELY: "I hear you're feeling disconnected right now. Sometimes music can be a companion when we feel alone. Here are some songs that explore similar feelings and might resonate with you:",
    Mood.SAD: "I understand you're going through a difficult time. Music has a way of expressing what we can't always put into words. These songs might help you process these feelings:",
    Mood.HAPPY: "It's wonderful that you're feeling so positive! Let's keep that energy going with some uplifting tracks that match your mood:",
    Mood.ANGRY: "I can sense your frustration. Sometimes we need music that matches our intensity and helps us release these feelings. Here are some powerful tracks for you:",
    Mood.ANXIOUS: "I understand you're feeling overwhelmed. These songs might help you find some calm or at least know you're not alone in feeling this way:",
    Mood.NOSTALGIC: "Ah, feeling nostalgic... Music has a unique way of taking us back. Here are some songs that capture that bittersweet feeling of remembering:",
    Mood.ENERGETIC: "You're full of energy! Let's channel that into some high-powered tracks that'll keep you motivated:",
    Mood.CALM: "Finding your peace... Here are some tranquil songs to help maintain that serene state of mind:",
}

DEFAULT_EMPATHETIC_RESPONSE = (
    "I can sense you're feeling {mood}. Music has a way of connecting with our emotions. "
    "Here are some songs that might resonate with how you're feeling:"
)


def empathetic_response(mood: Mood, responses: Dict[Mood, str] = EMPATHETIC_RESPONSES) -> str:
    """Preamble for a mood recommendation, generic for moods without one."""
    response = responses.get(mood)
    if response is None:
        return DEFAULT_EMPATHETIC_RESPONSE.format(mood=mood.value)
    return response


def match_reason(mood: Mood, themes: Tuple[str, ...]) -> str:
    """Explain why a song matches, mentioning up to two of its themes."""
    reason = MATCH_REASONS.get(mood, f"This song fits a {mood.value} mood")
    if themes:
        theme_str = themes[0] if len(themes) == 1 else f"{themes[0]} and {themes[1]}"
        reason += f" through themes of {theme_str}"
    return reason
