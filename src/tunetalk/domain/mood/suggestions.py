"""
Fixed per-mood song suggestions shown next to library matches.
"""

from typing import Dict, List, Tuple

from tunetalk.domain.library.models import UnifiedTrack, from_spotify_track

from .models import Mood, MoodBasedRecommendation

# (spotify id, name, artist, album, score)
_SuggestionRow = Tuple[str, str, str, str, float]

_SUGGESTION_ROWS: Dict[Mood, List[_SuggestionRow]] = {
    Mood.LONELY: [
        ("1mea3bSkSGXuIRvnydlB5b", "Somewhere I Belong", "Linkin Park", "Meteora", 0.95),
        ("4N3y2ChKKCG3zVCfyNiMQD", "Mad World", "Gary Jules", "Trading Snakeoil for Wolftickets", 0.90),
        ("u9HBEOlMgOtK8yXGKKMhRx", "The Sound of Silence", "Disturbed", "Immortalized", 0.88),
    ],
    Mood.SAD: [
        ("2DjPkzR89MSYPGaWhK8uKQ", "Hurt", "Johnny Cash", "American IV: The Man Comes Around", 0.95),
        ("0SiQrCn2h2aKOEqz5Zxwow", "The Night We Met", "Lord Huron", "Strange Trails", 0.90),
    ],
    Mood.HAPPY: [
        ("3BxnGCLFNdLKgVgVz6Vn5H", "Good Life", "OneRepublic", "Waking Up", 0.95),
        ("05wIrZSwuaVWhcv5FfqeJ0", "Walking on Sunshine", "Katrina and the Waves", "Walking on Sunshine", 0.93),
        ("60nZcImufyMA1MKQY3dcCH", "Happy", "Pharrell Williams", "G I R L", 0.98),
        ("0BxE4FqsDD1Ot4YuBXwn8F", "Can't Stop the Feeling!", "Justin Timberlake", "Trolls (Original Motion Picture Soundtrack)", 0.96),
        ("32OlwWuMpZ6b0aN2RZOeMS", "Uptown Funk", "Mark Ronson ft. Bruno Mars", "Uptown Special", 0.94),
        ("1WkMMavIMc4JZ8cfMmxHkI", "Good as Hell", "Lizzo", "Cuz I Love You", 0.92),
        ("0CFuMybe6s77w6QQrJjW7d", "I'm Gonna Be (500 Miles)", "The Proclaimers", "Sunshine on Leith", 0.90),
        ("5T8EDUDqKcs6OSOwEsfqG7", "Don't Stop Me Now", "Queen", "Jazz", 0.88),
        ("2RlgNHKcydI9sayD2Df2xp", "Mr. Blue Sky", "Electric Light Orchestra", "Out of the Blue", 0.86),
        ("3PPogGhAUjr4FLGzEFGzJI", "Best Day of My Life", "American Authors", "Oh, What a Life", 0.84),
    ],
    Mood.ANGRY: [
        ("2OzEKCmOoWhyuB8nHi8xhv", "Break Stuff", "Limp Bizkit", "Significant Other", 0.95),
        ("0yp7ORA8XPNO4kvNj5EYdx", "Bodies", "Drowning Pool", "Sinner", 0.92),
    ],
}

# Moods without their own list borrow this one
DEFAULT_SUGGESTION_MOOD = Mood.SAD


def _to_recommendation(row: _SuggestionRow) -> MoodBasedRecommendation:
    track_id, name, artist, album, score = row
    track: UnifiedTrack = from_spotify_track(id=track_id, name=name, artist=artist, album=album)
    return MoodBasedRecommendation(track=track, mood_score=score)


MOOD_SUGGESTIONS: Dict[Mood, Tuple[MoodBasedRecommendation, ...]] = {
    mood: tuple(_to_recommendation(row) for row in rows)
    for mood, rows in _SUGGESTION_ROWS.items()
}


def general_mood_suggestions(mood: Mood, limit: int = 10) -> List[MoodBasedRecommendation]:
    """Up to ``limit`` fixed suggestions for a mood, in table order."""
    suggestions = MOOD_SUGGESTIONS.get(mood, MOOD_SUGGESTIONS[DEFAULT_SUGGESTION_MOOD])
    return list(suggestions[: max(limit, 0)])
