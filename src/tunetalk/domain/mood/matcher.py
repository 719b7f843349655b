"""
Mood-based song matching over a candidate track list.

Each candidate's lyrics mood is looked up through LyricsMoodCache on a bounded
worker pool; qualifying matches are collected into one shared list under a
lock. Candidates whose lookup fails (or does not finish before the deadline)
are skipped, never retried, and never fail the whole match.
"""

import threading
from concurrent.futures import ThreadPoolExecutor, wait
from typing import List, Optional, Sequence, Tuple

from loguru import logger

from tunetalk.domain.library.models import UnifiedTrack

from .cache import LyricsMoodCache
from .keywords import RELATED_MOODS, match_reason
from .models import MoodAnalysis, MoodBasedRecommendation

DEFAULT_MAX_WORKERS = 5
DEFAULT_MATCH_THRESHOLD = 0.5
LOW_MATCH_SCORE = 0.2


def calculate_mood_match(user_mood: MoodAnalysis, song_mood: MoodAnalysis) -> float:
    """Score how well a song's mood fits the user's mood.

    - Same primary mood: 0.9 + 0.1 * song score   (0.90-1.00)
    - Related primary mood: 0.7 + 0.2 * song score (0.70-0.90)
      (RELATED_MOODS links primary moods to other primary moods)
    - Overlapping emotion tags: 0.5 + 0.3 * share of user tags matched (0.50-0.80)
    - Otherwise: 0.2
    """
    if user_mood.primary_mood == song_mood.primary_mood:
        return 0.9 + song_mood.mood_score * 0.1

    if song_mood.primary_mood in RELATED_MOODS.get(user_mood.primary_mood, ()):
        return 0.7 + song_mood.mood_score * 0.2

    user_tags = set(user_mood.emotion_tags)
    if user_tags:
        overlap = len(user_tags & set(song_mood.emotion_tags))
        if overlap:
            return 0.5 + (overlap / len(user_tags)) * 0.3

    return LOW_MATCH_SCORE


def rank_recommendations(
    recommendations: Sequence[MoodBasedRecommendation], limit: int
) -> List[MoodBasedRecommendation]:
    """Sort by score descending, then track id ascending, and truncate."""
    ranked = sorted(recommendations, key=lambda r: (-r.mood_score, r.track.id))
    return ranked[: max(limit, 0)]


class SongMatcher:
    """Concurrent map/reduce of candidate tracks onto a query mood."""

    def __init__(
        self,
        cache: LyricsMoodCache,
        max_workers: int = DEFAULT_MAX_WORKERS,
        threshold: float = DEFAULT_MATCH_THRESHOLD,
        timeout: Optional[float] = None,
    ):
        if max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        self.cache = cache
        self.max_workers = max_workers
        self.threshold = threshold
        self.timeout = timeout

    def match(
        self,
        mood: MoodAnalysis,
        candidates: Sequence[UnifiedTrack],
        limit: int,
        timeout: Optional[float] = None,
    ) -> List[MoodBasedRecommendation]:
        """Return up to ``limit`` candidates whose mood scores above threshold.

        Args:
            mood: The user's detected mood
            candidates: Tracks to score
            limit: Maximum number of recommendations
            timeout: Seconds to wait for all lookups (defaults to the matcher's)

        Returns:
            Recommendations, best first
        """
        if limit <= 0 or not candidates:
            return []

        deadline = timeout if timeout is not None else self.timeout
        matches: List[MoodBasedRecommendation] = []
        matches_lock = threading.Lock()
        closed = False

        def score_candidate(track: UnifiedTrack) -> Tuple[UnifiedTrack, Optional[float]]:
            record = self.cache.get_or_fetch(track.name, track.artist)
            score = calculate_mood_match(mood, record.mood)
            if score <= self.threshold:
                return track, None
            recommendation = MoodBasedRecommendation(
                track=track,
                mood_score=score,
                match_reason=match_reason(mood.primary_mood, record.themes),
            )
            with matches_lock:
                if not closed:
                    matches.append(recommendation)
            return track, score

        executor = ThreadPoolExecutor(max_workers=self.max_workers, thread_name_prefix="song-matcher")
        try:
            futures = {executor.submit(score_candidate, track): track for track in candidates}
            done, not_done = wait(futures, timeout=deadline)
        finally:
            # Late workers keep running but their results are ignored
            executor.shutdown(wait=False, cancel_futures=True)

        with matches_lock:
            closed = True
            collected = list(matches)

        skipped = len(not_done)
        for future in not_done:
            logger.warning(f"Skipping {futures[future].display_name}: lookup timed out")
        for future in done:
            error = future.exception()
            if error is not None:
                skipped += 1
                logger.warning(f"Skipping {futures[future].display_name}: {error}")

        logger.info(
            f"Mood match ({mood.primary_mood.value}): {len(candidates)} candidates, "
            f"{len(collected)} matched, {skipped} skipped"
        )
        return rank_recommendations(collected, limit)
