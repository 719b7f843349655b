"""
Provider interface for track lookups.

The chat core never resolves tracks itself; the surrounding layer can plug in
any service that satisfies this contract.
"""

from typing import Protocol

from .models import UnifiedTrack


class TrackLookupError(Exception):
    """Raised when a track cannot be resolved by its provider."""

    pass


class TrackLookup(Protocol):
    """Protocol for resolving a provider track id into a UnifiedTrack."""

    def get_track_by_id(self, track_id: str) -> UnifiedTrack:
        """Fetch a single track.

        Args:
            track_id: Provider-specific track id

        Returns:
            The normalized track

        Raises:
            TrackLookupError: If the track does not exist or the lookup fails
        """
        ...
