"""
Per-user mood history log.

One UTF-8 text file per user, one entry per line:

    <RFC3339 timestamp>|<mood>|<comma-separated song ids>

Files are append-only. Reads skip lines that do not parse instead of failing.
"""

import threading
from datetime import datetime
from pathlib import Path
from typing import Iterable, List

from loguru import logger

from tunetalk.core.path_security import is_path_within, is_safe_identifier
from tunetalk.domain.playback.state import Clock, utc_now

from .models import MoodHistoryEntry

FIELD_SEPARATOR = "|"
SONG_SEPARATOR = ","


class MoodHistoryError(Exception):
    """Raised when a mood history file cannot be written or read."""

    pass


def format_entry(entry: MoodHistoryEntry) -> str:
    """Serialize an entry to its newline-terminated log line."""
    return FIELD_SEPARATOR.join(
        [
            entry.timestamp.isoformat(timespec="seconds"),
            entry.mood,
            SONG_SEPARATOR.join(entry.song_ids),
        ]
    ) + "\n"


def parse_line(line: str) -> MoodHistoryEntry:
    """Parse one log line.

    Raises:
        ValueError: If the line has the wrong field count or a bad timestamp
    """
    parts = line.rstrip("\r\n").split(FIELD_SEPARATOR)
    if len(parts) != 3:
        raise ValueError(f"Expected 3 fields, got {len(parts)}")
    timestamp, mood, songs = parts
    return MoodHistoryEntry(
        timestamp=datetime.fromisoformat(timestamp),
        mood=mood,
        song_ids=tuple(songs.split(SONG_SEPARATOR)) if songs else (),
    )


class MoodHistoryStore:
    """Append-only mood history files under ``history_dir``."""

    def __init__(self, history_dir: Path, retention_days: int = 30, clock: Clock = utc_now):
        self.history_dir = Path(history_dir)
        self.retention_days = retention_days
        self._clock = clock
        self._write_lock = threading.Lock()

    def history_file(self, user_id: str) -> Path:
        """Path of a user's log file.

        Raises:
            ValueError: If user_id cannot safely be used in a file name
        """
        if not is_safe_identifier(user_id):
            raise ValueError(f"Invalid user id: {user_id!r}")
        path = self.history_dir / f"user_{user_id}_mood_history.txt"
        if not is_path_within(path, self.history_dir):
            raise ValueError(f"Invalid user id: {user_id!r}")
        return path

    def append(self, user_id: str, mood: str, song_ids: Iterable[str]) -> MoodHistoryEntry:
        """Append one entry to the user's log, creating file and directory.

        Raises:
            ValueError: If an id or mood contains a separator character
            MoodHistoryError: If the file cannot be written
        """
        song_ids = tuple(song_ids)
        for value in (mood, *song_ids):
            if any(sep in value for sep in (FIELD_SEPARATOR, SONG_SEPARATOR, "\n", "\r")):
                raise ValueError(f"Separator character in mood history value: {value!r}")

        path = self.history_file(user_id)
        entry = MoodHistoryEntry(timestamp=self._clock(), mood=mood, song_ids=song_ids)

        try:
            with self._write_lock:
                path.parent.mkdir(parents=True, exist_ok=True)
                with open(path, "a", encoding="utf-8") as f:
                    f.write(format_entry(entry))
        except OSError as e:
            raise MoodHistoryError(f"Failed to write mood history for {user_id}: {e}") from e

        threading.Thread(
            target=self._compact_if_needed,
            args=(path,),
            name=f"mood-history-compact-{user_id}",
            daemon=True,
        ).start()

        return entry

    def read(self, user_id: str) -> List[MoodHistoryEntry]:
        """Read all parseable entries of a user's log, oldest first.

        Raises:
            MoodHistoryError: If the file exists but cannot be read
        """
        path = self.history_file(user_id)
        if not path.exists():
            return []

        try:
            with open(path, "r", encoding="utf-8") as f:
                lines = f.readlines()
        except OSError as e:
            raise MoodHistoryError(f"Failed to read mood history for {user_id}: {e}") from e

        entries = []
        for line_number, line in enumerate(lines, start=1):
            if not line.strip():
                continue
            try:
                entries.append(parse_line(line))
            except ValueError as e:
                logger.debug(f"Skipping malformed mood history line {path.name}:{line_number}: {e}")
        return entries

    def _compact_if_needed(self, history_file: Path) -> None:
        """Hook for merging entries older than ``retention_days``.

        Runs in a background thread after every append. Currently a no-op:
        entries are kept as written.
        """
        # TODO: summarize entries older than retention_days into one line per mood
        return None
