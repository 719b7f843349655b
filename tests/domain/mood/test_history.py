"""Tests for the per-user mood history log."""

import threading
from datetime import datetime, timezone
from pathlib import Path
from unittest.mock import patch

import pytest

from tunetalk.domain.mood.history import (
    MoodHistoryError,
    MoodHistoryStore,
    format_entry,
    parse_line,
)
from tunetalk.domain.mood.models import MoodHistoryEntry

FIXED_TIME = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)


@pytest.fixture
def store(tmp_path: Path) -> MoodHistoryStore:
    return MoodHistoryStore(tmp_path / "mood_history", clock=lambda: FIXED_TIME)


class TestLineFormat:
    """Tests for format_entry / parse_line."""

    def test_format_entry(self) -> None:
        entry = MoodHistoryEntry(timestamp=FIXED_TIME, mood="sad", song_ids=("a", "b"))

        assert format_entry(entry) == "2024-01-02T03:04:05+00:00|sad|a,b\n"

    def test_empty_song_segment(self) -> None:
        entry = parse_line("2024-01-02T03:04:05+00:00|happy|\n")

        assert entry.mood == "happy"
        assert entry.song_ids == ()

    @pytest.mark.parametrize(
        "line",
        [
            "garbage",
            "2024-01-02T03:04:05+00:00|sad",
            "2024-01-02T03:04:05+00:00|sad|a|b",
            "not-a-date|sad|a",
        ],
    )
    def test_malformed_lines_raise(self, line: str) -> None:
        with pytest.raises(ValueError):
            parse_line(line)


class TestMoodHistoryStore:
    """Tests for MoodHistoryStore."""

    def test_append_creates_directory_and_file(self, store: MoodHistoryStore) -> None:
        store.append("default_user", "lonely", ["id1", "id2"])

        path = store.history_file("default_user")
        assert path.name == "user_default_user_mood_history.txt"
        assert path.read_text(encoding="utf-8") == "2024-01-02T03:04:05+00:00|lonely|id1,id2\n"

    def test_append_is_append_only(self, store: MoodHistoryStore) -> None:
        store.append("u1", "sad", ["a"])
        store.append("u1", "happy", [])

        entries = store.read("u1")

        assert [e.mood for e in entries] == ["sad", "happy"]
        assert entries[0].song_ids == ("a",)
        assert entries[1].song_ids == ()
        assert entries[0].timestamp == FIXED_TIME

    def test_read_missing_user_is_empty(self, store: MoodHistoryStore) -> None:
        assert store.read("nobody") == []

    def test_read_skips_malformed_lines(self, store: MoodHistoryStore) -> None:
        path = store.history_file("u1")
        path.parent.mkdir(parents=True)
        path.write_text(
            "2024-01-02T03:04:05+00:00|sad|a\n"
            "this line is broken\n"
            "\n"
            "2024-01-02T03:04:05+00:00|too|many|fields\n"
            "2024-01-03T00:00:00+00:00|calm|b,c\n",
            encoding="utf-8",
        )

        entries = store.read("u1")

        assert [(e.mood, e.song_ids) for e in entries] == [("sad", ("a",)), ("calm", ("b", "c"))]

    def test_users_have_separate_files(self, store: MoodHistoryStore) -> None:
        store.append("alice", "happy", [])
        store.append("bob", "sad", [])

        assert [e.mood for e in store.read("alice")] == ["happy"]
        assert [e.mood for e in store.read("bob")] == ["sad"]

    @pytest.mark.parametrize("user_id", ["../evil", "a/b", "", "a..b"])
    def test_unsafe_user_id_rejected(self, store: MoodHistoryStore, user_id: str) -> None:
        with pytest.raises(ValueError):
            store.append(user_id, "sad", [])

    def test_separator_in_values_rejected(self, store: MoodHistoryStore) -> None:
        with pytest.raises(ValueError):
            store.append("u1", "sad", ["a,b"])
        with pytest.raises(ValueError):
            store.append("u1", "sad|happy", [])

    def test_write_failure_raises_mood_history_error(self, tmp_path: Path) -> None:
        blocker = tmp_path / "not_a_dir"
        blocker.write_text("file in the way")
        store = MoodHistoryStore(blocker)

        with pytest.raises(MoodHistoryError):
            store.append("u1", "sad", [])

    def test_append_triggers_compaction_hook(self, store: MoodHistoryStore) -> None:
        called = threading.Event()

        with patch.object(MoodHistoryStore, "_compact_if_needed", side_effect=lambda path: called.set()):
            store.append("u1", "sad", [])

            assert called.wait(2)

    def test_concurrent_appends_keep_every_line(self, store: MoodHistoryStore) -> None:
        def write(n: int) -> None:
            for i in range(25):
                store.append("u1", "sad", [f"{n}-{i}"])

        threads = [threading.Thread(target=write, args=(n,)) for n in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(store.read("u1")) == 100
