"""Tests for locating downloaded audio files."""

import os
from pathlib import Path

import pytest

from igrok.exceptions import DiscoveryError, NoMediaFoundError
from igrok.media import discovery
from igrok.media.discovery import (
    UNKNOWN_MTIME,
    DiscoveredFileSet,
    discover,
    is_audio_file,
)


def _touch(path: Path, mtime: float) -> Path:
    path.write_bytes(b"")
    os.utime(path, (mtime, mtime))
    return path


class TestFiltering:
    def test_only_recognized_extensions(self, tmp_path):
        _touch(tmp_path / "a.mp3", 1000)
        _touch(tmp_path / "b.m4a", 1001)
        _touch(tmp_path / "c.opus", 1002)
        _touch(tmp_path / "d.webm", 1003)
        _touch(tmp_path / "e.txt", 1004)
        _touch(tmp_path / "f.mp3.part", 1005)

        result = discover(tmp_path)

        assert sorted(f.name for f in result) == ["a.mp3", "b.m4a", "c.opus"]

    def test_directories_are_ignored(self, tmp_path):
        (tmp_path / "album.mp3").mkdir()
        _touch(tmp_path / "song.mp3", 1000)

        result = discover(tmp_path)

        assert [f.name for f in result] == ["song.mp3"]

    def test_not_recursive(self, tmp_path):
        nested = tmp_path / "nested"
        nested.mkdir()
        _touch(nested / "deep.mp3", 2000)
        _touch(tmp_path / "top.mp3", 1000)

        result = discover(tmp_path)

        assert [f.name for f in result] == ["top.mp3"]

    def test_extension_case_insensitive(self):
        assert is_audio_file(Path("Song.MP3"))
        assert is_audio_file(Path("song.Opus"))
        assert not is_audio_file(Path("song.flac"))
        assert not is_audio_file(Path("mp3"))


class TestOrdering:
    def test_most_recent_first(self, tmp_path):
        _touch(tmp_path / "old.mp3", 1000)
        _touch(tmp_path / "newest.opus", 3000)
        _touch(tmp_path / "middle.m4a", 2000)

        result = discover(tmp_path)

        assert [f.name for f in result] == ["newest.opus", "middle.m4a", "old.mp3"]
        assert [f.modified for f in result] == [3000, 2000, 1000]

    def test_capped_at_ten(self, tmp_path):
        for i in range(15):
            _touch(tmp_path / f"track{i:02d}.mp3", 1000 + i)

        result = discover(tmp_path)

        assert len(result) == 10
        assert result[0].name == "track14.mp3"
        assert result[-1].name == "track05.mp3"

    def test_custom_limit(self, tmp_path):
        for i in range(5):
            _touch(tmp_path / f"track{i}.mp3", 1000 + i)

        result = discover(tmp_path, limit=2)

        assert [f.name for f in result] == ["track4.mp3", "track3.mp3"]

    def test_unreadable_mtime_sorts_last(self, tmp_path, monkeypatch):
        _touch(tmp_path / "a.mp3", 1000)
        _touch(tmp_path / "broken.mp3", 5000)
        _touch(tmp_path / "b.mp3", 2000)

        real_modified_time = discovery._modified_time

        def fake_modified_time(path):
            if path.name == "broken.mp3":
                return UNKNOWN_MTIME
            return real_modified_time(path)

        monkeypatch.setattr(discovery, "_modified_time", fake_modified_time)

        result = discover(tmp_path)

        assert [f.name for f in result] == ["b.mp3", "a.mp3", "broken.mp3"]

    def test_missing_file_mtime_is_unknown(self, tmp_path):
        assert discovery._modified_time(tmp_path / "gone.mp3") == UNKNOWN_MTIME


class TestFailures:
    def test_empty_directory(self, tmp_path):
        with pytest.raises(NoMediaFoundError):
            discover(tmp_path)

    def test_only_unrecognized_files(self, tmp_path):
        _touch(tmp_path / "cover.jpg", 1000)
        _touch(tmp_path / "video.mkv", 1000)

        with pytest.raises(NoMediaFoundError):
            discover(tmp_path)

    def test_missing_directory(self, tmp_path):
        with pytest.raises(DiscoveryError):
            discover(tmp_path / "does-not-exist")

    def test_empty_file_set_rejected(self):
        with pytest.raises(ValueError):
            DiscoveredFileSet(())
