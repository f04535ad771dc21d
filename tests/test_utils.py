"""Tests for utility helpers."""

import pytest

from igrok.exceptions import DependencyMissingError, InvalidIdentifierError
from igrok.media.info import probe_duration
from igrok.utils import dependencies
from igrok.utils.dependencies import check_dependencies, find_missing_tools
from igrok.utils.formatting import format_duration, format_track_position
from igrok.utils.path import create_dir, is_youtube_url, validate_youtube_url


class TestYoutubeUrl:
    @pytest.mark.parametrize(
        "url",
        [
            "https://www.youtube.com/watch?v=dQw4w9WgXcQ",
            "http://youtube.com/playlist?list=PL123",
            "youtu.be/dQw4w9WgXcQ",
            "https://music.youtube.com/watch?v=abc",
            "www.youtube.com/shorts/abc",
        ],
    )
    def test_valid(self, url):
        assert is_youtube_url(url)

    @pytest.mark.parametrize(
        "url",
        [
            "",
            "https://vimeo.com/123",
            "https://www.youtube.com/",
            "https://notyoutube.com/watch?v=abc",
            "ftp://youtube.com/watch?v=abc",
        ],
    )
    def test_invalid(self, url):
        assert not is_youtube_url(url)

    def test_validate_strips_whitespace(self):
        assert validate_youtube_url("  https://youtu.be/abc \n") == "https://youtu.be/abc"

    def test_validate_raises(self):
        with pytest.raises(InvalidIdentifierError):
            validate_youtube_url("https://example.com/video")


class TestDependencies:
    def test_all_present(self, monkeypatch):
        monkeypatch.setattr(dependencies.shutil, "which", lambda cmd: f"/usr/bin/{cmd}")

        check_dependencies(["yt-dlp", "mpv", "cava"])

    def test_first_missing_reported(self, monkeypatch):
        installed = {"yt-dlp"}
        monkeypatch.setattr(
            dependencies.shutil,
            "which",
            lambda cmd: f"/usr/bin/{cmd}" if cmd in installed else None,
        )

        assert find_missing_tools(["yt-dlp", "mpv", "cava"]) == ["mpv", "cava"]
        with pytest.raises(DependencyMissingError, match="mpv is not installed"):
            check_dependencies(["yt-dlp", "mpv", "cava"])


class TestFormatting:
    def test_format_duration(self):
        assert format_duration(0) == "0s"
        assert format_duration(61) == "1m 1s"
        assert format_duration(3600) == "1h"
        assert format_duration(9252.7) == "2h 34m 12s"

    def test_format_track_position(self):
        assert format_track_position(2, 5) == "[2/5]"


class TestMisc:
    def test_create_dir_nested(self, tmp_path):
        target = tmp_path / "a" / "b"

        create_dir(target)
        create_dir(target)

        assert target.is_dir()

    def test_probe_duration_unreadable(self, tmp_path):
        path = tmp_path / "garbage.mp3"
        path.write_bytes(b"")

        assert probe_duration(path) is None
        assert probe_duration(tmp_path / "missing.mp3") is None
