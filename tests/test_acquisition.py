"""Tests for fetching audio with the downloader."""

import asyncio

import pytest

from igrok.exceptions import AcquisitionError
from igrok.media.acquisition import Acquirer
from igrok.models.config import PlayerConfig

from .conftest import FakeLauncher

URL = "https://www.youtube.com/watch?v=dQw4w9WgXcQ"


class TestDownloaderArguments:
    def test_default_arguments(self, config, tmp_path):
        args = Acquirer(FakeLauncher(), config).build_args(URL, tmp_path)

        assert args == [
            "-q",
            "-x",
            "--audio-format",
            "mp3",
            "--audio-quality",
            "0",
            "-o",
            str(tmp_path / "%(title)s.%(ext)s"),
            "--print",
            "after_move:filepath",
            URL,
        ]

    def test_configured_format(self, tmp_path):
        config = PlayerConfig(output_dir=tmp_path, audio_format="opus", audio_quality=5)

        args = Acquirer(FakeLauncher(), config).build_args(URL, tmp_path)

        assert args[args.index("--audio-format") + 1] == "opus"
        assert args[args.index("--audio-quality") + 1] == "5"

    def test_url_is_last(self, config, tmp_path):
        args = Acquirer(FakeLauncher(), config).build_args(URL, tmp_path)

        assert args[-1] == URL


class TestAcquire:
    @pytest.mark.asyncio
    async def test_success(self, config, tmp_path):
        launcher = FakeLauncher(output=f"{tmp_path}/Song.mp3\n")

        await Acquirer(launcher, config).acquire(URL, tmp_path)

        name, _, options = launcher.calls[0]
        assert name == "yt-dlp"
        assert options == {"silent": True, "capture_output": True}
        assert launcher.log == ["launch:yt-dlp", "exit:yt-dlp"]

    @pytest.mark.asyncio
    async def test_nonzero_exit(self, config, tmp_path):
        launcher = FakeLauncher(returncodes={"yt-dlp": 1})

        with pytest.raises(AcquisitionError) as exc_info:
            await Acquirer(launcher, config).acquire(URL, tmp_path)

        assert exc_info.value.returncode == 1
        assert len(launcher.calls) == 1

    @pytest.mark.asyncio
    async def test_downloader_not_startable(self, config, tmp_path):
        launcher = FakeLauncher(fail=["yt-dlp"])

        with pytest.raises(AcquisitionError) as exc_info:
            await Acquirer(launcher, config).acquire(URL, tmp_path)

        assert exc_info.value.returncode is None

    @pytest.mark.asyncio
    async def test_custom_downloader_executable(self, tmp_path):
        config = PlayerConfig(output_dir=tmp_path, downloader="yt-dlp-nightly")
        launcher = FakeLauncher()

        await Acquirer(launcher, config).acquire(URL, tmp_path)

        assert launcher.calls[0][0] == "yt-dlp-nightly"

    @pytest.mark.asyncio
    async def test_cancellation_kills_downloader(self, config, tmp_path):
        launcher = FakeLauncher(returncodes={"yt-dlp": None})

        task = asyncio.create_task(Acquirer(launcher, config).acquire(URL, tmp_path))
        while not launcher.handles:
            await asyncio.sleep(0)
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task

        downloader = launcher.launched("yt-dlp")[0]
        assert downloader.killed
        assert not downloader.is_running
        assert launcher.log == ["launch:yt-dlp", "kill:yt-dlp", "exit:yt-dlp"]
