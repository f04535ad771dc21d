"""Test configuration and fixtures"""

import asyncio
from collections.abc import Callable, Sequence
from pathlib import Path

import pytest

from igrok.exceptions import ProcessLaunchError
from igrok.media.discovery import DiscoveredFileSet, MediaFile
from igrok.models.config import PlayerConfig


class FakeHandle:
    """Stands in for a running process; records its lifecycle in a shared log."""

    def __init__(
        self,
        name: str,
        args: Sequence[str],
        returncode: int | None,
        log: list[str],
        output: str = "",
    ):
        self.name = name
        self.args = list(args)
        self.output = output
        self.returncode: int | None = None
        self.killed = False
        self._final_returncode = returncode
        self._log = log
        self._exited = asyncio.Event()

    @property
    def is_running(self) -> bool:
        return self.returncode is None

    async def wait(self) -> int:
        if self._final_returncode is not None and not self.killed:
            self.returncode = self._final_returncode
        else:
            # Runs until killed
            await self._exited.wait()
        self._log.append(f"exit:{self.name}")
        return self.returncode

    def kill(self) -> None:
        if self.returncode is not None:
            raise ProcessLookupError
        self.killed = True
        self.returncode = -9
        self._log.append(f"kill:{self.name}")
        self._exited.set()


class FakeLauncher:
    """
    Launcher double. `returncodes` maps an executable to the exit status it
    will report (a list is consumed one launch at a time; None means the
    process runs until killed). Names in `fail` cannot be launched.
    """

    def __init__(
        self,
        returncodes: dict | None = None,
        fail: Sequence[str] = (),
        hooks: dict[str, Callable[[list[str]], None]] | None = None,
        output: str = "",
    ):
        self.returncodes = {"cava": None, **(returncodes or {})}
        self.fail = set(fail)
        self.hooks = hooks or {}
        self.output = output
        self.log: list[str] = []
        self.calls: list[tuple[str, list[str], dict]] = []
        self.handles: list[FakeHandle] = []

    async def launch(
        self,
        name: str,
        args: Sequence[str] = (),
        *,
        silent: bool = False,
        capture_output: bool = False,
    ) -> FakeHandle:
        self.calls.append(
            (name, list(args), {"silent": silent, "capture_output": capture_output})
        )
        self.log.append(f"launch:{name}")
        if name in self.fail:
            raise ProcessLaunchError(f"Failed to start '{name}': No such file")
        if name in self.hooks:
            self.hooks[name](list(args))

        returncode = self.returncodes.get(name, 0)
        if isinstance(returncode, list):
            returncode = returncode.pop(0)
        handle = FakeHandle(name, args, returncode, self.log, output=self.output)
        self.handles.append(handle)
        return handle

    def launched(self, name: str) -> list[FakeHandle]:
        return [h for h in self.handles if h.name == name]

    def played_files(self) -> list[str]:
        return [args[-1] for name, args, _ in self.calls if name == "mpv"]


@pytest.fixture
def config(tmp_path: Path) -> PlayerConfig:
    return PlayerConfig(output_dir=tmp_path, companion_delay=0)


@pytest.fixture
def media_file(tmp_path: Path) -> MediaFile:
    path = tmp_path / "Song.mp3"
    path.write_bytes(b"")
    return MediaFile(path, path.stat().st_mtime)


@pytest.fixture
def make_file_set(tmp_path: Path):
    def _make(*names: str) -> DiscoveredFileSet:
        files = []
        for name in names:
            path = tmp_path / name
            path.write_bytes(b"")
            files.append(MediaFile(path, path.stat().st_mtime))
        return DiscoveredFileSet(tuple(files))

    return _make
