"""
Launches external executables and exposes their lifetime through small handles.
"""

import asyncio
import logging
from collections.abc import Sequence
from typing import Protocol

from igrok.exceptions import ProcessLaunchError

log = logging.getLogger(__name__)


class ProcessHandle(Protocol):
    """Interface for a started external process."""

    name: str

    @property
    def is_running(self) -> bool: ...

    @property
    def returncode(self) -> int | None: ...

    async def wait(self) -> int:
        """Blocks until the process exits and returns its exit status."""
        ...

    def kill(self) -> None:
        """Forcibly terminates the process."""
        ...


class Launcher(Protocol):
    """Interface for starting external executables."""

    async def launch(
        self,
        name: str,
        args: Sequence[str] = (),
        *,
        silent: bool = False,
        capture_output: bool = False,
    ) -> ProcessHandle:
        """
        Starts `name` with `args`.

        Raises:
            ProcessLaunchError: If the executable cannot be started.
        """
        ...


class SubprocessHandle:
    """A ProcessHandle backed by an asyncio subprocess."""

    def __init__(self, name: str, process: asyncio.subprocess.Process):
        self.name = name
        self.output = ""
        self._process = process

    @property
    def pid(self) -> int:
        return self._process.pid

    @property
    def returncode(self) -> int | None:
        return self._process.returncode

    @property
    def is_running(self) -> bool:
        return self._process.returncode is None

    async def wait(self) -> int:
        """
        Waits for the process to exit. When stdout was captured it is drained
        into `self.output` so the child can never block on a full pipe.
        """
        if self._process.stdout is not None:
            stdout, _ = await self._process.communicate()
            self.output = stdout.decode("utf-8", errors="replace")
        else:
            await self._process.wait()
        log.debug(f"'{self.name}' (pid {self.pid}) exited with {self.returncode}.")
        return self._process.returncode

    def kill(self) -> None:
        """
        Sends SIGKILL to the process.

        Raises:
            ProcessLookupError: If the process has already been reaped.
        """
        self._process.kill()

    def __repr__(self) -> str:
        return f"<SubprocessHandle {self.name} pid={self.pid} rc={self.returncode}>"


class ProcessLauncher:
    """Starts real executables with asyncio.create_subprocess_exec."""

    async def launch(
        self,
        name: str,
        args: Sequence[str] = (),
        *,
        silent: bool = False,
        capture_output: bool = False,
    ) -> SubprocessHandle:
        """
        Starts an executable. Output is inherited from the terminal unless
        `silent` discards it or `capture_output` collects stdout.
        """
        if capture_output:
            stdout = asyncio.subprocess.PIPE
        elif silent:
            stdout = asyncio.subprocess.DEVNULL
        else:
            stdout = None
        stderr = asyncio.subprocess.DEVNULL if silent else None

        try:
            process = await asyncio.create_subprocess_exec(
                name, *args, stdout=stdout, stderr=stderr
            )
        except OSError as e:
            raise ProcessLaunchError(f"Failed to start '{name}': {e}") from e

        log.debug(f"Started '{name}' (pid {process.pid}) with args: {list(args)}")
        return SubprocessHandle(name, process)
