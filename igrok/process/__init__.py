"""
Process Layer.

This package wraps the external executables the application drives
(downloader, media player and visualizer) behind a small launcher interface,
so the rest of the code never touches asyncio subprocesses directly.
"""

from .launcher import Launcher, ProcessHandle, ProcessLauncher, SubprocessHandle

__all__ = ["Launcher", "ProcessHandle", "ProcessLauncher", "SubprocessHandle"]
