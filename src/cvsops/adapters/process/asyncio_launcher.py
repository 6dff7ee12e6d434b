from __future__ import annotations

import asyncio
import contextlib
from pathlib import Path

from cvsops.adapters.errors import CommandNotFound, LaunchError

STDERR_CHUNK_SIZE = 64 * 1024


class AsyncioChildProcess:
    def __init__(self, process: asyncio.subprocess.Process, executable: str) -> None:
        self._process = process
        self._executable = executable

    async def read_stderr(self) -> bytes:
        stream = self._process.stderr
        if stream is None:
            return b""
        try:
            return await stream.read(STDERR_CHUNK_SIZE)
        except OSError as e:
            raise LaunchError(
                f"Lost stderr pipe of {self._executable}",
                details={"pid": self._process.pid},
                cause=e,
            )

    async def wait(self) -> int:
        try:
            return await self._process.wait()
        except OSError as e:
            raise LaunchError(
                f"Failed waiting for {self._executable}",
                details={"pid": self._process.pid},
                cause=e,
            )

    def kill(self) -> None:
        if self._process.returncode is not None:
            return
        # Already gone between the check and the signal.
        with contextlib.suppress(ProcessLookupError):
            self._process.kill()


class AsyncioProcessLauncher:
    async def spawn(self, executable: str, argv: list[str], cwd: Path) -> AsyncioChildProcess:
        details = {"executable": executable, "cwd": str(cwd)}
        try:
            process = await asyncio.create_subprocess_exec(
                executable,
                *argv,
                cwd=str(cwd),
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.PIPE,
            )
        except FileNotFoundError as e:
            if not cwd.is_dir():
                raise LaunchError(
                    f"Working directory does not exist: {cwd}", details=details, cause=e
                )
            raise CommandNotFound(
                f"Executable not found: {executable}",
                details=details,
                hint="Install the CVS client or pass --executable",
                cause=e,
            )
        except OSError as e:
            raise LaunchError(
                f"Failed to start {executable}: {e.strerror or e}",
                details=details,
                cause=e,
            )
        return AsyncioChildProcess(process, executable)
