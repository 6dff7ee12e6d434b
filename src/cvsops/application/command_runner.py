from __future__ import annotations

import asyncio
import codecs
import logging
from collections.abc import Callable, Sequence
from pathlib import Path

from cvsops.adapters.errors import LaunchError
from cvsops.domain.commands import CvsCommand
from cvsops.ports.log_sink import LogSinkPort
from cvsops.ports.process_launcher import ChildProcess, ProcessLauncherPort

logger = logging.getLogger(__name__)

DEFAULT_EXECUTABLE = "cvs"


class ProcessCommandRunner:
    """Runs one CVS subcommand per call and reports its exit code.

    Standard error of the child is relayed chunk by chunk to ``log_sink`` while
    the process runs. The returned future resolves with the exit code, whatever
    its value, or fails with :class:`LaunchError` when the process could not be
    started or talked to. Calls are not serialized against each other.

    ``encoding`` is looked up immediately, so an unknown codec raises
    ``LookupError`` here rather than after cvs has started.
    """

    def __init__(
        self,
        cvsroot: str,
        work_dir: Path,
        launcher: ProcessLauncherPort,
        log_sink: LogSinkPort,
        *,
        executable: str = DEFAULT_EXECUTABLE,
        encoding: str = "utf-8",
    ) -> None:
        self._cvsroot = cvsroot
        self._work_dir = work_dir
        self._launcher = launcher
        self._log_sink = log_sink
        self._executable = executable
        self._decoder_factory = codecs.getincrementaldecoder(encoding)

    @property
    def cvsroot(self) -> str:
        return self._cvsroot

    def invoke(
        self,
        subcommand: str,
        args: Sequence[str],
        *,
        on_success: Callable[[], None] | None = None,
    ) -> asyncio.Future[int]:
        """Start ``cvs -d <root> <subcommand> *args`` and return its completion.

        ``on_success`` runs only for exit code 0, before the future resolves.
        Must be called with a running event loop.
        """
        command = CvsCommand(subcommand, tuple(args))
        return asyncio.ensure_future(self._run(command, on_success))

    async def _run(self, command: CvsCommand, on_success: Callable[[], None] | None) -> int:
        argv = command.argv(self._cvsroot)
        logger.debug("Running %s %s in %s", self._executable, argv, self._work_dir)
        try:
            child = await self._launcher.spawn(self._executable, argv, self._work_dir)
        except LaunchError as e:
            logger.warning("%s %s: %s", self._executable, command.subcommand, e)
            raise
        try:
            await self._relay_stderr(child)
            code = await child.wait()
        except BaseException as e:
            if isinstance(e, LaunchError):
                logger.warning("%s %s: %s", self._executable, command.subcommand, e)
            await self._reap(child)
            raise
        logger.debug("%s %s exited with %s", self._executable, command.subcommand, code)
        if code == 0 and on_success is not None:
            on_success()
        return code

    async def _reap(self, child: ChildProcess) -> None:
        child.kill()
        try:
            await child.wait()
        except LaunchError as e:
            logger.warning("Could not reap %s after failure: %s", self._executable, e)

    async def _relay_stderr(self, child: ChildProcess) -> None:
        # Multi-byte characters may straddle chunk boundaries.
        decoder = self._decoder_factory(errors="replace")
        while True:
            chunk = await child.read_stderr()
            text = decoder.decode(chunk, final=not chunk)
            if text:
                self._log_sink.print_to_log(text)
            if not chunk:
                return
