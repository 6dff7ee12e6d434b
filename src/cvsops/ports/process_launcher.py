from pathlib import Path
from typing import Protocol


class ChildProcess(Protocol):
    async def read_stderr(self) -> bytes:
        """Return the next stderr chunk, or ``b""`` once the stream is closed."""
        ...

    async def wait(self) -> int: ...

    def kill(self) -> None:
        """Kill the child if it is still running; no-op once it has exited."""
        ...


class ProcessLauncherPort(Protocol):
    async def spawn(self, executable: str, argv: list[str], cwd: Path) -> ChildProcess: ...
