from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import pytest

from cvsops.adapters.errors import CommandNotFound, LaunchError
from cvsops.application.command_runner import ProcessCommandRunner
from cvsops.application.cvs_client import CvsClient


@dataclass
class FakeChild:
    chunks: list[bytes]
    exit_code: int
    events: list[str]
    read_error: LaunchError | None = None

    async def read_stderr(self) -> bytes:
        if self.read_error is not None:
            raise self.read_error
        if not self.chunks:
            return b""
        return self.chunks.pop(0)

    async def wait(self) -> int:
        self.events.append(f"exit:{self.exit_code}")
        return self.exit_code

    def kill(self) -> None:
        self.events.append("kill")


@dataclass
class FakeLauncher:
    chunks: list[bytes] = field(default_factory=list)
    exit_code: int = 0
    spawn_error: LaunchError | None = None
    read_error: LaunchError | None = None
    calls: list[tuple[str, list[str], Path]] = field(default_factory=list)
    events: list[str] = field(default_factory=list)

    async def spawn(self, executable: str, argv: list[str], cwd: Path) -> FakeChild:
        self.calls.append((executable, argv, cwd))
        if self.spawn_error is not None:
            raise self.spawn_error
        return FakeChild(list(self.chunks), self.exit_code, self.events, self.read_error)


@dataclass
class RecordingLogSink:
    events: list[str]
    texts: list[str] = field(default_factory=list)
    error: Exception | None = None

    def print_to_log(self, text: str) -> None:
        if self.error is not None:
            raise self.error
        self.events.append(f"log:{text}")
        self.texts.append(text)


@dataclass
class RecordingCommentStore:
    events: list[str]
    comments: list[str] = field(default_factory=list)
    error: Exception | None = None

    def set_last_comment(self, text: str) -> None:
        if self.error is not None:
            raise self.error
        self.events.append(f"comment:{text}")
        self.comments.append(text)

    def get_last_comment(self) -> str | None:
        return self.comments[-1] if self.comments else None


@pytest.fixture
def launcher() -> FakeLauncher:
    return FakeLauncher()


@pytest.fixture
def log_sink(launcher: FakeLauncher) -> RecordingLogSink:
    return RecordingLogSink(launcher.events)


@pytest.fixture
def comment_store(launcher: FakeLauncher) -> RecordingCommentStore:
    return RecordingCommentStore(launcher.events)


@pytest.fixture
def runner(launcher, log_sink, tmp_path) -> ProcessCommandRunner:
    return ProcessCommandRunner(":pserver:anon@cvs.example.org:/cvsroot", tmp_path, launcher, log_sink)


@pytest.fixture
def client(runner, comment_store) -> CvsClient:
    return CvsClient(runner, comment_store)


@pytest.fixture
def missing_executable() -> CommandNotFound:
    return CommandNotFound("Executable not found: cvs", cause=FileNotFoundError(2, "No such file"))
