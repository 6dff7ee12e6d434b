from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

LAUNCH_FAILURE_EXIT = 3
TOOL_FAILURE_EXIT = 2


@dataclass(frozen=True)
class Problem:
    code: str
    message: str
    hint: str | None = None
    details: dict[str, Any] | None = None
    # True when cvs could not be run or its outcome could not be recorded,
    # False when cvs ran and reported failure or the request was incomplete.
    is_execution: bool = False


def _new_problems() -> list[Problem]:
    return []


def _new_chunks() -> list[str]:
    return []


@dataclass
class OperationReport:
    """What happened to one cvs operation started from the command line."""

    operation: str
    path: str
    argv: list[str] = field(default_factory=_new_chunks)
    cvs_exit_code: int | None = None
    stderr: list[str] = field(default_factory=_new_chunks)
    problems: list[Problem] = field(default_factory=_new_problems)

    @property
    def launched(self) -> bool:
        return self.cvs_exit_code is not None

    @property
    def exit_code(self) -> int:
        if any(p.is_execution for p in self.problems):
            return LAUNCH_FAILURE_EXIT
        if self.problems:
            return TOOL_FAILURE_EXIT
        return 0
