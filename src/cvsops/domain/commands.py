from __future__ import annotations

from dataclasses import dataclass

BINARY_KEYWORD_FLAG = "-kb"


@dataclass(frozen=True)
class CvsCommand:
    subcommand: str
    args: tuple[str, ...] = ()

    def argv(self, cvsroot: str) -> list[str]:
        return ["-d", cvsroot, self.subcommand, *self.args]


def remove(path: str) -> CvsCommand:
    return CvsCommand("remove", (path,))


def add(path: str) -> CvsCommand:
    return CvsCommand("add", (path,))


def add_binary(path: str) -> CvsCommand:
    return CvsCommand("add", (BINARY_KEYWORD_FLAG, path))


def commit(path: str, comment: str) -> CvsCommand:
    return CvsCommand("commit", ("-m", comment, path))


def update(path: str) -> CvsCommand:
    return CvsCommand("update", (path,))
