from __future__ import annotations

import asyncio

from cvsops.application.command_runner import ProcessCommandRunner
from cvsops.domain import commands
from cvsops.domain.commands import CvsCommand
from cvsops.ports.comment_store import CommentStorePort


class CvsClient:
    def __init__(self, runner: ProcessCommandRunner, comment_store: CommentStorePort) -> None:
        self.runner = runner
        self.comment_store = comment_store

    def run(self, command: CvsCommand) -> asyncio.Future[int]:
        return self.runner.invoke(command.subcommand, command.args)

    def remove(self, path: str) -> asyncio.Future[int]:
        return self.run(commands.remove(path))

    def add(self, path: str) -> asyncio.Future[int]:
        return self.run(commands.add(path))

    def add_binary(self, path: str) -> asyncio.Future[int]:
        return self.run(commands.add_binary(path))

    def commit(self, path: str, comment: str) -> asyncio.Future[int]:
        command = commands.commit(path, comment)

        def remember_comment() -> None:
            self.comment_store.set_last_comment(comment)

        return self.runner.invoke(
            command.subcommand, command.args, on_success=remember_comment
        )

    def update(self, path: str) -> asyncio.Future[int]:
        return self.run(commands.update(path))
