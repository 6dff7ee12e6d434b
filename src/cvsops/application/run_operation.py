from __future__ import annotations

from collections.abc import Callable, Sequence
from enum import Enum

from cvsops.adapters.errors import CommentStoreError, LaunchError
from cvsops.application.cvs_client import CvsClient
from cvsops.domain import commands
from cvsops.domain.commands import CvsCommand
from cvsops.domain.report import OperationReport, Problem


class Operation(str, Enum):
    REMOVE = "remove"
    ADD = "add"
    ADD_BINARY = "add-binary"
    COMMIT = "commit"
    UPDATE = "update"


_PLAIN_COMMANDS: dict[Operation, Callable[[str], CvsCommand]] = {
    Operation.REMOVE: commands.remove,
    Operation.ADD: commands.add,
    Operation.ADD_BINARY: commands.add_binary,
    Operation.UPDATE: commands.update,
}


async def run_operation(
    client: CvsClient,
    operation: Operation,
    path: str,
    comment: str | None = None,
    transcript: Sequence[str] = (),
) -> OperationReport:
    """Run one operation and describe it for the command line.

    ``transcript`` is the chunk list the runner's log sink fills in; it is
    copied into the report once the operation finished.
    """
    report = OperationReport(operation=operation.value, path=path)
    if operation is Operation.COMMIT:
        if not comment:
            report.problems.append(
                Problem(
                    code="COMMENT_MISSING",
                    message="No commit comment given and none was saved before",
                    hint="Pass --message",
                )
            )
            return report
        command = commands.commit(path, comment)
        pending = client.commit(path, comment)
    else:
        command = _PLAIN_COMMANDS[operation](path)
        pending = client.run(command)
    report.argv = command.argv(client.runner.cvsroot)

    try:
        report.cvs_exit_code = await pending
    except LaunchError as e:
        report.problems.append(
            Problem(
                code="CVS_LAUNCH_FAILED",
                message=str(e),
                hint=e.hint,
                details=e.details,
                is_execution=True,
            )
        )
    except CommentStoreError as e:
        # set_last_comment only runs after cvs commit exited with 0.
        report.cvs_exit_code = 0
        report.problems.append(
            Problem(
                code="COMMENT_STORE_FAILED",
                message=f"Commit succeeded but the comment was not saved: {e}",
                details=e.details,
                is_execution=True,
            )
        )
    report.stderr = list(transcript)

    if report.cvs_exit_code:
        report.problems.append(
            Problem(
                code="CVS_EXIT_NONZERO",
                message=f"cvs {command.subcommand} exited with code {report.cvs_exit_code}",
                details={"exit_code": report.cvs_exit_code},
            )
        )
    return report
