from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import NoReturn

import typer

from cvsops.adapters.comment_store.toml_file import TomlCommentStore
from cvsops.adapters.errors import AdapterError
from cvsops.adapters.log_sink.console import ConsoleLogSink
from cvsops.adapters.process.asyncio_launcher import AsyncioProcessLauncher
from cvsops.application.command_runner import ProcessCommandRunner
from cvsops.application.cvs_client import CvsClient
from cvsops.application.report_serialization import serialize_report
from cvsops.application.run_operation import Operation, run_operation
from cvsops.application.settings import load_settings, read_config, resolve_state_file
from cvsops.domain.report import OperationReport, Problem
from cvsops.utils.logging import setup_logger

app = typer.Typer(add_completion=False)

CvsRootOption = typer.Option(None, "--cvsroot", "-d", help="Repository root (CVSROOT).")
WorkDirOption = typer.Option(Path("."), "--work-dir", help="Directory cvs runs in.")
ExecutableOption = typer.Option(None, "--executable", help="CVS client to run.")
JsonOption = typer.Option(False, "--json")
VerboseOption = typer.Option(False, "--verbose", "-v")


def _config_failure(operation: Operation, path: str, error: AdapterError) -> OperationReport:
    return OperationReport(
        operation=operation.value,
        path=path,
        problems=[
            Problem(
                code="CONFIG_INVALID",
                message=str(error),
                hint=error.hint,
                details=error.details,
                is_execution=True,
            )
        ],
    )


def _report(report: OperationReport, as_json: bool, executable: str | None = None) -> NoReturn:
    if as_json:
        typer.echo(json.dumps(serialize_report(report, executable=executable)))
    else:
        for problem in report.problems:
            line = f"error: {problem.message}"
            if problem.hint:
                line += f" ({problem.hint})"
            typer.echo(line, err=True)
    raise typer.Exit(report.exit_code)


def _execute(
    operation: Operation,
    path: str,
    *,
    comment: str | None,
    cvsroot: str | None,
    work_dir: Path,
    executable: str | None,
    as_json: bool,
    verbose: bool,
) -> None:
    setup_logger(verbose)
    try:
        settings = load_settings(work_dir, cvsroot=cvsroot, executable=executable)
        store = TomlCommentStore(settings.state_file)
        if operation is Operation.COMMIT and not comment:
            comment = store.get_last_comment()
    except AdapterError as e:
        _report(_config_failure(operation, path, e), as_json)
    log_sink = ConsoleLogSink()
    runner = ProcessCommandRunner(
        settings.cvsroot,
        settings.work_dir,
        AsyncioProcessLauncher(),
        log_sink,
        executable=settings.executable,
        encoding=settings.encoding,
    )
    client = CvsClient(runner, store)
    report = asyncio.run(
        run_operation(client, operation, path, comment, transcript=log_sink.transcript)
    )
    _report(report, as_json, executable=settings.executable)


@app.command()
def remove(
    path: str,
    cvsroot: str | None = CvsRootOption,
    work_dir: Path = WorkDirOption,
    executable: str | None = ExecutableOption,
    json_output: bool = JsonOption,
    verbose: bool = VerboseOption,
):
    _execute(
        Operation.REMOVE,
        path,
        comment=None,
        cvsroot=cvsroot,
        work_dir=work_dir,
        executable=executable,
        as_json=json_output,
        verbose=verbose,
    )


@app.command()
def add(
    path: str,
    binary: bool = typer.Option(False, "--binary", help="Add with -kb."),
    cvsroot: str | None = CvsRootOption,
    work_dir: Path = WorkDirOption,
    executable: str | None = ExecutableOption,
    json_output: bool = JsonOption,
    verbose: bool = VerboseOption,
):
    _execute(
        Operation.ADD_BINARY if binary else Operation.ADD,
        path,
        comment=None,
        cvsroot=cvsroot,
        work_dir=work_dir,
        executable=executable,
        as_json=json_output,
        verbose=verbose,
    )


@app.command()
def commit(
    path: str,
    message: str | None = typer.Option(
        None, "--message", "-m", help="Commit comment; defaults to the last one used."
    ),
    cvsroot: str | None = CvsRootOption,
    work_dir: Path = WorkDirOption,
    executable: str | None = ExecutableOption,
    json_output: bool = JsonOption,
    verbose: bool = VerboseOption,
):
    _execute(
        Operation.COMMIT,
        path,
        comment=message,
        cvsroot=cvsroot,
        work_dir=work_dir,
        executable=executable,
        as_json=json_output,
        verbose=verbose,
    )


@app.command()
def update(
    path: str,
    cvsroot: str | None = CvsRootOption,
    work_dir: Path = WorkDirOption,
    executable: str | None = ExecutableOption,
    json_output: bool = JsonOption,
    verbose: bool = VerboseOption,
):
    _execute(
        Operation.UPDATE,
        path,
        comment=None,
        cvsroot=cvsroot,
        work_dir=work_dir,
        executable=executable,
        as_json=json_output,
        verbose=verbose,
    )


@app.command("last-comment")
def last_comment(work_dir: Path = WorkDirOption):
    try:
        store = TomlCommentStore(resolve_state_file(work_dir, read_config(work_dir)))
        comment = store.get_last_comment()
    except AdapterError as e:
        typer.echo(f"error: {e}", err=True)
        raise typer.Exit(3)
    if comment is None:
        raise typer.Exit(1)
    typer.echo(comment)
