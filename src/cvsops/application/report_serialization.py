from __future__ import annotations

from dataclasses import asdict
from datetime import datetime, timezone
from typing import Any

from cvsops.domain.report import OperationReport

REPORT_SCHEMA_VERSION = 1


def serialize_report(report: OperationReport, executable: str | None = None) -> dict[str, Any]:
    return {
        "report_schema_version": REPORT_SCHEMA_VERSION,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "operation": report.operation,
        "path": report.path,
        "executable": executable,
        "argv": list(report.argv),
        "launched": report.launched,
        "cvs_exit_code": report.cvs_exit_code,
        "stderr": "".join(report.stderr),
        "exit_code": report.exit_code,
        "problems": [asdict(problem) for problem in report.problems],
    }
