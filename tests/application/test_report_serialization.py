from cvsops.application.report_serialization import serialize_report
from cvsops.domain.report import OperationReport, Problem


def test_serialize_report_carries_argv_and_stderr():
    report = OperationReport(
        operation="update",
        path="b.txt",
        argv=["-d", "/cvsroot", "update", "b.txt"],
        cvs_exit_code=1,
        stderr=["cvs update: Updating .\n", "C b.txt\n"],
        problems=[Problem(code="CVS_EXIT_NONZERO", message="cvs update exited with code 1")],
    )
    data = serialize_report(report, executable="cvs")
    assert data["exit_code"] == 2
    assert data["cvs_exit_code"] == 1
    assert data["launched"] is True
    assert data["argv"] == ["-d", "/cvsroot", "update", "b.txt"]
    assert data["stderr"] == "cvs update: Updating .\nC b.txt\n"
    assert data["problems"][0]["code"] == "CVS_EXIT_NONZERO"
    assert data["problems"][0]["is_execution"] is False
