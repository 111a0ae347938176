from __future__ import annotations
import subprocess
from typing import Any
import pytest
from segprompt.git import (
    Divergence,
    GitStatus,
    ReportOutcome,
    StatusParseError,
    StatusReport,
    git_status,
    git_status_report,
    parse_ab,
)
from segprompt.styles import DARK_THEME, ANSIStyler, BashStyler, Painter

STATUS_OUTPUT = (
    "# branch.oid 5b1e2d4a8c0f3e9a7d6b1c2e3f4a5b6c7d8e9f0a\n"
    "# branch.head main\n"
    "# branch.upstream origin/main\n"
    "# branch.ab +2 -0\n"
)


@pytest.mark.parametrize(
    "ahead,behind,divergence",
    [
        (0, 0, Divergence.NONE),
        (3, 0, Divergence.AHEAD),
        (0, 4, Divergence.BEHIND),
        (1, 1, Divergence.BOTH),
        (12, 7, Divergence.BOTH),
    ],
)
def test_divergence_from_counts(
    ahead: int, behind: int, divergence: Divergence
) -> None:
    assert Divergence.from_counts(ahead, behind) is divergence


@pytest.mark.parametrize(
    "output,status",
    [
        pytest.param(
            STATUS_OUTPUT,
            GitStatus(head="main", ahead=2, behind=0),
            id="ahead",
        ),
        pytest.param(
            "# branch.oid (initial)\n# branch.head trunk\n",
            GitStatus(head="trunk"),
            id="no-upstream",
        ),
        pytest.param(
            "# branch.oid 5b1e2d4\n# branch.ab +0 -3\n",
            GitStatus(head="???", ahead=0, behind=3),
            id="no-head",
        ),
        pytest.param("", GitStatus(head="???"), id="empty"),
        pytest.param(
            "# branch.head old\n# branch.ab +1 -1\n"
            "# branch.head new\n# branch.ab +0 -0\n",
            GitStatus(head="new"),
            id="last-wins",
        ),
        pytest.param(
            "# branch.head (detached)\n",
            GitStatus(head="(detached)"),
            id="detached",
        ),
        pytest.param(
            STATUS_OUTPUT
            + "1 .M N... 100644 100644 100644 3f2a 3f2a src/foo.py\n"
            + "? notes.txt\n",
            GitStatus(head="main", ahead=2, dirty=True),
            id="modified",
        ),
        pytest.param(
            STATUS_OUTPUT + "u UU N... 100644 100644 100644 100644 a b c conflict.py\n",
            GitStatus(head="main", ahead=2, dirty=True),
            id="conflict",
        ),
        pytest.param(
            STATUS_OUTPUT + "? notes.txt\n! build/\n",
            GitStatus(head="main", ahead=2),
            id="untracked-only",
        ),
    ],
)
def test_parse_status(output: str, status: GitStatus) -> None:
    assert GitStatus.parse(output) == status


@pytest.mark.parametrize(
    "line,ahead,behind",
    [
        ("# branch.ab +0 -0", 0, 0),
        ("# branch.ab +2 -0", 2, 0),
        ("# branch.ab +10 -23", 10, 23),
    ],
)
def test_parse_ab(line: str, ahead: int, behind: int) -> None:
    assert parse_ab(line) == (ahead, behind)


@pytest.mark.parametrize(
    "line",
    [
        "# branch.ab",
        "# branch.ab +2",
        "# branch.ab +2 -0 -1",
        "# branch.ab 2 -0",
        "# branch.ab +2 0",
        "# branch.ab -0 +2",
        "# branch.ab +x -0",
        "# branch.ab + -",
    ],
)
def test_parse_ab_malformed(line: str) -> None:
    with pytest.raises(StatusParseError):
        parse_ab(line)


def test_parse_status_malformed_ab() -> None:
    with pytest.raises(StatusParseError):
        GitStatus.parse("# branch.head main\n# branch.ab 2 0\n")


@pytest.mark.parametrize(
    "status,rendered",
    [
        pytest.param(GitStatus(head="main"), " (main)", id="clean"),
        pytest.param(GitStatus(head="main", ahead=2), " (main ⬆︎)", id="ahead"),
        pytest.param(GitStatus(head="main", behind=5), " (main ⬇︎)", id="behind"),
        pytest.param(
            GitStatus(head="main", ahead=1, behind=5), " (main ⬍︎)", id="both"
        ),
        pytest.param(
            GitStatus(head="main", ahead=2, dirty=True),
            " (main ⬆︎\x1B[93m*\x1B[m)",
            id="dirty",
        ),
    ],
)
def test_display_ansi(status: GitStatus, rendered: str) -> None:
    paint = Painter(ANSIStyler(), DARK_THEME)
    assert status.display(paint) == rendered


def test_display_bash_escapes_head() -> None:
    paint = Painter(BashStyler(), DARK_THEME)
    assert GitStatus(head="back\\slash").display(paint) == r" (back\\slash)"


def test_from_report() -> None:
    assert GitStatus.from_report(
        StatusReport(ReportOutcome.OK, output=STATUS_OUTPUT)
    ) == GitStatus(head="main", ahead=2)
    assert (
        GitStatus.from_report(
            StatusReport(ReportOutcome.NOT_APPLICABLE, reason="git exited 128")
        )
        is None
    )
    assert (
        GitStatus.from_report(StatusReport(ReportOutcome.FAILED, reason="no git"))
        is None
    )


def test_git_status_report_ok(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_run(args: list[str], **kwargs: Any) -> subprocess.CompletedProcess:
        assert args == ["git", "status", "--porcelain=v2", "--branch"]
        assert kwargs["timeout"] == 2.5
        return subprocess.CompletedProcess(args, 0, stdout=STATUS_OUTPUT)

    monkeypatch.setattr(subprocess, "run", fake_run)
    assert git_status_report(timeout=2.5) == StatusReport(
        ReportOutcome.OK, output=STATUS_OUTPUT
    )
    assert git_status(timeout=2.5) == GitStatus(head="main", ahead=2)


def test_git_status_report_not_repo(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_run(args: list[str], **_kwargs: Any) -> subprocess.CompletedProcess:
        raise subprocess.CalledProcessError(128, args)

    monkeypatch.setattr(subprocess, "run", fake_run)
    report = git_status_report()
    assert report.outcome is ReportOutcome.NOT_APPLICABLE
    assert git_status() is None


@pytest.mark.parametrize(
    "exc",
    [
        FileNotFoundError(2, "No such file or directory", "git"),
        subprocess.TimeoutExpired(["git"], 1),
    ],
)
def test_git_status_report_failed(
    monkeypatch: pytest.MonkeyPatch, exc: Exception
) -> None:
    def fake_run(*_args: Any, **_kwargs: Any) -> subprocess.CompletedProcess:
        raise exc

    monkeypatch.setattr(subprocess, "run", fake_run)
    report = git_status_report(timeout=1)
    assert report.outcome is ReportOutcome.FAILED
    assert report.reason is not None
    assert git_status(timeout=1) is None
