from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
import logging
import re
import subprocess
from .config import PromptError
from .styles import Painter
from .styles import StyleClass as SC

log = logging.getLogger(__name__)

#: Displayed in place of the branch name when ``git status`` does not report
#: one
UNKNOWN_HEAD = "???"


class StatusParseError(PromptError):
    """Raised when a ``git status`` report contains a malformed header line"""


class ReportOutcome(Enum):
    #: ``git status`` succeeded
    OK = "ok"
    #: ``git status`` exited nonzero, i.e., we're not in a repository
    NOT_APPLICABLE = "not applicable"
    #: ``git status`` could not be run or did not finish
    FAILED = "failed"


@dataclass(frozen=True)
class StatusReport:
    """The result of running ``git status``"""

    outcome: ReportOutcome

    #: The command's stdout; only meaningful when ``outcome`` is ``OK``
    output: str = ""

    #: A description of why the report is unavailable
    reason: str | None = None


class Divergence(Enum):
    """
    The relationship between ``HEAD`` and its upstream.  The value of each
    enumeration is the glyph displayed after the branch name.
    """

    NONE = ""
    AHEAD = " ⬆︎"
    BEHIND = " ⬇︎"
    BOTH = " ⬍︎"

    @classmethod
    def from_counts(cls, ahead: int, behind: int) -> Divergence:
        if ahead and behind:
            return cls.BOTH
        elif ahead:
            return cls.AHEAD
        elif behind:
            return cls.BEHIND
        else:
            return cls.NONE


@dataclass(frozen=True)
class GitStatus:
    #: The name of the current branch, ``(detached)`` if ``HEAD`` is detached,
    #: or `UNKNOWN_HEAD` if Git did not say
    head: str

    #: The number of commits by which ``HEAD`` is ahead of ``@{upstream}``
    #: (0 if there is no upstream)
    ahead: int = 0

    #: The number of commits by which ``HEAD`` is behind ``@{upstream}`` (0 if
    #: there is no upstream)
    behind: int = 0

    #: `True` iff there are staged, unstaged, or conflicted changes
    dirty: bool = False

    @property
    def divergence(self) -> Divergence:
        return Divergence.from_counts(self.ahead, self.behind)

    @classmethod
    def parse(cls, output: str) -> GitStatus:
        """
        Parse the output of ``git status --porcelain=v2 --branch``.  If a
        header appears more than once, the last occurrence wins.

        :raises StatusParseError: if a ``# branch.ab`` line is malformed
        """
        head: str | None = None
        ahead = 0
        behind = 0
        dirty = False
        for line in output.splitlines():
            if line.startswith("# branch.head "):
                head = line[len("# branch.head ") :]
            elif line.startswith("# branch.ab ") or line == "# branch.ab":
                ahead, behind = parse_ab(line)
            elif line[:2] in ("1 ", "2 ", "u "):
                dirty = True
            # else: Ignore other headers, untracked, and ignored files
        if head is None:
            log.debug("No branch.head line in git status output")
            head = UNKNOWN_HEAD
        return cls(head=head, ahead=ahead, behind=behind, dirty=dirty)

    @classmethod
    def from_report(cls, report: StatusReport) -> GitStatus | None:
        if report.outcome is ReportOutcome.OK:
            return cls.parse(report.output)
        else:
            log.debug(
                "Git status unavailable (%s): %s", report.outcome.value, report.reason
            )
            return None

    def display(self, paint: Painter) -> str:
        p = paint(f" ({self.head}{self.divergence.value}", SC.GIT)
        if self.dirty:
            # Uncommitted changes:
            p += paint("*", SC.GIT_DIRTY)
        p += paint(")", SC.GIT)
        return p


def parse_ab(line: str) -> tuple[int, int]:
    """
    Parse a ``# branch.ab +<ahead> -<behind>`` line into an ``(ahead,
    behind)`` pair

    :raises StatusParseError: if the line does not consist of exactly two
        counts prefixed with ``+`` and ``-``, respectively
    """
    tokens = line.split()[2:]
    if len(tokens) != 2:
        raise StatusParseError(
            f"Expected two ahead/behind counts in git status output: {line!r}"
        )
    ahead_tk, behind_tk = tokens
    if not re.fullmatch(r"\+[0-9]+", ahead_tk):
        raise StatusParseError(f"Invalid ahead count in git status output: {line!r}")
    if not re.fullmatch(r"-[0-9]+", behind_tk):
        raise StatusParseError(f"Invalid behind count in git status output: {line!r}")
    return int(ahead_tk[1:]), int(behind_tk[1:])


def git_status_report(timeout: float | None = None) -> StatusReport:
    """
    Run ``git status --porcelain=v2 --branch`` in the current directory and
    return the result.  A nonzero exit status (e.g., because the current
    directory is not in a repository) produces a report with outcome
    ``NOT_APPLICABLE``; failing to run Git at all, or Git not finishing within
    ``timeout`` seconds (if given), produces a report with outcome ``FAILED``.
    """
    try:
        r = subprocess.run(
            ["git", "status", "--porcelain=v2", "--branch"],
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            check=True,
            text=True,
            timeout=timeout,
        )
    except subprocess.CalledProcessError as e:
        return StatusReport(
            ReportOutcome.NOT_APPLICABLE, reason=f"git exited {e.returncode}"
        )
    except subprocess.TimeoutExpired:
        return StatusReport(
            ReportOutcome.FAILED, reason=f"git timed out after {timeout} seconds"
        )
    except OSError as e:
        # Git is not installed, or the current directory is gone
        return StatusReport(ReportOutcome.FAILED, reason=str(e))
    return StatusReport(ReportOutcome.OK, output=r.stdout)


def git_status(timeout: float | None = None) -> GitStatus | None:
    """
    If the current directory is in a Git repository, ``git_status()`` returns
    a `GitStatus` instance describing the repository's current state.
    Otherwise, or if Git could not be run, it returns `None`.

    :raises StatusParseError: if Git's output is malformed
    """
    return GitStatus.from_report(git_status_report(timeout=timeout))
