from __future__ import annotations
from dataclasses import dataclass
import logging
import os
from pathlib import PurePath
from .config import PromptConfig
from .git import GitStatus, git_status
from .styles import Painter
from .styles import StyleClass as SC
from .util import format_duration, parse_millis

log = logging.getLogger(__name__)

#: Displayed in place of the current directory when it cannot be determined
UNKNOWN_CWD = "???"

#: The actual prompt symbol at the end of the left prompt
PROMPT_SUFFIX = "$ "


@dataclass
class PromptInfo:
    """Everything shown in the left prompt"""

    #: The path to the current working directory, abbreviated relative to the
    #: tmux session root or :envvar:`HOME`
    cwdstr: str

    git: GitStatus | None

    @classmethod
    def get(
        cls, config: PromptConfig, git: bool = True, git_timeout: float | None = None
    ) -> PromptInfo:
        gs = git_status(timeout=git_timeout) if git else None
        return cls(cwdstr=cwdstr(getcwd(), config), git=gs)

    def display(self, paint: Painter) -> str:
        """Construct & return the left prompt string"""
        # Show the path to the current working directory:
        ps1 = paint(self.cwdstr, SC.CWD)
        # Show Git status information, if any:
        if self.git is not None:
            ps1 += self.git.display(paint)
        ps1 += PROMPT_SUFFIX
        return ps1


@dataclass
class RPromptInfo:
    """Everything shown in the right prompt"""

    #: The exit status of the previous command, as passed to us by the shell.
    #: This is displayed verbatim and never parsed.
    exit_code: str

    #: The runtime of the previous command in milliseconds, if known
    duration: int | None

    @classmethod
    def get(cls, exit_code: str, config: PromptConfig) -> RPromptInfo:
        duration = parse_millis(config.last_cmd_time)
        if duration is None and config.last_cmd_time is not None:
            log.debug("Ignoring non-integer LAST_CMD_TIME %r", config.last_cmd_time)
        return cls(exit_code=exit_code, duration=duration)

    def display(self, paint: Painter) -> str:
        """Construct & return the right prompt string"""
        rps1 = ""
        if self.exit_code != "0":
            rps1 += " " + paint(self.exit_code, SC.EXIT_CODE)
        if self.duration is not None:
            if rps1:
                rps1 += paint(" in ", SC.JOIN)
            rps1 += paint(format_duration(self.duration), SC.TIMING)
        return rps1


def getcwd() -> PurePath | None:
    """
    Return the path to the current working directory, or `None` if it cannot
    be determined
    """
    # Prefer $PWD to os.getcwd() as the former does not resolve symlinks
    if pwd := os.environ.get("PWD"):
        return PurePath(pwd)
    try:
        return PurePath(os.getcwd())
    except OSError as e:
        log.debug("Could not determine current directory: %s", e)
        return None


def cwdstr(cwd: PurePath | None, config: PromptConfig) -> str:
    """
    Abbreviate the path ``cwd`` for display.  If the path is at or under the
    tmux session root, it is shown relative to the session root, starting
    with the session's name; otherwise, if it is at or under :envvar:`HOME`,
    it is shown starting with ``~``.  Any other path is shown as-is.
    """
    if cwd is None:
        return UNKNOWN_CWD
    if config.session_root is not None:
        assert config.session_name is not None
        try:
            return joinrel(config.session_name, cwd.relative_to(config.session_root))
        except ValueError:
            pass
    try:
        return joinrel("~", cwd.relative_to(config.home))
    except ValueError:
        return str(cwd)


def joinrel(base: str, rel: PurePath) -> str:
    return f"{base}/{rel}" if rel.parts else base
