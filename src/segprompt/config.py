from __future__ import annotations
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import PurePath


class PromptError(ValueError):
    """Base class for errors that abort the rendering of a prompt"""


class ConfigError(PromptError):
    """Raised when a required environment variable is missing or unusable"""


@dataclass(frozen=True)
class PromptConfig:
    #: The user's home directory (:envvar:`HOME`)
    home: PurePath

    #: The root directory of the current tmux session
    #: (:envvar:`TMUX_SESSION_PATH`), if any
    session_root: PurePath | None

    #: The raw value of :envvar:`LAST_CMD_TIME`, if set
    last_cmd_time: str | None

    @classmethod
    def from_environ(cls, environ: Mapping[str, str]) -> PromptConfig:
        try:
            home = PurePath(environ["HOME"])
        except KeyError:
            raise ConfigError("HOME environment variable is not defined") from None
        if sp := environ.get("TMUX_SESSION_PATH"):
            session_root = PurePath(sp)
            try:
                sp.encode("utf-8")
            except UnicodeEncodeError:
                raise ConfigError(
                    f"TMUX_SESSION_PATH is not valid UTF-8: {sp!r}"
                ) from None
            if not session_root.name:
                raise ConfigError(
                    f"Cannot get session name from TMUX_SESSION_PATH: {sp!r}"
                )
        else:
            session_root = None
        return cls(
            home=home,
            session_root=session_root,
            last_cmd_time=environ.get("LAST_CMD_TIME"),
        )

    @property
    def session_name(self) -> str | None:
        """The final component of `session_root`, if set"""
        if self.session_root is not None:
            return self.session_root.name
        else:
            return None
