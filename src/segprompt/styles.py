from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Protocol

#: The SGR sequence that resets all styling
RESET = "\x1B[m"


class Color(Enum):
    """
    An enumeration of the supported foreground colors.  Each color's value
    equals its xterm number.
    """

    RED = 1
    YELLOW = 3
    BLUE = 4
    MAGENTA = 5
    CYAN = 6
    GRAY = 8
    LIGHT_YELLOW = 11

    def asfg(self) -> int:
        """
        Return the ANSI SGR parameter for setting the color as the foreground
        color
        """
        c = self.value
        return c + 30 if c < 8 else c + 82


@dataclass(frozen=True)
class Style:
    color: Color | None = None
    bold: bool = False

    def as_params(self) -> list[str]:
        params = []
        if self.color is not None:
            params.append(str(self.color.asfg()))
        if self.bold:
            params.append("1")
        return params

    def sgr(self) -> str:
        """
        Return the ANSI escape sequence that switches on this style, or the
        empty string if the style is plain
        """
        if params := self.as_params():
            return f"\x1B[{';'.join(params)}m"
        else:
            return ""


class Styler(Protocol):
    #: The marker placed before a run of zero-width characters
    zw_start: ClassVar[str]

    #: The marker placed after a run of zero-width characters
    zw_end: ClassVar[str]

    def __call__(self, s: str, style: Style) -> str: ...

    def escape(self, s: str) -> str: ...


class ANSIStyler:
    """Class for styling strings for display immediately in the terminal"""

    zw_start: ClassVar[str] = ""
    zw_end: ClassVar[str] = ""

    def __call__(self, s: str, style: Style) -> str:
        """
        Stylize the string ``s`` with ANSI escape sequences.  If
        ``style.color`` is non-`None`, the string will be stylized with the
        given foreground color.  If ``style.bold`` is true, the string will be
        stylized bold.

        :param str s: the string to stylize
        :param Style style: the color & weight to stylize the string with
        """
        s = self.escape(s)
        if sgr := style.sgr():
            s = (
                f"{self.zw_start}{sgr}{self.zw_end}{s}"
                f"{self.zw_start}{RESET}{self.zw_end}"
            )
        return s

    def escape(self, s: str) -> str:
        return s


class BashStyler(ANSIStyler):
    """Class for escaping & styling strings for use in Bash's PS1 variable"""

    zw_start: ClassVar[str] = r"\["
    zw_end: ClassVar[str] = r"\]"

    def escape(self, s: str) -> str:
        """
        Escape characters in the string ``s`` that have special meaning in a
        PS1 variable.  ``$`` and backticks are escaped so that Bash's
        ``promptvars`` expansion (on by default) leaves them alone.
        """
        return s.replace("\\", r"\\").replace("$", r"\\$").replace("`", r"\\`")


class ZshStyler(ANSIStyler):
    """
    Class for escaping & styling strings for use in zsh's PROMPT and RPROMPT
    variables
    """

    zw_start: ClassVar[str] = "%{"
    zw_end: ClassVar[str] = "%}"

    def escape(self, s: str) -> str:
        # Assumes PROMPT_SUBST is unset (the default), so `$` and backticks are
        # displayed literally
        return s.replace("%", "%%")


StyleClass = Enum(
    "StyleClass",
    [
        "CWD",
        "GIT",
        "GIT_DIRTY",
        "EXIT_CODE",
        "TIMING",
        "JOIN",
    ],
)

Theme = dict[StyleClass, Style]

DARK_THEME = {
    StyleClass.CWD: Style(Color.CYAN),
    StyleClass.GIT: Style(),
    StyleClass.GIT_DIRTY: Style(Color.LIGHT_YELLOW),
    StyleClass.EXIT_CODE: Style(Color.RED, bold=True),
    StyleClass.TIMING: Style(Color.YELLOW),
    StyleClass.JOIN: Style(Color.GRAY),
}

LIGHT_THEME = DARK_THEME | {
    StyleClass.CWD: Style(Color.BLUE),
    StyleClass.GIT_DIRTY: Style(Color.MAGENTA),
    StyleClass.TIMING: Style(Color.MAGENTA),
}

THEMES = {
    "dark": DARK_THEME,
    "light": LIGHT_THEME,
}


@dataclass(frozen=True)
class Painter:
    """
    The color profile for a single invocation: a styler for the invoking shell
    paired with a color theme
    """

    styler: Styler
    theme: Theme

    def __call__(self, s: str, klass: StyleClass) -> str:
        return self.styler(s, self.theme[klass])
