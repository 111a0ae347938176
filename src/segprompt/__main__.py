from __future__ import annotations
import argparse
import logging
import os
import sys
from . import __url__, __version__
from .config import PromptConfig, PromptError
from .info import PromptInfo, RPromptInfo
from .styles import THEMES, ANSIStyler, BashStyler, Painter, ZshStyler


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="segprompt",
        allow_abbrev=False,
        description=(
            "Segmented left/right prompt for Bash and zsh."
            f"  Visit <{__url__}> for more information."
        ),
    )
    parser.add_argument(
        "--ansi",
        action="store_const",
        dest="stylecls",
        const=ANSIStyler,
        help="Format prompt for direct display",
    )
    parser.add_argument(
        "--bash",
        action="store_const",
        dest="stylecls",
        const=BashStyler,
        help="Format prompt for Bash's PS1 (default)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Log diagnostic information to stderr",
    )
    parser.add_argument(
        "--git-timeout",
        type=float,
        metavar="SECONDS",
        default=None,
        help="Disable Git integration if `git status` runtime exceeds timeout",
    )
    parser.add_argument(
        "--no-git",
        action="store_true",
        help="Do not show Git status information",
    )
    parser.add_argument(
        "-R",
        "--rprompt",
        action="store_true",
        help="Output the right prompt (exit code & runtime) instead of the left",
    )
    parser.add_argument(
        "-T",
        "--theme",
        choices=list(THEMES.keys()),
        default="dark",
        help="Select the color theme to use  [default: dark]",
    )
    parser.add_argument(
        "--zsh",
        action="store_const",
        dest="stylecls",
        const=ZshStyler,
        help="Format prompt for zsh's PROMPT/RPROMPT",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "exit_code", help="The exit status of the previous command (usually $?)"
    )
    # Unrecognized options are ignored so that shell integrations written for
    # newer versions keep working.
    args, _ = parser.parse_known_args(argv)
    if args.debug:
        logging.basicConfig(
            format="%(name)s: [%(levelname)s] %(message)s",
            level=logging.DEBUG,
        )
    styler = (args.stylecls or BashStyler)()
    paint = Painter(styler=styler, theme=THEMES[args.theme])
    try:
        config = PromptConfig.from_environ(os.environ)
        if args.rprompt:
            s = RPromptInfo.get(args.exit_code, config).display(paint)
        else:
            s = PromptInfo.get(
                config, git=not args.no_git, git_timeout=args.git_timeout
            ).display(paint)
    except PromptError as e:
        sys.exit(f"{parser.prog}: {e}")
    # The shell handles line breaks:
    print(s, end="")


if __name__ == "__main__":
    main()
