"""
Segmented left/right shell prompt for Bash and zsh

``segprompt`` is a small program for rendering a command prompt out of
independent segments.  It is run once per prompt render and prints a single
line for the shell to use as its prompt.

Features:

- Abbreviates the current directory relative to ``$HOME`` or to the root of
  the current tmux session (``$TMUX_SESSION_PATH``)
- Shows the current Git branch, whether it is ahead of and/or behind its
  upstream, and whether the worktree has uncommitted changes
- Right prompt with the previous command's exit code (when nonzero) and its
  runtime (``$LAST_CMD_TIME``, in milliseconds)
- Supports both Bash and zsh, wrapping all color codes in the shell's
  zero-width markers
"""

__version__ = "0.1.0"
__author__ = "John Thorvald Wodder II"
__author_email__ = "segprompt@varonathe.org"
__license__ = "MIT"
__url__ = "https://github.com/jwodder/segprompt"
