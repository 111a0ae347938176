from __future__ import annotations
import re


def parse_millis(s: str | None) -> int | None:
    """
    Parse a (possibly signed) decimal integer number of milliseconds.  If
    ``s`` is `None` or is not an integer, return `None`.
    """
    if s is None or not re.fullmatch(r"[-+]?[0-9]+", s):
        return None
    return int(s)


def format_duration(ms: int) -> str:
    """
    Format a number of milliseconds as a compact duration string.  The
    precision depends on the magnitude:

    - under 100ms: ``NNms`` (zero-padded to two digits)
    - under 1s: ``.NNs`` (hundredths of a second)
    - under 1m: ``S.Ts`` (seconds and tenths)
    - under 1h: ``MmSs``
    - otherwise: ``HhMm``

    Negative durations are formatted by magnitude and prefixed with ``-``.
    """
    sign = "-" if ms < 0 else ""
    t = abs(ms)
    if t < 100:
        s = f"{t:02}ms"
    elif t < 1000:
        s = f".{t // 10}s"
    elif t < 60_000:
        s = f"{t // 1000}.{t % 1000 // 100}s"
    elif t < 3_600_000:
        s = f"{t // 60_000}m{t % 60_000 // 1000}s"
    else:
        s = f"{t // 3_600_000}h{t % 3_600_000 // 60_000}m"
    return sign + s
