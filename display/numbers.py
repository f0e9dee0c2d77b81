"""Lenient number parsing for free-text cell values.

Both helpers read the longest numeric prefix of a string (after leading
whitespace) and ignore whatever follows, returning ``None`` when there is
no number at all. Digit runs too long for a float also count as no number.
"""

import math
import re

_FLOAT_PREFIX = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_INT_PREFIX = re.compile(r"[+-]?\d+")

# Upper bound for person and day counts; larger values are treated as unreadable
MAX_COUNT = 10_000


def parse_float(text: str | None) -> float | None:
    if not text:
        return None
    match = _FLOAT_PREFIX.match(text.lstrip())
    if not match:
        return None
    number = float(match.group(0))
    return number if math.isfinite(number) else None


def parse_int(text: str | None) -> int | None:
    if not text:
        return None
    match = _INT_PREFIX.match(text.lstrip())
    if not match:
        return None
    return int(match.group(0))
