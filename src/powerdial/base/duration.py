"""Human-readable autosuspend delays."""

import re

from .errors import DelayParseError

MS_PER_SECOND = 1000
MS_PER_MINUTE = 60 * MS_PER_SECOND

# Choices offered to the operator, in display order.
DELAY_PRESETS = (
    "0 seconds",
    "1 second",
    "2 seconds",
    "5 seconds",
    "20 seconds",
    "1 minute",
    "5 minutes",
)

_UNITS = {
    "ms": 1,
    "msec": 1,
    "millisecond": 1,
    "milliseconds": 1,
    "s": MS_PER_SECOND,
    "sec": MS_PER_SECOND,
    "secs": MS_PER_SECOND,
    "second": MS_PER_SECOND,
    "seconds": MS_PER_SECOND,
    "m": MS_PER_MINUTE,
    "min": MS_PER_MINUTE,
    "mins": MS_PER_MINUTE,
    "minute": MS_PER_MINUTE,
    "minutes": MS_PER_MINUTE,
}

_TERM = re.compile(r"(\d+)\s*([a-z]+)")


def parse_delay(text: str) -> int:
    """Parse delay text such as "5 minutes" into milliseconds.

    Accepts a bare "0", "Immediately", or one or more
    "<integer> <unit>" terms which are summed. Units cover milliseconds,
    seconds and minutes.

    Raises:
        DelayParseError: The text is empty or uses an unknown unit
    """
    normalized = text.strip().lower()
    if not normalized:
        raise DelayParseError(text, "value is empty")
    if normalized in ("0", "immediately"):
        return 0

    # "5 min" and "5min" are the same term
    compact = re.sub(r"(\d+)\s+([a-z])", r"\1\2", normalized)
    total = 0
    for token in compact.split():
        match = _TERM.fullmatch(token)
        if match is None:
            raise DelayParseError(text, f"expected '<number> <unit>', got {token!r}")
        value, unit = match.groups()
        if unit not in _UNITS:
            raise DelayParseError(text, f"unknown unit {unit!r}")
        total += int(value) * _UNITS[unit]
    return total


def format_delay(delay_ms: int) -> str:
    """Format milliseconds back into the vocabulary parse_delay accepts."""
    if delay_ms <= 0:
        return "0 seconds"

    minutes, rest = divmod(delay_ms, MS_PER_MINUTE)
    seconds, millis = divmod(rest, MS_PER_SECOND)
    parts = []
    for amount, unit in (
        (minutes, "minute"),
        (seconds, "second"),
        (millis, "millisecond"),
    ):
        if amount:
            parts.append(f"{amount} {unit}" if amount == 1 else f"{amount} {unit}s")
    return " ".join(parts)
