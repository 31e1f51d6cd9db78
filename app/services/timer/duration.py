"""Parsing of human-entered task durations ("1h 20min", "2.5h", "2:30", "45")"""
import math
import re
from decimal import Decimal
from numbers import Real
from typing import Union

from app.services.errors import FormatError
from .break_scheduler import round_half_up

_NUMBER = r"\d+(?:\.\d+)?|\.\d+"

_HOUR_UNITS = {"h", "hr", "hrs", "hour", "hours"}
_MINUTE_UNITS = {"m", "min", "mins", "minute", "minutes"}

_TOKEN_RE = re.compile(rf"\s*({_NUMBER})\s*([a-z]+)\s*")
_COLON_RE = re.compile(r"^(\d+):([0-5]?\d)$")
_BARE_RE = re.compile(rf"^({_NUMBER})$")


def duration_string_to_minutes(text: Union[str, int, float]) -> int:
    """
    Convert a duration to whole minutes.

    Accepted forms (case-insensitive, surrounding whitespace ignored):
        - combined: "1h 20min", "1 hour 20 minutes", "1h20m"
        - single unit: "2h", "2.5 hours", "90 mins"
        - colon: "2:30" (hours:minutes)
        - bare minutes: "45", or a number

    Returns:
        Minutes, rounded half-up

    Raises:
        FormatError: If the text matches none of the forms
    """
    if isinstance(text, Real) and not isinstance(text, bool):
        if not math.isfinite(text) or text < 0:
            raise FormatError(f"Duration must be a finite non-negative number: {text!r}")
        return round_half_up(Decimal(str(text)))
    if not isinstance(text, str):
        raise FormatError(f"Unsupported duration value: {text!r}")

    value = text.strip().lower()
    if not value:
        raise FormatError("Duration is empty")

    match = _BARE_RE.match(value)
    if match:
        return round_half_up(Decimal(match.group(1)))

    match = _COLON_RE.match(value)
    if match:
        return int(match.group(1)) * 60 + int(match.group(2))

    total = Decimal(0)
    seen = set()
    position = 0
    for token in _TOKEN_RE.finditer(value):
        if token.start() != position:
            break
        number, unit = Decimal(token.group(1)), token.group(2)
        if unit in _HOUR_UNITS and "h" not in seen:
            total += number * 60
            seen.add("h")
        elif unit in _MINUTE_UNITS and "m" not in seen:
            total += number
            seen.add("m")
        else:
            raise FormatError(f"Unrecognised duration: {text!r}")
        position = token.end()

    if not seen or position != len(value):
        raise FormatError(f"Unrecognised duration: {text!r}")
    return round_half_up(total)
