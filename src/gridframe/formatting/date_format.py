"""Serial date conversion and date/time format rendering."""

import calendar
import datetime
import logging
import math
from typing import NamedTuple

from openpyxl.utils.datetime import WINDOWS_EPOCH, from_excel

from ..core.exceptions import ValidationError

logger = logging.getLogger(__name__)

_DATE_LETTERS = "ymdhs"
_ELAPSED_LETTERS = "hms"
_AM_PM = "AM/PM"
_A_P = "A/P"
_SECONDS_PER_DAY = 86400
_MICROS_PER_DAY = _SECONDS_PER_DAY * 1_000_000
# First serial past 9999-12-31 on the 1900 date system
_SERIAL_LIMIT = 2958466


class DateToken(NamedTuple):
    """A piece of a date/time format."""

    kind: str  # year, month, minute, day, hour, second, fraction, ampm, elapsed_*, literal
    text: str


def serial_to_datetime(serial: float) -> datetime.datetime:
    """Convert a serial date on the 1900 date system to a datetime.

    Serials below 60 are shifted by a day to account for the fictitious
    1900-02-29 that the 1900 date system counts.

    Raises:
        ValidationError: If the serial falls outside the supported date range
    """
    try:
        converted = from_excel(serial)
    except (OverflowError, ValueError) as e:
        raise ValidationError(f"Serial date {serial} is out of range") from e

    # Serials in [0, 1) carry only a time of day
    if isinstance(converted, datetime.time):
        return datetime.datetime.combine(WINDOWS_EPOCH.date(), converted)
    return converted


def tokenize_date_format(pattern: str) -> list[DateToken]:
    """Split a cleaned date/time pattern into tokens.

    Month and minute share the ``m`` letter; an ``m`` run of one or two
    letters is a minute when it follows an hour or precedes a second.
    Bracketed codes other than elapsed time (``[h]``, ``[mm]``, ``[ss]``)
    are dropped.
    """
    tokens: list[DateToken] = []
    position = 0
    length = len(pattern)

    while position < length:
        char = pattern[position]
        lower = char.lower()

        if char == "[":
            end = pattern.find("]", position)
            if end == -1:
                tokens.append(DateToken("literal", pattern[position:]))
                break
            code = pattern[position + 1 : end].lower()
            if code and code[0] in _ELAPSED_LETTERS and code == code[0] * len(code):
                tokens.append(DateToken(f"elapsed_{code[0]}", code))
            position = end + 1
        elif char == "\\" and position + 1 < length:
            tokens.append(DateToken("literal", pattern[position + 1]))
            position += 2
        elif pattern[position : position + len(_AM_PM)].upper() == _AM_PM:
            tokens.append(DateToken("ampm", pattern[position : position + len(_AM_PM)]))
            position += len(_AM_PM)
        elif pattern[position : position + len(_A_P)].upper() == _A_P:
            tokens.append(DateToken("ap", pattern[position : position + len(_A_P)]))
            position += len(_A_P)
        elif lower in _DATE_LETTERS:
            end = position
            while end < length and pattern[end].lower() == lower:
                end += 1
            tokens.append(DateToken(lower, pattern[position:end]))
            position = end
        elif char == "." and _follows_seconds(tokens) and pattern.startswith("0", position + 1):
            end = position + 1
            while end < length and pattern[end] == "0":
                end += 1
            tokens.append(DateToken("fraction", pattern[position + 1 : end]))
            position = end
        else:
            tokens.append(DateToken("literal", char))
            position += 1

    return _resolve_months(tokens)


def _follows_seconds(tokens: list[DateToken]) -> bool:
    return bool(tokens) and tokens[-1].kind in ("s", "elapsed_s")


def _resolve_months(tokens: list[DateToken]) -> list[DateToken]:
    """Name each token's date part, deciding month versus minute."""
    parts = [index for index, token in enumerate(tokens) if token.kind != "literal"]
    resolved = list(tokens)
    names = {"y": "year", "d": "day", "h": "hour", "s": "second"}

    for order, index in enumerate(parts):
        token = tokens[index]
        if token.kind != "m":
            if token.kind in names:
                resolved[index] = DateToken(names[token.kind], token.text)
            continue

        previous = tokens[parts[order - 1]].kind if order > 0 else None
        following = tokens[parts[order + 1]].kind if order + 1 < len(parts) else None
        is_minute = len(token.text) <= 2 and (
            previous in ("h", "elapsed_h") or following in ("s", "elapsed_s")
        )
        resolved[index] = DateToken("minute" if is_minute else "month", token.text)

    return resolved


def render_date(serial: float, pattern: str) -> str:
    """Render a serial date through a date/time pattern.

    Args:
        serial: Serial day count on the 1900 date system
        pattern: Format section with fillers and quotes already removed

    Returns:
        The formatted date text

    Raises:
        ValidationError: If the serial falls outside the supported date range
    """
    if not math.isfinite(serial):
        raise ValidationError(f"Serial date {serial} is out of range")

    tokens = tokenize_date_format(pattern)
    fraction_digits = max((len(t.text) for t in tokens if t.kind == "fraction"), default=0)

    # Round to the smallest unit shown so 12:59:59.6 displays as 13:00:00;
    # serial conversion resolves milliseconds at best
    unit = 10 ** (6 - min(fraction_digits, 3))
    total_micros = round(serial * _MICROS_PER_DAY / unit) * unit
    if serial < _SERIAL_LIMIT:
        # Never round the last representable instant into year 10000
        total_micros = min(total_micros, _SERIAL_LIMIT * _MICROS_PER_DAY - unit)
    rounded_serial = total_micros / _MICROS_PER_DAY
    moment = serial_to_datetime(rounded_serial)

    twelve_hour = any(t.kind in ("ampm", "ap") for t in tokens)
    return "".join(_render_token(token, moment, total_micros, twelve_hour) for token in tokens)


def _render_token(
    token: DateToken, moment: datetime.datetime, total_micros: int, twelve_hour: bool
) -> str:
    width = len(token.text)

    if token.kind == "literal":
        return token.text
    if token.kind == "year":
        return f"{moment.year:04d}" if width > 2 else f"{moment.year % 100:02d}"
    if token.kind == "month":
        if width == 1:
            return str(moment.month)
        if width == 2:
            return f"{moment.month:02d}"
        if width == 3:
            return calendar.month_abbr[moment.month]
        if width == 5:
            return calendar.month_name[moment.month][0]
        return calendar.month_name[moment.month]
    if token.kind == "day":
        if width == 1:
            return str(moment.day)
        if width == 2:
            return f"{moment.day:02d}"
        if width == 3:
            return calendar.day_abbr[moment.weekday()]
        return calendar.day_name[moment.weekday()]
    if token.kind == "hour":
        hour = moment.hour
        if twelve_hour:
            hour = hour % 12 or 12
        return f"{hour:0{min(width, 2)}d}"
    if token.kind == "minute":
        return f"{moment.minute:0{min(width, 2)}d}"
    if token.kind == "second":
        return f"{moment.second:0{min(width, 2)}d}"
    if token.kind == "fraction":
        return "." + f"{moment.microsecond:06d}"[:width]
    if token.kind == "ampm":
        return "AM" if moment.hour < 12 else "PM"
    if token.kind == "ap":
        marker = "A" if moment.hour < 12 else "P"
        return marker.lower() if token.text[0].islower() else marker
    if token.kind.startswith("elapsed_"):
        divisor = {"h": 3600, "m": 60, "s": 1}[token.kind[-1]] * 1_000_000
        return f"{math.floor(total_micros / divisor):0{width}d}"

    logger.debug(f"Unhandled date token {token!r}")
    return token.text
