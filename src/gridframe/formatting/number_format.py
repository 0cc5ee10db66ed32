"""Number format interpretation.

A number format pattern holds up to four ``;``-separated sections used for
positive, negative and zero values and for text. The interpreter picks the
section for a value's sign, cleans it of alignment fillers and quotes, and
renders the value either as a date/time or as a number.
"""

import logging
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext
from fractions import Fraction
from typing import NamedTuple

from ..core.constants import NUMBER_FORMAT
from ..core.exceptions import FormatSectionError
from .date_format import render_date

logger = logging.getLogger(__name__)

_DIGIT_PLACEHOLDERS = "0#?"
_WORKING_PRECISION = 60
_PADDING = {"0": "0", "?": " "}


class FormatToken(NamedTuple):
    """A piece of a numeric format."""

    kind: str  # digit, point, comma, exponent, slash, percent, literal
    text: str


def parse_number(raw_text: str) -> Decimal | None:
    """Parse raw cell text as a finite decimal number, or return None."""
    if not raw_text or "_" in raw_text:
        return None
    try:
        value = Decimal(raw_text.strip())
    except InvalidOperation:
        return None
    return value if value.is_finite() else None


def split_sections(pattern: str) -> list[str]:
    """Split a pattern into its positive, negative, zero and text sections."""
    return pattern.split(NUMBER_FORMAT.SECTION_SEPARATOR)[: NUMBER_FORMAT.MAX_SECTIONS]


def section_index_for(value: Decimal) -> int:
    """Get the section index serving a value's sign."""
    if value > 0:
        return NUMBER_FORMAT.POSITIVE_SECTION
    if value < 0:
        return NUMBER_FORMAT.NEGATIVE_SECTION
    return NUMBER_FORMAT.ZERO_SECTION


def select_section(pattern: str, value: Decimal, strict: bool = True) -> tuple[str, bool]:
    """Pick the format section for a value.

    Args:
        pattern: Full format pattern
        value: Numeric cell value
        strict: Raise when the pattern has no section for the value's sign;
            otherwise fall back to the first section like a spreadsheet does

    Returns:
        Tuple of (section, render_absolute). ``render_absolute`` is set when a
        dedicated negative section was chosen, since it carries its own sign.

    Raises:
        FormatSectionError: If strict and the section is missing
    """
    sections = split_sections(pattern)
    index = section_index_for(value)

    if index < len(sections):
        return sections[index], index == NUMBER_FORMAT.NEGATIVE_SECTION

    if len(sections) == 1 and sections[0].strip().lower() == NUMBER_FORMAT.GENERAL.lower():
        return sections[0], False

    if strict:
        raise FormatSectionError(pattern, index)

    logger.debug(f"No section {index} in {pattern!r}; using the first section")
    return sections[0], False


def strip_fillers(section: str) -> str:
    """Remove alignment fillers (``_x`` and ``*x``) from a section.

    The marker and the character after it are both dropped. A preceding
    backslash is not checked, so an escaped ``_`` or ``*`` is stripped too.
    """
    kept = []
    position = 0
    while position < len(section):
        if section[position] in NUMBER_FORMAT.FILLER_MARKERS:
            position += 2
            continue
        kept.append(section[position])
        position += 1
    return "".join(kept)


def strip_quotes(section: str) -> str:
    """Drop quote characters, keeping quoted literal text verbatim."""
    return section.replace(NUMBER_FORMAT.QUOTE, "")


def is_date_format(format_id: int) -> bool:
    """Check whether a format id renders dates.

    Built-in ids 14-22 are the date/time formats. Custom formats (164 and
    up) are assumed to be dates as well.
    """
    return (
        NUMBER_FORMAT.DATE_FORMAT_MIN_ID <= format_id <= NUMBER_FORMAT.DATE_FORMAT_MAX_ID
        or format_id >= NUMBER_FORMAT.CUSTOM_FORMAT_MIN_ID
    )


class NumberFormatInterpreter:
    """Render raw cell text according to a number format."""

    def __init__(self, strict_sections: bool = True):
        """Initialize the interpreter.

        Args:
            strict_sections: Raise FormatSectionError when a pattern lacks the
                section for a value's sign instead of falling back
        """
        self.strict_sections = strict_sections

    def render(self, raw_text: str, format_id: int, pattern: str) -> str:
        """Render raw cell text as display text.

        Non-numeric text is returned unchanged.

        Args:
            raw_text: Raw stored cell text
            format_id: Number format id
            pattern: Number format pattern for ``format_id``

        Returns:
            Display text

        Raises:
            FormatSectionError: If the pattern has no section for the value's sign
        """
        value = parse_number(raw_text)
        if value is None:
            return raw_text

        section, render_absolute = select_section(pattern, value, strict=self.strict_sections)
        cleaned = strip_quotes(strip_fillers(section))
        shown = abs(value) if render_absolute else value

        if is_date_format(format_id):
            return render_date(float(shown), cleaned)
        return render_number(shown, cleaned)


# ---------------------------------------------------------------------- #
# Numeric rendering
# ---------------------------------------------------------------------- #


def tokenize_number_format(section: str) -> list[FormatToken]:
    """Split a cleaned numeric section into tokens.

    Bracketed codes (colors, conditions, locales) are dropped.
    """
    tokens: list[FormatToken] = []
    position = 0
    length = len(section)

    while position < length:
        char = section[position]
        if char == "[":
            end = section.find("]", position)
            position = length if end == -1 else end + 1
            continue
        if char == "\\" and position + 1 < length:
            tokens.append(FormatToken("literal", section[position + 1]))
            position += 2
            continue
        if char in "eE" and section[position + 1 : position + 2] in ("+", "-"):
            tokens.append(FormatToken("exponent", section[position : position + 2]))
            position += 2
            continue

        if char in _DIGIT_PLACEHOLDERS:
            kind = "digit"
        elif char == ".":
            kind = "point"
        elif char == ",":
            kind = "comma"
        elif char == "/":
            kind = "slash"
        elif char == "%":
            kind = "percent"
        else:
            kind = "literal"
        tokens.append(FormatToken(kind, char))
        position += 1

    return tokens


def render_number(value: Decimal, section: str) -> str:
    """Render a number through a cleaned numeric format section.

    Args:
        value: Value to show; a negative value gains a leading ``-``
        section: Format section with fillers and quotes already removed

    Returns:
        The formatted number text
    """
    general_at = section.lower().find(NUMBER_FORMAT.GENERAL.lower())
    if general_at != -1:
        end = general_at + len(NUMBER_FORMAT.GENERAL)
        return section[:general_at] + render_general(value) + section[end:]

    tokens = tokenize_number_format(section)
    digit_positions = [index for index, token in enumerate(tokens) if token.kind == "digit"]

    if not digit_positions:
        text = "".join(token.text for token in tokens)
        if NUMBER_FORMAT.TEXT_PLACEHOLDER in text:
            return text.replace(NUMBER_FORMAT.TEXT_PLACEHOLDER, render_general(value))
        return text

    # Working precision grows with the coefficient so scaling stays exact
    with localcontext() as context:
        context.prec = _WORKING_PRECISION + len(value.as_tuple().digits)
        return _render_placeholders(value, tokens, digit_positions[0], digit_positions[-1])


def _render_placeholders(
    value: Decimal, tokens: list[FormatToken], first: int, last: int
) -> str:
    # A fixed denominator ("?/8") is literal digits after the slash
    if any(token.kind == "slash" for token in tokens[first : last + 2]):
        while last + 1 < len(tokens) and (
            tokens[last + 1].kind == "slash" or tokens[last + 1].text.isdigit()
        ):
            last += 1

    prefix_tokens = tokens[:first]
    body = tokens[first : last + 1]
    suffix_tokens = tokens[last + 1 :]

    # Commas right after the last placeholder scale by a thousand each
    scaling = 0
    while scaling < len(suffix_tokens) and suffix_tokens[scaling].kind == "comma":
        scaling += 1
    suffix_tokens = suffix_tokens[scaling:]

    percent_count = sum(1 for token in tokens if token.kind == "percent")
    magnitude = abs(value) * Decimal(100) ** percent_count / Decimal(1000) ** scaling

    if any(token.kind == "slash" for token in body):
        number = _render_fraction(magnitude, body)
    elif any(token.kind == "exponent" for token in body):
        number = _render_scientific(magnitude, body)
    else:
        number = _render_fixed(magnitude, body)

    sign = "-" if value < 0 else ""
    prefix = "".join(token.text for token in prefix_tokens)
    suffix = "".join(token.text for token in suffix_tokens)
    return f"{sign}{prefix}{number}{suffix}"


def _round_half_up(value: Decimal, places: int) -> Decimal:
    # quantize needs room for every integer digit plus the kept places
    with localcontext() as context:
        context.prec = max(context.prec, value.adjusted() + places + 2)
        return value.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)


def _fill_integer(digits: str, placeholders: str) -> str:
    """Fit integer digits into placeholders, padding per placeholder type."""
    if digits == "0":
        digits = ""
    if len(digits) >= len(placeholders):
        return digits

    padding = []
    for placeholder in placeholders[: len(placeholders) - len(digits)]:
        if placeholder == "0":
            padding.append("0")
        elif placeholder == "?":
            padding.append(" ")
    return "".join(padding) + digits


def _fraction_chars(digits: str, placeholders: str) -> list[str]:
    """Map fraction digits onto placeholders, trimming trailing ``#``/``?`` zeros."""
    kept = list(digits)
    for index in range(len(placeholders) - 1, -1, -1):
        if kept[index] != "0" or placeholders[index] == "0":
            break
        kept[index] = " " if placeholders[index] == "?" else ""
    return kept


def _fill_fraction_digits(digits: str, placeholders: str) -> str:
    """Trim trailing zeros that fall on ``#`` or ``?`` placeholders."""
    return "".join(_fraction_chars(digits, placeholders))


def _fill_integer_tokens(digits: str, tokens: list[FormatToken], thousands: bool) -> str:
    """Fill integer placeholders right to left, keeping literals in place.

    The leftmost placeholder takes every digit that does not fit. With
    ``thousands`` set, a separator goes before every third digit shown.
    """
    if digits == "0":
        digits = ""

    pieces = []
    remaining = digits
    placeholders_left = sum(1 for token in tokens if token.kind == "digit")
    shown = 0

    for token in reversed(tokens):
        if token.kind == "literal":
            pieces.append(token.text)
            continue
        if token.kind != "digit":
            continue

        placeholders_left -= 1
        if placeholders_left == 0:
            taken, remaining = remaining, ""
        else:
            taken, remaining = remaining[-1:], remaining[:-1]
        if not taken:
            taken = _PADDING.get(token.text, "")

        for char in reversed(taken):
            if thousands and char.isdigit() and shown and shown % 3 == 0:
                pieces.append(",")
            pieces.append(char)
            if char.isdigit():
                shown += 1

    return "".join(reversed(pieces))


def _render_fixed(magnitude: Decimal, body: list[FormatToken]) -> str:
    point_at = next((i for i, token in enumerate(body) if token.kind == "point"), None)
    integer_part = body if point_at is None else body[:point_at]
    fraction_part = [] if point_at is None else body[point_at + 1 :]

    fraction_placeholders = "".join(t.text for t in fraction_part if t.kind == "digit")
    thousands = any(t.kind == "comma" for t in integer_part)

    rounded = _round_half_up(magnitude, len(fraction_placeholders))
    integer_digits, _, fraction_digits = f"{rounded:f}".partition(".")

    integer_text = _fill_integer_tokens(integer_digits, integer_part, thousands)
    if point_at is None:
        return integer_text

    chars = iter(_fraction_chars(fraction_digits, fraction_placeholders))
    fraction_text = "".join(
        next(chars) if token.kind == "digit" else token.text
        for token in fraction_part
        if token.kind in ("digit", "literal")
    )
    return f"{integer_text}.{fraction_text}"


def _render_scientific(magnitude: Decimal, body: list[FormatToken]) -> str:
    exponent_at = next(i for i, token in enumerate(body) if token.kind == "exponent")
    mantissa_tokens = body[:exponent_at]
    exponent_token = body[exponent_at]
    exponent_placeholders = "".join(t.text for t in body[exponent_at + 1 :] if t.kind == "digit")

    point_at = next((i for i, t in enumerate(mantissa_tokens) if t.kind == "point"), None)
    integer_placeholders = "".join(
        t.text for t in (mantissa_tokens if point_at is None else mantissa_tokens[:point_at])
        if t.kind == "digit"
    )
    fraction_placeholders = (
        ""
        if point_at is None
        else "".join(t.text for t in mantissa_tokens[point_at + 1 :] if t.kind == "digit")
    )
    integer_width = max(len(integer_placeholders), 1)

    exponent = 0
    mantissa = magnitude
    if magnitude != 0:
        exponent = magnitude.adjusted() - (integer_width - 1)
        mantissa = _round_half_up(magnitude.scaleb(-exponent), len(fraction_placeholders))
        if mantissa >= Decimal(10) ** integer_width:
            exponent += 1
            mantissa = _round_half_up(magnitude.scaleb(-exponent), len(fraction_placeholders))
    else:
        mantissa = _round_half_up(mantissa, len(fraction_placeholders))

    integer_digits, _, fraction_digits = f"{mantissa:f}".partition(".")
    text = _fill_integer(integer_digits, integer_placeholders) or "0"
    if point_at is not None:
        text += "." + _fill_fraction_digits(fraction_digits, fraction_placeholders)

    if exponent < 0:
        exponent_sign = "-"
    else:
        exponent_sign = "+" if exponent_token.text[1] == "+" else ""
    exponent_digits = f"{abs(exponent):0{max(len(exponent_placeholders), 1)}d}"
    return f"{text}{exponent_token.text[0]}{exponent_sign}{exponent_digits}"


def _render_fraction(magnitude: Decimal, body: list[FormatToken]) -> str:
    slash_at = next(i for i, token in enumerate(body) if token.kind == "slash")
    before, after = body[:slash_at], body[slash_at + 1 :]

    # Numerator placeholders are the digit run directly before the slash
    numerator_start = slash_at
    while numerator_start > 0 and before[numerator_start - 1].kind == "digit":
        numerator_start -= 1
    numerator_placeholders = "".join(t.text for t in before[numerator_start:])
    whole_placeholders = "".join(t.text for t in before[:numerator_start] if t.kind == "digit")

    denominator_text = "".join(t.text for t in after)
    fixed_denominator = None
    if denominator_text.isdigit() and denominator_text[0] != "0":
        fixed_denominator = int(denominator_text)

    whole = int(magnitude) if whole_placeholders else 0
    remainder = magnitude - whole

    if fixed_denominator is not None:
        denominator = fixed_denominator
        numerator = int(_round_half_up(remainder * denominator, 0))
    else:
        max_denominator = 10 ** max(len(denominator_text), 1) - 1
        approximation = Fraction(remainder).limit_denominator(max_denominator)
        numerator, denominator = approximation.numerator, approximation.denominator

    if whole_placeholders and numerator == denominator:
        whole, numerator = whole + 1, 0

    if whole_placeholders and numerator == 0:
        return _fill_integer(str(whole), whole_placeholders) or "0"

    numerator_text = str(numerator)
    if "?" in numerator_placeholders:
        numerator_text = numerator_text.rjust(len(numerator_placeholders))
    denominator_shown = str(denominator)
    if fixed_denominator is None and "?" in denominator_text:
        denominator_shown = denominator_shown.ljust(len(denominator_text))
    fraction_text = f"{numerator_text}/{denominator_shown}"

    if not whole_placeholders:
        return fraction_text
    whole_text = _fill_integer(str(whole), whole_placeholders)
    separator = "".join(t.text for t in before[:numerator_start] if t.kind == "literal") or " "
    return f"{whole_text}{separator}{fraction_text}" if whole_text else fraction_text


def render_general(value: Decimal) -> str:
    """Render a number the way the General format does.

    Shows up to eleven significant digits, switching to scientific notation
    for very large or very small magnitudes.
    """
    with localcontext() as context:
        context.prec = NUMBER_FORMAT.GENERAL_PRECISION
        context.rounding = ROUND_HALF_UP
        rounded = context.plus(value)

    if rounded == 0:
        return "0"
    rounded = rounded.normalize()
    exponent = rounded.adjusted()

    if -10 < exponent < NUMBER_FORMAT.GENERAL_PRECISION:
        return f"{rounded:f}"

    mantissa = rounded.scaleb(-exponent).normalize()
    exponent_sign = "+" if exponent >= 0 else "-"
    return f"{mantissa:f}E{exponent_sign}{abs(exponent):02d}"
