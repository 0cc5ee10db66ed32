"""Number format interpretation."""

from .builtin_formats import BUILTIN_FORMATS, builtin_pattern, is_builtin
from .date_format import render_date, serial_to_datetime
from .number_format import (
    NumberFormatInterpreter,
    is_date_format,
    render_general,
    render_number,
    select_section,
    split_sections,
    strip_fillers,
    strip_quotes,
)

__all__ = [
    "NumberFormatInterpreter",
    "BUILTIN_FORMATS",
    "builtin_pattern",
    "is_builtin",
    "is_date_format",
    "select_section",
    "split_sections",
    "strip_fillers",
    "strip_quotes",
    "render_number",
    "render_general",
    "render_date",
    "serial_to_datetime",
]
