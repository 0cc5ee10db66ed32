"""Predefined number formats.

Ids 0-163 are reserved for formats built into the spreadsheet application;
a workbook only stores the patterns of its custom formats (ids 164 and up).
Only part of the reserved range has a standard, locale-independent pattern.
"""

from collections.abc import Mapping
from types import MappingProxyType

from openpyxl.styles.numbers import BUILTIN_FORMATS as _OPENPYXL_BUILTIN_FORMATS

from ..core.constants import NUMBER_FORMAT

BUILTIN_FORMATS: Mapping[int, str] = MappingProxyType(
    {
        format_id: pattern
        for format_id, pattern in _OPENPYXL_BUILTIN_FORMATS.items()
        if 0 <= format_id < NUMBER_FORMAT.CUSTOM_FORMAT_MIN_ID
    }
)


def is_builtin(format_id: int) -> bool:
    """Check whether an id lies in the reserved built-in range."""
    return 0 <= format_id < NUMBER_FORMAT.CUSTOM_FORMAT_MIN_ID


def builtin_pattern(format_id: int) -> str | None:
    """Get the standard pattern for a built-in format id, if it has one."""
    return BUILTIN_FORMATS.get(format_id)
