"""Centralized constants for GridFrame.

Constants are grouped by concern in frozen dataclasses, with singleton
instances at the bottom of the module for easy access.
"""

from dataclasses import dataclass
from typing import Final


@dataclass(frozen=True)
class CellAddressConstants:
    """Constants for A1-style cell addressing."""

    ALPHABET_COUNT: Final[int] = 26
    FIRST_LETTER: Final[str] = "A"
    RANGE_SEPARATOR: Final[str] = ":"


@dataclass(frozen=True)
class NumberFormatConstants:
    """Constants for number format interpretation."""

    SECTION_SEPARATOR: Final[str] = ";"
    MAX_SECTIONS: Final[int] = 4

    # Sign sections
    POSITIVE_SECTION: Final[int] = 0
    NEGATIVE_SECTION: Final[int] = 1
    ZERO_SECTION: Final[int] = 2
    TEXT_SECTION: Final[int] = 3

    # Alignment filler markers; each swallows the character after it
    FILLER_MARKERS: Final[tuple[str, ...]] = ("_", "*")
    QUOTE: Final[str] = '"'

    # Format ids treated as dates: built-in 14-22 and every custom id
    DATE_FORMAT_MIN_ID: Final[int] = 14
    DATE_FORMAT_MAX_ID: Final[int] = 22
    CUSTOM_FORMAT_MIN_ID: Final[int] = 164

    GENERAL: Final[str] = "General"
    TEXT_PLACEHOLDER: Final[str] = "@"

    # Significant digits shown by the General format
    GENERAL_PRECISION: Final[int] = 11


# Create singleton instances for easy access
CELL_ADDRESS = CellAddressConstants()
NUMBER_FORMAT = NumberFormatConstants()
