"""Custom exceptions for GridFrame."""


class GridFrameError(Exception):
    """Base exception for all GridFrame errors."""

    pass


class AddressFormatError(GridFrameError, ValueError):
    """Raised when a cell reference is not of the form "A1"."""

    pass


class RangeFormatError(GridFrameError, ValueError):
    """Raised when a range reference is not of the form "A1:B2"."""

    pass


class RangeError(GridFrameError, ValueError):
    """Raised when a column or row index is less than one."""

    pass


class FormatSectionError(GridFrameError):
    """Raised when a number format has no section for the value's sign."""

    def __init__(self, pattern: str, section_index: int):
        self.pattern = pattern
        self.section_index = section_index
        super().__init__(
            f"Number format {pattern!r} has no section {section_index} "
            f"({_SECTION_NAMES[section_index]} values)"
        )


class LookupMiss(GridFrameError, KeyError):
    """Raised when a shared string, format id or style index cannot be resolved."""

    def __init__(self, table: str, key: object):
        self.table = table
        self.key = key
        super().__init__(f"No entry for {key!r} in {table}")

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message
        return self.args[0]


class ValidationError(GridFrameError):
    """Raised when input validation fails."""

    pass


class ConfigurationError(GridFrameError):
    """Raised when configuration is invalid."""

    pass


_SECTION_NAMES = ("positive", "negative", "zero", "text")
