"""A1-style cell address model."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..core.constants import CELL_ADDRESS
from ..core.exceptions import AddressFormatError, RangeError


def column_index_of(column_name: str) -> int:
    """Convert a column name to its 1-based index (A=1, Z=26, AA=27).

    Column names are bijective base-26 numerals: there is no zero digit, so
    every letter contributes its 1-based position in the alphabet.
    """
    index = 0
    base = ord(CELL_ADDRESS.FIRST_LETTER) - 1
    for letter in column_name:
        index = index * CELL_ADDRESS.ALPHABET_COUNT + (ord(letter) - base)
    return index


def column_name_of(column_index: int) -> str:
    """Convert a 1-based column index to its column name (1=A, 27=AA)."""
    if column_index < 1:
        raise RangeError(f"Column index should be greater than zero, got {column_index}")

    name = ""
    div = column_index
    while div > 0:
        mod = (div - 1) % CELL_ADDRESS.ALPHABET_COUNT
        name = chr(ord(CELL_ADDRESS.FIRST_LETTER) + mod) + name
        div = (div - mod) // CELL_ADDRESS.ALPHABET_COUNT
    return name


def _split_reference(text: str) -> tuple[str, str]:
    """Split "AB12" into ("AB", "12") with a letters-then-digits scan."""
    position = 0
    length = len(text)

    while position < length and "A" <= text[position] <= "Z":
        position += 1
    letters_end = position

    while position < length and text[position].isdigit() and text[position].isascii():
        position += 1

    letters, digits = text[:letters_end], text[letters_end:position]
    if not letters or not digits or position != length:
        raise AddressFormatError(f'Expected reference of form "A1", got {text!r}')
    return letters, digits


def _is_column_name(text: str) -> bool:
    return bool(text) and all("A" <= letter <= "Z" for letter in text)


def _check_row_index(row_index: int) -> None:
    if row_index < 1:
        raise RangeError(f"Row index should be greater than zero, got {row_index}")


class CellAddress(BaseModel):
    """A single cell coordinate, e.g. ``B7``.

    Addresses are immutable and ordered row-major: rows are compared first,
    then columns. Any address compares greater than ``None``.
    """

    model_config = ConfigDict(strict=True, frozen=True)

    column_name: str = Field(..., min_length=1, description="Column letters (A-Z)")
    row_index: int = Field(..., description="Row number (1-based)")
    column_index: int = Field(0, description="Column number (1-based), derived from column_name")

    @model_validator(mode="before")
    @classmethod
    def _derive_column_index(cls, data: Any) -> Any:
        if isinstance(data, dict) and isinstance(data.get("column_name"), str):
            data = dict(data)
            data["column_index"] = column_index_of(data["column_name"])
        return data

    @model_validator(mode="after")
    def _check_indices(self) -> "CellAddress":
        # Direct construction surfaces these as pydantic validation errors;
        # parse() and create() check first and raise the GridFrame errors
        if not _is_column_name(self.column_name):
            raise ValueError(f"Column name must be letters A-Z, got {self.column_name!r}")
        if self.row_index < 1:
            raise ValueError(f"Row index should be greater than zero, got {self.row_index}")
        return self

    @classmethod
    def parse(cls, text: str) -> "CellAddress":
        """Parse an "A1"-style reference.

        Args:
            text: Reference such as ``"C12"``; surrounding whitespace is ignored

        Returns:
            The parsed address

        Raises:
            AddressFormatError: If the text is not letters followed by digits
            RangeError: If the row number is zero
        """
        if not isinstance(text, str):
            raise AddressFormatError(f'Expected reference of form "A1", got {text!r}')
        letters, digits = _split_reference(text.strip())
        row_index = int(digits)
        _check_row_index(row_index)
        return cls(column_name=letters, row_index=row_index)

    @classmethod
    def create(cls, column_index: int, row_index: int) -> "CellAddress":
        """Build an address from 1-based column and row indices.

        Raises:
            RangeError: If either index is less than one
        """
        if column_index < 1:
            raise RangeError(f"Column index should be greater than zero, got {column_index}")
        _check_row_index(row_index)
        return cls(column_name=column_name_of(column_index), row_index=row_index)

    def to_text(self) -> str:
        """Render as an "A1"-style reference."""
        return f"{self.column_name}{self.row_index}"

    def to_zero_based(self) -> tuple[int, int]:
        """Get (row, column) as 0-based indices."""
        return (self.row_index - 1, self.column_index - 1)

    def offset(self, rows: int = 0, columns: int = 0) -> "CellAddress":
        """Get the address shifted by the given number of rows and columns."""
        return CellAddress.create(self.column_index + columns, self.row_index + rows)

    def compare_to(self, other: "CellAddress | None") -> int:
        """Compare row-major; returns -1, 0 or 1."""
        if other is None:
            return 1
        mine = (self.row_index, self.column_index)
        theirs = (other.row_index, other.column_index)
        if mine < theirs:
            return -1
        if mine > theirs:
            return 1
        return 0

    def __lt__(self, other: object) -> bool:
        if other is not None and not isinstance(other, CellAddress):
            return NotImplemented
        return self.compare_to(other) < 0

    def __le__(self, other: object) -> bool:
        if other is not None and not isinstance(other, CellAddress):
            return NotImplemented
        return self.compare_to(other) <= 0

    def __gt__(self, other: object) -> bool:
        if other is not None and not isinstance(other, CellAddress):
            return NotImplemented
        return self.compare_to(other) > 0

    def __ge__(self, other: object) -> bool:
        if other is not None and not isinstance(other, CellAddress):
            return NotImplemented
        return self.compare_to(other) >= 0

    def __str__(self) -> str:
        return self.to_text()
