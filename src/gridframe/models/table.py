"""Table-related models."""

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

from ..core.constants import CELL_ADDRESS
from ..core.exceptions import AddressFormatError, RangeError, RangeFormatError
from .cell_address import CellAddress

if TYPE_CHECKING:
    import pandas as pd


class TableBounds(BaseModel):
    """Represents a declared table's location in a spreadsheet.

    The range is inclusive on both ends. The first row holds the header,
    data rows follow it down to the end row. ``start`` is not required to
    precede ``end``; an inverted range simply selects nothing.
    """

    model_config = ConfigDict(strict=True, frozen=True)

    start: CellAddress = Field(..., description="Top-left cell (header row)")
    end: CellAddress = Field(..., description="Bottom-right cell")

    @classmethod
    def parse(cls, text: str) -> "TableBounds":
        """Parse an "A1:B2"-style range reference.

        Raises:
            RangeFormatError: If there is not exactly one separator or either
                side is not a valid cell reference
        """
        parts = text.split(CELL_ADDRESS.RANGE_SEPARATOR)
        if len(parts) != 2:
            raise RangeFormatError(f'Expected reference of form "A1:B2", got {text!r}')

        try:
            start, end = (CellAddress.parse(part) for part in parts)
        except (AddressFormatError, RangeError) as e:
            raise RangeFormatError(f'Expected reference of form "A1:B2", got {text!r}: {e}') from e

        return cls(start=start, end=end)

    @property
    def header_row(self) -> int:
        """Row holding the header names."""
        return self.start.row_index

    @property
    def first_data_row(self) -> int:
        """First data row, immediately below the header."""
        return self.start.row_index + 1

    @property
    def last_data_row(self) -> int:
        """Last data row (inclusive)."""
        return self.end.row_index

    @property
    def start_column(self) -> int:
        return self.start.column_index

    @property
    def end_column(self) -> int:
        return self.end.column_index

    @property
    def column_count(self) -> int:
        """Number of columns in the range."""
        return self.end_column - self.start_column + 1

    def contains_row(self, row_index: int) -> bool:
        """Check whether a row is one of the table's data rows."""
        return self.first_data_row <= row_index <= self.last_data_row

    def contains_column(self, column_index: int) -> bool:
        return self.start_column <= column_index <= self.end_column

    def column_position(self, address: CellAddress) -> int:
        """0-based output column for a cell inside the bounds."""
        return address.column_index - self.start_column

    def to_text(self) -> str:
        """Render as an "A1:B2"-style reference."""
        return f"{self.start}:{self.end}"

    def __str__(self) -> str:
        return self.to_text()


class TableDeclaration(BaseModel):
    """A table declared in a sheet: its name, header and range."""

    model_config = ConfigDict(strict=True, frozen=True)

    name: str = Field(..., description="Table name")
    header_names: list[str] = Field(..., description="Column names in declared order")
    reference: str = Field(..., description='Declared range, e.g. "A1:D10"')

    @property
    def bounds(self) -> TableBounds:
        return TableBounds.parse(self.reference)


class OutputTable(BaseModel):
    """Extracted table data with named columns."""

    model_config = ConfigDict(strict=True)

    name: str = Field(..., description="Table name")
    columns: list[str] = Field(default_factory=list, description="Column names in header order")
    rows: list[dict[str, str]] = Field(
        default_factory=list, description="Rows in source order, keyed by column name"
    )

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def shape(self) -> tuple[int, int]:
        """Table shape as (rows, columns)."""
        return (self.row_count, len(self.columns))

    def to_records(self) -> list[list[str]]:
        """Get row values as lists in column order."""
        return [[row.get(column, "") for column in self.columns] for row in self.rows]

    def to_dataframe(self) -> "pd.DataFrame":
        """Hand the table off to a pandas DataFrame."""
        import pandas as pd

        return pd.DataFrame(self.to_records(), columns=self.columns)
