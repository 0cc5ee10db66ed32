"""Tool for extracting a declared table from raw worksheet rows."""

from collections.abc import Iterable, Sequence

from ...core.exceptions import LookupMiss, ValidationError
from ...formatting.number_format import NumberFormatInterpreter
from ...models.cell_record import DataKind, RawCellRecord, RawRow
from ...models.lookups import WorkbookLookups
from ...models.table import OutputTable, TableBounds, TableDeclaration
from ...utils.logging_context import get_contextual_logger

logger = get_contextual_logger(__name__)

RowInput = RawRow | tuple[int, Sequence[RawCellRecord]]


class TableExtractor:
    """Convert sparse raw cell records into a table with named columns.

    Rows are taken in the order they arrive; only those between the header
    row and the end of the bounds are kept. Each cell inside the column
    bounds lands in the column at its offset from the first column.
    """

    def __init__(
        self,
        lookups: WorkbookLookups | None = None,
        interpreter: NumberFormatInterpreter | None = None,
        empty_value: str = "",
    ):
        """Initialize the extractor.

        Args:
            lookups: Workbook lookups for shared strings, styles and formats
            interpreter: Number format interpreter for styled cells
            empty_value: Value for columns with no cell in a row
        """
        self.lookups = lookups or WorkbookLookups()
        self.interpreter = interpreter or NumberFormatInterpreter()
        self.empty_value = empty_value

    def extract(
        self,
        table_name: str,
        header_names: Sequence[str],
        bounds: TableBounds,
        rows: Iterable[RowInput],
    ) -> OutputTable:
        """Extract one table.

        Args:
            table_name: Name of the output table
            header_names: Column names, in order; duplicates are allowed and
                the rightmost one wins in each row mapping
            bounds: Declared table range, header row included
            rows: Worksheet rows as ``RawRow`` or ``(row_index, cells)``

        Returns:
            OutputTable with one row per data row

        Raises:
            ValidationError: If a header name is missing
            LookupMiss: If a shared string, style or format cannot be resolved
            FormatSectionError: If a styled value's format lacks its sign section
        """
        columns = self._validate_headers(header_names)
        output_rows = []

        for row_index, cells in self._iter_rows(rows):
            if not bounds.contains_row(row_index):
                continue

            values = [self.empty_value] * len(columns)
            for cell in cells:
                if not bounds.contains_column(cell.address.column_index):
                    continue

                position = bounds.column_position(cell.address)
                if position >= len(columns):
                    logger.debug(f"Cell {cell.address} has no header in table {table_name!r}")
                    continue

                values[position] = self.resolve_cell(cell)

            output_rows.append(dict(zip(columns, values)))

        logger.debug(f"Extracted {len(output_rows)} rows for table {table_name!r} ({bounds})")
        return OutputTable(name=table_name, columns=columns, rows=output_rows)

    def extract_declaration(
        self, declaration: TableDeclaration, rows: Iterable[RowInput]
    ) -> OutputTable:
        """Extract a table from its declaration."""
        return self.extract(declaration.name, declaration.header_names, declaration.bounds, rows)

    def resolve_cell(self, cell: RawCellRecord) -> str:
        """Get the display text of a single cell."""
        if cell.data_kind == DataKind.SHARED_STRING_REF:
            try:
                index = int(cell.raw_text)
            except ValueError as e:
                raise LookupMiss("shared strings", cell.raw_text) from e
            return self.lookups.shared_string(index)

        if cell.data_kind == DataKind.STYLED:
            if cell.style_index is None:
                raise LookupMiss("cell formats", None)
            format_id = self.lookups.format_id_for_style(cell.style_index)
            pattern = self.lookups.pattern_for(format_id)
            return self.interpreter.render(cell.raw_text, format_id, pattern)

        return cell.raw_text

    @staticmethod
    def _validate_headers(header_names: Sequence[str]) -> list[str]:
        columns = list(header_names)
        for position, name in enumerate(columns):
            if name is None:
                raise ValidationError(f"Header name at position {position} is missing")
        return columns

    @staticmethod
    def _iter_rows(rows: Iterable[RowInput]) -> Iterable[tuple[int, Sequence[RawCellRecord]]]:
        for row in rows:
            if isinstance(row, RawRow):
                yield row.row_index, row.cells
            else:
                row_index, cells = row
                yield row_index, cells
