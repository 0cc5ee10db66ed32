"""Data models for GridFrame."""

from .cell_address import CellAddress, column_index_of, column_name_of
from .cell_record import DataKind, RawCellRecord, RawRow
from .lookups import WorkbookLookups
from .table import OutputTable, TableBounds, TableDeclaration

__all__ = [
    "CellAddress",
    "column_index_of",
    "column_name_of",
    "DataKind",
    "RawCellRecord",
    "RawRow",
    "WorkbookLookups",
    "TableBounds",
    "TableDeclaration",
    "OutputTable",
]
