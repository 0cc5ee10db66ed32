"""GridFrame - declared-table extraction from spreadsheet cell grids."""

__version__ = "0.1.0"

from gridframe.config import Config
from gridframe.formatting import NumberFormatInterpreter
from gridframe.gridframe import GridFrame
from gridframe.models import (
    CellAddress,
    DataKind,
    OutputTable,
    RawCellRecord,
    RawRow,
    TableBounds,
    TableDeclaration,
    WorkbookLookups,
)
from gridframe.tools.extraction import TableExtractor

__all__ = [
    "GridFrame",
    "Config",
    "CellAddress",
    "TableBounds",
    "TableDeclaration",
    "OutputTable",
    "DataKind",
    "RawCellRecord",
    "RawRow",
    "WorkbookLookups",
    "NumberFormatInterpreter",
    "TableExtractor",
]
