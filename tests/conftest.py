"""Pytest configuration and shared fixtures."""

import pytest

from gridframe.config import Config
from gridframe.models import DataKind, RawCellRecord, RawRow, TableBounds, WorkbookLookups


def make_cell(
    reference: str,
    raw_text: str,
    data_kind: DataKind = DataKind.PLAIN_NUMBER_OR_TEXT,
    style_index: int | None = None,
) -> RawCellRecord:
    """Build a raw cell record from an A1 reference."""
    return RawCellRecord.from_reference(reference, raw_text, data_kind, style_index)


@pytest.fixture
def cell_factory():
    """Factory for raw cell records."""
    return make_cell


@pytest.fixture
def people_rows() -> list[RawRow]:
    """Header row plus two data rows, with one cell outside the table."""
    return [
        RawRow(
            row_index=1,
            cells=[make_cell("A1", "Name", DataKind.TEXT), make_cell("B1", "Age", DataKind.TEXT)],
        ),
        RawRow(
            row_index=2,
            cells=[make_cell("A2", "Alice"), make_cell("B2", "30"), make_cell("C2", "ignored")],
        ),
        RawRow(row_index=3, cells=[make_cell("A3", "Bob")]),
    ]


@pytest.fixture
def people_bounds() -> TableBounds:
    return TableBounds.parse("A1:B3")


@pytest.fixture
def workbook_lookups() -> WorkbookLookups:
    """Lookups with a few shared strings, styles and one custom format."""
    return WorkbookLookups(
        shared_strings=["Widget", "Gadget", "Sprocket"],
        # style index -> format id: General, 0.00, mm-dd-yy, custom, #,##0
        cell_formats=[0, 2, 14, 164, 3],
        custom_formats={164: "yyyy-mm-dd hh:mm"},
    )


@pytest.fixture
def config() -> Config:
    """Configuration that does not read the environment."""
    return Config(log_level="WARNING", enable_contextual_logging=False)
