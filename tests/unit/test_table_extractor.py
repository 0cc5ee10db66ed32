"""Tests for the TableExtractor tool."""

import pytest

from gridframe.core.exceptions import FormatSectionError, LookupMiss, ValidationError
from gridframe.formatting.number_format import NumberFormatInterpreter
from gridframe.models import DataKind, RawRow, TableBounds, TableDeclaration
from gridframe.tools.extraction.table_extractor import TableExtractor


@pytest.fixture
def extractor(workbook_lookups) -> TableExtractor:
    return TableExtractor(lookups=workbook_lookups)


class TestExtract:
    """Test the core extraction scenario."""

    def test_people_table(self, extractor, people_rows, people_bounds):
        table = extractor.extract("People", ["Name", "Age"], people_bounds, people_rows)

        assert table.name == "People"
        assert table.columns == ["Name", "Age"]
        assert table.rows == [{"Name": "Alice", "Age": "30"}, {"Name": "Bob", "Age": ""}]

    def test_header_row_excluded(self, extractor, people_rows, people_bounds):
        table = extractor.extract("People", ["Name", "Age"], people_bounds, people_rows)

        assert all(row["Name"] != "Name" for row in table.rows)

    def test_rows_past_end_excluded(self, extractor, cell_factory):
        rows = [(row, [cell_factory(f"A{row}", f"v{row}")]) for row in range(1, 8)]

        table = extractor.extract("T", ["A"], TableBounds.parse("A2:A5"), rows)

        assert [row["A"] for row in table.rows] == ["v3", "v4", "v5"]

    def test_cells_left_of_bounds_ignored(self, extractor, cell_factory):
        rows = [
            (2, [cell_factory("A2", "left"), cell_factory("B2", "x"), cell_factory("C2", "y")]),
        ]

        table = extractor.extract("T", ["First", "Second"], TableBounds.parse("B1:C2"), rows)

        assert table.rows == [{"First": "x", "Second": "y"}]

    def test_arrival_order_preserved(self, extractor, cell_factory):
        rows = [
            (3, [cell_factory("A3", "third")]),
            (2, [cell_factory("A2", "second")]),
        ]

        table = extractor.extract("T", ["A"], TableBounds.parse("A1:A3"), rows)

        assert [row["A"] for row in table.rows] == ["third", "second"]

    def test_tuple_and_model_rows_mixed(self, extractor, cell_factory):
        rows = [
            RawRow(row_index=2, cells=[cell_factory("A2", "model")]),
            (3, [cell_factory("A3", "tuple")]),
        ]

        table = extractor.extract("T", ["A"], TableBounds.parse("A1:A3"), rows)

        assert [row["A"] for row in table.rows] == ["model", "tuple"]

    def test_empty_row_kept(self, extractor):
        table = extractor.extract("T", ["A", "B"], TableBounds.parse("A1:B2"), [(2, [])])

        assert table.rows == [{"A": "", "B": ""}]

    def test_custom_empty_value(self, workbook_lookups):
        extractor = TableExtractor(lookups=workbook_lookups, empty_value="-")

        table = extractor.extract("T", ["A"], TableBounds.parse("A1:A2"), [(2, [])])

        assert table.rows == [{"A": "-"}]

    def test_header_count_shorter_than_bounds(self, extractor, cell_factory):
        rows = [(2, [cell_factory("A2", "kept"), cell_factory("B2", "dropped")])]

        table = extractor.extract("T", ["A"], TableBounds.parse("A1:B2"), rows)

        assert table.rows == [{"A": "kept"}]


class TestHeaders:
    def test_missing_header_name(self, extractor, people_bounds):
        with pytest.raises(ValidationError):
            extractor.extract("T", ["Name", None], people_bounds, [])

    def test_duplicate_headers_rightmost_wins(self, extractor, cell_factory):
        rows = [(2, [cell_factory("A2", "left"), cell_factory("B2", "right")])]

        table = extractor.extract("T", ["Dup", "Dup"], TableBounds.parse("A1:B2"), rows)

        assert table.columns == ["Dup", "Dup"]
        assert table.rows == [{"Dup": "right"}]


class TestCellResolution:
    """Test how each data kind becomes display text."""

    def test_shared_string(self, extractor, cell_factory):
        cell = cell_factory("A2", "2", DataKind.SHARED_STRING_REF)

        assert extractor.resolve_cell(cell) == "Sprocket"

    def test_inline_text(self, extractor, cell_factory):
        assert extractor.resolve_cell(cell_factory("A2", "0.50", DataKind.TEXT)) == "0.50"

    def test_plain_number_passthrough(self, extractor, cell_factory):
        assert extractor.resolve_cell(cell_factory("A2", "0.50")) == "0.50"

    def test_styled_number(self, extractor, cell_factory):
        cell = cell_factory("A2", "3.14159", DataKind.STYLED, style_index=1)

        assert extractor.resolve_cell(cell) == "3.14"

    def test_styled_thousands(self, extractor, cell_factory):
        cell = cell_factory("A2", "1234567", DataKind.STYLED, style_index=4)

        assert extractor.resolve_cell(cell) == "1,234,567"

    def test_styled_builtin_date(self, extractor, cell_factory):
        cell = cell_factory("A2", "45000", DataKind.STYLED, style_index=2)

        assert extractor.resolve_cell(cell) == "03-15-23"

    def test_styled_custom_date(self, extractor, cell_factory):
        cell = cell_factory("A2", "45000.75", DataKind.STYLED, style_index=3)

        assert extractor.resolve_cell(cell) == "2023-03-15 18:00"

    def test_styled_general(self, extractor, cell_factory):
        cell = cell_factory("A2", "-2.50", DataKind.STYLED, style_index=0)

        assert extractor.resolve_cell(cell) == "-2.5"

    def test_styled_text_passthrough(self, extractor, cell_factory):
        cell = cell_factory("A2", "n/a", DataKind.STYLED, style_index=1)

        assert extractor.resolve_cell(cell) == "n/a"

    def test_shared_string_miss(self, extractor, cell_factory):
        with pytest.raises(LookupMiss):
            extractor.resolve_cell(cell_factory("A2", "9", DataKind.SHARED_STRING_REF))

    def test_shared_string_index_not_numeric(self, extractor, cell_factory):
        with pytest.raises(LookupMiss):
            extractor.resolve_cell(cell_factory("A2", "abc", DataKind.SHARED_STRING_REF))

    def test_styled_without_style_index(self, extractor, cell_factory):
        with pytest.raises(LookupMiss):
            extractor.resolve_cell(cell_factory("A2", "1", DataKind.STYLED))

    def test_missing_sign_section_propagates(self, extractor, cell_factory):
        cell = cell_factory("A2", "-1", DataKind.STYLED, style_index=1)

        with pytest.raises(FormatSectionError):
            extractor.resolve_cell(cell)

    def test_lenient_interpreter(self, workbook_lookups, cell_factory):
        extractor = TableExtractor(
            lookups=workbook_lookups, interpreter=NumberFormatInterpreter(strict_sections=False)
        )
        cell = cell_factory("A2", "-1", DataKind.STYLED, style_index=1)

        assert extractor.resolve_cell(cell) == "-1.00"


class TestExtractDeclaration:
    def test_declaration(self, extractor, people_rows):
        declaration = TableDeclaration(
            name="People", header_names=["Name", "Age"], reference="A1:B3"
        )

        table = extractor.extract_declaration(declaration, people_rows)

        assert table.to_records() == [["Alice", "30"], ["Bob", ""]]
