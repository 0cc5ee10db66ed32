"""Tests for the CellAddress model."""

import pytest

from gridframe.core.exceptions import AddressFormatError, RangeError
from gridframe.models.cell_address import CellAddress, column_index_of, column_name_of


class TestColumnEncoding:
    """Test bijective base-26 column encoding."""

    @pytest.mark.parametrize(
        "name,index",
        [("A", 1), ("Z", 26), ("AA", 27), ("AZ", 52), ("BA", 53), ("ZZ", 702), ("AAA", 703)],
    )
    def test_known_values(self, name, index):
        """Test well-known column names map to the right index."""
        assert column_index_of(name) == index
        assert column_name_of(index) == name

    def test_round_trip_through_zzz(self):
        """Test every column up to ZZZ survives index -> name -> index."""
        for index in range(1, 18279):
            assert column_index_of(column_name_of(index)) == index

    def test_names_strictly_increase(self):
        """Test longer names always sort after shorter ones."""
        assert column_index_of("Z") < column_index_of("AA") < column_index_of("AB")
        assert column_index_of("ZZ") < column_index_of("AAA")

    def test_zero_index_rejected(self):
        with pytest.raises(RangeError):
            column_name_of(0)


class TestParse:
    """Test parsing of A1-style references."""

    def test_simple_reference(self):
        address = CellAddress.parse("C12")

        assert address.column_name == "C"
        assert address.column_index == 3
        assert address.row_index == 12

    def test_multi_letter_reference(self):
        address = CellAddress.parse("AB7")

        assert address.column_index == 28
        assert address.row_index == 7

    def test_surrounding_whitespace_ignored(self):
        assert CellAddress.parse("  B2 ") == CellAddress.parse("B2")

    @pytest.mark.parametrize("text", ["", "A", "12", "1A", "A1B", "A-1", "a1", "A 1", "$A$1"])
    def test_malformed_references(self, text):
        """Test anything but letters followed by digits is rejected."""
        with pytest.raises(AddressFormatError):
            CellAddress.parse(text)

    def test_row_zero_rejected(self):
        with pytest.raises(RangeError):
            CellAddress.parse("A0")

    def test_errors_are_value_errors(self):
        with pytest.raises(ValueError):
            CellAddress.parse("nope")


class TestCreate:
    """Test building addresses from indices."""

    def test_create(self):
        address = CellAddress.create(28, 5)

        assert address.column_name == "AB"
        assert address.to_text() == "AB5"

    @pytest.mark.parametrize("column,row", [(0, 1), (-3, 1), (1, 0), (1, -1)])
    def test_non_positive_indices(self, column, row):
        with pytest.raises(RangeError):
            CellAddress.create(column, row)

    @pytest.mark.parametrize("text", ["A1", "Z99", "AA10", "XFD1048576", "BA3"])
    def test_round_trip(self, text):
        """Test create(parse(s)) renders back to the same text."""
        parsed = CellAddress.parse(text)
        assert CellAddress.create(parsed.column_index, parsed.row_index).to_text() == text

    def test_immutable(self):
        address = CellAddress.parse("A1")

        with pytest.raises(Exception):
            address.row_index = 5


class TestOrdering:
    """Test the row-major total order."""

    def test_same_row_orders_by_column(self):
        assert CellAddress.parse("A1") < CellAddress.parse("B1")

    def test_row_dominates_column(self):
        assert CellAddress.parse("B1") < CellAddress.parse("A2")
        assert CellAddress.parse("A2") > CellAddress.parse("Z1")

    def test_equality(self):
        first = CellAddress.parse("C3")
        second = CellAddress.create(3, 3)

        assert first == second
        assert first <= second
        assert first >= second
        assert first.compare_to(second) == 0
        assert hash(first) == hash(second)

    def test_sorting(self):
        addresses = [CellAddress.parse(text) for text in ["B2", "A2", "C1", "A1"]]

        assert [a.to_text() for a in sorted(addresses)] == ["A1", "C1", "A2", "B2"]

    def test_none_sorts_first(self):
        address = CellAddress.parse("A1")

        assert address > None
        assert address >= None
        assert not address < None
        assert address.compare_to(None) == 1


class TestHelpers:
    def test_zero_based(self):
        assert CellAddress.parse("C5").to_zero_based() == (4, 2)

    def test_offset(self):
        assert CellAddress.parse("B2").offset(rows=1, columns=2).to_text() == "D3"

    def test_str(self):
        assert str(CellAddress.parse("AA10")) == "AA10"
