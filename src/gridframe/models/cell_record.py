"""Raw cell records handed over by a worksheet reader."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from .cell_address import CellAddress


class DataKind(str, Enum):
    """How a cell's raw text is turned into display text."""

    TEXT = "text"
    SHARED_STRING_REF = "shared_string_ref"
    STYLED = "styled"
    PLAIN_NUMBER_OR_TEXT = "plain"


class RawCellRecord(BaseModel):
    """A single cell as stored in the worksheet, before any lookup."""

    model_config = ConfigDict(frozen=True)

    address: CellAddress = Field(..., description="Cell location")
    data_kind: DataKind = Field(DataKind.PLAIN_NUMBER_OR_TEXT, description="Data kind tag")
    raw_text: str = Field("", description="Raw stored text")
    style_index: int | None = Field(None, ge=0, description="Index into the cell formats")

    @classmethod
    def from_reference(
        cls,
        reference: str,
        raw_text: str,
        data_kind: DataKind = DataKind.PLAIN_NUMBER_OR_TEXT,
        style_index: int | None = None,
    ) -> "RawCellRecord":
        """Build a record from an "A1"-style reference string."""
        return cls(
            address=CellAddress.parse(reference),
            data_kind=data_kind,
            raw_text=raw_text,
            style_index=style_index,
        )


class RawRow(BaseModel):
    """The cells stored for one worksheet row; may be sparse."""

    model_config = ConfigDict(frozen=True)

    row_index: int = Field(..., ge=1, description="Row number (1-based)")
    cells: list[RawCellRecord] = Field(default_factory=list, description="Cells present in the row")
