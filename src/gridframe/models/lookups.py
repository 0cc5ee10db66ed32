"""Workbook-level lookup tables shared by every sheet."""

from collections.abc import Mapping
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from ..core.exceptions import LookupMiss
from ..formatting.builtin_formats import builtin_pattern


class WorkbookLookups(BaseModel):
    """Read-only lookups populated once per workbook.

    The three tables resolve shared-string indices, style indices and format
    ids. A missing entry raises ``LookupMiss``; nothing is guessed.
    """

    model_config = ConfigDict(frozen=True)

    shared_strings: tuple[str, ...] = Field(
        default_factory=tuple, description="Shared string table, indexed from 0"
    )
    custom_formats: Mapping[int, str] = Field(
        default_factory=dict,
        validate_default=True,
        description="Format patterns stored in the workbook, by format id",
    )
    cell_formats: tuple[int, ...] = Field(
        default_factory=tuple, description="Format id of each cell style, by style index"
    )

    @field_validator("custom_formats", mode="after")
    @classmethod
    def _freeze_custom_formats(cls, value: Mapping[int, str]) -> Mapping[int, str]:
        return MappingProxyType(dict(value))

    @field_serializer("custom_formats")
    def _dump_custom_formats(self, value: Mapping[int, str]) -> dict[int, str]:
        return dict(value)

    def shared_string(self, index: int) -> str:
        """Resolve a shared-string index."""
        if not 0 <= index < len(self.shared_strings):
            raise LookupMiss("shared strings", index)
        return self.shared_strings[index]

    def format_id_for_style(self, style_index: int) -> int:
        """Resolve a cell style index to its number format id."""
        if not 0 <= style_index < len(self.cell_formats):
            raise LookupMiss("cell formats", style_index)
        return self.cell_formats[style_index]

    def pattern_for(self, format_id: int) -> str:
        """Resolve a format id to its pattern; custom formats win over built-ins."""
        pattern = self.custom_formats.get(format_id)
        if pattern is None:
            pattern = builtin_pattern(format_id)
        if pattern is None:
            raise LookupMiss("number formats", format_id)
        return pattern
