"""Main GridFrame class."""

import logging
from collections.abc import Iterable, Sequence
from contextlib import AbstractContextManager, nullcontext

from .config import Config
from .formatting.number_format import NumberFormatInterpreter
from .models import OutputTable, TableDeclaration, WorkbookLookups
from .tools.extraction.table_extractor import RowInput, TableExtractor
from .utils.logging_context import (
    OperationContext,
    SheetContext,
    TableContext,
    WorkbookContext,
    get_contextual_logger,
    setup_contextual_logging,
)

logger = get_contextual_logger(__name__)


class GridFrame:
    """Extract declared tables from worksheet cell records."""

    def __init__(
        self,
        config: Config | None = None,
        lookups: WorkbookLookups | None = None,
        workbook_name: str | None = None,
        **kwargs,
    ):
        """Initialize GridFrame.

        Args:
            config: Configuration object. If None, loads from environment.
            lookups: Shared strings, cell formats and custom number formats
                of the workbook being read
            workbook_name: Workbook name added to the log context
            **kwargs: Config overrides
        """
        if config is None:
            config = Config.from_env()

        overrides = {key: value for key, value in kwargs.items() if key in Config.model_fields}
        if overrides:
            config = config.model_copy(update=overrides)

        self.config = config
        self.lookups = lookups or WorkbookLookups()
        self.workbook_name = workbook_name
        self._setup_logging()

        self._extractor = TableExtractor(
            lookups=self.lookups,
            interpreter=NumberFormatInterpreter(strict_sections=config.strict_format_sections),
            empty_value=config.empty_cell_value,
        )

        logger.debug(f"GridFrame initialized with config: {config}")

    def _setup_logging(self) -> None:
        """Setup logging configuration."""
        logging.basicConfig(
            level=getattr(logging, self.config.log_level.upper()),
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            filename=self.config.log_file,
        )
        if self.config.enable_contextual_logging:
            setup_contextual_logging()

    def extract_table(
        self, declaration: TableDeclaration, rows: Iterable[RowInput]
    ) -> OutputTable:
        """Extract a single declared table.

        Args:
            declaration: Table name, header names and range
            rows: Worksheet rows as ``RawRow`` or ``(row_index, cells)``

        Returns:
            The extracted table

        Raises:
            RangeFormatError: If the declared range is malformed
            LookupMiss: If a cell refers to a missing shared string, style or format
            FormatSectionError: If a value's format lacks its sign section
        """
        with self._workbook_scope(), TableContext(declaration.name), OperationContext("extract"):
            bounds = declaration.bounds
            table = self._extractor.extract(
                declaration.name, declaration.header_names, bounds, rows
            )
            logger.info(f"Extracted {table.row_count} rows from {bounds}")
            return table

    def extract_sheet(
        self,
        sheet_name: str,
        declarations: Sequence[TableDeclaration],
        rows: Iterable[RowInput],
    ) -> list[OutputTable]:
        """Extract every table declared in a sheet.

        The rows are read once and shared by all declarations.
        """
        with self._workbook_scope(), SheetContext(sheet_name):
            sheet_rows = list(rows)
            logger.info(f"Extracting {len(declarations)} tables from {len(sheet_rows)} rows")
            return [self.extract_table(declaration, sheet_rows) for declaration in declarations]

    def _workbook_scope(self) -> AbstractContextManager:
        if self.workbook_name is None:
            return nullcontext()
        return WorkbookContext(self.workbook_name)
