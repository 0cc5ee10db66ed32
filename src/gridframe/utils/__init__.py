"""Utility modules for GridFrame."""

from .logging_context import (
    OperationContext,
    SheetContext,
    TableContext,
    WorkbookContext,
    get_contextual_logger,
    setup_contextual_logging,
)

__all__ = [
    "get_contextual_logger",
    "setup_contextual_logging",
    "WorkbookContext",
    "SheetContext",
    "TableContext",
    "OperationContext",
]
