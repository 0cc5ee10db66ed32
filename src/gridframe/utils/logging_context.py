"""Context-aware logging utilities for GridFrame."""

import contextvars
import logging
from collections.abc import Mapping
from typing import Any

# Context variables for tracking what is being extracted
current_workbook = contextvars.ContextVar[str | None]("current_workbook", default=None)
current_sheet = contextvars.ContextVar[str | None]("current_sheet", default=None)
current_table = contextvars.ContextVar[str | None]("current_table", default=None)
current_operation = contextvars.ContextVar[str | None]("current_operation", default=None)

_CONTEXT_FIELDS = (
    ("workbook", current_workbook),
    ("sheet", current_sheet),
    ("table", current_table),
    ("op", current_operation),
)


class ContextualLogger(logging.LoggerAdapter):
    """Logger adapter that automatically includes extraction context."""

    def process(self, msg: str, kwargs: Mapping[str, Any]) -> tuple[str, Mapping[str, Any]]:
        """Add context information to log records."""
        extra = dict(kwargs.get("extra") or {})
        context_parts = []

        for field, variable in _CONTEXT_FIELDS:
            value = variable.get()
            if value:
                extra[field] = value
                context_parts.append(f"{field}={value}")

        kwargs = {**kwargs, "extra": extra}

        if context_parts:
            msg = f"[{', '.join(context_parts)}] {msg}"

        return msg, kwargs


def get_contextual_logger(name: str) -> ContextualLogger:
    """Get a logger that automatically includes extraction context.

    Args:
        name: Logger name (usually __name__)

    Returns:
        ContextualLogger instance
    """
    return ContextualLogger(logging.getLogger(name), {})


class _VariableContext:
    """Sets a context variable for the duration of a ``with`` block."""

    variable: contextvars.ContextVar[str | None]

    def __init__(self, value: str):
        self.value = value
        self.token = None

    def __enter__(self):
        self.token = self.variable.set(self.value)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.token:
            self.variable.reset(self.token)


class WorkbookContext(_VariableContext):
    """Context manager for tracking the workbook being processed."""

    variable = current_workbook


class SheetContext(_VariableContext):
    """Context manager for tracking the sheet being processed."""

    variable = current_sheet


class TableContext(_VariableContext):
    """Context manager for tracking the table being extracted."""

    variable = current_table


class OperationContext(_VariableContext):
    """Context manager for tracking the current operation."""

    variable = current_operation


def setup_contextual_logging():
    """Set up contextual logging with a structured format.

    This should be called once at application startup.
    """
    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s - "
        "%(workbook)s %(sheet)s %(table)s %(op)s",
        defaults={"workbook": "", "sheet": "", "table": "", "op": ""},
    )

    root_logger = logging.getLogger()
    for handler in root_logger.handlers:
        handler.setFormatter(formatter)
