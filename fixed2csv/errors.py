"""Error taxonomy of the conversion pipeline.

Every error carries the positional context known where it was raised. Callers
that know more (the converter knows the line number and the column) re-raise a
new error of the same kind with ``raise ... from error`` so the original stays
reachable through ``__cause__``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from .models import LogicalType


class ConversionError(RuntimeError):
    """Base class for every failure of a conversion run."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message)
        self.message = message
        self.context = context


class SchemaError(ConversionError):
    """Schema source missing, unreadable, malformed or empty."""

    def __init__(self, message: str, row_number: int | None = None, row: str | None = None) -> None:
        super().__init__(message, row_number=row_number, row=row)
        self.row_number = row_number
        self.row = row


class InputNotFoundError(ConversionError):
    """Input path missing or not a regular readable file."""

    def __init__(self, path: Path | str | None) -> None:
        super().__init__(f"Input file missing or not a readable regular file: {path}", path=path)
        self.path = path


class RecordLengthError(ConversionError):
    """A data line does not have the total width declared by the schema."""

    def __init__(
        self,
        expected: int,
        actual: int,
        raw_line: str,
        line_number: int | None = None,
    ) -> None:
        prefix = f"Line {line_number}: " if line_number is not None else ""
        message = (
            f"{prefix}record length mismatch: expected {expected}, got {actual}. "
            f"Line: '{raw_line}'"
        )
        super().__init__(
            message,
            expected=expected,
            actual=actual,
            raw_line=raw_line,
            line_number=line_number,
        )
        self.expected = expected
        self.actual = actual
        self.raw_line = raw_line
        self.line_number = line_number


class FieldFormatError(ConversionError):
    """A raw field value does not follow the grammar of its logical type."""

    def __init__(
        self,
        message: str,
        raw_value: str,
        column_type: LogicalType | str | None,
        line_number: int | None = None,
        column_name: str | None = None,
    ) -> None:
        super().__init__(
            message,
            raw_value=raw_value,
            column_type=column_type,
            line_number=line_number,
            column_name=column_name,
        )
        self.raw_value = raw_value
        self.column_type = column_type
        self.line_number = line_number
        self.column_name = column_name


class WriteError(ConversionError):
    """The output target failed while being opened, written or closed."""

    def __init__(self, message: str, path: Path | str | None = None) -> None:
        super().__init__(message, path=path)
        self.path = path
