from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from .config import ConverterSettings
from .errors import ConversionError, FieldFormatError, InputNotFoundError, RecordLengthError
from .formatters import WHITESPACE, format_value
from .models import Schema
from .parsing_engine import split_record
from .schema_reader import read_schema
from .writer import CsvWriter

LOGGER = logging.getLogger(__name__)


@dataclass
class ConversionSummary:
    output_path: Path
    column_count: int
    rows_written: int = 0
    blank_lines_skipped: int = 0


def _check_input(input_path: Path | str | None) -> Path:
    if input_path is None:
        raise InputNotFoundError(input_path)
    path = Path(input_path)
    if not path.is_file():
        LOGGER.error("Input file missing or not a regular file: %s", path)
        raise InputNotFoundError(path)
    try:
        with path.open("rb"):
            pass
    except OSError as error:
        raise InputNotFoundError(path) from error
    return path


def _format_line(line: str, line_number: int, schema: Schema) -> list[str]:
    try:
        raw_fields = split_record(line, schema.columns)
    except RecordLengthError as error:
        LOGGER.error("Line %s: length %s, expected %s.", line_number, error.actual, error.expected)
        raise RecordLengthError(
            expected=error.expected,
            actual=error.actual,
            raw_line=error.raw_line,
            line_number=line_number,
        ) from error

    formatted: list[str] = []
    for raw_value, column in zip(raw_fields, schema.columns):
        try:
            formatted.append(format_value(raw_value, column.type))
        except FieldFormatError as error:
            message = (
                f"Error processing column '{column.name}' (type {column.type.value}) "
                f"at line {line_number}: {error.message}"
            )
            LOGGER.error(message)
            raise FieldFormatError(
                message,
                raw_value=error.raw_value,
                column_type=column.type,
                line_number=line_number,
                column_name=column.name,
            ) from error
    return formatted


def convert(
    input_path: Path | str,
    schema_path: Path | str,
    output_path: Path | str,
    *,
    settings: ConverterSettings | None = None,
) -> ConversionSummary:
    """Convert a fixed-width file into CSV using a ``name,width,type`` schema.

    Blank input lines are skipped and do not count in the line numbers of
    error messages. Any error aborts the run and leaves the partially written
    output in place.
    """
    settings = settings or ConverterSettings()
    LOGGER.info(
        "Starting conversion: fixed-width '%s' + schema '%s' -> CSV '%s'",
        input_path,
        schema_path,
        output_path,
    )

    schema = read_schema(
        schema_path,
        encoding=settings.schema_encoding,
        delimiter=settings.schema_delimiter,
    )
    LOGGER.debug("Schema columns: %s", schema.columns)

    source = _check_input(input_path)
    summary = ConversionSummary(output_path=Path(output_path), column_count=len(schema))

    with CsvWriter(
        output_path,
        schema.names,
        encoding=settings.output_encoding,
        delimiter=settings.output_delimiter,
    ) as writer:
        line_number = 0
        try:
            with source.open("r", encoding=settings.input_encoding, newline="") as handle:
                for physical_number, raw_line in enumerate(handle, start=1):
                    line = raw_line.rstrip("\r\n")
                    if not line.strip(WHITESPACE):
                        summary.blank_lines_skipped += 1
                        LOGGER.debug("Blank line skipped at physical line %s.", physical_number)
                        continue

                    line_number += 1
                    writer.write_row(_format_line(line, line_number, schema))
        except (OSError, UnicodeError, LookupError) as error:
            message = f"I/O error while reading {source} after line {line_number}: {error}"
            LOGGER.error(message)
            raise ConversionError(message, path=source, line_number=line_number) from error
        summary.rows_written = writer.rows_written

    LOGGER.info(
        "Conversion finished: %s row(s) written to %s, %s blank line(s) skipped.",
        summary.rows_written,
        summary.output_path,
        summary.blank_lines_skipped,
    )
    return summary
