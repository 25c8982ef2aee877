from __future__ import annotations

import csv
import logging
from collections.abc import Iterable
from pathlib import Path

from pydantic import ValidationError

from .errors import SchemaError
from .models import ColumnDefinition, LogicalType, Schema, parse_type_name

LOGGER = logging.getLogger(__name__)

_EXPECTED_ROW = "3 tokens expected (name, width, type)"


def _tokenize(raw_row: str, delimiter: str, row_number: int) -> list[str]:
    try:
        return next(csv.reader([raw_row], delimiter=delimiter, strict=True), [])
    except csv.Error as error:
        raise SchemaError(
            f"Invalid row format at row {row_number}: {error}; {_EXPECTED_ROW}. Row: '{raw_row}'",
            row_number=row_number,
            row=raw_row,
        ) from error


def _is_blank(tokens: list[str]) -> bool:
    return not tokens or (len(tokens) == 1 and not tokens[0].strip())


def _parse_width(token: str, raw_row: str, row_number: int) -> int:
    text = token.strip()
    # int() alone would also accept "+5", "1_0" and non-ASCII digits.
    if not (text.isascii() and text.isdigit()) or int(text) <= 0:
        raise SchemaError(
            f"Invalid column width at row {row_number}: width must be a strictly positive integer, "
            f"got '{text}'. Row: '{raw_row}'",
            row_number=row_number,
            row=raw_row,
        )
    return int(text)


def _parse_row(tokens: list[str], raw_row: str, row_number: int) -> ColumnDefinition:
    if len(tokens) != 3:
        raise SchemaError(
            f"Invalid row format at row {row_number}: {_EXPECTED_ROW}, {len(tokens)} found. "
            f"Row: '{raw_row}'",
            row_number=row_number,
            row=raw_row,
        )

    name = tokens[0].strip()
    if not name:
        raise SchemaError(
            f"Invalid column name at row {row_number}: name must not be empty. Row: '{raw_row}'",
            row_number=row_number,
            row=raw_row,
        )

    width = _parse_width(tokens[1], raw_row, row_number)

    column_type = parse_type_name(tokens[2])
    if column_type is None:
        raise SchemaError(
            f"Invalid column type at row {row_number}: unknown type '{tokens[2].strip()}'. "
            f"Expected one of {LogicalType.names()}. Row: '{raw_row}'",
            row_number=row_number,
            row=raw_row,
        )

    return ColumnDefinition(name=name, width=width, type=column_type)


def parse_schema(
    rows: Iterable[str],
    *,
    delimiter: str = ",",
    source: str = "<schema>",
) -> Schema:
    """Build a schema from the raw rows of a delimited schema source.

    Rows are ``name,width,type`` with no header. Blank rows are skipped but
    still count in the 1-based row numbers used by error messages.
    """
    columns: list[ColumnDefinition] = []
    for row_number, raw_line in enumerate(rows, start=1):
        raw_row = raw_line.rstrip("\r\n")
        tokens = _tokenize(raw_row, delimiter, row_number)
        if _is_blank(tokens):
            LOGGER.debug("Blank schema row %s skipped.", row_number)
            continue
        columns.append(_parse_row(tokens, raw_row, row_number))

    if not columns:
        message = f"Schema source is empty or contains no valid column definitions: {source}"
        LOGGER.error(message)
        raise SchemaError(message)

    try:
        schema = Schema(columns=columns)
    except ValidationError as error:
        raise SchemaError(f"Invalid schema {source}: {error}") from error

    LOGGER.debug("Schema %s: %s column(s), total width %s.", source, len(schema), schema.total_width)
    return schema


def read_schema(
    schema_path: Path | str | None,
    *,
    encoding: str = "utf-8-sig",
    delimiter: str = ",",
) -> Schema:
    if schema_path is None:
        raise SchemaError("Schema file missing or not a regular file: None")

    path = Path(schema_path)
    if not path.is_file():
        message = f"Schema file missing or not a regular file: {path}"
        LOGGER.error(message)
        raise SchemaError(message)

    try:
        with path.open("r", encoding=encoding, newline="") as handle:
            return parse_schema(handle, delimiter=delimiter, source=str(path))
    except (OSError, UnicodeError, LookupError) as error:
        raise SchemaError(f"Unable to read schema file {path}: {error}") from error
