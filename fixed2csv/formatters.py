from __future__ import annotations

import logging
import re
from datetime import date

from .errors import FieldFormatError
from .models import LogicalType

LOGGER = logging.getLogger(__name__)

_DATE_RE = re.compile(r"([0-9]{4})-([0-9]{2})-([0-9]{2})")
_INTEGER_RE = re.compile(r"[+-]?[0-9]+")
_DECIMAL_RE = re.compile(r"[+-]?(?:[0-9]+\.[0-9]*|\.[0-9]+)")
_FORBIDDEN_STRING_CHARS = ("\r", "\n")

# Space and the ASCII control characters below it. Non-breaking and other
# Unicode spaces are data, not padding.
WHITESPACE = "".join(chr(code) for code in range(0x21))

INPUT_DATE_PATTERN = "YYYY-MM-DD"


def _invalid_date(value: str, raw_value: str) -> FieldFormatError:
    return FieldFormatError(
        f"Invalid date format: '{value}'. Expected format: {INPUT_DATE_PATTERN}.",
        raw_value=raw_value,
        column_type=LogicalType.DATE,
    )


def _format_date(raw_value: str) -> str:
    value = raw_value.strip(WHITESPACE)
    if not value:
        return ""

    match = _DATE_RE.fullmatch(value)
    if match is None:
        raise _invalid_date(value, raw_value)
    try:
        parsed = date(*(int(part) for part in match.groups()))
    except ValueError as error:
        raise _invalid_date(value, raw_value) from error
    # Years below 1000 keep four digits.
    return f"{parsed.day:02d}/{parsed.month:02d}/{parsed.year:04d}"


def _format_numeric(raw_value: str) -> str:
    value = raw_value.strip(WHITESPACE)
    if not value:
        return ""

    if "." in value:
        if _DECIMAL_RE.fullmatch(value):
            return str(float(value))
    elif _INTEGER_RE.fullmatch(value):
        return str(int(value))

    raise FieldFormatError(
        f"Invalid numeric format: '{raw_value}'.",
        raw_value=raw_value,
        column_type=LogicalType.NUMERIC,
    )


def _format_string(raw_value: str) -> str:
    if any(char in raw_value for char in _FORBIDDEN_STRING_CHARS):
        raise FieldFormatError(
            f"Text field contains forbidden characters (CR or LF): {raw_value!r}.",
            raw_value=raw_value,
            column_type=LogicalType.STRING,
        )
    return raw_value.rstrip(WHITESPACE)


def format_value(raw_value: str, column_type: LogicalType) -> str:
    """Render a raw fixed-width value in its canonical CSV form.

    DATE ``YYYY-MM-DD`` becomes ``DD/MM/YYYY``, NUMERIC is normalized
    (``"007"`` -> ``"7"``, ``"1.50"`` -> ``"1.5"``) and STRING keeps its
    leading whitespace. Blank DATE and NUMERIC values become empty strings.
    """
    if column_type == LogicalType.DATE:
        formatted = _format_date(raw_value)
    elif column_type == LogicalType.NUMERIC:
        formatted = _format_numeric(raw_value)
    elif column_type == LogicalType.STRING:
        formatted = _format_string(raw_value)
    else:
        message = f"Unknown or unsupported column type: {column_type!r}"
        LOGGER.error(message)
        raise FieldFormatError(message, raw_value=raw_value, column_type=column_type)

    LOGGER.debug("Formatted %r (%s) -> %r", raw_value, column_type, formatted)
    return formatted
