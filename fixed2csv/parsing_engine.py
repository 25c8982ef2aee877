from __future__ import annotations

import logging
from collections.abc import Sequence

from .errors import RecordLengthError
from .models import ColumnDefinition

LOGGER = logging.getLogger(__name__)


def split_record(line: str, columns: Sequence[ColumnDefinition]) -> list[str]:
    """Slice one fixed-width line into one raw value per column.

    Offsets are counted in code points, so multi-byte characters occupy a
    single position. Values are returned untouched; trimming belongs to the
    formatters.
    """
    expected = sum(column.width for column in columns)
    if len(line) != expected:
        raise RecordLengthError(expected=expected, actual=len(line), raw_line=line)

    fields: list[str] = []
    start = 0
    for column in columns:
        end = start + column.width
        fields.append(line[start:end])
        start = end

    LOGGER.debug("Split %s field(s): %s", len(fields), fields)
    return fields
