"""Fixed-width to CSV conversion driven by a name,width,type schema."""

from .converter import ConversionSummary, convert
from .errors import (
    ConversionError,
    FieldFormatError,
    InputNotFoundError,
    RecordLengthError,
    SchemaError,
    WriteError,
)
from .models import ColumnDefinition, LogicalType, Schema, parse_type_name

__all__ = [
    "ColumnDefinition",
    "ConversionError",
    "ConversionSummary",
    "FieldFormatError",
    "InputNotFoundError",
    "LogicalType",
    "RecordLengthError",
    "Schema",
    "SchemaError",
    "WriteError",
    "convert",
    "parse_type_name",
]
