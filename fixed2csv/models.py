from __future__ import annotations

import unicodedata
from enum import Enum
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict, Field


class LogicalType(str, Enum):
    STRING = "string"
    DATE = "date"
    NUMERIC = "numeric"

    @classmethod
    def names(cls) -> list[str]:
        return [member.value for member in cls]


# Localized names used by legacy metadata files.
_TYPE_ALIASES = {
    "cha\u00eene": LogicalType.STRING,
    "chaine": LogicalType.STRING,
    "num\u00e9rique": LogicalType.NUMERIC,
    "numerique": LogicalType.NUMERIC,
}

_TYPES_BY_NAME = MappingProxyType(
    {**{member.value: member for member in LogicalType}, **_TYPE_ALIASES}
)


def parse_type_name(token: str) -> LogicalType | None:
    """Resolve a schema type token, ignoring case and surrounding whitespace."""
    return _TYPES_BY_NAME.get(unicodedata.normalize("NFC", token.strip().lower()))


class ColumnDefinition(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    width: int = Field(ge=1)
    type: LogicalType


class Schema(BaseModel):
    model_config = ConfigDict(frozen=True)

    columns: list[ColumnDefinition] = Field(min_length=1)

    @property
    def total_width(self) -> int:
        return sum(column.width for column in self.columns)

    @property
    def names(self) -> list[str]:
        return [column.name for column in self.columns]

    def __len__(self) -> int:
        return len(self.columns)
