"""
Pytest configuration and fixtures for fixed2csv tests.
"""

import pytest

from fixed2csv.models import ColumnDefinition, LogicalType, Schema


SAMPLE_SCHEMA = "ID,10,numeric\nName,15,string\nBirth,10,date\n"


@pytest.fixture
def sample_schema():
    """The three-column schema used across the converter tests."""
    return Schema(
        columns=[
            ColumnDefinition(name="ID", width=10, type=LogicalType.NUMERIC),
            ColumnDefinition(name="Name", width=15, type=LogicalType.STRING),
            ColumnDefinition(name="Birth", width=10, type=LogicalType.DATE),
        ]
    )


@pytest.fixture
def schema_file(tmp_path):
    """Create a schema file from text."""

    def _write(content=SAMPLE_SCHEMA, name="schema.csv"):
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def input_file(tmp_path):
    """Create a fixed-width input file from a list of lines."""

    def _write(lines, name="input.txt", line_ending="\n"):
        path = tmp_path / name
        path.write_text("".join(line + line_ending for line in lines), encoding="utf-8", newline="")
        return path

    return _write


@pytest.fixture
def output_path(tmp_path):
    """Path of the CSV output (not created)."""
    return tmp_path / "out" / "output.csv"
