from __future__ import annotations

import csv
import logging
from collections.abc import Sequence
from pathlib import Path
from types import TracebackType
from typing import TextIO

from .errors import WriteError

LOGGER = logging.getLogger(__name__)

RECORD_SEPARATOR = "\r\n"
# Unencodable characters and unknown codec names surface as UnicodeError and LookupError.
_WRITE_ERRORS = (OSError, csv.Error, UnicodeError, LookupError)


class CsvWriter:
    """CSV output bound to one file and one header row.

    The header is written as soon as the writer is opened. Quoting follows
    RFC 4180 and every row, header included, ends with CRLF.
    """

    def __init__(
        self,
        output_path: Path | str,
        headers: Sequence[str],
        *,
        encoding: str = "utf-8",
        delimiter: str = ",",
    ) -> None:
        self.output_path = Path(output_path)
        self.headers = list(headers)
        self.rows_written = 0
        self._handle: TextIO | None = None

        LOGGER.info("Opening CSV output %s", self.output_path)
        LOGGER.debug("CSV headers: %s", self.headers)
        try:
            self.output_path.parent.mkdir(parents=True, exist_ok=True)
            self._handle = self.output_path.open("w", encoding=encoding, newline="")
        except (OSError, LookupError) as error:
            raise WriteError(
                f"Unable to open CSV output {self.output_path}: {error}", path=self.output_path
            ) from error

        self._writer = csv.writer(
            self._handle,
            delimiter=delimiter,
            quotechar='"',
            doublequote=True,
            quoting=csv.QUOTE_MINIMAL,
            lineterminator=RECORD_SEPARATOR,
        )
        try:
            self._write(self.headers)
        except WriteError:
            self.close()
            raise

    def _write(self, fields: Sequence[str]) -> None:
        if self._handle is None:
            raise WriteError(f"CSV output {self.output_path} is already closed.", path=self.output_path)
        try:
            self._writer.writerow(fields)
        except _WRITE_ERRORS as error:
            LOGGER.error("Error writing row to %s: %s", self.output_path, error)
            raise WriteError(
                f"Error writing row to CSV output {self.output_path}: {fields}", path=self.output_path
            ) from error

    def write_row(self, fields: Sequence[str]) -> None:
        self._write(fields)
        self.rows_written += 1

    def close(self) -> None:
        if self._handle is None:
            return
        handle, self._handle = self._handle, None
        LOGGER.debug("Closing CSV output %s (%s row(s)).", self.output_path, self.rows_written)
        try:
            handle.close()
        except _WRITE_ERRORS as error:
            raise WriteError(
                f"Unable to flush CSV output {self.output_path}: {error}", path=self.output_path
            ) from error

    def __enter__(self) -> "CsvWriter":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        if exc is None:
            self.close()
            return
        try:
            self.close()
        except WriteError as error:
            # The error already propagating wins.
            LOGGER.error("%s (while handling %s)", error, type(exc).__name__)
