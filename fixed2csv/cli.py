from __future__ import annotations

import argparse
import logging
import time
from collections.abc import Sequence
from pathlib import Path

from .config import ConverterSettings, load_settings
from .converter import convert
from .errors import ConversionError

LOGGER = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_CONVERSION_ERROR = 1
EXIT_UNEXPECTED_ERROR = 2


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
    )


def _settings_for(args: argparse.Namespace) -> ConverterSettings:
    settings = load_settings(args.config)
    return settings.with_overrides(
        input_encoding=getattr(args, "input_encoding", None),
        schema_encoding=getattr(args, "schema_encoding", None),
        output_encoding=getattr(args, "output_encoding", None),
    )


def _convert_command(args: argparse.Namespace) -> int:
    settings = _settings_for(args)
    started = time.perf_counter()
    summary = convert(
        input_path=Path(args.input),
        schema_path=Path(args.schema),
        output_path=Path(args.output),
        settings=settings,
    )
    elapsed_ms = (time.perf_counter() - started) * 1000
    LOGGER.info(
        "Conversion completed: %s row(s) written to %s in %.0f ms.",
        summary.rows_written,
        summary.output_path,
        elapsed_ms,
    )
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fixed2csv",
        description="Convert a fixed-width text file to CSV using a name,width,type schema.",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logs.")
    parser.add_argument(
        "--config",
        default=None,
        help="TOML configuration file (default: $FIXED2CSV_CONFIG or ./fixed2csv.toml).",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    convert_parser = subparsers.add_parser("convert", help="Convert a fixed-width file to CSV.")
    convert_parser.add_argument("-m", "--schema", required=True, help="Schema file path (name,width,type rows).")
    convert_parser.add_argument("-i", "--input", required=True, help="Fixed-width input file path.")
    convert_parser.add_argument("-o", "--output", required=True, help="CSV output file path.")
    convert_parser.add_argument("--input-encoding", default=None, help="Input file encoding.")
    convert_parser.add_argument("--schema-encoding", default=None, help="Schema file encoding.")
    convert_parser.add_argument("--output-encoding", default=None, help="CSV output encoding.")
    convert_parser.set_defaults(handler=_convert_command)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _setup_logging(verbose=args.verbose)
    try:
        return args.handler(args)
    except ConversionError as error:
        LOGGER.error("Conversion failed: %s", error)
        LOGGER.debug("Failure context: %s", error.context, exc_info=error)
        return EXIT_CONVERSION_ERROR
    except Exception:
        LOGGER.exception("An unexpected error occurred.")
        return EXIT_UNEXPECTED_ERROR


if __name__ == "__main__":
    raise SystemExit(main())
