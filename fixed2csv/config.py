from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

LOGGER = logging.getLogger(__name__)

ENV_PREFIX = "FIXED2CSV_"
CONFIG_ENV_VAR = "FIXED2CSV_CONFIG"
DEFAULT_CONFIG_FILENAME = "fixed2csv.toml"


@dataclass(frozen=True)
class ConverterSettings:
    input_encoding: str = "utf-8"
    schema_encoding: str = "utf-8-sig"
    output_encoding: str = "utf-8"
    schema_delimiter: str = ","
    output_delimiter: str = ","

    def with_overrides(self, **overrides: Any) -> "ConverterSettings":
        """Return a copy with every non-None override applied."""
        values = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **values)


def _candidate_config_files(config_path: Path | None) -> list[Path]:
    if config_path is not None:
        return [config_path]

    candidates: list[Path] = []
    explicit_file = os.getenv(CONFIG_ENV_VAR)
    if explicit_file:
        candidates.append(Path(explicit_file).expanduser())
    candidates.append(Path.cwd() / DEFAULT_CONFIG_FILENAME)
    return candidates


def _load_file_values(config_path: Path | None) -> dict[str, Any]:
    for file_path in _candidate_config_files(config_path):
        if not file_path.exists():
            if config_path is not None:
                raise FileNotFoundError(f"Configuration file not found: {file_path}")
            continue
        with file_path.open("rb") as handle:
            payload = tomllib.load(handle)
        LOGGER.debug("Configuration loaded from %s", file_path)
        # Settings may live at top level or under a [fixed2csv] table.
        section = payload.get("fixed2csv", payload)
        return dict(section) if isinstance(section, dict) else {}
    return {}


def _load_env_values() -> dict[str, str]:
    values: dict[str, str] = {}
    for setting in fields(ConverterSettings):
        raw = os.getenv(f"{ENV_PREFIX}{setting.name.upper()}")
        if raw is not None and raw.strip():
            values[setting.name] = raw.strip()
    return values


def load_settings(config_path: Path | str | None = None) -> ConverterSettings:
    """Resolve settings from defaults, then the TOML file, then the environment.

    Raises ``FileNotFoundError`` when an explicit ``config_path`` does not
    exist and ``ValueError`` on unknown or non-string keys.
    """
    path = Path(config_path).expanduser() if config_path is not None else None
    known = {setting.name for setting in fields(ConverterSettings)}

    file_values = _load_file_values(path)
    unknown = sorted(set(file_values) - known)
    if unknown:
        raise ValueError(f"Unknown configuration key(s): {', '.join(unknown)}. Allowed: {sorted(known)}")
    invalid = sorted(key for key, value in file_values.items() if not isinstance(value, str))
    if invalid:
        raise ValueError(f"Configuration value(s) must be strings: {', '.join(invalid)}")

    settings = ConverterSettings(**file_values)
    return settings.with_overrides(**_load_env_values())
