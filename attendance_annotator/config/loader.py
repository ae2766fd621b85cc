from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.config_models import AnalysisSettings, LabelFormat, OutputOptions
from ..models.roster import Department, RosterEntry

"""Config loader.

Responsibilities:
- Load YAML config (default config/analysis.yml)
- Validate against config_schema.json
- Build the roster and output options, applying defaults
- Apply the ATTENDANCE_OUTPUT_DIR environment override
"""

SCHEMA_PATH = Path(__file__).parent / "config_schema.json"
DEFAULT_CONFIG_PATH = Path("config/analysis.yml")
OUTPUT_DIR_ENV = "ATTENDANCE_OUTPUT_DIR"


class ConfigError(Exception):
    pass


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: schema file missing or invalid, or data violates it
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")

    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def _build_roster(raw: list[dict[str, Any]]) -> tuple[RosterEntry, ...]:
    entries: list[RosterEntry] = []
    seen: dict[int, str] = {}
    for item in raw:
        row = item["row"]
        name = str(item["name"]).strip()
        if row in seen:
            raise ConfigError(f"duplicate roster row {row}: '{seen[row]}' and '{name}'")
        try:
            dept = Department.parse(item["department"])
        except ValueError as e:
            raise ConfigError(f"roster row {row}: {e}") from e
        seen[row] = name
        entries.append(RosterEntry(row=row, name=name, department=dept))
    return tuple(entries)


def _build_output(raw: dict[str, Any]) -> OutputOptions:
    defaults = OutputOptions()
    directory = os.getenv(OUTPUT_DIR_ENV) or raw.get("directory", defaults.directory)
    return OutputOptions(
        directory=directory,
        label_format=LabelFormat(raw.get("label_format", defaults.label_format.value)),
        header_row=raw.get("header_row", defaults.header_row),
        sheet_title=raw.get("sheet_title", defaults.sheet_title),
        minimum_rows=raw.get("minimum_rows", defaults.minimum_rows),
    )


def load_config(path: Path) -> AnalysisSettings:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping, got {type(data).__name__}")

    _validate_config_schema(data)

    return AnalysisSettings(
        roster=_build_roster(data["roster"]),
        output=_build_output(data.get("output", {})),
    )
