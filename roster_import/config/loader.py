from __future__ import annotations

import json
import re
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from roster_import.models.dialect import DatePattern, RosterDialect

"""Config loader.

Responsibilities:
- Load YAML config (config/roster.yml by default)
- Validate against the bundled config_schema.json
- Apply defaults (output ./out, timezone UTC, rooms 501-532)
- Build the RosterDialect the parsers run with
"""

SCHEMA_PATH = Path(__file__).with_name("config_schema.json")

DEFAULT_CONFIG_PATH = Path("config/roster.yml")


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class ImportConfig:
    source_directory: str
    output_directory: str = "./out"
    timezone: str = "UTC"
    room_start: int = 501
    room_end: int = 532
    dialect_overrides: dict[str, Any] = field(default_factory=dict)


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: schema file missing / not valid JSON, or the config
            violates the schema (missing keys, wrong types, unknown keys)
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


def load_config(path: Path) -> ImportConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError("config validation failed: top level must be a mapping")

    _validate_config_schema(data)

    rooms = data.get("room_range", {})
    start = rooms.get("start", 501)
    end = rooms.get("end", 532)
    if start > end:
        raise ConfigError(f"config validation failed: room_range start {start} > end {end}")

    return ImportConfig(
        source_directory=data["source_directory"],
        output_directory=data.get("output_directory", "./out"),
        timezone=data.get("timezone", "UTC"),
        room_start=start,
        room_end=end,
        dialect_overrides=data.get("dialect", {}),
    )


def build_dialect(cfg: ImportConfig) -> RosterDialect:
    """RosterDialect from defaults + config overrides.

    Token lists become tuples; regexes are compiled once here so a bad pattern
    fails at startup rather than mid-run.
    """
    overrides: dict[str, Any] = {}
    for key, value in cfg.dialect_overrides.items():
        if key == "date_patterns":
            overrides[key] = tuple(
                DatePattern(name=p["name"], regex=p["regex"], formats=tuple(p["formats"]))
                for p in value
            )
        elif isinstance(value, list):
            overrides[key] = tuple(value)
        else:
            overrides[key] = value

    patterns = [overrides.get("weekday_pattern"), overrides.get("ordinal_suffix_pattern")]
    patterns += [p.regex for p in overrides.get("date_patterns", ())]
    for pattern in patterns:
        if pattern is None:
            continue
        try:
            re.compile(pattern)
        except re.error as e:
            raise ConfigError(f"invalid dialect regex {pattern!r}: {e}") from e

    return replace(
        RosterDialect(),
        room_start=cfg.room_start,
        room_end=cfg.room_end,
        **overrides,
    )
