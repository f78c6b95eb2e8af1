from __future__ import annotations

from pathlib import Path

import pytest

from roster_import.config.loader import ConfigError, ImportConfig, build_dialect, load_config
from roster_import.models.dialect import DEFAULT_DATE_PATTERNS


def test_load_config_success(write_config: Path):
    cfg = load_config(write_config)
    assert cfg.source_directory == "./data"
    assert cfg.output_directory == "./out"
    assert cfg.timezone == "UTC"
    assert (cfg.room_start, cfg.room_end) == (501, 532)
    assert cfg.dialect_overrides == {}


def test_load_config_defaults(temp_workdir: Path):
    path = temp_workdir / "config" / "roster.yml"
    path.write_text("source_directory: ./data\n", encoding="utf-8")
    cfg = load_config(path)
    assert cfg == ImportConfig(source_directory="./data")


def test_load_config_missing_file(temp_workdir: Path):
    with pytest.raises(ConfigError) as e:
        load_config(temp_workdir / "config" / "not_exists.yml")
    assert "config file not found" in str(e.value)


def test_load_config_missing_required(write_config: Path):
    text = write_config.read_text(encoding="utf-8").replace("source_directory: ./data\n", "")
    write_config.write_text(text, encoding="utf-8")
    with pytest.raises(ConfigError) as e:
        load_config(write_config)
    assert "config validation failed" in str(e.value) and "required property" in str(e.value)


def test_load_config_extra_field(write_config: Path):
    write_config.write_text(write_config.read_text(encoding="utf-8") + "extra_field: 1\n", encoding="utf-8")
    with pytest.raises(ConfigError) as e:
        load_config(write_config)
    assert "config validation failed" in str(e.value)


def test_load_config_invalid_yaml(write_config: Path):
    write_config.write_text("source_directory: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigError) as e:
        load_config(write_config)
    assert "invalid yaml" in str(e.value)


def test_load_config_top_level_not_mapping(write_config: Path):
    write_config.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(write_config)


def test_load_config_reversed_room_range(write_config: Path):
    text = write_config.read_text(encoding="utf-8").replace("start: 501", "start: 600")
    write_config.write_text(text, encoding="utf-8")
    with pytest.raises(ConfigError) as e:
        load_config(write_config)
    assert "room_range" in str(e.value)


def test_load_config_unknown_dialect_key(write_config: Path):
    write_config.write_text(
        write_config.read_text(encoding="utf-8") + "dialect:\n  bed_tokens: [BED]\n", encoding="utf-8"
    )
    with pytest.raises(ConfigError):
        load_config(write_config)


def test_build_dialect_applies_overrides(write_config: Path):
    write_config.write_text(
        write_config.read_text(encoding="utf-8").replace("end: 532", "end: 510")
        + "dialect:\n"
        "  room_tokens: [BED]\n"
        "  charge_markers: [LEAD RN]\n"
        "  date_patterns:\n"
        "    - name: dotted\n"
        "      regex: '(\\d{2}\\.\\d{2}\\.\\d{4})'\n"
        "      formats: ['%d.%m.%Y']\n",
        encoding="utf-8",
    )
    dialect = build_dialect(load_config(write_config))
    assert dialect.room_end == 510
    assert len(dialect.room_numbers) == 10
    assert dialect.room_tokens == ("BED",)
    assert dialect.charge_markers == ("LEAD RN",)
    assert dialect.patient_tokens == ("PATIENT",)
    assert len(dialect.date_patterns) == 1
    assert dialect.date_patterns[0].formats == ("%d.%m.%Y",)


def test_build_dialect_defaults():
    dialect = build_dialect(ImportConfig(source_directory="./data"))
    assert dialect.room_numbers == range(501, 533)
    assert dialect.date_patterns == DEFAULT_DATE_PATTERNS


def test_build_dialect_bad_regex():
    cfg = ImportConfig(source_directory="./data", dialect_overrides={"weekday_pattern": "(unclosed"})
    with pytest.raises(ConfigError) as e:
        build_dialect(cfg)
    assert "invalid dialect regex" in str(e.value)
