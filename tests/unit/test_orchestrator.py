from __future__ import annotations

import json
from datetime import date
from pathlib import Path
from unittest.mock import patch

import pytest

from roster_import.config.loader import ImportConfig
from roster_import.logging.error_log import ErrorLogBuffer
from roster_import.models.dialect import RosterDialect
from roster_import.models.processing_result import FileStatus
from roster_import.services.orchestrator import (
    ERROR_GRID_HEADER,
    ERROR_READ,
    ProcessingError,
    make_clock,
    process_all,
    process_file,
    scan_documents,
)


def _config(base: Path) -> ImportConfig:
    return ImportConfig(source_directory=str(base / "data"), output_directory=str(base / "out"))


def test_scan_documents_filters_and_sorts(tmp_path: Path):
    for name in ["b.docx", "a.html", "c.HTM", "notes.txt", "~$b.docx"]:
        (tmp_path / name).write_text("x", encoding="utf-8")
    (tmp_path / "sub.html").mkdir()
    assert [p.name for p in scan_documents(tmp_path)] == ["a.html", "b.docx", "c.HTM"]


def test_scan_documents_missing_directory(tmp_path: Path):
    with pytest.raises(ProcessingError) as e:
        scan_documents(tmp_path / "nope")
    assert "directory not found" in str(e.value)


def test_make_clock():
    assert isinstance(make_clock("Asia/Tokyo")(), date)
    with pytest.raises(ProcessingError):
        make_clock("Not/AZone")


def test_process_file_success_writes_json(tmp_path: Path, sample_html: str, fixed_clock):
    src = tmp_path / "sheet.html"
    src.write_text(sample_html, encoding="utf-8")
    errors = ErrorLogBuffer(tmp_path / "logs")
    stat = process_file(src, RosterDialect(), tmp_path / "out", errors, clock=fixed_clock)
    assert stat.status is FileStatus.SUCCESS
    assert stat.roster_date == "2025-04-04"
    assert stat.filled_rooms == 2
    data = json.loads((tmp_path / "out" / "sheet.json").read_text(encoding="utf-8"))
    assert data["chargeNurses"] == {"day": "#7501", "night": "#7601"}
    assert len(errors) == 0


def test_process_file_failures_are_recorded(tmp_path: Path, no_grid_html: str, fixed_clock):
    no_grid = tmp_path / "no_grid.html"
    no_grid.write_text(no_grid_html, encoding="utf-8")
    broken = tmp_path / "broken.docx"
    broken.write_bytes(b"garbage")
    errors = ErrorLogBuffer(tmp_path / "logs")

    s1 = process_file(no_grid, RosterDialect(), tmp_path / "out", errors, clock=fixed_clock)
    s2 = process_file(broken, RosterDialect(), tmp_path / "out", errors, clock=fixed_clock)
    assert s1.status is FileStatus.FAILED and s2.status is FileStatus.FAILED
    assert "grid header" in s1.error

    path = errors.flush()
    records = [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines()]
    assert [(r["file"], r["error_type"]) for r in records] == [
        ("no_grid.html", ERROR_GRID_HEADER),
        ("broken.docx", ERROR_READ),
    ]
    assert not (tmp_path / "out").exists()


def test_process_all_aggregates(tmp_path: Path, sample_html: str, no_grid_html: str, fixed_clock):
    data = tmp_path / "data"
    data.mkdir()
    (data / "a.html").write_text(sample_html, encoding="utf-8")
    (data / "b.html").write_text(sample_html, encoding="utf-8")
    (data / "c.html").write_text(no_grid_html, encoding="utf-8")
    errors = ErrorLogBuffer(tmp_path / "logs")

    with patch("roster_import.services.progress.is_tty_enabled", return_value=False):
        result = process_all(_config(tmp_path), clock=fixed_clock, errors=errors)

    assert result.total_files == 3
    assert result.success_files == 2
    assert result.failed_files == 1
    assert result.total_filled_rooms == 4
    assert [s.file_name for s in result.file_stats] == ["a.html", "b.html", "c.html"]
    assert result.error_log_path is not None
    assert Path(result.error_log_path).parent == tmp_path / "logs"
    assert sorted(p.name for p in (tmp_path / "out").iterdir()) == ["a.json", "b.json"]


def test_process_all_empty_directory(tmp_path: Path):
    (tmp_path / "data").mkdir()
    errors = ErrorLogBuffer(tmp_path / "logs")
    result = process_all(_config(tmp_path), errors=errors)
    assert result.total_files == 0
    assert result.error_log_path is None


def test_process_all_missing_directory(tmp_path: Path):
    with pytest.raises(ProcessingError):
        process_all(_config(tmp_path), errors=ErrorLogBuffer(tmp_path / "logs"))
