from __future__ import annotations

import json
import logging
import time
from datetime import UTC, date, datetime
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..config.loader import ImportConfig, build_dialect
from ..logging.error_log import ErrorLogBuffer, ErrorRecord
from ..markup.reader import SUPPORTED_SUFFIXES, DocumentReadError, UnsupportedDocumentError, read_document
from ..models.dialect import RosterDialect
from ..models.processing_result import FileStat, FileStatus, ProcessingResult
from ..models.roster import Roster
from ..parsing.dates import Clock
from ..parsing.errors import GridHeaderNotFoundError
from .assembler import parse_roster
from .progress import ProgressTracker

logger = logging.getLogger(__name__)

"""Batch orchestration.

process_all() scans the source directory, parses every supported document,
writes one JSON roster per document and aggregates the run metrics. A
document that fails (unreadable, no grid header) is recorded in the error log
and the run continues with the next file.
"""


class ProcessingError(Exception):
    """Run-level failure (bad source directory, bad timezone)."""


ERROR_GRID_HEADER = "GRID_HEADER_NOT_FOUND"
ERROR_READ = "DOCUMENT_READ_ERROR"
ERROR_UNSUPPORTED = "UNSUPPORTED_DOCUMENT"


def scan_documents(directory: Path) -> list[Path]:
    """Supported documents in directory (non-recursive, sorted by name).

    Word lock files ("~$sheet.docx") are skipped.
    """
    if not directory.exists() or not directory.is_dir():
        raise ProcessingError(f"directory not found: {directory}")
    return sorted(
        p
        for p in directory.iterdir()
        if p.is_file() and p.suffix.lower() in SUPPORTED_SUFFIXES and not p.name.startswith("~$")
    )


def make_clock(timezone: str) -> Clock:
    """Today in the configured timezone (used when a sheet carries no date)."""
    try:
        tz = ZoneInfo(timezone)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ProcessingError(f"unknown timezone: {timezone}") from e

    def _today() -> date:
        return datetime.now(tz).date()

    return _today


def write_roster(roster: Roster, output_dir: Path, stem: str) -> Path:
    output_dir.mkdir(parents=True, exist_ok=True)
    out = output_dir / f"{stem}.json"
    out.write_text(json.dumps(roster.to_dict(), ensure_ascii=False, indent=2), encoding="utf-8")
    return out


def process_file(
    path: Path,
    dialect: RosterDialect,
    output_dir: Path,
    errors: ErrorLogBuffer,
    *,
    clock: Clock,
) -> FileStat:
    """Parse and write one document; failures become a FAILED FileStat."""
    started = time.perf_counter()

    def _failed(error_type: str, exc: Exception) -> FileStat:
        logger.error(f"{path.name}: {exc}")
        errors.append(ErrorRecord.create(path.name, error_type, str(exc)))
        return FileStat(
            file_name=path.name,
            status=FileStatus.FAILED,
            elapsed_seconds=time.perf_counter() - started,
            error=str(exc),
        )

    try:
        document = read_document(path)
        roster = parse_roster(document, dialect, clock=clock)
    except UnsupportedDocumentError as e:
        return _failed(ERROR_UNSUPPORTED, e)
    except DocumentReadError as e:
        return _failed(ERROR_READ, e)
    except GridHeaderNotFoundError as e:
        return _failed(ERROR_GRID_HEADER, e)

    out = write_roster(roster, output_dir, path.stem)
    logger.info(f"{path.name}: date={roster.date} rooms={roster.filled_rooms} -> {out}")
    return FileStat(
        file_name=path.name,
        status=FileStatus.SUCCESS,
        elapsed_seconds=time.perf_counter() - started,
        roster_date=roster.date,
        filled_rooms=roster.filled_rooms,
        output_path=str(out),
    )


def process_all(
    config: ImportConfig,
    dialect: RosterDialect | None = None,
    *,
    clock: Clock | None = None,
    errors: ErrorLogBuffer | None = None,
) -> ProcessingResult:
    """Parse every document of config.source_directory.

    Raises:
        ProcessingError: source directory missing or timezone unknown
    """
    dialect = dialect or build_dialect(config)
    clock = clock or make_clock(config.timezone)
    errors = errors or ErrorLogBuffer()
    output_dir = Path(config.output_directory)

    start_time = datetime.now(UTC)
    documents = scan_documents(Path(config.source_directory))
    logger.info(f"found {len(documents)} document(s) in {config.source_directory}")

    stats: list[FileStat] = []
    with ProgressTracker(len(documents)) as progress:
        for path in documents:
            progress.start_file(path)
            stat = process_file(path, dialect, output_dir, errors, clock=clock)
            stats.append(stat)
            progress.finish_file(stat)

    log_path = errors.flush()
    if log_path is not None:
        logger.warning(f"error log written: {log_path}")

    end_time = datetime.now(UTC)
    success = [s for s in stats if s.status is FileStatus.SUCCESS]
    return ProcessingResult(
        success_files=len(success),
        failed_files=len(stats) - len(success),
        total_filled_rooms=sum(s.filled_rooms for s in success),
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=(end_time - start_time).total_seconds(),
        file_stats=stats,
        error_log_path=str(log_path) if log_path is not None else None,
    )
