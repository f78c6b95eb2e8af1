from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

import pandas as pd
from dotenv import load_dotenv

from roster_import.config.loader import DEFAULT_CONFIG_PATH, ConfigError, build_dialect, load_config
from roster_import.logging.init import enable_debug, log_summary, setup_logging
from roster_import.markup.reader import DocumentReadError, read_document
from roster_import.parsing.errors import GridHeaderNotFoundError
from roster_import.services.assembler import parse_roster
from roster_import.services.orchestrator import ProcessingError, make_clock, process_all, scan_documents
from roster_import.services.summary import render_summary_body

"""CLI entrypoint.

Flow:
- Load .env (ROSTER_CONFIG may point at a non-default config file)
- Load config, build the dialect
- Parse every document of source_directory, write JSON rosters
- Print the SUMMARY line and exit with the run status
"""

EXIT_SUCCESS_ALL = 0
EXIT_FATAL = 1
EXIT_PARTIAL_FAILURE = 2

CONFIG_ENV = "ROSTER_CONFIG"


def _load_env_file(path: Path, override: bool = False) -> None:
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="ICU staffing sheet -> roster JSON")
    p.add_argument("--config", type=Path, default=None, help=f"Config file (default: ${CONFIG_ENV} or {DEFAULT_CONFIG_PATH})")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--inspect-data", action="store_true", help="Print parsed header fields & assignment grid then exit")
    return p.parse_args(argv)


def _inspect_data(cfg, dialect) -> int:
    try:
        documents = scan_documents(Path(cfg.source_directory))
    except ProcessingError as e:
        print(f"inspect: {e}")
        return EXIT_FATAL
    if not documents:
        print("inspect: no documents")
        return EXIT_SUCCESS_ALL
    clock = make_clock(cfg.timezone)
    for f in documents:
        print(f"FILE: {f.name}")
        try:
            roster = parse_roster(read_document(f), dialect, clock=clock)
        except (DocumentReadError, GridHeaderNotFoundError) as e:
            print(f"  error={e}")
            continue
        print(f"  date={roster.date} charge_day={roster.charge_nurses.day} charge_night={roster.charge_nurses.night}")
        print(f"  pcts_day={roster.pcts_day!r} pcts_night={roster.pcts_night!r}")
        print(f"  floats_day={list(roster.floats.day)} floats_night={list(roster.floats.night)}")
        print(f"  respiratory={list(roster.respiratory)}")
        grid = pd.DataFrame([r.to_dict() for r in roster.assignments])
        print(grid.to_string(index=False))
    return EXIT_SUCCESS_ALL


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # None のときのみ sys.argv を読む (テストで [] を渡すケース)
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"))

    if args.debug:
        enable_debug()

    config_path = args.config or Path(os.getenv(CONFIG_ENV, str(DEFAULT_CONFIG_PATH)))
    try:
        cfg = load_config(config_path)
        dialect = build_dialect(cfg)
    except (ConfigError, ValueError) as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    directory = Path(cfg.source_directory)
    if not directory.exists():
        logger.error(f"directory not found: {directory}")
        return EXIT_FATAL

    logger.info(f"Processing files from: {directory}")

    if args.inspect_data:
        try:
            return _inspect_data(cfg, dialect)
        except ProcessingError as e:
            logger.error(f"processing: {e}")
            return EXIT_FATAL

    try:
        result = process_all(cfg, dialect)
    except ProcessingError as e:
        logger.error(f"processing: {e}")
        return EXIT_FATAL

    log_summary(render_summary_body(result.total_files, result))

    if result.failed_files > 0:
        return EXIT_PARTIAL_FAILURE
    return EXIT_SUCCESS_ALL
