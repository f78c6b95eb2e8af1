from __future__ import annotations

import logging
from datetime import date

from ..models.dialect import RosterDialect
from ..models.markup import Document, Row, Table
from ..models.roster import Roster, ShiftPair
from ..parsing.dates import Clock, find_date, format_date
from ..parsing.extract import first_present
from ..parsing.grid import parse_grid
from ..parsing.info_block import InfoBlock, parse_info_block
from ..parsing.text import contains_any

logger = logging.getLogger(__name__)

"""Roster assembly: the single entry point of the parsing core.

parse_roster() picks the metadata table, flattens every other table into one
row list (the .docx conversion sometimes splits the grid into several tables),
runs the info-block and grid parsers and merges the results with their
documented defaults.

Only GridHeaderNotFoundError escapes; every other problem resolves to a
default value so one malformed row cannot block the rest of the sheet.
"""

__all__ = [
    "select_metadata_table",
    "content_rows",
    "parse_roster",
]


def select_metadata_table(tables: tuple[Table, ...], dialect: RosterDialect) -> Table | None:
    """First table mentioning the charge nurse marker, else the first table.

    The fallback may misattribute a content table as metadata on unusual
    sheets; the grid header check downstream still catches most of those.
    """
    for table in tables:
        if contains_any(table.text, dialect.charge_markers):
            return table
    if tables:
        logger.warning("metadata table not identified; using the first table")
        return tables[0]
    return None


def content_rows(tables: tuple[Table, ...], metadata: Table | None) -> list[Row]:
    return [row for table in tables if table is not metadata for row in table.rows]


def parse_roster(
    document: Document,
    dialect: RosterDialect | None = None,
    *,
    clock: Clock | None = None,
) -> Roster:
    """Parse a markup document into a Roster.

    Raises:
        GridHeaderNotFoundError: no assignment grid header row could be located
    """
    dialect = dialect or RosterDialect()
    clock = clock or date.today

    tables = document.tables
    metadata = select_metadata_table(tables, dialect)
    rows = content_rows(tables, metadata)
    logger.debug("tables=%d content_rows=%d", len(tables), len(rows))

    info = parse_info_block(metadata, dialect) if metadata is not None else InfoBlock()
    grid = parse_grid(rows, dialect)

    roster_date = first_present(
        "date",
        lambda: info.date,
        lambda: find_date(document.full_text, dialect),
        default_factory=lambda: format_date(clock()),
    )

    return Roster(
        date=roster_date,
        assignments=grid.assignments,
        pcts_day=first_present("pcts_day", lambda: info.pcts_day, default=""),
        pcts_night=first_present("pcts_night", lambda: info.pcts_night, default=""),
        charge_nurses=ShiftPair(
            day=first_present("charge_day", lambda: info.charge_nurses.day, default=""),
            night=first_present("charge_night", lambda: info.charge_nurses.night, default=""),
        ),
        floats=grid.floats,
        respiratory=grid.respiratory,
    )
