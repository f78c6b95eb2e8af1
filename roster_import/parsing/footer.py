from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from roster_import.models.dialect import RosterDialect
from roster_import.models.markup import Cell, Row
from roster_import.models.roster import ShiftLists
from roster_import.parsing.shifts import DAY, NIGHT, ShiftMatcher
from roster_import.parsing.text import cell_at, contains_any, list_from_cell

"""Footer list parser (respiratory therapists, floats).

Two layouts occur below the grid:

- label and names in one cell ("FLOATS (DAYS)\\nJane\\nBob")
- a label row followed by a data row, names in the same column
  ("RESPIRATORY THERAPISTS | FLOATS (DAYS) | FLOATS (NIGHTS)" then the lists)

Both are handled per cell. The first non-empty list found for a target wins.
"""

__all__ = [
    "FooterSection",
    "parse_footer",
]

logger = logging.getLogger(__name__)

RESPIRATORY = "respiratory"
FLOAT_DAY = "float_day"
FLOAT_NIGHT = "float_night"


@dataclass(frozen=True)
class FooterSection:
    floats: ShiftLists = field(default_factory=ShiftLists)
    respiratory: tuple[str, ...] = ()


def _classify(text: str, dialect: RosterDialect, shifts: ShiftMatcher) -> str | None:
    # only label lines count: "FLOATS (DAYS)\nKnight" is a day list
    label = " ".join(line for line in text.split("\n") if _is_label_line(line, dialect))
    if contains_any(label, dialect.float_tokens):
        shift = shifts.shift_of(label)
        if shift == NIGHT:
            return FLOAT_NIGHT
        if shift == DAY:
            return FLOAT_DAY
        return None
    if contains_any(label, dialect.respiratory_tokens):
        return RESPIRATORY
    return None


def _is_label_line(line: str, dialect: RosterDialect) -> bool:
    return contains_any(line, dialect.footer_tokens)


def _names_in_cell(cell: Cell | None, dialect: RosterDialect) -> list[str]:
    return [line for line in list_from_cell(cell) if not _is_label_line(line, dialect)]


def parse_footer(rows: Sequence[Row], dialect: RosterDialect | None = None) -> FooterSection:
    """Collect float and respiratory lists from the rows after the grid body."""
    dialect = dialect or RosterDialect()
    shifts = ShiftMatcher(dialect)
    found: dict[str, list[str]] = {RESPIRATORY: [], FLOAT_DAY: [], FLOAT_NIGHT: []}

    for index, row in enumerate(rows):
        next_row = rows[index + 1] if index + 1 < len(rows) else None
        for col, cell in enumerate(row.cells):
            target = _classify(cell.text, dialect, shifts)
            if target is None or found[target]:
                continue
            names = _names_in_cell(cell, dialect)
            if not names and next_row is not None:
                below = cell_at(next_row.cells, col)
                if below is not None and _classify(below.text, dialect, shifts) is None:
                    names = _names_in_cell(below, dialect)
            if names:
                logger.debug("footer row %d col %d: %s -> %d names", index, col, target, len(names))
                found[target] = names

    return FooterSection(
        floats=ShiftLists(day=tuple(found[FLOAT_DAY]), night=tuple(found[FLOAT_NIGHT])),
        respiratory=tuple(found[RESPIRATORY]),
    )
