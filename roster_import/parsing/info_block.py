from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass, field

from roster_import.models.dialect import RosterDialect
from roster_import.models.markup import Cell, Row, Table
from roster_import.models.roster import ShiftPair
from roster_import.parsing.dates import find_date
from roster_import.parsing.shifts import DAY, NIGHT, ShiftMatcher
from roster_import.parsing.text import cell_text, contains_any

"""Metadata block ("info table") parser.

The block sits above the grid and carries the shift date, the PCT list and the
charge nurse for each shift. One row may feed several fields, a shift's info
may be spread over several rows and one row may carry both shifts
("7A-7P CHARGE NURSE: #7501 | 7P-7A CHARGE NURSE: #7601").

Each PCT / charge marker is filed under the nearest shift token before it in
the row. A marker with no shift token before it takes the row's shift, and a
row without any shift token belongs to the shift the rows above ended on.
"""

__all__ = [
    "InfoBlock",
    "parse_info_block",
]

logger = logging.getLogger(__name__)

PCTS = "pcts"
CHARGE = "charge"


@dataclass(frozen=True)
class InfoBlock:
    date: str | None = None
    pcts_day: str = ""
    pcts_night: str = ""
    charge_nurses: ShiftPair = field(default_factory=ShiftPair)


@dataclass(frozen=True)
class _Hit:
    kind: str
    shift: str | None
    value: str


def _alternation(tokens: Iterable[str]) -> str:
    # longest first so "PCT'S" wins over "PCT"
    ordered = sorted({t for t in tokens if t}, key=len, reverse=True)
    return "|".join(re.escape(t) for t in ordered)


class _Patterns:
    def __init__(self, dialect: RosterDialect) -> None:
        stops = _alternation(
            dialect.day_shift_tokens
            + dialect.night_shift_tokens
            + dialect.charge_markers
            + dialect.support_staff_markers
        )
        support = _alternation(dialect.support_staff_markers)
        charge = _alternation(dialect.charge_markers)
        value = rf"(.*?)\s*(?=(?<!\w)(?:{stops})s?(?!\w)|$)"
        self.weekday = re.compile(dialect.weekday_pattern, re.IGNORECASE)
        self.support = re.compile(rf"(?:{support})\s*:?\s*{value}", re.IGNORECASE | re.DOTALL)
        self.support_value = re.compile(rf"^\s*{value}", re.IGNORECASE | re.DOTALL)
        # value optional: "CHARGE NURSE:" | "#7501" split over two cells
        self.charge = re.compile(rf"(?:{charge})\s*:?\s*(#?\w+)?", re.IGNORECASE)
        self.charge_value = re.compile(r"^\s*(#?\w+)")
        self.shifts = ShiftMatcher(dialect)


def _clean(value: str | None) -> str:
    return (value or "").strip(" :\n")


def _value_in_next_cell(cells: tuple[Cell, ...], index: int, kind: str, patterns: _Patterns) -> str:
    following = (cell_text(c) for c in cells[index + 1:])
    text = next((t for t in following if t), "")
    if not text or patterns.support.search(text) or patterns.charge.search(text):
        return ""
    if any(pos == 0 for pos, _ in patterns.shifts.positions(text)):
        return ""
    regex = patterns.support_value if kind == PCTS else patterns.charge_value
    m = regex.search(text)
    return _clean(m.group(1)) if m else ""


def _row_hits(row: Row, patterns: _Patterns) -> tuple[list[_Hit], str | None]:
    """Marker values of one row in reading order, plus the last shift token seen."""
    hits: list[_Hit] = []
    current: str | None = None
    for index, cell in enumerate(row.cells):
        text = cell_text(cell)
        if not text:
            continue
        events = [(pos, "", shift) for pos, shift in patterns.shifts.positions(text)]
        events += [(m.start(), PCTS, _clean(m.group(1))) for m in patterns.support.finditer(text)]
        events += [(m.start(), CHARGE, _clean(m.group(1))) for m in patterns.charge.finditer(text)]
        for _, kind, value in sorted(events, key=lambda e: e[0]):
            if not kind:
                current = value
                continue
            value = value or _value_in_next_cell(row.cells, index, kind, patterns)
            if value:
                hits.append(_Hit(kind=kind, shift=current, value=value))
    return hits, current


def parse_info_block(table: Table, dialect: RosterDialect | None = None) -> InfoBlock:
    """Extract date, PCTs and charge nurses from the metadata table.

    Missing values stay empty ("" / None for the date); nothing is raised.
    """
    dialect = dialect or RosterDialect()
    patterns = _Patterns(dialect)

    found_date: str | None = None
    found: dict[str, dict[str, str]] = {PCTS: {DAY: "", NIGHT: ""}, CHARGE: {DAY: "", NIGHT: ""}}
    inherited: str | None = None

    for index, row in enumerate(table.rows):
        text = row.text
        if not text.strip():
            continue

        if found_date is None and (
            patterns.weekday.search(text) or contains_any(text, dialect.date_label_tokens)
        ):
            found_date = find_date(text, dialect)

        hits, last_shift = _row_hits(row, patterns)
        row_shift = patterns.shifts.shift_of(text) or inherited
        for hit in hits:
            shift = hit.shift or row_shift
            if shift is None:
                logger.debug("info row %d: %s %r has no shift", index, hit.kind, hit.value)
                continue
            if not found[hit.kind][shift]:
                found[hit.kind][shift] = hit.value
                logger.debug("info row %d: %s %s %r", index, shift, hit.kind, hit.value)
        inherited = last_shift or inherited

    pcts = found[PCTS]
    # 夜勤 PCT 欄が空のシートは日勤と同じ体制
    if pcts[DAY] and not pcts[NIGHT]:
        pcts[NIGHT] = pcts[DAY]

    return InfoBlock(
        date=found_date,
        pcts_day=pcts[DAY],
        pcts_night=pcts[NIGHT],
        charge_nurses=ShiftPair(day=found[CHARGE][DAY], night=found[CHARGE][NIGHT]),
    )
