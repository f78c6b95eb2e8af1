from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass, field

from roster_import.models.dialect import RosterDialect
from roster_import.models.markup import Row
from roster_import.models.roster import AssignmentRow, ColumnMap, HeaderCandidate, ShiftLists
from roster_import.parsing.errors import GridHeaderNotFoundError
from roster_import.parsing.footer import parse_footer
from roster_import.parsing.headers import build_matchers, contains_token, map_headers
from roster_import.parsing.text import cell_at, cell_text, contains_any

"""Assignment grid parser.

Steps:
1. Find the grid header row among all content rows (room + patient tokens,
   best keyword score wins)
2. Map header cells to semantic columns
3. Body = rows after the header up to the first footer marker row
4. Place body rows into a fixed, room-indexed list (one slot per room of the
   dialect's range); bad or out-of-range room numbers are skipped silently,
   duplicate rooms: last row wins
5. Hand the remaining rows to the footer parser
"""

__all__ = [
    "GridSection",
    "find_header_row",
    "map_grid_columns",
    "parse_grid",
]

logger = logging.getLogger(__name__)

_LEADING_INT = re.compile(r"^\s*(\d+)")


@dataclass(frozen=True)
class GridSection:
    assignments: tuple[AssignmentRow, ...]
    header_index: int
    footer_start: int
    column_map: ColumnMap = field(default_factory=dict)
    floats: ShiftLists = field(default_factory=ShiftLists)
    respiratory: tuple[str, ...] = ()


def _score(text: str, dialect: RosterDialect) -> int:
    groups = (
        dialect.room_tokens,
        dialect.patient_tokens,
        dialect.nurse_day_tokens,
        dialect.nurse_night_tokens,
    )
    return sum(1 for g in groups if contains_any(text, g))


def _is_marked(row: Row) -> bool:
    filled = [c for c in row.cells if c.text.strip()]
    return bool(filled) and all(c.is_header for c in filled)


def find_header_row(rows: Sequence[Row], dialect: RosterDialect | None = None) -> int:
    """Index of the grid header row.

    Among rows with a room and a patient token the highest keyword score wins;
    on a tie a row of <th> cells beats a plain one, then the earliest row.

    Raises:
        GridHeaderNotFoundError: no row carries both a room and a patient token
    """
    dialect = dialect or RosterDialect()
    best: HeaderCandidate | None = None
    for index, row in enumerate(rows):
        text = row.text
        if not (contains_any(text, dialect.room_tokens) and contains_any(text, dialect.patient_tokens)):
            continue
        candidate = HeaderCandidate(score=_score(text, dialect), index=index, marked=_is_marked(row))
        if best is None or candidate.rank > best.rank:
            best = candidate
    if best is None:
        raise GridHeaderNotFoundError(dialect.room_tokens, dialect.patient_tokens, len(rows))
    logger.debug("grid header at row %d (score=%d)", best.index, best.score)
    return best.index


def _positional_extension(headers: list[str], after: int | None, before: int | None, dialect: RosterDialect) -> int | None:
    if after is None:
        return None
    is_ext = contains_token(*dialect.extension_tokens)
    upper = before if before is not None and before > after else len(headers)
    return next((i for i in range(after + 1, upper) if is_ext(headers[i])), None)


def map_grid_columns(headers: list[str], dialect: RosterDialect) -> ColumnMap:
    """Column map for the grid header, extension columns resolved by position
    when the header only says "EXT"."""
    column_map = map_headers(headers, build_matchers(dialect))
    if column_map["ext_day"] is None:
        column_map["ext_day"] = _positional_extension(
            headers, column_map["rn_day"], column_map["rn_night"], dialect
        )
    if column_map["ext_night"] is None:
        column_map["ext_night"] = _positional_extension(
            headers, column_map["rn_night"], None, dialect
        )
    return column_map


def _room_number(text: str) -> int | None:
    m = _LEADING_INT.match(text)
    return int(m.group(1)) if m else None


def _footer_start(rows: Sequence[Row], header_index: int, room_col: int | None, dialect: RosterDialect) -> int:
    for index in range(header_index + 1, len(rows)):
        row = rows[index]
        if not contains_any(row.text, dialect.footer_tokens):
            continue
        # a room row whose status mentions e.g. "respiratory" is still body
        room = _room_number(cell_text(cell_at(row.cells, room_col)))
        if room is not None and dialect.in_range(room):
            continue
        return index
    return len(rows)


def _build_row(room: int, row: Row, column_map: ColumnMap) -> AssignmentRow:
    def col(key: str) -> str:
        return cell_text(cell_at(row.cells, column_map.get(key)))

    return AssignmentRow(
        room=str(room),
        prec=col("prec"),
        patient=col("patient"),
        mrn=col("mrn"),
        status=col("status"),
        rn_day=col("rn_day"),
        ext_day=col("ext_day"),
        rn_night=col("rn_night"),
        ext_night=col("ext_night"),
    )


def parse_grid(rows: Sequence[Row], dialect: RosterDialect | None = None) -> GridSection:
    """Rebuild the room-indexed assignment list from the content rows.

    Parameters
    ----------
    rows: every row of every non-metadata table, in document order
    dialect: token sets and room range (defaults to the 501-532 template)
    """
    dialect = dialect or RosterDialect()
    header_index = find_header_row(rows, dialect)
    headers = [cell_text(c) for c in rows[header_index].cells]
    column_map = map_grid_columns(headers, dialect)
    missing = [k for k, v in column_map.items() if v is None]
    if missing:
        logger.debug("grid columns not found: %s", ", ".join(missing))

    room_col = column_map["room"]
    footer_start = _footer_start(rows, header_index, room_col, dialect)
    slots = [AssignmentRow.empty(n) for n in dialect.room_numbers]

    if room_col is None:
        logger.warning("grid header has no room column; assignments left empty")
    else:
        for index in range(header_index + 1, footer_start):
            row = rows[index]
            room = _room_number(cell_text(cell_at(row.cells, room_col)))
            if room is None or not dialect.in_range(room):
                # 空行・区切り行はよくあるので静かにスキップ
                logger.debug("grid row %d skipped (room=%r)", index, room)
                continue
            slot = room - dialect.room_start
            if slots[slot].is_filled:
                logger.debug("grid row %d overrides room %d", index, room)
            slots[slot] = _build_row(room, row, column_map)

    footer = parse_footer(rows[footer_start:], dialect)
    return GridSection(
        assignments=tuple(slots),
        header_index=header_index,
        footer_start=footer_start,
        column_map=column_map,
        floats=footer.floats,
        respiratory=footer.respiratory,
    )
