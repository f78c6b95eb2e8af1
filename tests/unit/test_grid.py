from __future__ import annotations

from dataclasses import replace

import pytest

from roster_import.models.dialect import RosterDialect
from roster_import.models.markup import Cell, Row
from roster_import.parsing.errors import GridHeaderNotFoundError
from roster_import.parsing.grid import find_header_row, parse_grid

HEADER = ["RM", "PREC", "PATIENT", "MRN", "STATUS", "RN DAYS", "EXT", "RN NIGHTS", "EXT"]


def _row(*texts: str) -> Row:
    return Row(cells=tuple(Cell(t) for t in texts))


def _body(room: str, patient: str, rn_day: str = "") -> Row:
    return _row(room, "", patient, "", "", rn_day, "", "", "")


def test_fixed_length_and_defaults():
    grid = parse_grid([_row(*HEADER)])
    assert len(grid.assignments) == 32
    assert [a.room for a in grid.assignments] == [str(n) for n in range(501, 533)]
    assert all(a.patient == "" and a.rn_day == "" for a in grid.assignments)


def test_room_round_trip_leaves_other_slots_untouched():
    grid = parse_grid([_row(*HEADER), _body("512", "J. Doe", "#7502")])
    slot = grid.assignments[512 - 501]
    assert slot.room == "512"
    assert slot.patient == "J. Doe"
    assert slot.rn_day == "#7502"
    others = [a for i, a in enumerate(grid.assignments) if i != 11]
    assert all(a.patient == "" for a in others)


@pytest.mark.parametrize("room", ["999", "abc", "", "500", "533", "  "])
def test_garbage_and_out_of_range_rooms_are_skipped(room: str):
    grid = parse_grid([_row(*HEADER), _body(room, "Ghost")])
    assert all(a.patient == "" for a in grid.assignments)


def test_duplicate_room_last_row_wins():
    grid = parse_grid([_row(*HEADER), _body("505", "First"), _body("505", "Second")])
    assert grid.assignments[4].patient == "Second"


def test_room_with_suffix_uses_leading_number():
    grid = parse_grid([_row(*HEADER), _body("507A", "Suffix")])
    assert grid.assignments[6].room == "507"
    assert grid.assignments[6].patient == "Suffix"


def test_short_row_missing_columns_default_to_empty():
    grid = parse_grid([_row(*HEADER), _row("510", "I", "Short")])
    slot = grid.assignments[9]
    assert slot.prec == "I"
    assert slot.patient == "Short"
    assert slot.rn_night == ""
    assert slot.ext_night == ""


def test_unmapped_column_defaults_to_empty():
    grid = parse_grid([_row("ROOM", "PATIENT", "RN DAYS"), _row("512", "J. Doe", "#7502")])
    slot = grid.assignments[11]
    assert slot.patient == "J. Doe"
    assert slot.rn_day == "#7502"
    assert slot.mrn == ""
    assert slot.ext_day == ""
    assert grid.column_map["mrn"] is None


def test_missing_header_is_fatal():
    rows = [_row("512", "J. Doe"), _row("ROOM only"), _row("PATIENT only")]
    with pytest.raises(GridHeaderNotFoundError) as e:
        parse_grid(rows)
    assert "grid header" in str(e.value)
    assert e.value.scanned_rows == 3


def test_header_detection_prefers_higher_score():
    rows = [
        _row("PATIENT ROOM ASSIGNMENTS"),
        _row(*HEADER),
        _body("501", "A. Smith"),
    ]
    assert find_header_row(rows) == 1
    grid = parse_grid(rows)
    assert grid.header_index == 1
    assert grid.assignments[0].patient == "A. Smith"


def test_header_cells_break_score_ties():
    plain = _row("ROOM", "PATIENT")
    marked = Row(cells=(Cell("RM", is_header=True), Cell("PATIENT", is_header=True), Cell("")))
    assert find_header_row([plain, marked]) == 1
    # equal score and both plain: earliest row
    assert find_header_row([plain, _row("RM", "PATIENT")]) == 0


def test_body_stops_at_footer_marker():
    rows = [
        _row(*HEADER),
        _body("501", "A. Smith"),
        _row("FLOATS (DAYS)\nDana", "FLOATS (NIGHTS)\nFay"),
        _body("502", "Not grid"),
    ]
    grid = parse_grid(rows)
    assert grid.footer_start == 2
    assert grid.assignments[1].patient == ""
    assert grid.floats.day == ("Dana",)
    assert grid.floats.night == ("Fay",)


def test_room_row_mentioning_respiratory_is_still_body():
    rows = [
        _row(*HEADER),
        _row("503", "", "B. Jones", "", "Respiratory failure", "#7502", "", "", ""),
        _body("504", "C. Lee"),
    ]
    grid = parse_grid(rows)
    assert grid.footer_start == 3
    assert grid.assignments[2].status == "Respiratory failure"
    assert grid.assignments[3].patient == "C. Lee"


@pytest.mark.parametrize("start,end", [(1, 1), (101, 110), (501, 532), (700, 763)])
def test_any_room_range_yields_exact_length(start: int, end: int):
    dialect = replace(RosterDialect(), room_start=start, room_end=end)
    grid = parse_grid([_row(*HEADER), _body(str(start), "Edge")], dialect)
    assert len(grid.assignments) == end - start + 1
    assert [a.room for a in grid.assignments] == [str(n) for n in range(start, end + 1)]
    assert grid.assignments[0].patient == "Edge"
