from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, NamedTuple

"""Roster domain models.

A Roster is the full record parsed from one staffing sheet: the shift date,
support staff (PCTs), charge nurses, a fixed-length room grid and the footer
lists (floats, respiratory therapists). Instances are immutable; downstream
editing works on the dict returned by to_dict().
"""

__all__ = [
    "AssignmentRow",
    "ShiftPair",
    "ShiftLists",
    "Roster",
    "HeaderCandidate",
    "ColumnMap",
]

# semantic key -> column index (None = not found)
ColumnMap = dict[str, "int | None"]


class HeaderCandidate(NamedTuple):
    """Score of one candidate grid header row (detection only, not stored).

    marked: every non-empty cell is a header cell (<th>) in the source
    """
    score: int
    index: int
    marked: bool = False

    @property
    def rank(self) -> tuple[int, bool]:
        return (self.score, self.marked)


@dataclass(frozen=True)
class AssignmentRow:
    """One room's patient / nurse binding."""
    room: str
    prec: str = ""
    patient: str = ""
    mrn: str = ""
    status: str = ""
    rn_day: str = ""
    ext_day: str = ""
    rn_night: str = ""
    ext_night: str = ""

    @staticmethod
    def empty(room: int) -> AssignmentRow:
        return AssignmentRow(room=str(room))

    @property
    def is_filled(self) -> bool:
        return bool(self.patient)

    def to_dict(self) -> dict[str, str]:
        return {
            "room": self.room,
            "prec": self.prec,
            "patient": self.patient,
            "mrn": self.mrn,
            "status": self.status,
            "rnDay": self.rn_day,
            "extDay": self.ext_day,
            "rnNight": self.rn_night,
            "extNight": self.ext_night,
        }


@dataclass(frozen=True)
class ShiftPair:
    day: str = ""
    night: str = ""


@dataclass(frozen=True)
class ShiftLists:
    day: tuple[str, ...] = ()
    night: tuple[str, ...] = ()


@dataclass(frozen=True)
class Roster:
    """One shift period's complete staffing record.

    assignments always holds one AssignmentRow per room of the configured
    range, in ascending room order. List fields are never None.
    """
    date: str
    assignments: tuple[AssignmentRow, ...]
    pcts_day: str = ""
    pcts_night: str = ""
    charge_nurses: ShiftPair = field(default_factory=ShiftPair)
    floats: ShiftLists = field(default_factory=ShiftLists)
    respiratory: tuple[str, ...] = ()

    def assignment_for(self, room: int | str) -> AssignmentRow | None:
        key = str(room)
        for row in self.assignments:
            if row.room == key:
                return row
        return None

    @property
    def filled_rooms(self) -> int:
        return sum(1 for r in self.assignments if r.is_filled)

    def to_dict(self) -> dict[str, Any]:
        """Serialize using the camelCase keys of the dashboard export."""
        return {
            "date": self.date,
            "pctsDay": self.pcts_day,
            "pctsNight": self.pcts_night,
            "chargeNurses": {"day": self.charge_nurses.day, "night": self.charge_nurses.night},
            "assignments": [r.to_dict() for r in self.assignments],
            "floats": {"day": list(self.floats.day), "night": list(self.floats.night)},
            "respiratory": list(self.respiratory),
        }
