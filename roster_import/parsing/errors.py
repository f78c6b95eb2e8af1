from __future__ import annotations

from collections.abc import Iterable

"""Parser exceptions.

Only structural failures are raised out of parse_roster. Per-field and per-row
problems are absorbed by the parsers and resolved with default values.
"""

__all__ = [
    "RosterParseError",
    "GridHeaderNotFoundError",
]


class RosterParseError(Exception):
    """Base class for fatal roster parse failures."""


class GridHeaderNotFoundError(RosterParseError):
    """Raised when no row of the content tables looks like the grid header."""

    def __init__(self, room_tokens: Iterable[str], patient_tokens: Iterable[str], scanned_rows: int) -> None:
        self.room_tokens = tuple(room_tokens)
        self.patient_tokens = tuple(patient_tokens)
        self.scanned_rows = scanned_rows
        super().__init__(
            "Could not find the assignment grid header row "
            f"(needs one of {'/'.join(self.room_tokens)} and {'/'.join(self.patient_tokens)}; "
            f"scanned {scanned_rows} rows). Please check the file format."
        )
