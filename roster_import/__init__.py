"""ICU staffing-sheet roster import.

Parses hand-maintained assignment sheets (.docx / converted HTML) into a
structured Roster. The parsing core entry point is parse_roster().
"""

from .markup.reader import read_document, read_html
from .models.dialect import RosterDialect
from .models.roster import AssignmentRow, Roster
from .parsing.errors import GridHeaderNotFoundError, RosterParseError
from .services.assembler import parse_roster

__all__ = [
    "AssignmentRow",
    "GridHeaderNotFoundError",
    "Roster",
    "RosterDialect",
    "RosterParseError",
    "parse_roster",
    "read_document",
    "read_html",
]
