"""Heuristic parsers for staffing-sheet markup.

Leaf-first: text -> dates / headers -> info_block, grid, footer. The
document-level entry point is roster_import.services.assembler.parse_roster.
"""

from .dates import find_date, resolve_date
from .errors import GridHeaderNotFoundError, RosterParseError
from .headers import map_headers
from .text import cell_text, list_from_cell

__all__ = [
    "GridHeaderNotFoundError",
    "RosterParseError",
    "cell_text",
    "find_date",
    "list_from_cell",
    "map_headers",
    "resolve_date",
]
