"""Domain models for the roster import tool.

This package contains the markup tree the parsers consume, the dialect
configuration that drives them, the Roster value they produce and the
batch-run bookkeeping models.
"""

from .dialect import DatePattern, RosterDialect
from .markup import Cell, Document, Row, Table
from .roster import AssignmentRow, HeaderCandidate, Roster, ShiftLists, ShiftPair

__all__ = [
    # Configuration models
    "DatePattern",
    "RosterDialect",
    # Input tree
    "Cell",
    "Document",
    "Row",
    "Table",
    # Parse results
    "AssignmentRow",
    "HeaderCandidate",
    "Roster",
    "ShiftLists",
    "ShiftPair",
]
