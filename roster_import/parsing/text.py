from __future__ import annotations

import re
from collections.abc import Iterable

from roster_import.models.markup import Cell

"""Cell / text normalization helpers shared by all parsers."""

__all__ = [
    "cell_at",
    "cell_text",
    "list_from_cell",
    "contains_any",
    "normalize_label",
]

_WS = re.compile(r"\s+")


def cell_text(cell: Cell | None) -> str:
    """Rendered text of a cell without surrounding whitespace ("" if absent)."""
    if cell is None:
        return ""
    return cell.text.strip()


def list_from_cell(cell: Cell | None) -> list[str]:
    """Split a cell into its non-blank lines (one name per line)."""
    return [line.strip() for line in cell_text(cell).split("\n") if line.strip()]


def cell_at(cells: tuple[Cell, ...], index: int | None) -> Cell | None:
    if index is None or index < 0 or index >= len(cells):
        return None
    return cells[index]


def contains_any(text: str, tokens: Iterable[str]) -> bool:
    """Case-insensitive substring test against any token.

    Whitespace runs (including line breaks inside merged cells) compare as a
    single space, so "RN\\nDAYS" contains "RN DAY".
    """
    folded = " ".join(text.split()).casefold()
    return any(" ".join(t.split()).casefold() in folded for t in tokens if t.strip())


def normalize_label(text: str) -> str:
    """Lowercase and drop all whitespace ("RN\\nDays " -> "rndays")."""
    return _WS.sub("", text).casefold()
