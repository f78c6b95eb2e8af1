from __future__ import annotations

from dataclasses import dataclass

"""Markup tree consumed by the roster parser.

The tree is produced by markup.reader from HTML or .docx input. Only table /
row / cell structure and rendered cell text are required, so any producer
that builds these objects is accepted.
"""

__all__ = [
    "Cell",
    "Row",
    "Table",
    "Document",
]


@dataclass(frozen=True)
class Cell:
    """A single table cell.

    text keeps the rendered line breaks of the cell (one line per paragraph
    or <br>), header/label detection depends on them inside merged cells.
    """
    text: str
    is_header: bool = False  # <th> in HTML input


@dataclass(frozen=True)
class Row:
    cells: tuple[Cell, ...] = ()

    @property
    def texts(self) -> list[str]:
        return [c.text.strip() for c in self.cells]

    @property
    def text(self) -> str:
        return " ".join(self.texts)

    def __len__(self) -> int:
        return len(self.cells)


@dataclass(frozen=True)
class Table:
    rows: tuple[Row, ...] = ()

    @property
    def text(self) -> str:
        return "\n".join(r.text for r in self.rows)


@dataclass(frozen=True)
class Document:
    """Parsed document: tables in document order plus the full text.

    text may carry content outside tables (paragraphs above the first table
    often hold the date). When empty, full_text falls back to table text.
    """
    tables: tuple[Table, ...] = ()
    text: str = ""

    @property
    def full_text(self) -> str:
        if self.text:
            return self.text
        return "\n".join(t.text for t in self.tables)
