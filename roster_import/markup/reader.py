from __future__ import annotations

import logging
import zipfile
from pathlib import Path

import docx
from bs4 import BeautifulSoup, Tag
from docx.opc.exceptions import PackageNotFoundError

from roster_import.models.markup import Cell, Document, Row, Table

"""Document readers: HTML / .docx -> markup tree.

read_html() walks tables produced by a .docx-to-HTML converter (mammoth style:
one <p> per cell paragraph). Cell text is rendered the way a browser's
innerText would be: <br> and block boundaries become line breaks, runs of
whitespace inside a line collapse to one space.

read_docx() reads the Word tables directly with python-docx. Horizontally
merged cells are reported by python-docx once per grid column; they are
collapsed to a single cell like an HTML colspan.
"""

__all__ = [
    "DocumentReadError",
    "UnsupportedDocumentError",
    "SUPPORTED_SUFFIXES",
    "read_html",
    "read_docx",
    "read_document",
]

logger = logging.getLogger(__name__)

SUPPORTED_SUFFIXES = (".docx", ".html", ".htm")

_BLOCK_TAGS = ["p", "div", "li", "h1", "h2", "h3", "h4", "h5", "h6", "table", "tr", "td", "th"]


class DocumentReadError(Exception):
    """Raised when a document cannot be opened or decoded."""


class UnsupportedDocumentError(DocumentReadError):
    """Raised for file types without a reader."""


def _rendered_text(node: Tag) -> str:
    for br in node.find_all("br"):
        br.replace_with("\n")
    for block in node.find_all(_BLOCK_TAGS):
        block.insert_before("\n")
        block.insert_after("\n")
    lines = (" ".join(line.split()) for line in node.get_text().split("\n"))
    return "\n".join(line for line in lines if line)


def _own_rows(table: Tag) -> list[Tag]:
    # nested tables contribute their own Table entries, not rows of the parent
    return [tr for tr in table.find_all("tr") if tr.find_parent("table") is table]


def read_html(html: str) -> Document:
    """Parse converter HTML into a Document (tables in document order)."""
    soup = BeautifulSoup(html, "html.parser")
    tables: list[Table] = []
    for table_tag in soup.find_all("table"):
        rows: list[Row] = []
        for tr in _own_rows(table_tag):
            cells = tuple(
                Cell(text=_rendered_text(td), is_header=td.name == "th")
                for td in tr.find_all(["td", "th"], recursive=False)
            )
            rows.append(Row(cells=cells))
        tables.append(Table(rows=tuple(rows)))
    text = _rendered_text(soup)
    logger.debug("html: %d tables", len(tables))
    return Document(tables=tuple(tables), text=text)


def _docx_row(row) -> Row:
    cells: list[Cell] = []
    previous = None
    for cell in row.cells:
        if previous is not None and cell._tc is previous:
            continue
        previous = cell._tc
        cells.append(Cell(text=cell.text))
    return Row(cells=tuple(cells))


def read_docx(path: Path) -> Document:
    """Read the tables and paragraph text of a Word document."""
    try:
        word = docx.Document(str(path))
    except (PackageNotFoundError, zipfile.BadZipFile, KeyError, ValueError) as e:
        raise DocumentReadError(
            f"failed to parse {path.name}: it might be corrupted or in an unsupported format ({e})"
        ) from e
    tables = tuple(Table(rows=tuple(_docx_row(r) for r in t.rows)) for t in word.tables)
    paragraphs = [p.text for p in word.paragraphs if p.text.strip()]
    text = "\n".join(paragraphs + [t.text for t in tables])
    logger.debug("docx %s: %d tables", path.name, len(tables))
    return Document(tables=tables, text=text)


def read_document(path: Path) -> Document:
    """Dispatch on file suffix.

    Raises:
        UnsupportedDocumentError: suffix not in SUPPORTED_SUFFIXES
        DocumentReadError: file missing or unreadable
    """
    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise UnsupportedDocumentError(f"unsupported document type: {path.name}")
    if not path.exists():
        raise DocumentReadError(f"file not found: {path}")
    if suffix == ".docx":
        return read_docx(path)
    try:
        html = path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        raise DocumentReadError(f"failed to read {path.name}: {e}") from e
    return read_html(html)
