"""Table extraction.

Walks every ``<table>`` in a document and returns it as a grid of cells.
A cell is its trimmed text, or a :class:`LinkCell` when it holds anchors so
that link targets are never flattened into the surrounding text.
"""
from __future__ import annotations
import logging
from typing import List, Optional

from bs4 import Tag

from court_records.ingest.schemas import Cell, Link, LinkCell, Row, Table
from court_records.parsing.walker import HtmlWalker

logger = logging.getLogger(__name__)


def link_from_anchor(walker: HtmlWalker, anchor: Tag) -> Link:
    data = {k: str(v) for k, v in anchor.attrs.items() if k.startswith("data-")}
    return Link(
        text=walker.text_content(anchor, breaks=False),
        href=walker.resolve_url(walker.attr(anchor, "href")),
        target=walker.attr(anchor, "target"),
        data=data,
    )


def extract_cell(walker: HtmlWalker, cell: Tag) -> Cell:
    anchors = walker.find_by_tag("a", within=cell)
    if anchors:
        return LinkCell(links=[link_from_anchor(walker, a) for a in anchors])
    return walker.text_content(cell)


def extract_row(walker: HtmlWalker, tr: Tag) -> Row:
    return [extract_cell(walker, c) for c in walker.children(tr, "td", "th")]


def extract_table(walker: HtmlWalker, table: Tag) -> Table:
    rows: Table = []
    for tr in walker.own_rows(table):
        row = extract_row(walker, tr)
        # stray whitespace-only <tr>
        if row:
            rows.append(row)
    return rows


def tables_from_walker(walker: HtmlWalker) -> List[Table]:
    result: List[Table] = []
    for table in walker.find_by_tag("table"):
        grid = extract_table(walker, table)
        if grid:
            result.append(grid)
    return result


def extract_tables(markup: Optional[str], base_url: Optional[str] = None) -> List[Table]:
    """Every non-empty table in ``markup``, in document order.

    Never raises: a document the parser cannot walk yields ``[]``.
    """
    if not markup:
        return []
    try:
        return tables_from_walker(HtmlWalker(markup, base_url=base_url))
    except Exception as e:
        logger.warning(f"Table extraction failed, no tables returned: {e}")
        return []


def cell_text(cell: Optional[Cell]) -> str:
    if cell is None:
        return ""
    if isinstance(cell, LinkCell):
        return cell.text
    return cell


__all__ = ['extract_tables', 'tables_from_walker', 'extract_table', 'extract_cell',
           'link_from_anchor', 'cell_text']
