"""Section locators shared by the per-source mappers.

A logical section (case status, acts, orders, ...) is found by a heading or
caption whose text contains one of a few marker phrases; the structurally
adjacent table supplies the rows. Any miss yields an empty result so the
caller can fall back to defaults.
"""
from __future__ import annotations
import logging
import re
from contextlib import contextmanager
from typing import Dict, Iterator, List, Optional, Sequence

from bs4 import Tag

from court_records.ingest.schemas import Cell, Row, Table
from court_records.parsing.tables import cell_text, extract_row, extract_table
from court_records.parsing.walker import HtmlWalker

logger = logging.getLogger(__name__)

HEADING_TAGS = ("caption", "h1", "h2", "h3", "h4", "h5", "h6", "th", "label", "strong", "b")


def _matches(text: str, phrases: Sequence[str]) -> bool:
    low = text.lower()
    return any(p.lower() in low for p in phrases)


def find_heading(walker: HtmlWalker, phrases: Sequence[str],
                 tags: Sequence[str] = HEADING_TAGS) -> Optional[Tag]:
    for node in walker.find_by_tag(*tags):
        if _matches(walker.text_content(node, breaks=False), phrases):
            return node
    return None


def _next_table(walker: HtmlWalker, node: Tag) -> Optional[Tag]:
    sib = walker.next_element_sibling(node)
    while sib is not None:
        if sib.name == "table":
            return sib
        inner = walker.find_first("table", within=sib)
        if inner is not None:
            return inner
        # another heading means the section had no table of its own
        if sib.name in ("h1", "h2", "h3", "h4", "h5", "h6"):
            return None
        sib = walker.next_element_sibling(sib)
    return None


def section_table(walker: HtmlWalker, heading: Optional[Tag]) -> Optional[Tag]:
    """Table belonging to ``heading``.

    A caption belongs to its own table. Otherwise the first table after the
    heading among its siblings, then among the siblings of its parent
    (headings wrapped in a ``div`` ahead of the table).
    """
    if heading is None:
        return None
    if heading.name == "caption":
        return walker.parent_table(heading)
    table = _next_table(walker, heading)
    if table is not None:
        return table
    parent = walker.parent(heading)
    if parent is not None and parent.name not in ("table", "tr", "[document]"):
        return _next_table(walker, parent)
    return None


def table_after_sibling_text(walker: HtmlWalker, phrases: Sequence[str]) -> Optional[Tag]:
    """First table whose previous element sibling mentions one of ``phrases``."""
    for table in walker.find_by_tag("table"):
        prev = walker.previous_element_sibling(table)
        if prev is not None and _matches(walker.text_content(prev, breaks=False), phrases):
            return table
    return None


def locate_table(walker: HtmlWalker, phrases: Sequence[str],
                 tags: Sequence[str] = HEADING_TAGS) -> Optional[Tag]:
    table = section_table(walker, find_heading(walker, phrases, tags))
    if table is None:
        logger.debug(f"Section not present: {phrases[0]!r}")
    return table


def body_rows(walker: HtmlWalker, table: Optional[Tag], skip_header: bool = True) -> Table:
    """Data rows of ``table``.

    Rows inside ``thead`` and rows made only of ``th`` cells are headers; with
    ``skip_header`` they are dropped.
    """
    if table is None:
        return []
    rows: Table = []
    for tr in walker.own_rows(table):
        cells = walker.children(tr, "td", "th")
        if not cells:
            continue
        if skip_header and (tr.find_parent("thead") is not None or all(c.name == "th" for c in cells)):
            continue
        rows.append(extract_row(walker, tr))
    return rows


def cell(row: Sequence[Cell], index: int) -> str:
    if index < 0 or index >= len(row):
        return ""
    return cell_text(row[index]).strip()


def cell_link(row: Sequence[Cell], index: int) -> Optional[str]:
    if index < 0 or index >= len(row):
        return None
    value = row[index]
    if isinstance(value, str):
        return None
    for link in value.links:
        if link.href:
            return link.href
    return None


def normalize_label(text: str) -> str:
    text = re.sub(r"\s+", " ", text).strip().lower()
    return text.rstrip(" :.-")


def label_value_map(rows: Sequence[Row]) -> Dict[str, str]:
    """``{label: value}`` from rows laid out as label, value, label, value, ...

    First occurrence of a label wins.
    """
    found: Dict[str, str] = {}
    for row in rows:
        texts = [cell_text(c).strip() for c in row]
        for i in range(0, len(texts) - 1, 2):
            key = normalize_label(texts[i])
            if key and key not in found:
                found[key] = texts[i + 1]
    return found


def value_for(values: Dict[str, str], *labels: str) -> str:
    """Value whose label equals, else contains, one of ``labels``."""
    wanted = [normalize_label(label) for label in labels]
    for w in wanted:
        if w in values:
            return values[w]
    for w in wanted:
        for key, value in values.items():
            if w in key:
                return value
    return ""


def cells_after_label(walker: HtmlWalker, table: Optional[Tag]) -> Dict[str, str]:
    """Label -> text of the next ``td`` for every ``td`` in ``table``."""
    if table is None:
        return {}
    tds = walker.find_by_tag("td", within=table)
    found: Dict[str, str] = {}
    for i in range(len(tds) - 1):
        key = normalize_label(walker.text_content(tds[i], breaks=False))
        if key and key not in found:
            found[key] = walker.text_content(tds[i + 1], breaks=False)
    return found


def grid_rows(tables: Sequence[Table]) -> Table:
    return [row for table in tables for row in table]


@contextmanager
def degrade(section: str) -> Iterator[None]:
    """Keep one malformed section from sinking the whole record."""
    try:
        yield
    except Exception as e:
        logger.debug(f"Section {section!r} degraded to default: {e!r}")


def table_grid(walker: HtmlWalker, table: Optional[Tag]) -> Table:
    return extract_table(walker, table) if table is not None else []


__all__ = [
    'find_heading', 'section_table', 'table_after_sibling_text', 'locate_table', 'body_rows',
    'cell', 'cell_link', 'normalize_label', 'label_value_map', 'value_for', 'cells_after_label',
    'grid_rows', 'degrade', 'table_grid', 'HEADING_TAGS',
]
