"""Grid approximation for documents that carry no tables.

Upstream portals sometimes answer with prose or ``label: value`` dumps (for
instance "no records found" pages). The structurer degrades in two steps so
callers always get the same grid shape the table extractor produces:

 1. the full text of each ``p``/``div``/``span`` that holds text of its
    own (or has no such block inside it), outermost first, split on tab or
    pipe, else on the first colon into a (label, value) pair, else kept as
    a one-column row;
 2. failing that, the plain text of the whole document line by line with the
    tab / colon rules.
"""
from __future__ import annotations
import logging
import re
from typing import List, Optional

from court_records.ingest.schemas import Row, Table
from court_records.parsing.tables import tables_from_walker
from court_records.parsing.walker import HtmlWalker

logger = logging.getLogger(__name__)

LEAF_TAGS = ("p", "div", "span")
_TAB_OR_PIPE = re.compile(r"\t|\|")


def _split_colon(text: str) -> Row:
    label, _, value = text.partition(":")
    return [label.strip(), value.strip()]


def split_leaf_text(text: str) -> Row:
    if "\t" in text or "|" in text:
        return [part.strip() for part in _TAB_OR_PIPE.split(text)]
    if ":" in text:
        return _split_colon(text)
    return [text]


def split_line(line: str) -> Row:
    if "\t" in line:
        return [part.strip() for part in line.split("\t")]
    if ":" in line:
        return _split_colon(line)
    return [line]


def _is_row_source(walker: HtmlWalker, el) -> bool:
    if walker.own_text(el).strip():
        return True
    return walker.find_first(*LEAF_TAGS, within=el) is None


def _leaf_rows(walker: HtmlWalker) -> Table:
    rows: Table = []
    taken = set()
    for el in walker.find_by_tag(*LEAF_TAGS):
        # document order: an enclosing row source is always seen first
        if any(id(p) in taken for p in el.parents):
            continue
        if not _is_row_source(walker, el):
            continue
        text = walker.raw_text(el).strip()
        if text:
            taken.add(id(el))
            rows.append(split_leaf_text(text))
    return rows


def _line_rows(walker: HtmlWalker) -> Table:
    rows: Table = []
    for line in walker.raw_text(walker.root).split("\n"):
        line = line.strip()
        if line:
            rows.append(split_line(line))
    return rows


def structure_walker(walker: HtmlWalker) -> List[Table]:
    rows = _leaf_rows(walker)
    if not rows:
        logger.debug("No leaf text blocks; falling back to document lines")
        rows = _line_rows(walker)
    return [rows] if rows else []


def structure_text(markup: Optional[str]) -> List[Table]:
    """Pseudo-table built from the text of ``markup``; ``[]`` means no data."""
    if not markup:
        return []
    try:
        return structure_walker(HtmlWalker(markup))
    except Exception as e:
        logger.warning(f"Text structuring failed: {e}")
        return []


def grid_from_walker(walker: HtmlWalker) -> List[Table]:
    tables = tables_from_walker(walker)
    if tables:
        return tables
    return structure_walker(walker)


def extract_grid(markup: Optional[str], base_url: Optional[str] = None) -> List[Table]:
    """Tables when the document has any, otherwise the structured text."""
    if not markup:
        return []
    try:
        return grid_from_walker(HtmlWalker(markup, base_url=base_url))
    except Exception as e:
        logger.warning(f"Grid extraction failed: {e}")
        return []


__all__ = ['structure_text', 'structure_walker', 'extract_grid', 'grid_from_walker',
           'split_leaf_text', 'split_line']
