"""Search result grouping.

A search answers with one sub-table per sub-court / bench. Each becomes a
list of :class:`RowRecord` under the sub-court's label. Rows that carry no
CINO or diary number cannot be opened or followed later and are dropped;
``ResultGroups.dropped`` says how many.

HTML answers (eCourts district and high-court templates) mark every
sub-table with a ``distTableContent`` container whose ``<caption>`` names
the court and whose ``id`` is the establishment code. JSON answers are
renamed field by field onto the same row schema.
"""
from __future__ import annotations
import logging
import re
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from bs4 import Tag

from court_records.ingest.payloads import maybe_json, resolve_payload
from court_records.ingest.schemas import (
    DEFAULT_COURT_LABELS, ResultGroups, RowRecord, SearchContext, SourceKind,
)
from court_records.parsing.parties import respondent_from, split_versus
from court_records.parsing.walker import HtmlWalker
from court_records.reconcile.tracking import (
    CASE_NUMBER_FIELDS, CASE_TYPE_FIELDS, CASE_YEAR_FIELDS, COMBINED_CASE_FIELDS,
    diary_of, first_value, split_combined,
)

logger = logging.getLogger(__name__)

CONTAINER_CLASS = "distTableContent"
MIN_CELLS = 4
CNR_PATTERN = re.compile(r"\b([A-Z]{4}\d{12})\b")

CINO_FIELDS = ("cino", "CINO", "cnr", "CNR", "cnr_number", "cnr_no", "View")
PETITIONER_FIELDS = ("petitioner_name", "pet_name", "petitioner", "Petitioner")
RESPONDENT_FIELDS = ("respondent_name", "res_name", "respondent", "Respondent")
PARTIES_FIELDS = ("Petitioner versus Respondent", "parties")
SERIAL_FIELDS = ("serial_number", "Serial Number", "s_no", "sr_no")
COURT_FIELDS = ("court_name", "Court Name", "court")
EST_CODE_FIELDS = ("est_code", "court_code")
STATUS_FIELDS = ("case_status", "status")
_ADVOCATE_FIELD = re.compile(r"^adv_name\d*$")


def _or_none(value: Optional[str]) -> Optional[str]:
    value = (value or "").strip()
    return value or None


def _with_context(fields: Dict[str, Any], context: Optional[SearchContext]) -> Dict[str, Any]:
    if context is None:
        return fields
    defaults = (("district_name", context.district_name), ("litigant_name", context.litigant_name),
                ("search_status", context.case_status))
    for key, value in defaults:
        if not fields.get(key):
            fields[key] = value
    return fields


class _Grouper:
    """Accumulates rows per label; labels keep first-seen order."""

    def __init__(self) -> None:
        self.groups: Dict[str, List[RowRecord]] = {}
        self.dropped = 0

    def add(self, label: str, row: RowRecord) -> None:
        if not row.primary_identifier:
            self.dropped += 1
            return
        self.groups.setdefault(label, []).append(row)

    def result(self) -> ResultGroups:
        if self.dropped:
            logger.debug(f"Dropped {self.dropped} result rows without an identifier")
        return ResultGroups(self.groups, dropped=self.dropped)


# -- HTML ---------------------------------------------------------------------

def _cino_from(walker: HtmlWalker, cells: Iterable[Tag]) -> Optional[str]:
    anchors = [a for c in cells for a in walker.find_by_tag("a", "button", within=c)]
    for a in anchors:
        cno = walker.attr(a, "data-cno")
        if cno:
            return cno
    for a in anchors:
        for name in ("onclick", "href"):
            m = CNR_PATTERN.search(walker.attr(a, name))
            if m:
                return m.group(1)
    return None


def _parties(walker: HtmlWalker, cell: Tag) -> Tuple[str, str]:
    lines = walker.lines(cell)
    if len(lines) >= 2:
        return lines[0], respondent_from(" ".join(lines[1:]))
    return split_versus(lines[0] if lines else "")


def _container_rows(walker: HtmlWalker, container: Tag) -> List[Tag]:
    table = container if container.name == "table" else walker.find_first("table", within=container)
    if table is None:
        return walker.find_by_tag("tr", within=container)
    tbody = walker.find_first("tbody", within=table)
    if tbody is not None:
        return [tr for tr in walker.find_by_tag("tr", within=tbody) if walker.parent_table(tr) is table]
    return walker.own_rows(table)


def row_from_cells(walker: HtmlWalker, tr: Tag, label: str, est_code: str,
                   context: Optional[SearchContext] = None) -> Optional[RowRecord]:
    """Row record from ``serial | TYPE/NUMBER/YEAR | parties | view`` cells."""
    cells = walker.children(tr, "td")
    if len(cells) < MIN_CELLS:
        return None
    case_type, case_number, case_year = split_combined(walker.text_content(cells[1], breaks=False))
    petitioner, respondent = _parties(walker, cells[2])
    fields: Dict[str, Any] = {
        'cino': _cino_from(walker, cells[3:]),
        'serial_number': _or_none(walker.text_content(cells[0], breaks=False)),
        'case_type': _or_none(case_type),
        'case_number': _or_none(case_number),
        'case_year': _or_none(case_year),
        'petitioner_name': _or_none(petitioner),
        'respondent_name': _or_none(respondent),
        'court_name': label,
        'est_code': _or_none(est_code),
    }
    return RowRecord(**_with_context(fields, context))


def group_html(markup: str, kind: SourceKind, context: Optional[SearchContext] = None,
               base_url: Optional[str] = None) -> ResultGroups:
    walker = HtmlWalker(markup, base_url=base_url)
    grouper = _Grouper()
    containers = walker.find_by_class(CONTAINER_CLASS)
    if not containers:
        logger.debug("No result containers in search document")
    for container in containers:
        est_code = walker.attr(container, "id")
        caption = walker.find_first("caption", within=container)
        label = walker.text_content(caption, breaks=False) or est_code or DEFAULT_COURT_LABELS[kind]
        for tr in _container_rows(walker, container):
            row = row_from_cells(walker, tr, label, est_code, context)
            if row is not None:
                grouper.add(label, row)
    return grouper.result()


# -- JSON -----------------------------------------------------------------------

def _advocates(item: Mapping[str, Any]) -> List[str]:
    names = []
    for key in sorted(k for k in item if isinstance(k, str) and _ADVOCATE_FIELD.match(k)):
        value = str(item[key] or "").strip()
        if value:
            names.append(value)
    return names


def row_from_item(item: Mapping[str, Any], context: Optional[SearchContext] = None) -> RowRecord:
    """Rename a JSON result entry onto the row schema."""
    case_type = first_value(item, CASE_TYPE_FIELDS)
    case_number = first_value(item, CASE_NUMBER_FIELDS)
    case_year = first_value(item, CASE_YEAR_FIELDS)
    combined = first_value(item, COMBINED_CASE_FIELDS)
    if combined and not (case_type and case_number and case_year):
        case_type, case_number, case_year = split_combined(combined)

    petitioner = first_value(item, PETITIONER_FIELDS)
    respondent = first_value(item, RESPONDENT_FIELDS)
    if not petitioner and not respondent:
        petitioner, respondent = split_versus(first_value(item, PARTIES_FIELDS))

    fields: Dict[str, Any] = {
        'cino': _or_none(first_value(item, CINO_FIELDS)),
        'diary_number': diary_of(item),
        'case_type': _or_none(case_type),
        'case_number': _or_none(case_number),
        'case_year': _or_none(case_year),
        'petitioner_name': _or_none(petitioner),
        'respondent_name': _or_none(respondent),
        'serial_number': _or_none(first_value(item, SERIAL_FIELDS)),
        'court_name': _or_none(first_value(item, COURT_FIELDS)),
        'est_code': _or_none(first_value(item, EST_CODE_FIELDS)),
        'district_name': _or_none(first_value(item, ("district_name",))),
        'litigant_name': _or_none(first_value(item, ("litigant_name",))),
        'search_status': _or_none(first_value(item, STATUS_FIELDS)),
        'advocate_names': _advocates(item),
    }
    return RowRecord(**_with_context(fields, context))


def group_items(items: Iterable[Mapping[str, Any]], kind: SourceKind,
                context: Optional[SearchContext] = None) -> ResultGroups:
    grouper = _Grouper()
    default_label = DEFAULT_COURT_LABELS[kind]
    for item in items:
        row = row_from_item(item, context)
        grouper.add(row.court_name or default_label, row)
    return grouper.result()


def parse_search_results(payload: Any, source_kind: Any, context: Optional[SearchContext] = None,
                         base_url: Optional[str] = None) -> ResultGroups:
    """Sub-court label -> rows for a search answer (HTML or JSON).

    An answer with no recognizable containers or result list yields an empty
    mapping. Only an unknown ``source_kind`` raises.
    """
    kind = SourceKind.coerce(source_kind)
    data = maybe_json(payload)
    try:
        if isinstance(data, str):
            return group_html(data, kind, context, base_url=base_url)
        resolved = resolve_payload(data)
        if resolved is None:
            logger.debug(f"Unrecognized search payload of type {type(data).__name__}")
            return ResultGroups()
        return group_items(resolved.items, kind, context)
    except Exception as e:
        logger.warning(f"Search result grouping failed, returning no groups: {e}")
        return ResultGroups()


__all__ = ['parse_search_results', 'group_html', 'group_items', 'row_from_cells', 'row_from_item',
           'CONTAINER_CLASS', 'CNR_PATTERN']
