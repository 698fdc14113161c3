"""Supreme Court case status documents (sci.gov.in).

The case status service answers either with one HTML page or with a
sectioned payload::

    {"case_details": {"success": true, "data": {"data": "<html>"}},
     "listing_dates": {...}, "judgement_orders": {...}, ...}

Both are reduced to ``{section name: HtmlWalker}`` first. The case details
section is mostly a two-column label/value table, but some responses are
plain text, so it is read through :func:`grid_from_walker` which falls back
to the text structurer.
"""
from __future__ import annotations
import logging
import re
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from court_records.ingest.schemas import (
    ActSection, CaseRecord, CaseStatus, DEFAULT_COURT_LABELS, FilingInfo, HearingEvent,
    InterlocutoryApplication, OrderEntry, Parties, Party, Row, SourceKind,
)
from court_records.mappers import sections as S
from court_records.mappers.identity import diary_identifier, record_identifiers
from court_records.parsing.acts import extract_act_sections
from court_records.parsing.dates import normalize_date
from court_records.parsing.fallback import grid_from_walker
from court_records.parsing.parties import split_advocate
from court_records.parsing.walker import HtmlWalker
from court_records.reconcile.tracking import composite_key

logger = logging.getLogger(__name__)

CASE_DETAILS = "case_details"
LISTING_DATES = "listing_dates"
INTERLOCUTORY = "interlocutory_application"
JUDGEMENT_ORDERS = "judgement_orders"
SECTIONS = (CASE_DETAILS, LISTING_DATES, INTERLOCUTORY, JUDGEMENT_ORDERS)

_DATE_TOKEN = r"(\d{1,2}[-/.]\d{1,2}[-/.]\d{4}|\d{4}-\d{2}-\d{2})"
_FILED_ON = re.compile(r"Filed\s+on\s*:?\s*" + _DATE_TOKEN, re.IGNORECASE)
_REGISTERED_ON = re.compile(r"Registered\s+on\s*:?\s*" + _DATE_TOKEN, re.IGNORECASE)
_ANY_DATE = re.compile(_DATE_TOKEN)
_CORAM = re.compile(r"\[\s*CORAM\s*:?\s*(.*?)\s*\]", re.IGNORECASE | re.DOTALL)
# "C.A. No. 001234 - 2023"
_CASE_NO = re.compile(r"^(?P<type>.+?)\s+No\.?\s*(?P<number>\d+)\s*[-/]\s*(?P<year>\d{4})", re.IGNORECASE)
# "1 STATE OF KARNATAKA", "2) RAMESH"
_NUMBERED = re.compile(r"^\s*\d{1,3}\s*[).:-]?\s+(?=\D)")


# -- section discovery --------------------------------------------------------

def _section_names(name: str) -> Tuple[str, ...]:
    return (name, name.replace("_", "-"))


def split_sections(walker: HtmlWalker) -> Dict[str, HtmlWalker]:
    """Section walkers located by class, id or ``data-section``.

    A page with no marked case details section is read whole as the case
    details.
    """
    found: Dict[str, HtmlWalker] = {}
    for name in SECTIONS:
        for alias in _section_names(name):
            candidates = (walker.find_by_class(alias) + [walker.find_by_id(alias)]
                          + walker.find_by_attribute("data-section", alias))
            element = next((c for c in candidates if c is not None), None)
            if element is not None:
                found[name] = HtmlWalker(str(element), base_url=walker.base_url)
                break
    if CASE_DETAILS not in found:
        found[CASE_DETAILS] = walker
    return found


def sections_from_payload(payload: Mapping[str, Any], base_url: Optional[str] = None) -> Dict[str, HtmlWalker]:
    """Section walkers from the sectioned JSON payload.

    Sections reported with ``"success": false`` are skipped; a section may
    also be given directly as an HTML string.
    """
    found: Dict[str, HtmlWalker] = {}
    for name, entry in payload.items():
        html: Any = entry
        if isinstance(entry, Mapping):
            if entry.get("success") is False:
                logger.debug(f"Section {name!r} reported unsuccessful")
                continue
            inner = entry.get("data")
            html = inner.get("data") if isinstance(inner, Mapping) else inner
        if isinstance(html, str) and html.strip():
            found[str(name)] = HtmlWalker(html, base_url=base_url)
    return found


# -- case details ---------------------------------------------------------------

def _detail_values(walker: HtmlWalker) -> Dict[str, str]:
    return S.label_value_map(S.grid_rows(grid_from_walker(walker)))


def _exact(values: Dict[str, str], *labels: str) -> str:
    for label in labels:
        value = values.get(S.normalize_label(label))
        if value:
            return value.strip()
    return ""


def _first_line(text: str) -> str:
    return text.strip().split("\n")[0].strip()


def _numbered_lines(text: str) -> List[str]:
    names = []
    for line in text.split("\n"):
        line = _NUMBERED.sub("", line).strip()
        if line:
            names.append(re.sub(r"\s+", " ", line))
    return names


def _attach_advocates(names: Sequence[str], advocates: Sequence[str]) -> List[Party]:
    parties: List[Party] = []
    for i, text in enumerate(names):
        name, inline = split_advocate(text)
        if not name:
            continue
        advocate = inline
        if advocate is None and i < len(advocates):
            advocate = advocates[i]
        parties.append(Party(name=name, advocate=advocate))
    # one advocate line for a multi-party side belongs to the first party only
    if len(advocates) == 1 and parties and parties[0].advocate is None:
        parties[0] = Party(name=parties[0].name, advocate=advocates[0])
    return parties


def _stage(text: str) -> Tuple[Optional[str], Optional[str]]:
    """``"PENDING (Motion Hearing [FRESH])"`` -> ``("PENDING", "Motion Hearing [FRESH]")``."""
    text = re.sub(r"\s+", " ", text).strip()
    if not text:
        return None, None
    label, paren, rest = text.partition("(")
    if not paren:
        return text, None
    rest = rest.strip()
    if rest.endswith(")"):
        rest = rest[:-1].strip()
    return label.strip() or None, rest or None


def _listed_on(text: str) -> Tuple[Optional[str], Optional[str]]:
    coram = _CORAM.search(text)
    judge = re.sub(r"\s+", " ", coram.group(1)).strip() if coram else None
    before = text[:coram.start()] if coram else text
    date = _ANY_DATE.search(before)
    return normalize_date(date.group(1) if date else before.strip()), judge or None


def _acts(values: Dict[str, str]) -> List[ActSection]:
    act = re.sub(r"\s+", " ", _exact(values, "Act")).strip()
    sections = re.sub(r"\s+", " ", _exact(values, "U/Section", "U/S", "Section")).strip()
    if act and sections:
        return [ActSection(act=act, sections=sections)]
    if sections:
        return extract_act_sections(sections)
    return extract_act_sections(act)


class _Details:
    """Fields lifted from the case details section."""

    def __init__(self, values: Dict[str, str]) -> None:
        self.values = values
        diary_text = _exact(values, "Diary No", "Diary Number")
        self.diary = diary_identifier(diary_text)
        filed = _FILED_ON.search(diary_text)

        case_text = _exact(values, "Case No", "Case Number")
        registered = _REGISTERED_ON.search(case_text)
        registration = re.sub(r"\s+", " ", case_text[:registered.start()] if registered else _first_line(case_text))
        registration = registration.strip(" ,") or None
        self.case_type = None
        self.composite = None
        m = _CASE_NO.match(registration or "")
        if m:
            self.case_type = m.group("type").strip()
            self.composite = composite_key(self.case_type, m.group("number"), m.group("year"))

        self.filing = FilingInfo(
            case_type=self.case_type,
            filing_number=self.diary,
            filing_date=normalize_date(filed.group(1)) if filed else None,
            registration_number=registration,
            registration_date=normalize_date(registered.group(1)) if registered else None,
            cnr_number=_first_line(_exact(values, "CNR Number", "CNR No")) or None,
        )

        stage, stage_detail = _stage(_exact(values, "Status/Stage", "Status"))
        listed_date, coram = _listed_on(_exact(values, "Present/Last Listed On", "Last Listed On"))
        tentative = _exact(values, "Tentatively case may be listed on", "Tentatively Listed On")
        tentative_date = _ANY_DATE.search(tentative)
        self.status = CaseStatus(
            stage=stage,
            stage_detail=stage_detail,
            last_listed_date=listed_date,
            next_hearing_date=normalize_date(tentative_date.group(1) if tentative_date else tentative),
            court_and_judge=coram,
            nature_of_disposal=_exact(values, "Disp.Type", "Disposal Type") or None,
            category=re.sub(r"\s+", " ", _exact(values, "Category")) or None,
        )

        self.parties = Parties(
            petitioners=_attach_advocates(
                _numbered_lines(_exact(values, "Petitioner(s)", "Petitioner")),
                _numbered_lines(_exact(values, "Petitioner Advocate(s)", "Petitioner Advocate")),
            ),
            respondents=_attach_advocates(
                _numbered_lines(_exact(values, "Respondent(s)", "Respondent")),
                _numbered_lines(_exact(values, "Respondent Advocate(s)", "Respondent Advocate")),
            ),
        )
        self.acts = _acts(values)


# -- tabular sections -------------------------------------------------------------

def _header_index(header: Row, *words: str) -> Optional[int]:
    for i, cell in enumerate(header):
        text = S.normalize_label(S.cell(header, i))
        if any(w in text for w in words):
            return i
    return None


def _section_tables(walker: HtmlWalker) -> List[Tuple[Row, List[Row]]]:
    """``(header, body rows)`` per table; header is ``[]`` when none is marked."""
    out = []
    for table in walker.find_by_tag("table"):
        rows = S.body_rows(walker, table, skip_header=False)
        if not rows:
            continue
        trs = [tr for tr in walker.own_rows(table) if walker.children(tr, "td", "th")]
        first_is_header = bool(trs) and (trs[0].find_parent("thead") is not None
                                         or all(c.name == "th" for c in walker.children(trs[0], "td", "th")))
        if first_is_header:
            out.append((rows[0], rows[1:]))
        else:
            out.append(([], rows))
    return out


def _pick(row: Row, index: Optional[int], default: int) -> str:
    return S.cell(row, index if index is not None else default)


def _listing_dates(walker: Optional[HtmlWalker]) -> List[HearingEvent]:
    if walker is None:
        return []
    events: List[HearingEvent] = []
    for header, rows in _section_tables(walker):
        date_col = _header_index(header, "cl date", "date")
        purpose_col = _header_index(header, "purpose")
        judge_col = _header_index(header, "judge", "coram")
        stage_col = _header_index(header, "stage")
        for row in rows:
            date = _pick(row, date_col, 0)
            if not date:
                continue
            events.append(HearingEvent(
                date=normalize_date(date),
                purpose=(_pick(row, purpose_col, 3) or _pick(row, stage_col, 2)) or None,
                judge=_pick(row, judge_col, 5) or None,
            ))
    return events


def _interlocutory(walker: Optional[HtmlWalker]) -> List[InterlocutoryApplication]:
    if walker is None:
        return []
    applications: List[InterlocutoryApplication] = []
    for header, rows in _section_tables(walker):
        number_col = _header_index(header, "ia no", "ia number", "number")
        party_col = _header_index(header, "filed by", "party")
        filed_col = _header_index(header, "filed on", "filing date")
        next_col = _header_index(header, "next date")
        status_col = _header_index(header, "status")
        for row in rows:
            number = _pick(row, number_col, 0)
            if not number:
                continue
            applications.append(InterlocutoryApplication(
                ia_number=number,
                party=_pick(row, party_col, 2) or None,
                filing_date=normalize_date(_pick(row, filed_col, 3)),
                next_date=normalize_date(S.cell(row, next_col)) if next_col is not None else None,
                status=_pick(row, status_col, 4) or None,
            ))
    return applications


def _judgement_orders(walker: Optional[HtmlWalker]) -> List[OrderEntry]:
    if walker is None:
        return []
    orders: List[OrderEntry] = []
    for anchor in walker.find_by_tag("a"):
        href = walker.resolve_url(walker.attr(anchor, "href"))
        if not href:
            continue
        text = walker.text_content(anchor, breaks=False)
        date = _ANY_DATE.search(text)
        orders.append(OrderEntry(
            number=str(len(orders) + 1),
            date=normalize_date(date.group(1)) if date else None,
            link=href,
        ))
    return orders


# -- entry points -----------------------------------------------------------------

def map_sections(sections: Mapping[str, HtmlWalker]) -> CaseRecord:
    details = _Details({})
    history: List[HearingEvent] = []
    applications: List[InterlocutoryApplication] = []
    orders: List[OrderEntry] = []

    with S.degrade("case_details"):
        walker = sections.get(CASE_DETAILS)
        if walker is not None:
            details = _Details(_detail_values(walker))
    with S.degrade("listing_dates"):
        history = _listing_dates(sections.get(LISTING_DATES))
    with S.degrade("interlocutory_applications"):
        applications = _interlocutory(sections.get(INTERLOCUTORY))
    with S.degrade("judgement_orders"):
        orders = _judgement_orders(sections.get(JUDGEMENT_ORDERS))

    record = CaseRecord(
        identifiers=record_identifiers(details.filing, extra=(details.diary, details.composite)),
        filing=details.filing,
        status=details.status,
        parties=details.parties,
        acts_and_sections=details.acts,
        history=history,
        orders=orders,
        interlocutory_applications=applications,
        source_kind=SourceKind.SUPREME,
    )
    if record.is_empty():
        return record
    return record.model_copy(update={'source_court_label': DEFAULT_COURT_LABELS[SourceKind.SUPREME]})


def map_case_detail(walker: HtmlWalker) -> CaseRecord:
    return map_sections(split_sections(walker))


def map_payload(payload: Mapping[str, Any], base_url: Optional[str] = None) -> CaseRecord:
    return map_sections(sections_from_payload(payload, base_url=base_url))


__all__ = ['map_case_detail', 'map_payload', 'map_sections', 'split_sections',
           'sections_from_payload', 'SECTIONS']
