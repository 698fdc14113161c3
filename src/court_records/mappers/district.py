"""District-court case detail pages (eCourts district services).

Sections are tables identified by their ``<caption>``; parties are ``h5``
headings followed by ``li`` lists.
"""
from __future__ import annotations
import logging
from typing import Dict, List, Optional, Sequence

from court_records.ingest.schemas import (
    ActSection, CaseRecord, CaseStatus, FilingInfo, HearingEvent, InterlocutoryApplication,
    OrderEntry, Parties, Party, ProcessEntry, Row, SourceKind,
)
from court_records.mappers import sections as S
from court_records.mappers.identity import record_identifiers
from court_records.parsing.dates import normalize_date
from court_records.parsing.parties import party_from_text, parties_from_lines, split_advocate
from court_records.parsing.walker import HtmlWalker

logger = logging.getLogger(__name__)

CAPTION = ("caption",)

MARKERS = {
    'case_details': ("Case Details",),
    'status': ("Case Status",),
    'petitioner': ("Petitioner",),
    'respondent': ("Respondent",),
    'acts': ("Acts",),
    'history': ("Case History", "History of Case Hearing"),
    'orders': ("Orders",),
    'ia': ("IA Details", "Interlocutory Application"),
    'process': ("Process Details",),
}

# positional layout of the single data row, used when the table is not label/value
CASE_DETAIL_COLUMNS = ("case_type", "filing_number", "filing_date",
                       "registration_number", "registration_date", "cnr_number")
STATUS_COLUMNS = ("first_hearing_date", "next_hearing_date", "stage", "stage_detail", "court_and_judge")

CASE_DETAIL_LABELS = {
    'case_type': ("case type",),
    'filing_number': ("filing number",),
    'filing_date': ("filing date",),
    'registration_number': ("registration number",),
    'registration_date': ("registration date",),
    'cnr_number': ("cnr number", "cnr no"),
}
STATUS_LABELS = {
    'first_hearing_date': ("first hearing date",),
    'next_hearing_date': ("next hearing date",),
    'stage': ("case status",),
    'stage_detail': ("case stage", "stage of case"),
    'court_and_judge': ("court number and judge", "court no. and judge"),
    'decision_date': ("decision date",),
    'nature_of_disposal': ("nature of disposal",),
}
DATE_FIELDS = {"filing_date", "registration_date", "first_hearing_date",
               "next_hearing_date", "decision_date"}


def _is_label(text: str, labels: Dict[str, Sequence[str]]) -> bool:
    first = S.normalize_label(text)
    return any(first.startswith(k) for group in labels.values() for k in group)


def _looks_like_labels(rows: Sequence[Row], labels: Dict[str, Sequence[str]]) -> bool:
    # a td header row spans every column; label/value rows hold at most two pairs
    return any(len(row) <= 4 and _is_label(S.cell(row, 0), labels) for row in rows)


def _read_fields(rows: Sequence[Row], columns: Sequence[str],
                 labels: Dict[str, Sequence[str]]) -> Dict[str, Optional[str]]:
    if _looks_like_labels(rows, labels):
        values = S.label_value_map(rows)
        found = {name: S.value_for(values, *aliases) for name, aliases in labels.items()}
    else:
        data = [r for r in rows if not _is_label(S.cell(r, 0), labels)]
        first = data[0] if data else []
        found = {name: S.cell(first, i) for i, name in enumerate(columns)}
    out: Dict[str, Optional[str]] = {}
    for name, value in found.items():
        value = (value or "").strip()
        out[name] = (normalize_date(value) if name in DATE_FIELDS else value) or None
    return out


def _court_label(walker: HtmlWalker) -> Optional[str]:
    heading = walker.find_first("h2")
    if heading is None:
        heading = walker.find_first("title")
    label = walker.text_content(heading, breaks=False)
    return label or None


def _party_list(walker: HtmlWalker, phrases: Sequence[str]) -> List[Party]:
    heading = S.find_heading(walker, phrases, ("h5", "h4", "h3"))
    if heading is None:
        logger.debug(f"No party heading for {phrases[0]!r}")
        return []
    section = walker.next_element_sibling(heading)
    if section is None:
        return []
    items = walker.find_by_tag("li", within=section)
    if not items:
        return parties_from_lines(walker.lines(section))
    parties: List[Party] = []
    for item in items:
        name_el = walker.find_first("p", within=item)
        if name_el is not None:
            name, _ = split_advocate(walker.text_content(name_el, breaks=False))
            _, advocate = split_advocate(walker.text_content(item, breaks=False))
            if name:
                parties.append(Party(name=name, advocate=advocate))
            continue
        party = party_from_text(walker.text_content(item, breaks=False))
        if party is not None:
            parties.append(party)
    return parties


def _acts(walker: HtmlWalker) -> List[ActSection]:
    rows = S.body_rows(walker, S.locate_table(walker, MARKERS['acts'], CAPTION))
    acts: List[ActSection] = []
    for row in rows:
        act = S.cell(row, 0)
        if not act or act.lower().startswith("under act"):
            continue
        acts.append(ActSection(act=act, sections=S.cell(row, 1)))
    return acts


def _history(walker: HtmlWalker) -> List[HearingEvent]:
    rows = S.body_rows(walker, S.locate_table(walker, MARKERS['history'], CAPTION))
    events: List[HearingEvent] = []
    for row in rows:
        registration = S.cell(row, 0)
        if not registration or len(row) < 2:
            continue
        events.append(HearingEvent(
            registration_number=registration,
            judge=S.cell(row, 1) or None,
            business_date=normalize_date(S.cell(row, 2)),
            date=normalize_date(S.cell(row, 3)),
            purpose=S.cell(row, 4) or None,
        ))
    return events


def _orders(walker: HtmlWalker) -> List[OrderEntry]:
    rows = S.body_rows(walker, S.locate_table(walker, MARKERS['orders'], CAPTION))
    orders: List[OrderEntry] = []
    for row in rows:
        number = S.cell(row, 0)
        if not number or len(row) < 2:
            continue
        link = next((S.cell_link(row, i) for i in range(len(row)) if S.cell_link(row, i)), None)
        judge = S.cell(row, 2) if len(row) >= 4 else ""
        orders.append(OrderEntry(
            number=number,
            date=normalize_date(S.cell(row, 1)),
            judge=judge or None,
            link=link,
        ))
    return orders


def _interlocutory(walker: HtmlWalker) -> List[InterlocutoryApplication]:
    rows = S.body_rows(walker, S.locate_table(walker, MARKERS['ia'], CAPTION))
    applications: List[InterlocutoryApplication] = []
    for row in rows:
        if len(row) < 5 or not S.cell(row, 0):
            continue
        applications.append(InterlocutoryApplication(
            ia_number=S.cell(row, 0),
            party=S.cell(row, 1) or None,
            filing_date=normalize_date(S.cell(row, 2)),
            next_date=normalize_date(S.cell(row, 3)),
            status=S.cell(row, 4) or None,
        ))
    return applications


def _processes(walker: HtmlWalker) -> List[ProcessEntry]:
    rows = S.body_rows(walker, S.locate_table(walker, MARKERS['process'], CAPTION))
    entries: List[ProcessEntry] = []
    for row in rows:
        process_id = S.cell(row, 0)
        if not process_id:
            continue
        entries.append(ProcessEntry(
            process_id=process_id,
            process_date=normalize_date(S.cell(row, 1)),
            title=S.cell(row, 2) or None,
            party_name=S.cell(row, 3) or None,
            issued_process=S.cell(row, 4) or None,
        ))
    return entries


def map_case_detail(walker: HtmlWalker) -> CaseRecord:
    label = None
    filing = FilingInfo()
    status = CaseStatus()
    petitioners: List[Party] = []
    respondents: List[Party] = []
    acts: List[ActSection] = []
    history: List[HearingEvent] = []
    orders: List[OrderEntry] = []
    applications: List[InterlocutoryApplication] = []
    processes: List[ProcessEntry] = []

    with S.degrade("court_label"):
        label = _court_label(walker)
    with S.degrade("case_details"):
        rows = S.body_rows(walker, S.locate_table(walker, MARKERS['case_details'], CAPTION))
        if rows:
            filing = FilingInfo(**_read_fields(rows, CASE_DETAIL_COLUMNS, CASE_DETAIL_LABELS))
    with S.degrade("status"):
        rows = S.body_rows(walker, S.locate_table(walker, MARKERS['status'], CAPTION))
        if rows:
            status = CaseStatus(**_read_fields(rows, STATUS_COLUMNS, STATUS_LABELS))
    with S.degrade("petitioners"):
        petitioners = _party_list(walker, MARKERS['petitioner'])
    with S.degrade("respondents"):
        respondents = _party_list(walker, MARKERS['respondent'])
    with S.degrade("acts"):
        acts = _acts(walker)
    with S.degrade("history"):
        history = _history(walker)
    with S.degrade("orders"):
        orders = _orders(walker)
    with S.degrade("interlocutory_applications"):
        applications = _interlocutory(walker)
    with S.degrade("processes"):
        processes = _processes(walker)

    return CaseRecord(
        identifiers=record_identifiers(filing),
        filing=filing,
        status=status,
        parties=Parties(petitioners=petitioners, respondents=respondents),
        acts_and_sections=acts,
        history=history,
        orders=orders,
        interlocutory_applications=applications,
        processes=processes,
        source_court_label=label,
        source_kind=SourceKind.DISTRICT,
    )


__all__ = ['map_case_detail', 'MARKERS']
