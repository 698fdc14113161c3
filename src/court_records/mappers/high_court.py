"""High-court case detail pages (eCourts high-court services).

Layout differs from the district pages: case details sit in a
``.case_details_table`` as label/value cells, the status table follows a
"Case Status" heading, parties are ``<br>``-separated spans and the orders /
IA tables hang off ``h2`` headings.
"""
from __future__ import annotations
import logging
from typing import List, Optional

from court_records.ingest.schemas import (
    ActSection, CaseRecord, CaseStatus, FilingInfo, HearingEvent, InterlocutoryApplication,
    OrderEntry, Parties, Party, SourceKind,
)
from court_records.mappers import sections as S
from court_records.mappers.identity import record_identifiers
from court_records.parsing.dates import normalize_date
from court_records.parsing.parties import parties_from_lines
from court_records.parsing.walker import HtmlWalker

logger = logging.getLogger(__name__)

H2 = ("h2", "h3", "h4")

CASE_DETAILS_CLASS = "case_details_table"
PETITIONER_CLASS = "Petitioner_Advocate_table"
RESPONDENT_CLASS = "Respondent_Advocate_table"

MARKERS = {
    'status': ("Case Status",),
    'acts': ("Acts",),
    'history': ("History of Case Hearing", "Case History"),
    'orders': ("Orders",),
    'ia': ("IA Details",),
}

STATUS_KEYS = {
    'first_hearing_date': "first hearing date",
    'decision_date': "decision date",
    'stage': "case status",
    'stage_detail': "stage of case",
    'nature_of_disposal': "nature of disposal",
    'court_and_judge': "coram",
    'judicial_branch': "judicial branch",
    'not_before_me': "not before me",
    'next_hearing_date': "next hearing date",
}
STATUS_DATES = {"first_hearing_date", "decision_date", "next_hearing_date"}


def _court_label(walker: HtmlWalker) -> Optional[str]:
    for heading in walker.find_by_tag("h1", "h2", "h3"):
        text = walker.text_content(heading, breaks=False)
        if "court" in text.lower():
            return text
    title = walker.find_first("title")
    return walker.text_content(title, breaks=False) or None


def _filing(walker: HtmlWalker) -> FilingInfo:
    tables = walker.find_by_class(CASE_DETAILS_CLASS)
    if not tables:
        logger.debug("No case details table")
        return FilingInfo()
    table = tables[0]
    values = S.cells_after_label(walker, table)
    cnr = walker.text_content(walker.find_first("strong", within=table), breaks=False)
    cnr = cnr.split(":")[-1].strip() or S.value_for(values, "cnr number")
    return FilingInfo(
        case_type=S.value_for(values, "case type") or None,
        filing_number=S.value_for(values, "filing number") or None,
        filing_date=normalize_date(S.value_for(values, "filing date")),
        registration_number=S.value_for(values, "registration number") or None,
        registration_date=normalize_date(S.value_for(values, "registration date")),
        cnr_number=cnr or None,
    )


def _status(walker: HtmlWalker) -> CaseStatus:
    table = S.table_after_sibling_text(walker, MARKERS['status'])
    if table is None:
        table = S.locate_table(walker, MARKERS['status'], H2)
    if table is None:
        return CaseStatus()
    values = S.label_value_map(S.body_rows(walker, table, skip_header=False))
    fields = {}
    for name, label in STATUS_KEYS.items():
        value = values.get(label, "")
        fields[name] = (normalize_date(value) if name in STATUS_DATES else value) or None
    return CaseStatus(**fields)


def _parties(walker: HtmlWalker, class_name: str) -> List[Party]:
    spans = walker.find_by_class(class_name)
    if not spans:
        logger.debug(f"No {class_name} block")
        return []
    return parties_from_lines(walker.lines(spans[0]))


def _acts(walker: HtmlWalker) -> List[ActSection]:
    table = S.locate_table(walker, MARKERS['acts'], H2 + ("caption",))
    acts: List[ActSection] = []
    for row in S.body_rows(walker, table):
        act = S.cell(row, 0)
        if not act or act.lower().startswith("under act"):
            continue
        acts.append(ActSection(act=act, sections=S.cell(row, 1)))
    return acts


def _history(walker: HtmlWalker) -> List[HearingEvent]:
    table = S.locate_table(walker, MARKERS['history'], H2 + ("caption",))
    events: List[HearingEvent] = []
    for row in S.body_rows(walker, table):
        if len(row) < 5:
            continue
        events.append(HearingEvent(
            registration_number=S.cell(row, 0) or None,
            judge=S.cell(row, 1) or None,
            business_date=normalize_date(S.cell(row, 2)),
            date=normalize_date(S.cell(row, 3)),
            purpose=S.cell(row, 4) or None,
        ))
    return events


def _orders(walker: HtmlWalker) -> List[OrderEntry]:
    table = S.locate_table(walker, MARKERS['orders'], H2)
    orders: List[OrderEntry] = []
    # the first row is the column header even when it is written with td
    for row in S.body_rows(walker, table, skip_header=False)[1:]:
        if len(row) < 5:
            continue
        orders.append(OrderEntry(
            number=S.cell(row, 0) or None,
            case_number=S.cell(row, 1) or None,
            judge=S.cell(row, 2) or None,
            date=normalize_date(S.cell(row, 3)),
            link=S.cell_link(row, 4),
        ))
    return orders


def _interlocutory(walker: HtmlWalker) -> List[InterlocutoryApplication]:
    table = S.locate_table(walker, MARKERS['ia'], H2)
    applications: List[InterlocutoryApplication] = []
    for row in S.body_rows(walker, table, skip_header=False)[1:]:
        if len(row) < 5:
            continue
        applications.append(InterlocutoryApplication(
            ia_number=S.cell(row, 0) or None,
            party=S.cell(row, 1) or None,
            filing_date=normalize_date(S.cell(row, 2)),
            next_date=normalize_date(S.cell(row, 3)),
            status=S.cell(row, 4) or None,
        ))
    return applications


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

    with S.degrade("court_label"):
        label = _court_label(walker)
    with S.degrade("case_details"):
        filing = _filing(walker)
    with S.degrade("status"):
        status = _status(walker)
    with S.degrade("petitioners"):
        petitioners = _parties(walker, PETITIONER_CLASS)
    with S.degrade("respondents"):
        respondents = _parties(walker, RESPONDENT_CLASS)
    with S.degrade("acts"):
        acts = _acts(walker)
    with S.degrade("history"):
        history = _history(walker)
    with S.degrade("orders"):
        orders = _orders(walker)
    with S.degrade("interlocutory_applications"):
        applications = _interlocutory(walker)

    return CaseRecord(
        identifiers=record_identifiers(filing),
        filing=filing,
        status=status,
        parties=Parties(petitioners=petitioners, respondents=respondents),
        acts_and_sections=acts,
        history=history,
        orders=orders,
        interlocutory_applications=applications,
        source_court_label=label,
        source_kind=SourceKind.HIGH,
    )


__all__ = ['map_case_detail', 'MARKERS']
