"""Canonical schemas for normalized court records.

These pydantic models define the cell shapes produced by the table walker,
the unified case record lifted out of a case-detail page and the
lightweight row records lifted out of search results.
"""
from __future__ import annotations
from enum import Enum
from typing import Dict, FrozenSet, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from court_records.errors import UnsupportedSourceError

NOT_AVAILABLE = "Not Available"


class SourceKind(str, Enum):
    SUPREME = "supreme"
    HIGH = "high"
    DISTRICT = "district"

    @classmethod
    def coerce(cls, value: Union["SourceKind", str]) -> "SourceKind":
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().lower()
            for kind in cls:
                if key in (kind.value, kind.name.lower()):
                    return kind
        raise UnsupportedSourceError(value)


DEFAULT_COURT_LABELS = {
    SourceKind.SUPREME: "Supreme Court of India",
    SourceKind.HIGH: "High Court",
    SourceKind.DISTRICT: "District Court",
}


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class Link(_Frozen):
    text: str = ""
    href: str = ""
    target: str = ""
    data: Dict[str, str] = Field(default_factory=dict)


class LinkCell(_Frozen):
    type: Literal["links"] = "links"
    links: List[Link] = Field(default_factory=list)

    @property
    def text(self) -> str:
        return " ".join(link.text for link in self.links if link.text)


Cell = Union[str, LinkCell]
Row = List[Cell]
Table = List[Row]


class FilingInfo(_Frozen):
    case_type: Optional[str] = None
    filing_number: Optional[str] = None
    filing_date: Optional[str] = None
    registration_number: Optional[str] = None
    registration_date: Optional[str] = None
    cnr_number: Optional[str] = None


class CaseStatus(_Frozen):
    stage: Optional[str] = None
    stage_detail: Optional[str] = None
    first_hearing_date: Optional[str] = None
    next_hearing_date: Optional[str] = None
    last_listed_date: Optional[str] = None
    decision_date: Optional[str] = None
    nature_of_disposal: Optional[str] = None
    court_and_judge: Optional[str] = None
    judicial_branch: Optional[str] = None
    not_before_me: Optional[str] = None
    category: Optional[str] = None


class Party(_Frozen):
    name: str
    advocate: Optional[str] = None


class Parties(_Frozen):
    petitioners: List[Party] = Field(default_factory=list)
    respondents: List[Party] = Field(default_factory=list)


class ActSection(_Frozen):
    act: str
    sections: str = ""


class HearingEvent(_Frozen):
    date: Optional[str] = None
    purpose: Optional[str] = None
    judge: Optional[str] = None
    business_date: Optional[str] = None
    registration_number: Optional[str] = None


class OrderEntry(_Frozen):
    number: Optional[str] = None
    date: Optional[str] = None
    judge: Optional[str] = None
    link: Optional[str] = None
    case_number: Optional[str] = None


class InterlocutoryApplication(_Frozen):
    ia_number: Optional[str] = None
    party: Optional[str] = None
    filing_date: Optional[str] = None
    next_date: Optional[str] = None
    status: Optional[str] = None


class ProcessEntry(_Frozen):
    process_id: Optional[str] = None
    process_date: Optional[str] = None
    title: Optional[str] = None
    party_name: Optional[str] = None
    issued_process: Optional[str] = None


class CaseRecord(_Frozen):
    identifiers: FrozenSet[str] = frozenset()
    filing: FilingInfo = Field(default_factory=FilingInfo)
    status: CaseStatus = Field(default_factory=CaseStatus)
    parties: Parties = Field(default_factory=Parties)
    acts_and_sections: List[ActSection] = Field(default_factory=list)
    history: List[HearingEvent] = Field(default_factory=list)
    orders: List[OrderEntry] = Field(default_factory=list)
    interlocutory_applications: List[InterlocutoryApplication] = Field(default_factory=list)
    processes: List[ProcessEntry] = Field(default_factory=list)
    source_court_label: Optional[str] = None
    source_kind: Optional[SourceKind] = None

    def is_empty(self) -> bool:
        return self == CaseRecord(source_kind=self.source_kind)


class SearchContext(_Frozen):
    district_name: Optional[str] = None
    litigant_name: Optional[str] = None
    case_status: Optional[str] = None


class RowRecord(_Frozen):
    cino: Optional[str] = None
    diary_number: Optional[str] = None
    case_type: Optional[str] = None
    case_number: Optional[str] = None
    case_year: Optional[str] = None
    petitioner_name: Optional[str] = None
    respondent_name: Optional[str] = None
    serial_number: Optional[str] = None
    court_name: Optional[str] = None
    est_code: Optional[str] = None
    district_name: Optional[str] = None
    litigant_name: Optional[str] = None
    search_status: Optional[str] = None
    advocate_names: List[str] = Field(default_factory=list)

    @property
    def primary_identifier(self) -> Optional[str]:
        return self.cino or self.diary_number or None


class ResultGroups(dict):
    """Sub-court label -> rows, in document order.

    ``dropped`` counts rows discarded because no identifier could be resolved.
    """

    def __init__(self, *args, dropped: int = 0, **kwargs):
        super().__init__(*args, **kwargs)
        self.dropped = dropped

    def row_count(self) -> int:
        return sum(len(rows) for rows in self.values())


__all__ = [
    'NOT_AVAILABLE', 'SourceKind', 'DEFAULT_COURT_LABELS',
    'Link', 'LinkCell', 'Cell', 'Row', 'Table',
    'FilingInfo', 'CaseStatus', 'Party', 'Parties', 'ActSection', 'HearingEvent',
    'OrderEntry', 'InterlocutoryApplication', 'ProcessEntry', 'CaseRecord',
    'SearchContext', 'RowRecord', 'ResultGroups',
]
