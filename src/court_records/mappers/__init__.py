"""Per-source case detail mappers.

One mapper per upstream portal, all sharing the walker, the table extractor
and the section locators in :mod:`court_records.mappers.sections`.
"""
from __future__ import annotations
from typing import Any, Callable, Dict, Mapping, Optional

from court_records.ingest.payloads import maybe_json
from court_records.ingest.schemas import CaseRecord, SourceKind
from court_records.mappers import district, high_court, supreme
from court_records.parsing.walker import HtmlWalker

Mapper = Callable[[HtmlWalker], CaseRecord]

MAPPERS: Dict[SourceKind, Mapper] = {
    SourceKind.SUPREME: supreme.map_case_detail,
    SourceKind.HIGH: high_court.map_case_detail,
    SourceKind.DISTRICT: district.map_case_detail,
}


def get_mapper(kind: SourceKind) -> Mapper:
    return MAPPERS[SourceKind.coerce(kind)]


def map_document(markup: Any, kind: SourceKind, base_url: Optional[str] = None) -> CaseRecord:
    """Run the mapper for ``kind`` over ``markup``.

    The supreme court service may also answer with its sectioned JSON
    payload, given either decoded or as a JSON string.
    """
    kind = SourceKind.coerce(kind)
    if kind is SourceKind.SUPREME:
        data = maybe_json(markup)
        if isinstance(data, Mapping):
            return supreme.map_payload(data, base_url=base_url)
        if isinstance(data, str):
            markup = data
    if not isinstance(markup, str):
        markup = ""
    return get_mapper(kind)(HtmlWalker(markup, base_url=base_url))


__all__ = ['MAPPERS', 'Mapper', 'get_mapper', 'map_document']
