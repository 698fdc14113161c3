"""Normalize court portal documents into case records.

Public entry points:
 - :func:`parse_case_detail` for one case detail page;
 - :func:`parse_search_results` for a search answer grouped by sub-court;
 - :func:`build_key_set` / :func:`is_tracked` for follow-list reconciliation;
 - :func:`normalize_batch` for many detail pages at once.
"""
from __future__ import annotations
import logging
from typing import Any, Optional

from court_records.errors import CourtRecordsError, UnsupportedSourceError
from court_records.ingest.schemas import (
    CaseRecord, ResultGroups, RowRecord, SearchContext, SourceKind,
)
from court_records.parsing.fallback import extract_grid, structure_text
from court_records.parsing.tables import extract_tables
from court_records.grouping.results import parse_search_results
from court_records.ingest.batch import normalize_batch
from court_records.mappers import map_document
from court_records.reconcile import KeySet, build_key_set, is_tracked, tracked_flags

logger = logging.getLogger(__name__)

__version__ = "0.1.0"


def parse_case_detail(markup: Any, source_kind: Any, base_url: Optional[str] = None) -> CaseRecord:
    """Case record for one detail document.

    Never raises for document content: blank, error or unparseable pages
    come back as an empty record. An unknown ``source_kind`` raises
    :class:`UnsupportedSourceError`.
    """
    kind = SourceKind.coerce(source_kind)
    try:
        return map_document(markup, kind, base_url=base_url)
    except Exception as e:
        logger.warning(f"Case detail mapping failed for {kind.value} document: {e}")
        return CaseRecord(source_kind=kind)


__all__ = [
    'parse_case_detail', 'parse_search_results', 'build_key_set', 'is_tracked', 'tracked_flags',
    'normalize_batch', 'extract_tables', 'structure_text', 'extract_grid',
    'CaseRecord', 'RowRecord', 'ResultGroups', 'SearchContext', 'SourceKind', 'KeySet',
    'CourtRecordsError', 'UnsupportedSourceError',
]
