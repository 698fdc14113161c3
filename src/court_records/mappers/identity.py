"""Identifier collection for mapped case records."""
from __future__ import annotations
import re
from typing import FrozenSet, Iterable, Optional

from court_records.ingest.schemas import FilingInfo
from court_records.reconcile.tracking import composite_key, diary_key, split_combined

_NUMBER_YEAR = re.compile(r"(\d+)\s*/\s*(\d{4})")


def registration_key(case_type: Optional[str], registration_number: Optional[str]) -> Optional[str]:
    """Composite key from a registration number.

    Accepts ``TYPE/NUMBER/YEAR`` as well as ``NUMBER/YEAR`` paired with the
    separately known case type.
    """
    if not registration_number:
        return None
    pieces = [p.strip() for p in registration_number.split("/") if p.strip()]
    if len(pieces) >= 3:
        return composite_key(*split_combined(registration_number))
    m = _NUMBER_YEAR.search(registration_number)
    if m and case_type:
        return composite_key(case_type, m.group(1), m.group(2))
    return None


def diary_identifier(text: Optional[str]) -> Optional[str]:
    m = _NUMBER_YEAR.search(text or "")
    if not m:
        return None
    return diary_key(m.group(1), m.group(2))


def record_identifiers(filing: FilingInfo, extra: Iterable[Optional[str]] = ()) -> FrozenSet[str]:
    ids = set()
    if filing.cnr_number:
        ids.add(filing.cnr_number.strip())
    if filing.registration_number:
        ids.add(filing.registration_number.strip())
    key = registration_key(filing.case_type, filing.registration_number)
    if key:
        ids.add(key)
    for value in extra:
        if value and value.strip():
            ids.add(value.strip())
    return frozenset(ids)


__all__ = ['record_identifiers', 'registration_key', 'diary_identifier']
