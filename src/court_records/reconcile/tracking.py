"""Is a freshly parsed row already tracked?

Tracked references are whatever field bag the follow-list service stored at
follow time, so a fresh row and its tracked counterpart do not always share
an identifying field. Both sides are therefore reduced to the same keys:

 - the primary identifier (CINO / CNR, or the apex-court diary ``n/yyyy``);
 - a composite ``TYPE/NUMBER/YEAR`` key with the number and year in
   canonical integer form, so ``"0007"`` and ``"7"`` agree.

A mapped ``CaseRecord`` contributes its identifier set instead.

A row counts as tracked when either of its keys is in the set built from
the tracked references. Everything here is pure; the tracked collection is
only read.
"""
from __future__ import annotations
import logging
import re
from typing import Any, FrozenSet, Iterable, List, Mapping, Optional, Set, Tuple

from pydantic import BaseModel

from court_records.ingest.schemas import CaseRecord, RowRecord

logger = logging.getLogger(__name__)

KeySet = FrozenSet[str]

KEY_DELIMITER = "/"

PRIMARY_FIELDS = ("cino", "CINO", "cnr", "CNR", "cnr_number", "cnr_no", "View")
DIARY_FIELDS = ("diary_number", "diary_no_year", "Diary Number")
CASE_TYPE_FIELDS = ("case_type", "type_name", "Case Type", "case_type_name")
CASE_NUMBER_FIELDS = ("case_number", "case_no2", "fil_no", "reg_no", "Case Number", "case_no")
CASE_YEAR_FIELDS = ("case_year", "fil_year", "reg_year", "Case Year")
COMBINED_CASE_FIELDS = ("Case Type/Case Number/Case Year", "case_type_number_year")


def canonical_number(value: Any) -> str:
    """``"0007"`` -> ``"7"``; non-numeric text is only trimmed."""
    if value is None:
        return ""
    text = re.sub(r"\s+", "", str(value))
    if text.isdigit():
        return str(int(text))
    return text


def canonical_type(value: Any) -> str:
    if value is None:
        return ""
    return re.sub(r"\s+", " ", str(value)).strip().upper()


def composite_key(case_type: Any, case_number: Any, case_year: Any) -> Optional[str]:
    parts = (canonical_type(case_type), canonical_number(case_number), canonical_number(case_year))
    if not all(parts):
        return None
    return KEY_DELIMITER.join(parts)


def diary_key(number: Any, year: Any) -> Optional[str]:
    n, y = canonical_number(number), canonical_number(year)
    if not n or not y:
        return None
    return f"{n}/{y}"


def split_combined(value: Any) -> Tuple[str, str, str]:
    """``"CRL/123/2021"`` -> ``("CRL", "123", "2021")``.

    The last two pieces are number and year; anything before them is the
    case type, which may itself contain a slash.
    """
    pieces = [p.strip() for p in str(value or "").split("/")]
    if len(pieces) < 3:
        pieces += [""] * (3 - len(pieces))
        return pieces[0], pieces[1], pieces[2]
    return "/".join(pieces[:-2]), pieces[-2], pieces[-1]


def _as_mapping(entry: Any) -> Mapping[str, Any]:
    if isinstance(entry, BaseModel):
        entry = entry.model_dump()
    if not isinstance(entry, Mapping):
        return {}
    followed = entry.get("followed")
    if isinstance(followed, Mapping):
        return followed
    return entry


def first_value(data: Mapping[str, Any], fields: Iterable[str]) -> str:
    for f in fields:
        value = data.get(f)
        if value is not None and str(value).strip():
            return str(value).strip()
    return ""


def diary_of(data: Mapping[str, Any]) -> Optional[str]:
    diary = first_value(data, DIARY_FIELDS)
    if diary:
        n, _, y = diary.partition("/")
        return diary_key(n, y) or diary
    return diary_key(data.get("diary_no"), data.get("diary_year"))


def primary_identifier_of(data: Mapping[str, Any]) -> Optional[str]:
    return first_value(data, PRIMARY_FIELDS) or diary_of(data)


def composite_key_of(data: Mapping[str, Any]) -> Optional[str]:
    key = composite_key(first_value(data, CASE_TYPE_FIELDS), first_value(data, CASE_NUMBER_FIELDS),
                        first_value(data, CASE_YEAR_FIELDS))
    if key:
        return key
    combined = first_value(data, COMBINED_CASE_FIELDS)
    if combined:
        return composite_key(*split_combined(combined))
    return None


def record_keys(record: CaseRecord) -> List[str]:
    """Keys of a mapped case record: its identifiers minus the bare registration number.

    A registration number without its case type (``123/2021``) reads like a
    diary number, so only the composite built from it takes part.
    """
    registration = (record.filing.registration_number or "").strip()
    return sorted(k for k in record.identifiers if k != registration)


def reference_keys(entry: Any) -> List[str]:
    if isinstance(entry, CaseRecord):
        return record_keys(entry)
    data = _as_mapping(entry)
    return [k for k in (first_value(data, PRIMARY_FIELDS), diary_of(data), composite_key_of(data)) if k]


def row_keys(row: RowRecord) -> List[str]:
    keys: List[str] = []
    primary = row.primary_identifier
    if primary:
        keys.append(primary)
        if row.diary_number:
            n, _, y = row.diary_number.partition("/")
            canonical = diary_key(n, y)
            if canonical and canonical != primary:
                keys.append(canonical)
    composite = composite_key(row.case_type, row.case_number, row.case_year)
    if composite:
        keys.append(composite)
    return keys


def build_key_set(tracked: Optional[Iterable[Any]]) -> KeySet:
    """Keys of every tracked reference; build once per reconciliation pass."""
    keys: Set[str] = set()
    for entry in tracked or ():
        keys.update(reference_keys(entry))
    logger.debug(f"Built tracked key set with {len(keys)} keys")
    return frozenset(keys)


def is_tracked(row: RowRecord, key_set: KeySet) -> bool:
    if not key_set:
        return False
    return any(k in key_set for k in row_keys(row))


def tracked_flags(rows: Iterable[RowRecord], key_set: KeySet) -> List[bool]:
    return [is_tracked(r, key_set) for r in rows]


__all__ = [
    'KeySet', 'build_key_set', 'is_tracked', 'tracked_flags', 'row_keys', 'reference_keys', 'record_keys',
    'composite_key', 'canonical_number', 'canonical_type', 'split_combined', 'diary_key',
    'primary_identifier_of', 'diary_of', 'composite_key_of', 'first_value',
]
