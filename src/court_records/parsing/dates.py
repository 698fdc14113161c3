"""Display normalization for portal dates.

Portals mix ``dd-mm-yyyy``, ``dd/mm/yyyy``, ISO dates and long forms such as
``12th March 2021``. Parseable values are rendered as ``dd-mm-yyyy``; known
placeholders become ``"Not Available"``; anything else passes through as the
raw text. No date is ever guessed: a value missing its day, month or year is
left as text.
"""
from __future__ import annotations
import re
from datetime import datetime
from typing import Optional

from dateutil import parser as dtp

from court_records.ingest.schemas import NOT_AVAILABLE

DISPLAY_FORMAT = "%d-%m-%Y"

PLACEHOLDER_DATES = (
    "1970-01-01",
    "01-01-1970",
    "01/01/1970",
    "0000-00-00",
    "00-00-0000",
    "00/00/0000",
)

# two defaults that differ in every date part; a part filled from the default shows up as a mismatch
_DEFAULTS = (datetime(2000, 1, 1), datetime(2001, 2, 2))
_YEAR_FIRST = re.compile(r"^\d{4}[-/]\d{1,2}[-/]\d{1,2}")


def is_placeholder(text: str) -> bool:
    return any(p in text for p in PLACEHOLDER_DATES)


def parse_date(text: str) -> Optional[datetime]:
    cleaned = re.sub(r"\s+", " ", text).strip()
    if not cleaned:
        return None
    # Indian portals write day first, except for ISO timestamps
    dayfirst = not _YEAR_FIRST.match(cleaned)
    try:
        first, second = (dtp.parse(cleaned, dayfirst=dayfirst, yearfirst=not dayfirst, default=d)
                         for d in _DEFAULTS)
    except (ValueError, OverflowError):
        return None
    if first.date() != second.date():
        return None
    return first


def normalize_date(text: Optional[str]) -> Optional[str]:
    if text is None:
        return None
    text = str(text).strip()
    if not text:
        return None
    if is_placeholder(text):
        return NOT_AVAILABLE
    parsed = parse_date(text)
    if parsed is None:
        return text
    return parsed.strftime(DISPLAY_FORMAT)


__all__ = ['normalize_date', 'parse_date', 'is_placeholder', 'PLACEHOLDER_DATES', 'DISPLAY_FORMAT']
