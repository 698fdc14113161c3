"""Act / section references from free text.

Portals that do not tabulate acts give them as prose such as:
  - Section 482 CrPC
  - Sec. 438 of the Code of Criminal Procedure, 1973
  - S. 138 NI Act
  - Indian Penal Code, 1860 U/s 302, 34

Returns ``ActSection`` pairs; text with no recognizable section keeps the
whole text as the act name.
"""
from __future__ import annotations
import re
from typing import List, Optional

from court_records.ingest.schemas import ActSection

SECTION_RE = re.compile(
    r"\b(?:section|sec\.|s\.|u/s\.?)\s*(\d+[A-Za-z]*(?:\s*\(\w+\))?)\s*(?:of\s+the\s+)?"
    r"(code\s+of\s+criminal\s+procedure(?:,?\s*1973)?|crpc|cr\.p\.c\.?|ipc|i\.p\.c\.?|indian\s+penal\s+code(?:,?\s*1860)?"
    r"|ni\s+act|negotiable\s+instruments\s+act(?:,?\s*1881)?)?",
    re.IGNORECASE,
)

ACT_ALIASES = {
    'crpc': 'CrPC',
    'cr.p.c': 'CrPC',
    'cr.p.c.': 'CrPC',
    'code of criminal procedure': 'CrPC',
    'code of criminal procedure, 1973': 'CrPC',
    'code of criminal procedure 1973': 'CrPC',
    'ipc': 'IPC',
    'i.p.c': 'IPC',
    'i.p.c.': 'IPC',
    'indian penal code': 'IPC',
    'indian penal code, 1860': 'IPC',
    'indian penal code 1860': 'IPC',
    'ni act': 'NI Act',
    'negotiable instruments act': 'NI Act',
    'negotiable instruments act, 1881': 'NI Act',
    'negotiable instruments act 1881': 'NI Act',
}

# "Indian Penal Code, 1860 U/s 302, 34"
_ACT_THEN_SECTIONS = re.compile(r"^(?P<act>.+?)\s+(?:u/s\.?|under\s+sections?)\s*(?P<sections>[\w(),\s/-]+)$", re.IGNORECASE)


def canonical_act(name: str) -> str:
    key = re.sub(r"\s+", " ", name).strip().lower()
    return ACT_ALIASES.get(key, re.sub(r"\s+", " ", name).strip())


def extract_act_sections(text: Optional[str], default_act: str = "") -> List[ActSection]:
    if not text or not text.strip():
        return []
    text = re.sub(r"\s+", " ", text).strip()
    m = _ACT_THEN_SECTIONS.match(text)
    if m:
        return [ActSection(act=m.group("act").strip(" ,"), sections=m.group("sections").strip(" ,"))]
    refs: List[ActSection] = []
    for m in SECTION_RE.finditer(text):
        act = canonical_act(m.group(2)) if m.group(2) else default_act
        refs.append(ActSection(act=act, sections=m.group(1).strip()))
    if not refs:
        return [ActSection(act=text, sections="")]
    seen = set()
    dedup = []
    for r in refs:
        key = (r.act, r.sections)
        if key in seen:
            continue
        seen.add(key)
        dedup.append(r)
    return dedup


__all__ = ['extract_act_sections', 'canonical_act', 'ACT_ALIASES']
