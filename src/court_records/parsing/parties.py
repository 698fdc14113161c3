"""Party-name heuristics shared by the mappers and the result grouper.

Known limitation: the "versus" split cannot tell a separator from a party
whose own name contains the word; the split is kept literal.
"""
from __future__ import annotations
import re
from typing import List, Optional, Sequence, Tuple

from court_records.ingest.schemas import Party

# "Advocate - NAME"; "Advocate-General" is a party, not a marker
ADVOCATE_MARKER = re.compile(r"\bAdvocate\s*-(?:\s+|$)", re.IGNORECASE)
VERSUS = re.compile(r"versus", re.IGNORECASE)
# "1) NAME", "2. NAME", "3 - NAME"; "3-D Ltd" is a name
_ENUMERATION = re.compile(r"^\s*\d{1,3}\s*(?:[).:]|-(?=\s))\s*")


def clean_name(text: Optional[str]) -> str:
    text = re.sub(r"\s+", " ", text or "").strip()
    return _ENUMERATION.sub("", text).strip()


def split_advocate(text: Optional[str]) -> Tuple[str, Optional[str]]:
    """``"John Doe   Advocate - Jane Roe"`` -> ``("John Doe", "Jane Roe")``."""
    text = text or ""
    m = ADVOCATE_MARKER.search(text)
    if not m:
        return clean_name(text), None
    name = clean_name(text[:m.start()])
    advocate = re.sub(r"\s+", " ", text[m.end():]).strip() or None
    return name, advocate


def party_from_text(text: Optional[str]) -> Optional[Party]:
    name, advocate = split_advocate(text)
    if not name:
        return None
    return Party(name=name, advocate=advocate)


def parties_from_lines(lines: Sequence[str]) -> List[Party]:
    """Parties from a line list where an advocate may sit on its own line.

    A line that starts with the advocate marker attaches to the party right
    above it; an inline marker splits within the line.
    """
    parties: List[Party] = []
    for line in lines:
        line = line.strip()
        if not line:
            continue
        m = ADVOCATE_MARKER.match(line)
        if m:
            advocate = re.sub(r"\s+", " ", line[m.end():]).strip() or None
            if parties and advocate:
                last = parties[-1]
                joined = f"{last.advocate}, {advocate}" if last.advocate else advocate
                parties[-1] = Party(name=last.name, advocate=joined)
            continue
        party = party_from_text(line)
        if party is not None:
            parties.append(party)
    return parties


def split_versus(text: Optional[str]) -> Tuple[str, str]:
    """Split ``"A versus B"`` into ``("A", "B")``.

    Every occurrence of "versus" (any case) is treated as a separator and the
    piece after the first one is taken as the respondent. A name that itself
    contains "versus" therefore splits wrongly; this is accepted upstream
    ambiguity.
    """
    text = re.sub(r"\s+", " ", text or "").strip()
    if not VERSUS.search(text):
        return text, ""
    pieces = VERSUS.split(text)
    return pieces[0].strip(), pieces[1].strip()


def respondent_from(text: Optional[str]) -> str:
    """Respondent from a ``"versus NAME"`` fragment, or the text itself."""
    text = re.sub(r"\s+", " ", text or "").strip()
    if VERSUS.search(text):
        return VERSUS.split(text)[1].strip()
    return text


__all__ = ['split_advocate', 'party_from_text', 'parties_from_lines', 'split_versus',
           'respondent_from', 'clean_name', 'ADVOCATE_MARKER']
