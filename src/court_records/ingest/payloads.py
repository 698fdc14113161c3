"""Boundary handling for raw payloads handed in by the fetch layer.

Search endpoints answer with a bare list, or with the list wrapped under one
of a few keys. That shape is resolved once here into ``Rows`` or ``Wrapped``
so nothing downstream re-checks it.
"""
from __future__ import annotations
import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

logger = logging.getLogger(__name__)

WRAPPER_KEYS = ("results", "data", "cases")


@dataclass
class Rows:
    items: List[Dict[str, Any]] = field(default_factory=list)


@dataclass
class Wrapped:
    key: str
    items: List[Dict[str, Any]] = field(default_factory=list)


ResultPayload = Union[Rows, Wrapped]


def maybe_json(payload: Any) -> Any:
    """Decode ``payload`` when it is a string that looks like JSON.

    Anything else, including strings that fail to decode, comes back as-is
    so the caller can treat it as markup.
    """
    if not isinstance(payload, (str, bytes)):
        return payload
    text = payload.decode("utf-8", errors="replace") if isinstance(payload, bytes) else payload
    stripped = text.lstrip()
    if not stripped.startswith(("{", "[")):
        return text
    try:
        return json.loads(stripped)
    except ValueError as e:
        logger.debug(f"Payload looked like JSON but did not decode ({e}); treating as HTML")
        return text


def _dicts(items: List[Any]) -> List[Dict[str, Any]]:
    return [item for item in items if isinstance(item, dict)]


def resolve_payload(data: Any) -> Optional[ResultPayload]:
    """``Rows`` for a bare list, ``Wrapped`` for the first list under a known key."""
    if isinstance(data, list):
        return Rows(_dicts(data))
    if isinstance(data, dict):
        for key in WRAPPER_KEYS:
            value = data.get(key)
            if isinstance(value, list):
                return Wrapped(key, _dicts(value))
    return None


__all__ = ['Rows', 'Wrapped', 'ResultPayload', 'maybe_json', 'resolve_payload', 'WRAPPER_KEYS']
