"""Batch normalization of many case detail documents.

Parsing is CPU-bound and holds no shared state, so a batch (for example
every tracked case on a dashboard refresh) fans out one document per task
over a process pool sized to the cores and fans back in, input order kept.
There is no I/O here; timeouts and retries belong to whoever fetched the
documents.
"""
from __future__ import annotations
import logging
import os
from concurrent.futures import ProcessPoolExecutor
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Tuple

from court_records.ingest.schemas import CaseRecord, SourceKind

logger = logging.getLogger(__name__)

Document = Tuple[Any, SourceKind, Optional[str]]


def _as_document(entry: Any) -> Document:
    if isinstance(entry, Mapping):
        markup = entry.get("markup", entry.get("html"))
        kind = entry.get("source", entry.get("source_kind"))
        return markup, SourceKind.coerce(kind), entry.get("base_url")
    if isinstance(entry, (tuple, list)) and len(entry) in (2, 3):
        base_url = entry[2] if len(entry) == 3 else None
        return entry[0], SourceKind.coerce(entry[1]), base_url
    raise TypeError(f"Unsupported batch entry: {type(entry).__name__}")


def _normalize_one(document: Document) -> CaseRecord:
    # the package imports this module, so resolve the entry point at call time
    from court_records import parse_case_detail
    markup, kind, base_url = document
    return parse_case_detail(markup, kind, base_url=base_url)


def default_workers() -> int:
    return os.cpu_count() or 1


def normalize_batch(documents: Iterable[Any], max_workers: Optional[int] = None) -> List[CaseRecord]:
    """Case records for ``documents``, in input order.

    Entries are ``(markup, source_kind[, base_url])`` pairs or mappings with
    ``markup``/``html``, ``source`` and optional ``base_url``. Every source
    kind is checked before any work starts, so a bad entry raises
    immediately instead of from inside a worker. ``max_workers`` defaults
    to the core count.
    """
    batch: Sequence[Document] = [_as_document(d) for d in documents]
    if len(batch) <= 1:
        return [_normalize_one(d) for d in batch]
    workers = min(max_workers or default_workers(), len(batch))
    if workers <= 1:
        return [_normalize_one(d) for d in batch]
    logger.info(f"Normalizing {len(batch)} documents over {workers} workers")
    with ProcessPoolExecutor(max_workers=workers) as executor:
        return list(executor.map(_normalize_one, batch))


__all__ = ['normalize_batch', 'default_workers']
