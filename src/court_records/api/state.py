from typing import Any, Dict
import time

# Parse Stats (for monitoring)
parse_stats: Dict[str, Any] = {
    'documents_parsed': 0,
    'empty_records': 0,
    'search_rows': 0,
    'rows_dropped': 0,
    'last_parse_time': None,
}

# Metrics
REQUEST_COUNT: Any = None
REQUEST_LATENCY: Any = None
DOCUMENTS_PARSED: Any = None


def record_parse(source: str, empty: bool) -> None:
    """Update parse statistics for monitoring."""
    parse_stats['documents_parsed'] = int(parse_stats.get('documents_parsed') or 0) + 1
    parse_stats['last_parse_time'] = time.time()
    if empty:
        parse_stats['empty_records'] = int(parse_stats.get('empty_records') or 0) + 1
    if DOCUMENTS_PARSED is not None:
        DOCUMENTS_PARSED.labels(source, 'empty' if empty else 'ok').inc()


def record_search(rows: int, dropped: int) -> None:
    parse_stats['search_rows'] = int(parse_stats.get('search_rows') or 0) + rows
    parse_stats['rows_dropped'] = int(parse_stats.get('rows_dropped') or 0) + dropped
