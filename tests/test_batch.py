import pytest

from court_records import normalize_batch, parse_case_detail
from court_records.errors import UnsupportedSourceError
from court_records.ingest import batch
from court_records.ingest.batch import default_workers
from court_records.ingest.schemas import SourceKind


def _documents(load_fixture):
    return [
        (load_fixture("district_case.html"), "district"),
        {"markup": load_fixture("high_court_case.html"), "source": "high"},
        {"html": load_fixture("supreme_case.html"), "source_kind": SourceKind.SUPREME},
        ("", "district"),
    ]


def test_batch_matches_single_parses_in_order(load_fixture):
    documents = _documents(load_fixture)
    records = normalize_batch(documents, max_workers=1)
    assert [r.source_kind for r in records] == [
        SourceKind.DISTRICT, SourceKind.HIGH, SourceKind.SUPREME, SourceKind.DISTRICT,
    ]
    assert records[0] == parse_case_detail(load_fixture("district_case.html"), "district")
    assert records[3].is_empty()


def test_batch_over_process_pool_keeps_order(load_fixture):
    documents = _documents(load_fixture)
    assert normalize_batch(documents, max_workers=2) == normalize_batch(documents, max_workers=1)


def test_base_url_in_tuple_entry(load_fixture):
    (record,) = normalize_batch([(load_fixture("district_case.html"), "district", "https://example.org/")])
    assert record.orders[0].link == "https://example.org/ecourtindia_v6/orders/1.pdf"


def test_empty_batch():
    assert normalize_batch([]) == []


def test_unsupported_source_raises_before_work():
    with pytest.raises(UnsupportedSourceError):
        normalize_batch([("<p>ok</p>", "district"), ("<p>ok</p>", "tribunal")], max_workers=2)


def test_bad_entry_shape():
    with pytest.raises(TypeError):
        normalize_batch(["<p>just markup</p>"])


def test_default_workers_follow_cores(monkeypatch):
    monkeypatch.setattr(batch.os, "cpu_count", lambda: 3)
    assert default_workers() == 3
    monkeypatch.setattr(batch.os, "cpu_count", lambda: None)
    assert default_workers() == 1


def test_single_worker_runs_inline(monkeypatch, load_fixture):
    def no_pool(*args, **kwargs):
        raise AssertionError("process pool started")

    monkeypatch.setattr(batch, "ProcessPoolExecutor", no_pool)
    records = normalize_batch(_documents(load_fixture), max_workers=1)
    assert len(records) == 4
    (record,) = normalize_batch([(load_fixture("district_case.html"), "district")], max_workers=8)
    assert record.source_kind == SourceKind.DISTRICT

