from court_records import build_key_set, is_tracked, parse_case_detail, tracked_flags
from court_records.ingest.schemas import RowRecord
from court_records.reconcile.tracking import canonical_number, composite_key, record_keys, reference_keys, split_combined


def test_canonical_numbers():
    assert canonical_number("0007") == "7"
    assert canonical_number(" 12 ") == "12"
    assert canonical_number("12A") == "12A"
    assert composite_key("crl", "0007", "2021") == "CRL/7/2021"
    assert composite_key("CRL", "", "2021") is None


def test_split_combined_keeps_slashes_in_type():
    assert split_combined("CRL/123/2021") == ("CRL", "123", "2021")
    assert split_combined("CRL.A/S/12/2020") == ("CRL.A/S", "12", "2020")
    assert split_combined("123") == ("123", "", "")


def test_leading_zeros_match():
    key_set = build_key_set([{"case_type": "crl", "case_number": "0007", "case_year": "2021"}])
    row = RowRecord(cino="MHPU010000072021", case_type="CRL", case_number="7", case_year="2021")
    assert is_tracked(row, key_set)


def test_primary_or_composite_either_side():
    key_set = build_key_set([
        {"cino": "MHPU010012342021"},
        {"Case Type/Case Number/Case Year": "WP/0678/2022"},
    ])
    by_primary = RowRecord(cino="MHPU010012342021")
    by_composite = RowRecord(cino="KAHC010123452022", case_type="WP", case_number="678", case_year="2022")
    unrelated = RowRecord(cino="KAHC019999992022", case_type="WP", case_number="679", case_year="2022")
    assert tracked_flags([by_primary, by_composite, unrelated], key_set) == [True, True, False]


def test_followed_envelope_and_diary():
    key_set = build_key_set([{"followed": {"diary_no": "12345", "diary_year": "2023"}}])
    assert "12345/2023" in key_set
    assert is_tracked(RowRecord(diary_number="012345/2023"), key_set)


def test_tracked_row_records():
    tracked = [RowRecord(cino="MHPU010012342021", case_type="CRL", case_number="123", case_year="2021")]
    assert reference_keys(tracked[0]) == ["MHPU010012342021", "CRL/123/2021"]
    assert is_tracked(RowRecord(cino="MHPU010012342021"), build_key_set(tracked))


def test_empty_key_set_tracks_nothing():
    assert build_key_set(None) == frozenset()
    assert build_key_set([{}, "junk", {"followed": {}}]) == frozenset()
    row = RowRecord(cino="MHPU010012342021")
    assert not is_tracked(row, frozenset())
    assert tracked_flags([row, row], frozenset()) == [False, False]


def test_tracked_collection_not_mutated():
    tracked = [{"cino": "A1"}, {"followed": {"cino": "B2"}}]
    snapshot = [dict(t) for t in tracked]
    build_key_set(tracked)
    assert tracked == snapshot


def test_case_record_keys(load_fixture):
    record = parse_case_detail(load_fixture("district_case.html"), "district")
    assert record_keys(record) == ["CRL/123/2021", "MHPU010012342021"]
    key_set = build_key_set([record])
    assert key_set == {"CRL/123/2021", "MHPU010012342021"}
    assert is_tracked(RowRecord(cino="MHPU010012342021"), key_set)
    assert is_tracked(RowRecord(cino="MHPU019999992021", case_type="CRL", case_number="0123", case_year="2021"), key_set)
    # a bare registration number must not pass for diary 123/2021
    assert not is_tracked(RowRecord(diary_number="123/2021"), key_set)


def test_supreme_record_tracks_diary_row():
    payload = {"case_details": {"success": True, "data": {"data": (
        "<div>Diary No.: 999/2024 Filed on 01-02-2024</div>"
    )}}}
    key_set = build_key_set([parse_case_detail(payload, "supreme")])
    assert is_tracked(RowRecord(diary_number="999/2024"), key_set)
