import json

import pytest

from court_records import parse_search_results
from court_records.errors import UnsupportedSourceError
from court_records.ingest.schemas import ResultGroups, SearchContext


def test_district_search_html_groups(load_fixture):
    groups = parse_search_results(load_fixture("district_search.html"), "district")

    assert list(groups) == ["Chief Judicial Magistrate, Pune", "Civil Judge Senior Division, Pune"]
    assert groups.dropped == 2
    assert groups.row_count() == 3

    first, second = groups["Chief Judicial Magistrate, Pune"]
    assert first.cino == "MHPU010012342021"
    assert (first.case_type, first.case_number, first.case_year) == ("CRL", "123", "2021")
    assert first.petitioner_name == "State of Maharashtra"
    assert first.respondent_name == "Ramesh Patil"
    assert first.serial_number == "1"
    assert first.est_code == "MHPU01"
    assert first.court_name == "Chief Judicial Magistrate, Pune"

    # CNR taken from the onclick handler when there is no data-cno
    assert second.cino == "MHPU010004562020"
    assert second.case_number == "0456"

    (civil,) = groups["Civil Judge Senior Division, Pune"]
    assert civil.cino == "MHPU020000772018"


def test_empty_container_is_omitted(load_fixture):
    groups = parse_search_results(load_fixture("district_search.html"), "district")
    assert "Small Causes Court, Pune" not in groups
    assert all(rows for rows in groups.values())


def test_context_fills_row_defaults(load_fixture):
    context = SearchContext(district_name="Pune", litigant_name="Patil", case_status="Pending")
    groups = parse_search_results(load_fixture("district_search.html"), "district", context=context)
    row = groups["Chief Judicial Magistrate, Pune"][0]
    assert (row.district_name, row.litigant_name, row.search_status) == ("Pune", "Patil", "Pending")


def test_high_court_json_results(load_fixture):
    groups = parse_search_results(load_fixture("high_court_search.json"), "high")

    assert list(groups) == ["Principal Bench at Bengaluru", "Dharwad Bench"]
    assert groups.dropped == 1
    row = groups["Principal Bench at Bengaluru"][0]
    assert row.cino == "KAHC010123452022"
    assert (row.case_type, row.case_number, row.case_year) == ("WP", "678", "2022")
    assert row.petitioner_name == "M/s Sunrise Traders"
    assert row.respondent_name == "State of Karnataka"
    assert row.advocate_names == ["K. Shetty"]


def test_json_already_decoded(load_fixture):
    payload = json.loads(load_fixture("high_court_search.json"))
    assert parse_search_results(payload, "high") == parse_search_results(payload["results"], "high")


def test_combined_case_field_and_versus_text():
    payload = [{
        "cino": "MHPU010012342021",
        "Case Type/Case Number/Case Year": "CRL/123/2021",
        "Petitioner versus Respondent": "State of Maharashtra versus Ramesh Patil",
    }]
    groups = parse_search_results(payload, "district")
    (row,) = groups["District Court"]
    assert (row.case_type, row.case_number, row.case_year) == ("CRL", "123", "2021")
    assert (row.petitioner_name, row.respondent_name) == ("State of Maharashtra", "Ramesh Patil")


def test_versus_inside_party_name_is_split_literally():
    payload = [{"cino": "X1", "parties": "Universus Pvt Ltd versus Ramesh Patil"}]
    (row,) = parse_search_results(payload, "district")["District Court"]
    assert row.petitioner_name == "Uni"
    assert row.respondent_name == "Pvt Ltd"


def test_supreme_diary_rows():
    payload = {"data": [
        {"diary_no": "12345", "diary_year": "2023", "pet_name": "RAMESH KUMAR", "res_name": "STATE OF UP"},
        {"pet_name": "NO DIARY"},
    ]}
    groups = parse_search_results(payload, "supreme")
    (row,) = groups["Supreme Court of India"]
    assert row.diary_number == "12345/2023"
    assert row.primary_identifier == "12345/2023"
    assert groups.dropped == 1


@pytest.mark.parametrize("payload", [{"message": "no records"}, 42, "", "<p>Record not found</p>", "{broken"])
def test_unrecognized_payload_is_empty(payload):
    groups = parse_search_results(payload, "district")
    assert groups == ResultGroups()
    assert groups.dropped == 0


def test_unknown_source_raises():
    with pytest.raises(UnsupportedSourceError):
        parse_search_results("[]", "tribunal")
