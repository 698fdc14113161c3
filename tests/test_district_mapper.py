from court_records import parse_case_detail
from court_records.ingest.schemas import CaseRecord, SourceKind


def _status_table(rows_html):
    return f"<table><caption>Case Status</caption>{rows_html}</table>"


def test_district_detail_page(load_fixture):
    record = parse_case_detail(load_fixture("district_case.html"), "district")

    assert record.source_kind is SourceKind.DISTRICT
    assert record.source_court_label == "District and Sessions Court, Pune"

    filing = record.filing
    assert filing.case_type == "CRL"
    assert filing.filing_number == "4567/2021"
    assert filing.filing_date == "02-03-2021"
    assert filing.registration_number == "123/2021"
    assert filing.registration_date == "05-03-2021"
    assert filing.cnr_number == "MHPU010012342021"
    assert record.identifiers == {"MHPU010012342021", "123/2021", "CRL/123/2021"}

    status = record.status
    assert status.first_hearing_date == "10-03-2021"
    assert status.next_hearing_date == "15-11-2026"
    assert status.stage == "PENDING"
    assert status.stage_detail == "Arguments"
    assert status.court_and_judge == "Court 3 / Judge X"

    petitioners = [(p.name, p.advocate) for p in record.parties.petitioners]
    respondents = [(p.name, p.advocate) for p in record.parties.respondents]
    assert petitioners == [("State of Maharashtra", "P. Kulkarni")]
    assert respondents == [("Ramesh Patil", "S. Deshmukh"), ("Sunita Patil", None)]

    assert [(a.act, a.sections) for a in record.acts_and_sections] == [("Indian Penal Code", "420, 34")]

    assert len(record.history) == 2
    assert record.history[0].business_date == "10-03-2021"
    assert record.history[0].date == "12-04-2021"
    assert record.history[1].purpose == "Arguments"

    order = record.orders[0]
    assert (order.number, order.date, order.judge) == ("1", "12-04-2021", "Judge X")
    assert order.link == "/ecourtindia_v6/orders/1.pdf"

    ia = record.interlocutory_applications[0]
    assert (ia.ia_number, ia.status, ia.next_date) == ("IA/1/2021", "Pending", "15-11-2026")

    assert record.processes[0].process_id == "P-1001"
    assert record.processes[0].issued_process == "Issued"


def test_order_links_resolve_against_base_url(load_fixture):
    record = parse_case_detail(load_fixture("district_case.html"), "district",
                               base_url="https://services.ecourts.gov.in/ecourtindia_v6/")
    assert record.orders[0].link == "https://services.ecourts.gov.in/ecourtindia_v6/orders/1.pdf"


def test_single_status_row_without_header():
    markup = _status_table(
        "<tr><td>10-03-2021</td><td>15-11-2026</td><td>PENDING</td><td>Evidence</td><td>Court 1</td></tr>"
    )
    record = parse_case_detail(markup, "district")
    assert record.status.stage == "PENDING"
    assert record.status.next_hearing_date == "15-11-2026"
    assert record.status.stage_detail == "Evidence"


def test_label_layout_status():
    markup = _status_table(
        "<tr><td>First Hearing Date</td><td>10-03-2021</td></tr>"
        "<tr><td>Case Status</td><td>Disposed</td></tr>"
        "<tr><td>Decision Date</td><td>01-01-1970</td></tr>"
        "<tr><td>Nature of Disposal</td><td>Uncontested--Withdrawn</td></tr>"
    )
    status = parse_case_detail(markup, "district").status
    assert status.stage == "Disposed"
    assert status.first_hearing_date == "10-03-2021"
    assert status.decision_date == "Not Available"
    assert status.nature_of_disposal == "Uncontested--Withdrawn"
    assert status.next_hearing_date is None


def test_empty_or_error_page_is_default_record():
    for markup in ("", None, "<html><body>Invalid Captcha</body></html>"):
        record = parse_case_detail(markup, SourceKind.DISTRICT)
        assert record == CaseRecord(source_kind=SourceKind.DISTRICT)
        assert record.is_empty()


def test_missing_sections_keep_defaults():
    record = parse_case_detail(_status_table(
        "<tr><td>10-03-2021</td><td>15-11-2026</td><td>PENDING</td></tr>"), "district")
    assert record.filing.cnr_number is None
    assert record.parties.petitioners == []
    assert record.orders == []
    assert record.identifiers == frozenset()


def test_section_complete_fixture_populates_every_field(load_fixture):
    record = parse_case_detail(load_fixture("district_case.html"), "district")
    entries = [record.filing, *record.history, *record.interlocutory_applications, *record.processes]
    for entry in entries:
        assert None not in entry.model_dump().values(), entry
    assert all(p.advocate for p in record.parties.petitioners)
