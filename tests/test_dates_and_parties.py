import pytest

from court_records.parsing.acts import extract_act_sections
from court_records.parsing.dates import normalize_date
from court_records.parsing.parties import (
    parties_from_lines, party_from_text, respondent_from, split_advocate, split_versus,
)


@pytest.mark.parametrize("raw,expected", [
    ("05-03-2021", "05-03-2021"),
    ("05/03/2021", "05-03-2021"),
    ("2021-03-05", "05-03-2021"),
    ("2021-03-05T10:30:00Z", "05-03-2021"),
    ("12th March 2021", "12-03-2021"),
    ("05-Mar-2021", "05-03-2021"),
])
def test_dates_render_day_month_year(raw, expected):
    assert normalize_date(raw) == expected


@pytest.mark.parametrize("raw", ["1970-01-01", "01-01-1970", "0000-00-00"])
def test_placeholder_dates_are_not_available(raw):
    assert normalize_date(raw) == "Not Available"


def test_unparseable_date_passes_through():
    assert normalize_date("Next week") == "Next week"
    # no day given, so no day is invented
    assert normalize_date("March 2021") == "March 2021"
    assert normalize_date("") is None
    assert normalize_date(None) is None


def test_advocate_suffix_is_split():
    # spacing as it appears in the district party blocks
    assert split_advocate("John Doe    Advocate - Jane Roe") == ("John Doe", "Jane Roe")
    party = party_from_text("John Doe    Advocate - Jane Roe")
    assert party.name == "John Doe"
    assert party.advocate == "Jane Roe"


def test_party_without_advocate():
    assert split_advocate("2) Ramesh Patil") == ("Ramesh Patil", None)
    assert party_from_text("   ") is None


def test_enumeration_needs_punctuation():
    assert split_advocate("42 Enterprises Ltd")[0] == "42 Enterprises Ltd"
    assert split_advocate("3-D Technologies Ltd") == ("3-D Technologies Ltd", None)
    assert split_advocate("2 - Ramesh Patil") == ("Ramesh Patil", None)


def test_advocate_general_is_a_party_name():
    assert split_advocate("The Advocate-General of Karnataka") == ("The Advocate-General of Karnataka", None)
    assert split_advocate("State  Advocate- Government Pleader") == ("State", "Government Pleader")
    parties = parties_from_lines(["1) State of Karnataka", "2) The Advocate-General of Karnataka"])
    assert [(p.name, p.advocate) for p in parties] == [
        ("State of Karnataka", None),
        ("The Advocate-General of Karnataka", None),
    ]


def test_advocate_lines_attach_to_previous_party():
    parties = parties_from_lines([
        "1) M/s Sunrise Traders",
        "Advocate - K. Shetty",
        "Advocate - R. Bhat",
        "2) Anand Rao",
    ])
    assert [(p.name, p.advocate) for p in parties] == [
        ("M/s Sunrise Traders", "K. Shetty, R. Bhat"),
        ("Anand Rao", None),
    ]


def test_leading_advocate_line_is_ignored():
    assert parties_from_lines(["Advocate - Nobody"]) == []


def test_versus_split():
    assert split_versus("State of Maharashtra versus Ramesh Patil") == ("State of Maharashtra", "Ramesh Patil")
    assert split_versus("State VERSUS Ramesh") == ("State", "Ramesh")
    assert split_versus("No respondent given") == ("No respondent given", "")
    assert respondent_from("versus Ramesh Patil") == "Ramesh Patil"


def test_versus_inside_a_name_splits_wrongly():
    # Known limitation: the separator cannot be told apart from a name containing the word.
    petitioner, respondent = split_versus("Universus Pvt Ltd versus Ramesh Patil")
    assert petitioner == "Uni"
    assert respondent == "Pvt Ltd"


def test_act_then_sections():
    acts = extract_act_sections("Indian Penal Code, 1860 U/s 302, 34")
    assert [(a.act, a.sections) for a in acts] == [("Indian Penal Code, 1860", "302, 34")]


def test_section_references_in_prose():
    acts = extract_act_sections("Petition under Section 482 CrPC and Sec. 438 of the Code of Criminal Procedure")
    assert [(a.act, a.sections) for a in acts] == [("CrPC", "482"), ("CrPC", "438")]


def test_act_without_sections_keeps_text():
    acts = extract_act_sections("Motor Vehicles Act")
    assert [(a.act, a.sections) for a in acts] == [("Motor Vehicles Act", "")]
    assert extract_act_sections("") == []
