from court_records import extract_tables, extract_grid
from court_records.ingest.schemas import LinkCell


def test_table_count_matches_non_empty_tables():
    html = """
    <table><tr><td>a</td><td>b</td></tr></table>
    <table></table>
    <table><tr></tr><tr><td>c</td></tr></table>
    <table><tr>   </tr></table>
    """
    tables = extract_tables(html)
    assert len(tables) == 2
    assert tables[0] == [["a", "b"]]
    assert tables[1] == [["c"]]


def test_link_cells_keep_targets():
    html = """
    <table><tr>
      <td>Order</td>
      <td><a href="/orders/1.pdf" target="_blank" data-cno="MHPU010012342021">View</a>
          <a href="https://example.org/x">Other</a></td>
    </tr></table>
    """
    tables = extract_tables(html, base_url="https://services.ecourts.gov.in/ecourtindia_v6/")
    cell = tables[0][0][1]
    assert isinstance(cell, LinkCell)
    assert cell.type == "links"
    assert [link.text for link in cell.links] == ["View", "Other"]
    assert cell.links[0].href == "https://services.ecourts.gov.in/orders/1.pdf"
    assert cell.links[0].target == "_blank"
    assert cell.links[0].data == {"data-cno": "MHPU010012342021"}
    assert cell.links[1].href == "https://example.org/x"


def test_nested_tables_are_not_duplicated():
    html = """
    <table>
      <tr><td>outer</td><td><table><tr><td>inner</td></tr></table></td></tr>
    </table>
    """
    tables = extract_tables(html)
    assert len(tables) == 2
    assert len(tables[0]) == 1
    assert tables[1] == [["inner"]]


def test_whitespace_is_collapsed():
    tables = extract_tables("<table><tr><td>  John \n\t Doe  </td></tr></table>")
    assert tables == [[["John Doe"]]]


def test_malformed_and_empty_input_never_raise():
    assert extract_tables("") == []
    assert extract_tables(None) == []
    assert extract_tables("<table><tr><td>unclosed") == [[["unclosed"]]]
    assert extract_tables("<<<>>>") == []


def test_extract_grid_prefers_tables():
    html = "<div>Status: Pending</div><table><tr><td>x</td></tr></table>"
    assert extract_grid(html) == [[["x"]]]
