from court_records import extract_grid, structure_text


def test_colon_leaf_becomes_label_value_pair():
    html = "<div><p>Case Status: Pending</p><p>Next Date: 12-03-2024 10:00</p></div>"
    assert structure_text(html) == [[["Case Status", "Pending"], ["Next Date", "12-03-2024 10:00"]]]


def test_tab_and_pipe_split_every_part():
    html = "<p>Diary No\t12345/2023\tFiled</p><span>A | B | C</span>"
    assert structure_text(html) == [[["Diary No", "12345/2023", "Filed"], ["A", "B", "C"]]]


def test_plain_leaf_is_single_column():
    assert structure_text("<p>No records found</p>") == [[["No records found"]]]


def test_nested_blocks_use_the_innermost_text_holder():
    html = "<div><div><span>Inner: value</span></div></div>"
    assert structure_text(html) == [[["Inner", "value"]]]


def test_inline_children_keep_the_label():
    html = "<div>Status/Stage: <span>DISPOSED</span></div><div><p>Diary No.: <b>999/2024</b></p></div>"
    assert structure_text(html) == [[["Status/Stage", "DISPOSED"], ["Diary No.", "999/2024"]]]


def test_document_lines_when_no_leaf_blocks():
    html = "<body>Case Status: Pending\nJudge\tCourt 3\n\nNo further data</body>"
    assert structure_text(html) == [[["Case Status", "Pending"], ["Judge", "Court 3"], ["No further data"]]]


def test_empty_input_yields_no_data():
    assert structure_text("") == []
    assert structure_text("<div>   </div>") == []


def test_extract_grid_falls_back_to_text():
    assert extract_grid("<p>Status: Disposed</p>") == [[["Status", "Disposed"]]]
