"""
Unit tests -- CSV export document.
"""
from src.export.csv_export import default_columns, export_node, format_csv, format_filter
from src.grouping.tree import group_by

RECORDS = [
    {"name": "Jack Spratt", "company": "Nucore", "revenue": "112"},
    {"name": 'Jill "JJ" Hill', "company": "Nucore", "revenue": None},
]


def test_layout_without_path():
    text = format_csv(["name", "revenue"], RECORDS, title="Report")
    assert text.splitlines() == [
        "Report",
        "",
        '"name","revenue",',
        '"Jack Spratt","112",',
        '"Jill ""JJ"" Hill","",',
    ]


def test_layout_with_path():
    lines = format_csv(["company"], RECORDS[:1], title="Report", path="Nucore > 2018-03").splitlines()
    assert lines[:6] == ["Report", "", "Local Filter:", '"Nucore > 2018-03",', "", ""]
    assert lines[6] == '"company",'


def test_missing_column_renders_empty():
    text = format_csv(["nope"], RECORDS[:1])
    assert text.splitlines()[-1] == '"",'


def test_numeric_path_is_formula_escaped():
    assert format_filter("2018 > Nucore") == '="2018 > Nucore",'


def test_non_numeric_path_is_plain():
    assert format_filter("Nucore > 2018") == '"Nucore > 2018",'


def test_zero_path_is_plain():
    assert format_filter("0 > x") == '"0 > x",'


def test_commas_in_path_replaced():
    assert format_filter("Smith, John") == '"Smith  John",'


def test_default_columns():
    assert default_columns(RECORDS) == ["name", "company", "revenue"]
    assert default_columns([]) == []


def test_export_node_uses_path_and_records():
    tree = group_by(RECORDS, [{"field": "company", "series": ["count(name)"]}])
    text = export_node(tree[0], ["name"], title="T")
    assert '"Nucore",' in text.splitlines()
    assert text.count('"Jack Spratt",') == 1
