"""
Unit tests -- export sinks.
"""
from src.export.sink import CSV_MEDIA_TYPE, FileSink, download_response, safe_filename


def test_file_sink_writes(tmp_path):
    sink = FileSink(tmp_path / "out")
    target = sink.deliver("a,b\n", "report.csv")
    assert target == tmp_path / "out" / "report.csv"
    assert target.read_text(encoding="utf-8") == "a,b\n"


def test_file_sink_default_filename(tmp_path):
    target = FileSink(tmp_path).deliver("x")
    assert target.name == "drilldown_export.csv"


def test_safe_filename_strips_directories():
    assert safe_filename("../../etc/passwd") == "passwd"
    assert safe_filename("my report.csv") == "my_report.csv"


def test_safe_filename_falls_back():
    assert safe_filename("...") == "drilldown_export.csv"


def test_download_response():
    resp = download_response("a,b\n", "nodes.csv")
    assert resp.media_type == CSV_MEDIA_TYPE
    assert resp.headers["content-disposition"] == 'attachment; filename="nodes.csv"'
    assert resp.body == b"a,b\n"
