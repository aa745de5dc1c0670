"""
CSV export of the records behind a drilldown node.

Document layout:

    <title>
    <blank>
    Local Filter:                 (only when a breadcrumb is given)
    "Acme > 2018-03",
    <blank>
    <blank>
    "col1","col2",...             (header)
    "v1","v2",...                 (one row per record)

A breadcrumb that starts with a positive integer (e.g. a year) is written
as ="..." so spreadsheets keep it as text instead of converting it.
"""
from __future__ import annotations

from typing import Any, Sequence

from src.grouping.aggregator import parse_int
from src.grouping.spec import GroupNode, Record


def _quote(value: Any) -> str:
    text = "" if value is None else str(value)
    return '"' + text.replace('"', '""') + '"'


def _row(values: Sequence[Any]) -> str:
    return "".join(_quote(v) + "," for v in values)


def format_filter(path: str) -> str:
    """The "Local Filter" breadcrumb cell, formula-escaped when numeric."""
    path = path.replace(",", " ")
    n = parse_int(path)
    if n is not None and n > 0:
        return "=" + _quote(path) + ","
    return _quote(path) + ","


def format_csv(
    columns: Sequence[str],
    records: Sequence[Record],
    title: str = "",
    path: str | None = None,
) -> str:
    """Render *records* restricted to *columns* as a CSV document."""
    lines: list[str] = [title, ""]
    if path is not None:
        lines += ["Local Filter:", format_filter(path), "", ""]
    lines.append(_row(columns))
    for record in records:
        lines.append(_row([record.get(c) for c in columns]))
    return "\n".join(lines) + "\n"


def default_columns(records: Sequence[Record]) -> list[str]:
    """Keys of the first record, in order (empty when there are no records)."""
    return list(records[0].keys()) if records else []


def export_node(node: GroupNode, columns: Sequence[str] | None = None, title: str = "") -> str:
    """CSV of a node's records, filtered by its breadcrumb."""
    cols = list(columns) if columns else default_columns(node.records)
    return format_csv(cols, node.records, title=title, path=node.path)
