"""
Breadcrumb paths ("Nucore > 2018-03 > Development") for drilldown nodes.
"""
from __future__ import annotations

from typing import Any, Sequence

from src.grouping.modifiers import apply_modifier
from src.grouping.spec import ParsedGroup, Record

SEPARATOR = " > "


def _render(value: Any) -> str:
    return "" if value is None else str(value)


def build_path(
    records: Sequence[Record],
    full_groups: Sequence[ParsedGroup],
    group: ParsedGroup,
) -> str:
    """Breadcrumb from the root level down to *group*, inclusive.

    Every record of a bucket shares the values of the fields above it, so
    the first record is enough to read them back.
    """
    if not records:
        return ""
    first = records[0]
    parts: list[str] = []
    for level in full_groups:
        parts.append(_render(apply_modifier(first.get(level.field), level)))
        if level.field == group.field:
            break
    return SEPARATOR.join(parts)
