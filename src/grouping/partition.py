"""
Partitioner -- distinct group values and the bucket of records behind each.
"""
from __future__ import annotations

import math
from typing import Any, Sequence

from src.core.utils import first_seen
from src.grouping.modifiers import apply_modifier
from src.grouping.spec import ParsedGroup, Record


def group_value(record: Record, group: ParsedGroup) -> Any:
    """The (modified) value *record* is grouped under at this level.

    NaN never equals itself, so it is grouped as None (no value).
    """
    value = apply_modifier(record.get(group.field), group)
    if isinstance(value, float) and math.isnan(value):
        return None
    return value


def sort_key(value: Any) -> tuple:
    """Ascending order: numbers, then strings, then anything else (None too)."""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return (0, value, "")
    if isinstance(value, str):
        return (1, 0, value)
    return (2, 0, str(value))


def distinct_values(records: Sequence[Record], group: ParsedGroup) -> list[Any]:
    """Sorted distinct values of the group field across *records*."""
    return sorted(first_seen(group_value(r, group) for r in records), key=sort_key)


def bucket(records: Sequence[Record], group: ParsedGroup, value: Any) -> list[Record]:
    """Records whose group value equals *value*, in their original order."""
    return [r for r in records if group_value(r, group) == value]
