"""
Validates a grouping list before any record is touched.

Checks performed:
  1. Every group names a non-empty field
  2. A ``date_trunc(...)`` field carries both a unit and a field
  3. Every series expression has the form func(field)
  4. No two levels group on the same (post-modifier) field, since the
     breadcrumb is rebuilt by matching on field names

Unknown aggregate functions and unknown date units are deliberately not
reported: they degrade at aggregation time instead of failing the call.
"""
from __future__ import annotations

from typing import Any, Mapping, Sequence

from src.grouping.errors import SpecError
from src.grouping.parser import coerce_group, parse_aggregate_field, parse_group_field
from src.grouping.spec import GroupSpec


def validate_groups(groups: Sequence[GroupSpec | Mapping[str, Any]]) -> list[str]:
    """Return a list of validation error messages (empty list = valid)."""
    errors: list[str] = []
    seen_fields: dict[str, int] = {}

    for level, raw in enumerate(groups):
        try:
            group = coerce_group(raw)
        except SpecError as exc:
            errors.extend(exc.errors)
            continue

        if not group.field.strip():
            errors.append(f"Level {level}: group field is empty.")
            continue

        try:
            field, _, _ = parse_group_field(group.field)
        except SpecError as exc:
            errors.extend(f"Level {level}: {e}" for e in exc.errors)
            field = None

        for series in group.series_specs():
            try:
                parse_aggregate_field(series.data)
            except SpecError as exc:
                errors.extend(f"Level {level}: {e}" for e in exc.errors)

        if field is None:
            continue
        if field in seen_fields:
            errors.append(
                f"Level {level}: field '{field}' is already grouped on at level "
                f"{seen_fields[field]}; each field may appear once per drilldown."
            )
        else:
            seen_fields[field] = level

    return errors
