"""
Parses the small fixed grammar used in grouping specs.

  - aggregate expressions   ``func(field)``          e.g. ``sum(revenue)``
  - group-field modifiers   ``date_trunc(unit,field)`` e.g. ``date_trunc(month,startdate)``

Everything else in a group field is a literal record key.
"""
from __future__ import annotations

import re
from typing import Any, Iterable, Mapping

from pydantic import ValidationError

from src.grouping.errors import SpecError
from src.grouping.spec import (
    AggregateKind,
    GroupSpec,
    ModifierKind,
    ParsedGroup,
    ParsedSeries,
    SeriesSpec,
)

_PARENS_RE = re.compile(r"\((.*)\)")
_DATE_TRUNC_RE = re.compile(r"^date_trunc")

_AGGREGATES = {k.value: k for k in AggregateKind}


def parse_aggregate_field(expr: str) -> str:
    """Return the text inside the parentheses of *expr*.

    ``"sum(revenue)"`` -> ``"revenue"``.  Raises ``SpecError`` when *expr*
    has no parenthesised group.
    """
    match = _PARENS_RE.search(expr or "")
    if match is None:
        raise SpecError(f"Malformed aggregate expression {expr!r}: expected func(field).")
    return match.group(1).strip()


def parse_aggregate_kind(expr: str) -> AggregateKind | None:
    """Map the function name of *expr* to an ``AggregateKind`` (None if unknown)."""
    name = (expr or "").split("(", 1)[0].strip().lower()
    return _AGGREGATES.get(name)


def parse_group_field(field: str) -> tuple[str, ModifierKind | None, tuple[str, ...]]:
    """Split a group field into ``(lookup_field, modifier, modifier_params)``.

    Only ``date_trunc(unit,field)`` is recognised.  Anything else, including
    ``date_trunc`` with no argument list, comes back unchanged as a literal
    field name.
    """
    if not _DATE_TRUNC_RE.match(field):
        return field, None, ()
    match = _PARENS_RE.search(field)
    if match is None:
        return field, None, ()
    params = tuple(p.strip() for p in match.group(1).split(","))
    if len(params) < 2 or not params[1]:
        raise SpecError(
            f"Malformed modifier {field!r}: expected date_trunc(unit,field)."
        )
    return params[1], ModifierKind.DATE_TRUNC, params


def parse_series(series: SeriesSpec | str) -> ParsedSeries:
    if isinstance(series, str):
        series = SeriesSpec(data=series)
    return ParsedSeries(
        kind=parse_aggregate_kind(series.data),
        field=parse_aggregate_field(series.data),
        name=series.name or series.data,
        expression=series.data,
    )


def coerce_group(spec: GroupSpec | Mapping[str, Any]) -> GroupSpec:
    if isinstance(spec, GroupSpec):
        return spec
    try:
        return GroupSpec.model_validate(spec)
    except ValidationError as exc:
        raise SpecError(
            [f"Invalid group spec {spec!r}: {e['msg']} ({'.'.join(map(str, e['loc']))})"
             for e in exc.errors()]
        ) from exc


def parse_group(spec: GroupSpec | Mapping[str, Any]) -> ParsedGroup:
    """Build a ``ParsedGroup`` from *spec* without modifying it."""
    spec = coerce_group(spec)
    field, modifier, params = parse_group_field(spec.field)
    return ParsedGroup(
        field=field,
        raw_field=spec.field,
        series=tuple(parse_series(s) for s in spec.series_specs()),
        modifier=modifier,
        modifier_params=params,
        chart=spec.chart,
    )


def parse_groups(specs: Iterable[GroupSpec | Mapping[str, Any]]) -> tuple[ParsedGroup, ...]:
    """Validate then parse a full grouping list.

    Raises ``SpecError`` listing every problem found, before any record is
    touched.
    """
    # validator imports this module, so bind it late
    from src.grouping.validator import validate_groups

    groups = [coerce_group(s) for s in specs]
    errors = validate_groups(groups)
    if errors:
        raise SpecError(errors)
    return tuple(parse_group(g) for g in groups)
