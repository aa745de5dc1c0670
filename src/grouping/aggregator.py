"""
Aggregator -- the per-node summary statistics of a drilldown level.

For every series of a group this computes one result over the records that
fall under the node's group value:

  - sum       sum of the integer-parsed field values
  - max/min   running max/min from the safe-integer sentinels
  - count     number of records (the series field is ignored)
  - boxplot   min, quartiles (linear interpolation) and max

Field values are read the way spreadsheet-ish data usually arrives: as
strings with an integer prefix.  ``parse_int`` takes the leading integer
(``"42abc"`` -> 42, ``"3.9"`` -> 3); anything else is non-numeric and is
handled per ``NumericPolicy`` -- dropped (EXCLUDE, the default) or counted
as 0 (ZERO).  Count never looks at the field value.
"""
from __future__ import annotations

import math
import re
from typing import Any, Iterable, Sequence

from src.core.logging import get_logger
from src.grouping.partition import group_value
from src.grouping.spec import (
    AggregateKind,
    Boxplot,
    NumericPolicy,
    ParsedGroup,
    ParsedSeries,
    Record,
)

logger = get_logger(__name__)

# ── Sentinels ───────────────────────────────────────────

MAX_SAFE_INTEGER = 2**53 - 1
MIN_SAFE_INTEGER = -(2**53 - 1)

_INT_PREFIX_RE = re.compile(r"^\s*([+-]?\d+)")


# ── Numeric helpers ─────────────────────────────────────


def parse_int(value: Any) -> int | None:
    """Leading integer of *value*, or None when there is none."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        return int(value)
    match = _INT_PREFIX_RE.match(str(value))
    if match is None:
        return None
    return int(match.group(1))


def numeric_values(
    records: Iterable[Record],
    field: str,
    policy: NumericPolicy = NumericPolicy.EXCLUDE,
) -> list[int]:
    out: list[int] = []
    for record in records:
        n = parse_int(record.get(field))
        if n is None:
            if policy is NumericPolicy.ZERO:
                out.append(0)
            continue
        out.append(n)
    return out


def quantile(values: Sequence[float], q: float) -> float:
    """Linear-interpolated quantile of *values* (sorted on a copy).

    >>> quantile([1, 2, 3, 4], 0.5)
    2.5
    """
    if not values:
        raise ValueError("quantile() of an empty sequence")
    ordered = sorted(values)
    pos = (len(ordered) - 1) * q
    base = math.floor(pos)
    rest = pos - base
    if base + 1 < len(ordered):
        return ordered[base] + rest * (ordered[base + 1] - ordered[base])
    return ordered[base]


def running_max(values: Iterable[int]) -> int:
    result = MIN_SAFE_INTEGER
    for v in values:
        if v > result:
            result = v
    return result


def running_min(values: Iterable[int]) -> int:
    result = MAX_SAFE_INTEGER
    for v in values:
        if v < result:
            result = v
    return result


def boxplot(values: Sequence[int]) -> Boxplot:
    """Five-number summary; quartiles are None when *values* is empty."""
    if not values:
        return Boxplot(min=MAX_SAFE_INTEGER, q1=None, median=None, q3=None, max=MIN_SAFE_INTEGER)
    return Boxplot(
        min=running_min(values),
        q1=quantile(values, 0.25),
        median=quantile(values, 0.5),
        q3=quantile(values, 0.75),
        max=running_max(values),
    )


# ── Dispatch ────────────────────────────────────────────


def aggregate_series(
    records: Sequence[Record],
    series: ParsedSeries,
    policy: NumericPolicy = NumericPolicy.EXCLUDE,
) -> Any:
    """One series result over *records* (already filtered to the node)."""
    kind = series.kind
    if kind is AggregateKind.COUNT:
        return len(records)
    if kind is None:
        logger.warning("Unknown aggregate function %r -- series skipped", series.expression)
        return None

    values = numeric_values(records, series.field, policy)
    if kind is AggregateKind.SUM:
        return sum(values)
    if kind is AggregateKind.MAX:
        return running_max(values)
    if kind is AggregateKind.MIN:
        return running_min(values)
    if kind is AggregateKind.BOXPLOT:
        return boxplot(values)
    return None


def aggregate(
    records: Sequence[Record],
    group: ParsedGroup,
    name: Any,
    policy: NumericPolicy = NumericPolicy.EXCLUDE,
) -> list[Any]:
    """Results of every series of *group* for the node whose value is *name*.

    *records* is re-filtered on the group value, so the function can be fed
    an unfiltered record set when used on its own.
    """
    matching = [r for r in records if group_value(r, group) == name]
    return [aggregate_series(matching, s, policy) for s in group.series]
