"""
Tree builder -- turns records + an ordered grouping list into a drilldown tree.

The first level of the tree groups on the first spec, the second level on
the first and second, and so on.  Each node carries the series results of
its bucket, its breadcrumb path and its records; once the specs run out a
node's children are the raw records of its bucket.

    >>> tree = group_by(records, [
    ...     {"field": "company", "series": ["sum(revenue)"], "chart": "pie"},
    ...     {"field": "date_trunc(month,startdate)", "series": ["sum(revenue)"], "chart": "line"},
    ... ])
    >>> tree[0].name, tree[0].children[0].path
    ('Acme', 'Acme > 2018-01')

Aggregation and path building are pluggable: pass ``aggregate_func`` /
``path_func`` with the signatures of ``aggregate`` / ``build_path``.
"""
from __future__ import annotations

from typing import Any, Callable, Mapping, Sequence

from src.grouping.aggregator import aggregate
from src.grouping.parser import parse_groups
from src.grouping.partition import bucket, distinct_values
from src.grouping.path import build_path
from src.grouping.spec import GroupNode, GroupSpec, NumericPolicy, ParsedGroup, Record

AggregateFunc = Callable[..., list[Any]]
PathFunc = Callable[[Sequence[Record], Sequence[ParsedGroup], ParsedGroup], str]


def build_tree(
    records: Sequence[Record],
    groups: Sequence[ParsedGroup],
    full_groups: Sequence[ParsedGroup],
    aggregate_func: AggregateFunc = aggregate,
    path_func: PathFunc = build_path,
    policy: NumericPolicy = NumericPolicy.EXCLUDE,
) -> list[Any]:
    """Recursive driver over already-parsed groups.

    Returns the nodes of this level, or -- with no groups left -- the
    records themselves (the leaf payload).
    """
    if not groups:
        return list(records)

    group, rest = groups[0], groups[1:]
    nodes: list[GroupNode] = []
    for name in distinct_values(records, group):
        members = bucket(records, group, name)
        nodes.append(GroupNode(
            name=name,
            chart=group.chart,
            values=aggregate_func(members, group, name, policy=policy),
            children=build_tree(members, rest, full_groups, aggregate_func, path_func, policy),
            path=path_func(members, full_groups, group),
            records=members,
            group=group,
        ))
    return nodes


def group_by(
    records: Sequence[Record],
    groups: Sequence[GroupSpec | Mapping[str, Any]],
    aggregate_func: AggregateFunc = aggregate,
    path_func: PathFunc = build_path,
    policy: NumericPolicy = NumericPolicy.EXCLUDE,
) -> list[Any]:
    """Group *records* into a drilldown tree, one level per entry of *groups*.

    Parameters
    ----------
    records : sequence of mappings
        Flat input rows; never modified.
    groups : sequence of GroupSpec or dict
        Ordered grouping levels; never modified.
    aggregate_func, path_func : callables, optional
        Strategy overrides for node values and breadcrumbs.
    policy : NumericPolicy
        How non-numeric field values enter sum/min/max/boxplot.

    Raises
    ------
    SpecError
        If any grouping or series descriptor is malformed.
    """
    parsed = parse_groups(groups)
    return build_tree(records, parsed, parsed, aggregate_func, path_func, policy)
