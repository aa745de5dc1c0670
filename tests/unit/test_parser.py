"""
Unit tests -- spec parser: aggregate fields, modifiers, parsed descriptors.
"""
import pytest

from src.grouping.errors import SpecError
from src.grouping.parser import (
    parse_aggregate_field,
    parse_aggregate_kind,
    parse_group,
    parse_group_field,
    parse_groups,
    parse_series,
)
from src.grouping.spec import AggregateKind, GroupSpec, ModifierKind, SeriesSpec


# ── Aggregate expressions ───────────────────────────────

def test_parse_aggregate_field():
    assert parse_aggregate_field("sum(revenue)") == "revenue"


def test_parse_aggregate_field_count_star():
    assert parse_aggregate_field("count(*)") == "*"


def test_parse_aggregate_field_requires_parentheses():
    with pytest.raises(SpecError, match="revenue"):
        parse_aggregate_field("revenue")


def test_parse_aggregate_kind_known():
    assert parse_aggregate_kind("SUM(revenue)") is AggregateKind.SUM
    assert parse_aggregate_kind("boxplot(age)") is AggregateKind.BOXPLOT
    assert parse_aggregate_kind(" count (x)") is AggregateKind.COUNT


def test_parse_aggregate_kind_unknown_is_none():
    assert parse_aggregate_kind("median(age)") is None
    # no prefix matching: "summary" is not "sum"
    assert parse_aggregate_kind("summary(age)") is None


def test_parse_series_from_string_uses_expression_as_name():
    s = parse_series("max(age)")
    assert s.kind is AggregateKind.MAX
    assert s.field == "age"
    assert s.name == "max(age)"


def test_parse_series_keeps_label():
    s = parse_series(SeriesSpec(data="sum(age)", name="Sum of Ages"))
    assert s.name == "Sum of Ages"


# ── Group field modifiers ───────────────────────────────

def test_plain_field_has_no_modifier():
    assert parse_group_field("company") == ("company", None, ())


def test_date_trunc_rewrites_field():
    field, modifier, params = parse_group_field("date_trunc(month,startdate)")
    assert field == "startdate"
    assert modifier is ModifierKind.DATE_TRUNC
    assert params == ("month", "startdate")


def test_date_trunc_strips_whitespace():
    field, _, params = parse_group_field("date_trunc(year, startdate)")
    assert field == "startdate"
    assert params == ("year", "startdate")


def test_date_trunc_without_parens_is_literal():
    assert parse_group_field("date_trunc_flag") == ("date_trunc_flag", None, ())


def test_unknown_modifier_is_literal():
    assert parse_group_field("upper(name)") == ("upper(name)", None, ())


def test_date_trunc_missing_field_is_malformed():
    with pytest.raises(SpecError):
        parse_group_field("date_trunc(month)")


# ── Parsed groups ───────────────────────────────────────

def test_parse_group_does_not_mutate_input():
    spec = GroupSpec(field="date_trunc(month,startdate)", series=["sum(revenue)"], chart="line")
    before = spec.model_dump()
    parsed = parse_group(spec)
    assert spec.model_dump() == before
    assert spec.field == "date_trunc(month,startdate)"
    assert parsed.field == "startdate"
    assert parsed.raw_field == "date_trunc(month,startdate)"
    assert parsed.chart == "line"


def test_parse_group_accepts_dict():
    parsed = parse_group({"field": "company", "series": [{"data": "count(x)", "name": "N"}]})
    assert parsed.series[0].kind is AggregateKind.COUNT
    assert parsed.series[0].name == "N"


def test_legacy_aggregate_becomes_single_series():
    parsed = parse_group({"field": "company", "aggregate": "sum(revenue)"})
    assert len(parsed.series) == 1
    assert parsed.series[0].kind is AggregateKind.SUM
    assert parsed.series[0].field == "revenue"


def test_series_wins_over_legacy_aggregate():
    parsed = parse_group({"field": "company", "aggregate": "sum(revenue)", "series": ["count(x)"]})
    assert [s.kind for s in parsed.series] == [AggregateKind.COUNT]


def test_parse_groups_reports_all_errors():
    with pytest.raises(SpecError) as exc_info:
        parse_groups([
            {"field": "company", "series": ["revenue"]},
            {"field": "date_trunc(month)", "series": ["sum(x)"]},
        ])
    assert len(exc_info.value.errors) == 2


def test_parse_groups_rejects_missing_field():
    with pytest.raises(SpecError):
        parse_groups([{"series": ["sum(x)"]}])
