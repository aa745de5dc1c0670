"""
Unit tests -- GroupSpec / SeriesSpec models and GroupNode helpers.
"""
import pytest
from pydantic import ValidationError

from src.grouping.spec import Boxplot, GroupNode, GroupSpec, SeriesSpec, walk


def test_group_spec_defaults():
    spec = GroupSpec(field="company")
    assert spec.series == []
    assert spec.aggregate is None
    assert spec.chart is None
    assert spec.series_specs() == []


def test_series_strings_coerced():
    spec = GroupSpec(field="company", series=["sum(revenue)", {"data": "count(_id)", "name": "N"}])
    assert spec.series == [SeriesSpec(data="sum(revenue)"), SeriesSpec(data="count(_id)", name="N")]


def test_legacy_aggregate_fallback():
    spec = GroupSpec(field="company", aggregate="max(age)")
    assert spec.series_specs() == [SeriesSpec(data="max(age)")]


def test_field_required():
    with pytest.raises(ValidationError):
        GroupSpec(series=["sum(x)"])


def test_node_y_and_leaf():
    node = GroupNode(name="A", chart=None, values=[3, 4], children=[{"a": 1}], path="A")
    assert node.y == 3
    assert node.is_leaf
    assert GroupNode(name="B", chart=None, values=[], children=[], path="B").y is None


def test_walk_depth_first():
    leaf = GroupNode(name="a1", chart=None, values=[], children=[{"x": 1}], path="a > a1")
    root = GroupNode(name="a", chart=None, values=[], children=[leaf], path="a")
    other = GroupNode(name="b", chart=None, values=[], children=[{"x": 2}], path="b")
    assert [n.name for n in walk([root, other])] == ["a", "a1", "b"]


def test_node_to_dict_renders_boxplot():
    box = Boxplot(min=1, q1=2, median=3, q3=4, max=5)
    node = GroupNode(name="A", chart="boxplot", values=[box], children=[], path="A")
    d = node.to_dict()
    assert d["y"] == {"min": 1, "q1": 2, "median": 3, "q3": 4, "max": 5}
    assert d["series"] == []
