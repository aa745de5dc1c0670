"""
Grouping specs -- the declarative input of a drilldown and the
internally-owned descriptors the engine parses them into.

``GroupSpec`` / ``SeriesSpec`` are what callers write (or what the YAML
catalog holds).  ``ParsedGroup`` / ``ParsedSeries`` are frozen copies built
once per call; the engine only ever reads those, so caller input is never
mutated.  ``GroupNode`` is one element of the output tree.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Sequence

from pydantic import BaseModel, Field, field_validator

Record = Mapping[str, Any]


# ── Tagged kinds ────────────────────────────────────────


class AggregateKind(str, Enum):
    SUM = "sum"
    MAX = "max"
    MIN = "min"
    COUNT = "count"
    BOXPLOT = "boxplot"


class ModifierKind(str, Enum):
    DATE_TRUNC = "date_trunc"


class DateUnit(str, Enum):
    DAY = "day"
    MONTH = "month"
    YEAR = "year"


class NumericPolicy(str, Enum):
    """What sum/min/max/boxplot do with values that are not integers."""

    EXCLUDE = "exclude"  # drop the value
    ZERO = "zero"        # count it as 0


# ── Input models ────────────────────────────────────────


class SeriesSpec(BaseModel):
    """One aggregate computed at a grouping level, e.g. ``sum(revenue)``."""

    data: str = Field(..., description="Aggregate expression, func(field)")
    name: str | None = Field(None, description="Display label, e.g. 'Sum of Ages'")


class GroupSpec(BaseModel):
    """One level of the drilldown."""

    field: str = Field(..., description="Record field, or date_trunc(unit,field)")
    series: list[SeriesSpec] = Field(default_factory=list)
    aggregate: str | None = Field(
        None, description="Legacy single-aggregate form, used when series is empty",
    )
    chart: str | None = Field(None, description="Display hint, passed through untouched")

    @field_validator("series", mode="before")
    @classmethod
    def _coerce_series(cls, value: Any) -> Any:
        if isinstance(value, list):
            return [{"data": v} if isinstance(v, str) else v for v in value]
        return value

    def series_specs(self) -> list[SeriesSpec]:
        """Series of this level, falling back to the legacy ``aggregate``."""
        if self.series:
            return list(self.series)
        if self.aggregate:
            return [SeriesSpec(data=self.aggregate)]
        return []


# ── Parsed descriptors ──────────────────────────────────


@dataclass(frozen=True)
class ParsedSeries:
    kind: AggregateKind | None  # None: unknown aggregate function
    field: str
    name: str
    expression: str


@dataclass(frozen=True)
class ParsedGroup:
    field: str
    raw_field: str
    series: tuple[ParsedSeries, ...] = ()
    modifier: ModifierKind | None = None
    modifier_params: tuple[str, ...] = ()
    chart: str | None = None


# ── Output ──────────────────────────────────────────────


@dataclass(frozen=True)
class Boxplot:
    min: float
    q1: float | None
    median: float | None
    q3: float | None
    max: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "min": self.min,
            "q1": self.q1,
            "median": self.median,
            "q3": self.q3,
            "max": self.max,
        }


@dataclass
class GroupNode:
    """A node of the drilldown tree.

    ``children`` holds the next level's nodes, or the raw records of the
    bucket once every grouping level has been consumed.
    """

    name: Any
    chart: str | None
    values: list[Any]
    children: list[Any]
    path: str
    records: list[Record] = field(default_factory=list)
    group: ParsedGroup | None = None

    @property
    def y(self) -> Any:
        """First series value (the single-value form charts plot)."""
        return self.values[0] if self.values else None

    @property
    def is_leaf(self) -> bool:
        return not any(isinstance(c, GroupNode) for c in self.children)

    def to_dict(self, include_records: bool = True) -> dict[str, Any]:
        if self.children and isinstance(self.children[0], GroupNode):
            children: list[Any] = [c.to_dict(include_records) for c in self.children]
        else:
            children = [dict(r) for r in self.children]
        out: dict[str, Any] = {
            "name": self.name,
            "chart": self.chart,
            "y": _render_value(self.y),
            "values": [_render_value(v) for v in self.values],
            "series": [s.name for s in self.group.series] if self.group else [],
            "path": self.path,
            "record_count": len(self.records),
            "drilldown": children,
        }
        if include_records:
            out["records"] = [dict(r) for r in self.records]
        return out


def _render_value(value: Any) -> Any:
    if isinstance(value, Boxplot):
        return value.to_dict()
    return value


def walk(nodes: Sequence[GroupNode]):
    """Yield every node of a tree, depth first, in sibling order."""
    for node in nodes:
        yield node
        if node.children and isinstance(node.children[0], GroupNode):
            yield from walk(node.children)
