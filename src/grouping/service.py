"""
Drilldown service -- orchestrates resolve -> validate/parse -> build -> log.

Callers either ship the grouping list with the records or name a
definition from the catalog.  The engine itself stays pure; this layer adds
settings, timing and logging around it.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Sequence

from src.core.config import get_settings
from src.core.logging import get_logger
from src.core.utils import timer
from src.grouping.definitions import DrilldownDefinition, get_definition
from src.grouping.errors import SpecError
from src.grouping.parser import parse_groups
from src.grouping.spec import GroupNode, GroupSpec, NumericPolicy, Record
from src.grouping.tree import build_tree

logger = get_logger(__name__)


@dataclass
class DrilldownResult:
    tree: list[Any]
    record_count: int
    levels: int
    definition: DrilldownDefinition | None = None
    latency_ms: int = 0

    def to_dict(self, include_records: bool = True) -> dict[str, Any]:
        return {
            "definition": self.definition.name if self.definition else None,
            "record_count": self.record_count,
            "levels": self.levels,
            "latency_ms": self.latency_ms,
            "tree": [
                n.to_dict(include_records) if isinstance(n, GroupNode) else dict(n)
                for n in self.tree
            ],
        }


def resolve_policy(policy: NumericPolicy | str | None = None) -> NumericPolicy:
    """Explicit policy, else the configured ``NUMERIC_POLICY``."""
    value = policy if policy is not None else get_settings().numeric_policy
    try:
        return NumericPolicy(value)
    except ValueError:
        raise SpecError(
            f"Unknown numeric policy {value!r}. "
            f"Allowed: {', '.join(p.value for p in NumericPolicy)}"
        ) from None


def build_drilldown(
    records: Sequence[Record],
    groups: Sequence[GroupSpec | Mapping[str, Any]] | None = None,
    definition: str | None = None,
    policy: NumericPolicy | str | None = None,
) -> DrilldownResult:
    """Build the drilldown tree for *records*.

    Parameters
    ----------
    records : sequence of mappings
        The flat record set.
    groups : sequence of GroupSpec or dict, optional
        Inline grouping levels.
    definition : str, optional
        Name of a catalogued drilldown; mutually exclusive with *groups*.
    policy : NumericPolicy or str, optional
        Overrides the configured non-numeric policy.
    """
    if (groups is None) == (definition is None):
        raise SpecError("Provide exactly one of 'groups' or 'definition'.")

    resolved: DrilldownDefinition | None = None
    if definition is not None:
        resolved = get_definition(definition)
        groups = resolved.groups

    numeric_policy = resolve_policy(policy)
    logger.info("Drilldown | definition=%s | records=%d | levels=%d | policy=%s",
                definition, len(records), len(groups), numeric_policy.value)

    with timer() as t:
        parsed = parse_groups(groups)
        tree = build_tree(records, parsed, parsed, policy=numeric_policy)

    logger.info("Drilldown built | top-level nodes=%d | %d ms", len(tree), t["elapsed_ms"])
    return DrilldownResult(
        tree=tree,
        record_count=len(records),
        levels=len(parsed),
        definition=resolved,
        latency_ms=t["elapsed_ms"],
    )
