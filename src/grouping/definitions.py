"""
Loads, parses, and caches the drilldown catalog YAML.

The catalog names reusable drilldowns so callers can ask for
"revenue_by_company" instead of shipping the grouping list every time.
Each definition carries:
  - title            (export title line, chart heading)
  - description
  - download_fields  (columns written by the CSV export)
  - groups           (the ordered grouping levels)
"""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from functools import lru_cache
from typing import Any

import yaml

from src.core.config import get_settings
from src.core.logging import get_logger
from src.grouping.errors import DefinitionNotFound, SpecError
from src.grouping.spec import GroupSpec
from src.grouping.validator import validate_groups

logger = get_logger(__name__)


@dataclass(frozen=True)
class DrilldownDefinition:
    name: str
    title: str
    description: str = ""
    download_fields: list[str] = field(default_factory=list)
    groups: list[GroupSpec] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "title": self.title,
            "description": self.description,
            "download_fields": list(self.download_fields),
            "groups": [g.model_dump(exclude_none=True) for g in self.groups],
        }


# ── Parsing ──────────────────────────────────────────────

def _parse_definition(raw: dict[str, Any]) -> DrilldownDefinition:
    name = raw["name"]
    groups = [GroupSpec.model_validate(g) for g in raw.get("groups") or []]
    errors = validate_groups(groups)
    if errors:
        raise SpecError([f"Drilldown '{name}': {e}" for e in errors])
    return DrilldownDefinition(
        name=name,
        title=raw.get("title") or name.replace("_", " ").title(),
        description=raw.get("description", ""),
        download_fields=list(raw.get("download_fields") or []),
        groups=groups,
    )


def parse_catalog(raw_yaml: dict[str, Any] | None) -> dict[str, DrilldownDefinition]:
    raw_yaml = raw_yaml or {}
    definitions = [_parse_definition(d) for d in raw_yaml.get("drilldowns", [])]
    return {d.name: d for d in definitions}


# ── Public API ───────────────────────────────────────────

@lru_cache
def load_definitions(path: str | None = None) -> dict[str, DrilldownDefinition]:
    """Load and cache the catalog from YAML (settings path by default)."""
    catalog_path = Path(path or get_settings().drilldowns_path)
    with open(catalog_path, encoding="utf-8") as f:
        raw = yaml.safe_load(f)
    definitions = parse_catalog(raw)
    logger.info("Loaded %d drilldown definitions from %s", len(definitions), catalog_path)
    return definitions


def get_definition_names() -> list[str]:
    return list(load_definitions().keys())


def get_definition(name: str) -> DrilldownDefinition:
    definitions = load_definitions()
    if name not in definitions:
        raise DefinitionNotFound(name, list(definitions))
    return definitions[name]
