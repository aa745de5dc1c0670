"""POST /groupby -- build a drilldown tree from inline records."""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field
from fastapi import APIRouter, HTTPException

from src.grouping.errors import DefinitionNotFound, SpecError
from src.grouping.service import build_drilldown
from src.grouping.spec import GroupSpec
from src.core.logging import get_logger

logger = get_logger(__name__)
router = APIRouter()


class GroupByRequest(BaseModel):
    records: list[dict[str, Any]] = Field(..., description="Flat records to group")
    groups: list[GroupSpec] | None = Field(None, description="Inline grouping levels")
    definition: str | None = Field(None, description="Catalogued drilldown name")
    policy: str | None = Field(None, description="exclude | zero (non-numeric values)")
    include_records: bool = Field(False, description="Attach each node's records to the response")


class GroupByResponse(BaseModel):
    definition: str | None
    record_count: int
    levels: int
    latency_ms: int
    tree: list[dict[str, Any]]


@router.post("", response_model=GroupByResponse)
def groupby_endpoint(req: GroupByRequest):
    """records + groups (or a definition name) -> drilldown tree."""
    try:
        result = build_drilldown(
            req.records, groups=req.groups, definition=req.definition, policy=req.policy,
        )
    except SpecError as exc:
        raise HTTPException(status_code=422, detail=exc.errors)
    except DefinitionNotFound as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    except Exception as exc:
        logger.exception("Drilldown build failed")
        raise HTTPException(status_code=500, detail=str(exc))

    return GroupByResponse(**result.to_dict(include_records=req.include_records))
