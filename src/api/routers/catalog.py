"""
GET /drilldowns, GET /drilldowns/{name} -- catalog endpoints.
"""
from __future__ import annotations

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from src.grouping.definitions import get_definition, load_definitions
from src.grouping.errors import DefinitionNotFound

router = APIRouter()


class DefinitionItem(BaseModel):
    name: str
    title: str
    description: str
    levels: int


class DefinitionDetail(BaseModel):
    name: str
    title: str
    description: str
    download_fields: list[str]
    groups: list[dict]


@router.get("/drilldowns", response_model=list[DefinitionItem])
def list_drilldowns() -> list[DefinitionItem]:
    """Return every catalogued drilldown (lightweight)."""
    return [
        DefinitionItem(name=d.name, title=d.title, description=d.description, levels=len(d.groups))
        for d in load_definitions().values()
    ]


@router.get("/drilldowns/{name}", response_model=DefinitionDetail)
def drilldown_detail(name: str) -> DefinitionDetail:
    """Return one drilldown with its grouping levels."""
    try:
        definition = get_definition(name)
    except DefinitionNotFound as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    return DefinitionDetail(**definition.to_dict())
