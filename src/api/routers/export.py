"""POST /export -- download the records behind a drilldown node as CSV."""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field
from fastapi import APIRouter, HTTPException

from src.core.config import get_settings
from src.export.csv_export import default_columns, format_csv
from src.export.sink import download_response
from src.grouping.definitions import get_definition
from src.grouping.errors import DefinitionNotFound
from src.core.logging import get_logger

logger = get_logger(__name__)
router = APIRouter()


class ExportRequest(BaseModel):
    records: list[dict[str, Any]] = Field(..., description="Records of the node being exported")
    columns: list[str] | None = Field(None, description="Columns to write, in order")
    path: str | None = Field(None, description="Breadcrumb of the node (Local Filter line)")
    title: str | None = Field(None, description="Title line; defaults to the drilldown title")
    definition: str | None = Field(None, description="Catalogued drilldown supplying title/columns")
    filename: str | None = Field(None, description="Download filename")


@router.post("")
def export_endpoint(req: ExportRequest):
    """Format the records as CSV and send them as an attachment."""
    settings = get_settings()
    title = req.title
    columns = req.columns

    if req.definition:
        try:
            definition = get_definition(req.definition)
        except DefinitionNotFound as exc:
            raise HTTPException(status_code=404, detail=str(exc))
        title = title or definition.title
        columns = columns or definition.download_fields or None

    columns = columns or default_columns(req.records)
    content = format_csv(columns, req.records, title=title or settings.export_title, path=req.path)
    logger.info("Export | rows=%d | columns=%d | path=%s", len(req.records), len(columns), req.path)
    return download_response(content, req.filename)
