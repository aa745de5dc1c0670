"""
FastAPI application entry-point.
"""
from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api.routers import catalog, export, groupby

app = FastAPI(
    title="Drilldown Group-By Tree",
    version="0.1.0",
    description="Groups flat records into multi-level drilldown trees for charts and CSV export",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(groupby.router, prefix="/groupby", tags=["Drilldown"])
app.include_router(export.router, prefix="/export", tags=["Export"])
app.include_router(catalog.router, tags=["Catalog"])


@app.get("/health")
def health():
    return {"status": "ok"}
