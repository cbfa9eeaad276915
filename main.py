"""
Valveflow Core: Valve Pressure Optimization Backend
===================================================

FastAPI entry point.
Start with:  uvicorn main:app --reload
"""

import logging

from fastapi import FastAPI

from valveflow.api.routes import router
from valveflow.config import EngineConfig

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
)

app = FastAPI(
    title="Valveflow Core",
    description=(
        "Collapses a valve tunnel network to its useful valves, computes "
        "exact travel distances, and searches for the opening order that "
        "releases the most pressure within a time budget."
    ),
    version="0.1.0",
)

app.include_router(router, prefix="/api")


@app.get("/")
async def root():
    """Service status plus the defaults applied when a request omits them."""
    defaults = EngineConfig()
    return {
        "name": "Valveflow Core",
        "version": "0.1.0",
        "status": "running",
        "defaults": defaults.model_dump(),
        "endpoints": ["/api/solve", "/api/reduce", "/api/distances"],
    }
