"""
FastAPI routes for the Valveflow Core backend.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException

from valveflow.api.schemas import (
    DistanceInput,
    DistanceMatrixResult,
    ReducedGraphResult,
    SolveInput,
    SolveResult,
    ValveInput,
    ValveSummary,
)
from valveflow.config import EngineConfig
from valveflow.core.errors import ValveflowError
from valveflow.engine.pressure_engine import PressureEngine

logger = logging.getLogger(__name__)

router = APIRouter()


# ── Pressure search ────────────────────────────────────────────────

@router.post("/solve", response_model=SolveResult)
async def solve(payload: SolveInput) -> SolveResult:
    """
    Accept valve description lines and return the maximum pressure
    released within the time budget, plus the valve opening order.
    """
    config = EngineConfig(
        start=payload.start,
        time_budget=payload.time_budget,
        strategy=payload.strategy,
        memoize=payload.memoize,
    )
    try:
        result = PressureEngine(config).run(payload.lines)
        return SolveResult(**result)
    except ValveflowError as exc:
        logger.error("Solve failed: %s", exc.log_message())
        raise HTTPException(status_code=400, detail=str(exc))


# ── Graph inspection ───────────────────────────────────────────────

@router.post("/reduce", response_model=ReducedGraphResult)
async def reduce_graph(payload: ValveInput) -> ReducedGraphResult:
    """Return the graph after zero-flow valves are inlined away."""
    try:
        reduced = PressureEngine(EngineConfig(start=payload.start)).reduce(payload.lines)
    except ValveflowError as exc:
        logger.error("Reduce failed: %s", exc.log_message())
        raise HTTPException(status_code=400, detail=str(exc))

    return ReducedGraphResult(
        valves={vid: ValveSummary(**data) for vid, data in reduced.to_dict().items()}
    )


@router.post("/distances", response_model=DistanceMatrixResult)
async def distances(payload: DistanceInput) -> DistanceMatrixResult:
    """Return shortest distances between every pair of retained valves."""
    config = EngineConfig(start=payload.start, strategy=payload.strategy)
    try:
        matrix = PressureEngine(config).distances(payload.lines)
    except ValveflowError as exc:
        logger.error("Distance matrix failed: %s", exc.log_message())
        raise HTTPException(status_code=400, detail=str(exc))

    return DistanceMatrixResult(valves=matrix.ids(), matrix=matrix.to_array().tolist())
