"""
Pydantic schemas for the FastAPI endpoints.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from valveflow.config import DEFAULT_START, DEFAULT_TIME_BUDGET


# ── Requests ───────────────────────────────────────────────────────

class ValveInput(BaseModel):
    """Valve description lines + start valve."""

    lines: list[str] = Field(..., description="Valve description lines")
    start: str = Field(default=DEFAULT_START, pattern=r"^[A-Z]{2}$")


class DistanceInput(ValveInput):
    strategy: Literal["dijkstra", "dfs"] = "dijkstra"


class SolveInput(DistanceInput):
    """Full solve request."""

    time_budget: int = Field(
        default=DEFAULT_TIME_BUDGET,
        gt=0,
        description="Time units for travel plus opening valves",
    )
    memoize: bool = False


# ── Responses ──────────────────────────────────────────────────────

class SolveResult(BaseModel):
    """Result of running the pressure engine."""

    pressure: int
    path: list[tuple[str, int]]
    retained_valves: list[str]
    node_count: int
    reduced_node_count: int
    start: str
    time_budget: int


class ValveSummary(BaseModel):
    flow_rate: int
    tunnels: dict[str, int]


class ReducedGraphResult(BaseModel):
    """Reduced graph keyed by valve id."""

    valves: dict[str, ValveSummary]


class DistanceMatrixResult(BaseModel):
    """Shortest distances, rows and columns in ``valves`` order."""

    valves: list[str]
    matrix: list[list[int]]
