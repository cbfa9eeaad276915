"""
Engine configuration.

Defaults match the classic puzzle setup (start at AA with 30 time units)
and can be overridden from ``VALVEFLOW_*`` environment variables.
"""

from __future__ import annotations

import os
from typing import Literal, Mapping

from pydantic import BaseModel, Field

DEFAULT_START = "AA"
DEFAULT_TIME_BUDGET = 30

ENV_PREFIX = "VALVEFLOW_"


class EngineConfig(BaseModel):
    """Fixed run parameters for one PressureEngine invocation."""

    start: str = Field(
        default=DEFAULT_START,
        pattern=r"^[A-Z]{2}$",
        description="Valve the search starts from",
    )
    time_budget: int = Field(
        default=DEFAULT_TIME_BUDGET,
        gt=0,
        description="Time units available for travel and opening valves",
    )
    strategy: Literal["dijkstra", "dfs"] = Field(
        default="dijkstra", description="Shortest-path strategy"
    )
    memoize: bool = Field(default=False, description="Cache search sub-results")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "EngineConfig":
        """Build a config from ``VALVEFLOW_START`` and friends."""
        environ = os.environ if environ is None else environ
        values = {
            name: environ[ENV_PREFIX + name.upper()]
            for name in cls.model_fields
            if ENV_PREFIX + name.upper() in environ
        }
        return cls(**values)
