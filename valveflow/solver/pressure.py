"""
PressureMaximizer: time-budgeted recursive search over a DistanceMatrix
for the valve opening order that releases the most pressure.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from valveflow.core.valve import NodeId
from valveflow.solver.distance_matrix import DistanceMatrix

logger = logging.getLogger(__name__)

OPEN_COST = 1

# (valve_id, time remaining once it is open)
PathStep = tuple[NodeId, int]


@dataclass(frozen=True)
class SearchResult:
    pressure: int
    path: tuple[PathStep, ...] = field(default_factory=tuple)

    @property
    def opened(self) -> list[NodeId]:
        """Valve ids in the order they were opened, start included."""
        return [valve_id for valve_id, _ in self.path]


class PressureMaximizer:
    """
    Exhaustive branch search.

    Standing at valve X with R time remaining and unopened set U, every Y in
    U reachable with ``distance(X, Y) + 1 < R`` is tried in turn.  The value
    of a branch is ``flow_rate(X) * R`` plus the best child branch, so the
    start valve is credited for the whole budget.

    With ``memoize=True`` results are cached per
    (valve, remaining time, unopened set); the answer is unchanged.
    """

    def __init__(self, matrix: DistanceMatrix, memoize: bool = False) -> None:
        self.matrix = matrix
        self.memoize = memoize
        self._cache: dict[tuple[NodeId, int, frozenset[NodeId]], SearchResult] = {}
        self.calls = 0

    def maximize(self, start: NodeId, time_budget: int) -> SearchResult:
        if time_budget <= 0:
            raise ValueError(f"time_budget must be positive, got {time_budget}.")
        if start not in self.matrix:
            raise ValueError(f"Start valve {start!r} is not in the distance matrix.")

        self._cache.clear()
        self.calls = 0
        unopened = frozenset(
            v.valve_id
            for v in self.matrix
            if v.valve_id != start and v.flow_rate > 0
        )
        result = self._search(start, time_budget, unopened)

        logger.info(
            "Max pressure %d from %s in %d time units (%d search calls)",
            result.pressure,
            start,
            time_budget,
            self.calls,
        )
        return result

    def _search(
        self, current: NodeId, remaining: int, unopened: frozenset[NodeId]
    ) -> SearchResult:
        key = (current, remaining, unopened)
        if self.memoize and key in self._cache:
            return self._cache[key]

        self.calls += 1
        best = SearchResult(0)
        for next_id in sorted(unopened):
            cost = self.matrix.distance(current, next_id) + OPEN_COST
            if cost >= remaining:
                continue
            child = self._search(next_id, remaining - cost, unopened - {next_id})
            if child.pressure > best.pressure:
                best = child

        result = SearchResult(
            pressure=self.matrix.flow_rate(current) * remaining + best.pressure,
            path=((current, remaining),) + best.path,
        )
        if self.memoize:
            self._cache[key] = result
        return result
