"""
PressureEngine: top-level orchestrator.

Accepts valve description lines (or pre-parsed records), builds the valve
graph, reduces it, computes the distance matrix, and delegates to the
PressureMaximizer.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, Sequence, Union

from valveflow.config import EngineConfig
from valveflow.core.builder import GraphBuilder
from valveflow.core.parser import ValveRecord, parse_lines
from valveflow.core.valve import ValveGraph
from valveflow.solver.distance_matrix import (
    DistanceMatrix,
    DistanceMatrixBuilder,
    get_strategy,
)
from valveflow.solver.pressure import PressureMaximizer
from valveflow.solver.reducer import GraphReducer

logger = logging.getLogger(__name__)

# Receives (stage name, payload) after each pipeline stage.
EventSink = Callable[[str, dict[str, Any]], None]

ValveInput = Union[Sequence[str], Iterable[ValveRecord]]


class PressureEngine:
    """
    Main entry-point for pressure computation.

    Usage
    -----
    >>> engine = PressureEngine()
    >>> result = engine.run(open("input.txt").read().splitlines())
    >>> print(result["pressure"])
    """

    def __init__(
        self,
        config: EngineConfig | None = None,
        event_sink: EventSink | None = None,
    ) -> None:
        self.config = config or EngineConfig()
        self.event_sink = event_sink
        self.builder = GraphBuilder()

    # ── Public API ─────────────────────────────────────────────────

    def run(self, valves: ValveInput) -> dict[str, Any]:
        """
        Run the full pipeline and return the best pressure release.

        Returns
        -------
        dict with keys: pressure, path, retained_valves, node_count,
        reduced_node_count, start, time_budget
        """
        graph = self.build(valves)
        reduced = self._reduce(graph)
        matrix = self._distances(graph, reduced)

        maximizer = PressureMaximizer(matrix, memoize=self.config.memoize)
        result = maximizer.maximize(self.config.start, self.config.time_budget)
        self._emit(
            "maximize",
            {"pressure": result.pressure, "search_calls": maximizer.calls},
        )

        return {
            "pressure": result.pressure,
            "path": [list(step) for step in result.path],
            "retained_valves": reduced.ids(),
            "node_count": len(graph),
            "reduced_node_count": len(reduced),
            "start": self.config.start,
            "time_budget": self.config.time_budget,
        }

    def reduce(self, valves: ValveInput) -> ValveGraph:
        """Build and reduce, returning the reduced graph."""
        return self._reduce(self.build(valves))

    def distances(self, valves: ValveInput) -> DistanceMatrix:
        """Build, reduce, and return the distance matrix of retained valves."""
        graph = self.build(valves)
        return self._distances(graph, self._reduce(graph))

    def build(self, valves: ValveInput) -> ValveGraph:
        """Parse (when given text lines) and build the valve graph."""
        items = list(valves)
        if items and isinstance(items[0], str):
            records = parse_lines(items)
        else:
            records = items
        graph = self.builder.build(records)
        self._emit("build", {"valves": len(graph), "tunnels": graph.edge_count()})
        return graph

    # ── Stages ─────────────────────────────────────────────────────

    def _reduce(self, graph: ValveGraph) -> ValveGraph:
        reduced = GraphReducer(self.config.start).reduce(graph)
        self._emit("reduce", {"valves": len(reduced), "retained": reduced.ids()})
        return reduced

    def _distances(self, graph: ValveGraph, reduced: ValveGraph) -> DistanceMatrix:
        # Exact distances come from the original graph, not reduced edge costs.
        builder = DistanceMatrixBuilder(get_strategy(self.config.strategy))
        matrix = builder.build(graph, reduced.ids())
        self._emit("distances", {"valves": len(matrix), "strategy": self.config.strategy})
        return matrix

    def _emit(self, stage: str, payload: dict[str, Any]) -> None:
        logger.debug("Stage %s: %s", stage, payload)
        if self.event_sink is not None:
            self.event_sink(stage, payload)
