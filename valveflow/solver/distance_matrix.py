"""
DistanceMatrixBuilder: materializes a fully connected ValveGraph over the
retained valves, where each tunnel cost is the exact shortest traversal
cost in the source graph.
"""

from __future__ import annotations

import logging
import math

import networkx as nx
import numpy as np

from valveflow.core.errors import GraphConsistencyError, PathNotFoundError
from valveflow.core.valve import NodeId, Valve, ValveGraph
from valveflow.solver.interface import ShortestPathStrategy

logger = logging.getLogger(__name__)


# ── Strategies ─────────────────────────────────────────────────────

class ExhaustiveDFSStrategy(ShortestPathStrategy):
    """
    Recursive depth-first search per (source, target) pair.

    Revisiting a valve is forbidden along a path, which is valid for
    shortest paths since a cycle only adds cost.  Branches whose cost
    already reaches the best complete path are cut.
    """

    name = "dfs"

    def distances_from(
        self,
        graph: ValveGraph,
        source: NodeId,
        targets: list[NodeId],
    ) -> dict[NodeId, int]:
        result: dict[NodeId, int] = {}
        for target in targets:
            best = self._search(graph, source, target, frozenset(), 0, math.inf)
            if best != math.inf:
                result[target] = int(best)
        return result

    def _search(
        self,
        graph: ValveGraph,
        current: NodeId,
        target: NodeId,
        visited: frozenset[NodeId],
        cost_so_far: int,
        best: float,
    ) -> float:
        if current == target:
            return cost_so_far

        visited = visited | {current}
        for next_id, step in sorted(graph.get(current).tunnels.items()):
            if next_id in visited or cost_so_far + step >= best:
                continue
            best = min(
                best,
                self._search(graph, next_id, target, visited, cost_so_far + step, best),
            )
        return best


class DijkstraStrategy(ShortestPathStrategy):
    """Single-source Dijkstra via NetworkX over the weighted tunnel graph."""

    name = "dijkstra"

    def distances_from(
        self,
        graph: ValveGraph,
        source: NodeId,
        targets: list[NodeId],
    ) -> dict[NodeId, int]:
        lengths = nx.single_source_dijkstra_path_length(
            graph.to_networkx(), source, weight="weight"
        )
        return {t: int(lengths[t]) for t in targets if t in lengths}


STRATEGIES: dict[str, type[ShortestPathStrategy]] = {
    ExhaustiveDFSStrategy.name: ExhaustiveDFSStrategy,
    DijkstraStrategy.name: DijkstraStrategy,
}


def get_strategy(name: str) -> ShortestPathStrategy:
    """
    Instantiate a shortest-path strategy by name.

    Raises KeyError if the name is not registered.
    """
    if name not in STRATEGIES:
        raise KeyError(
            f"Unknown shortest-path strategy {name!r}. "
            f"Registered strategies: {list(STRATEGIES.keys())}"
        )
    return STRATEGIES[name]()


# ── Distance matrix ────────────────────────────────────────────────

class DistanceMatrix(ValveGraph):
    """
    A fully connected ValveGraph whose tunnel costs are shortest distances.
    Read-only by convention once built.
    """

    def distance(self, source: NodeId, target: NodeId) -> int:
        return self.cost(source, target)

    def to_array(self) -> np.ndarray:
        """
        Square integer matrix in sorted valve-id order; the diagonal is 0.
        """
        ids = self.ids()
        index = {vid: i for i, vid in enumerate(ids)}
        matrix = np.zeros((len(ids), len(ids)), dtype=np.int64)
        for valve in self:
            for target, cost in valve.tunnels.items():
                matrix[index[valve.valve_id], index[target]] = cost
        return matrix


class DistanceMatrixBuilder:
    """
    Computes shortest distances between every ordered pair of retained
    valves using the configured ShortestPathStrategy.
    """

    def __init__(self, strategy: ShortestPathStrategy | None = None) -> None:
        self.strategy = strategy or DijkstraStrategy()

    def build(
        self,
        source_graph: ValveGraph,
        retained: list[NodeId] | None = None,
    ) -> DistanceMatrix:
        """
        Parameters
        ----------
        source_graph : ValveGraph
            Graph whose tunnels define the distances (normally the
            pre-reduction graph).
        retained : list[str], optional
            Valves to include.  Defaults to every valve of *source_graph*.

        Raises
        ------
        GraphConsistencyError if a retained valve is not in *source_graph*.
        PathNotFoundError if two retained valves are disconnected.
        """
        ids = sorted(retained) if retained is not None else source_graph.ids()
        missing = [vid for vid in ids if vid not in source_graph]
        if missing:
            raise GraphConsistencyError(
                f"Retained valves missing from source graph: {missing}",
                context={"valves": missing},
            )

        matrix = DistanceMatrix()
        for source in ids:
            targets = [vid for vid in ids if vid != source]
            found = self.strategy.distances_from(source_graph, source, targets)
            unreachable = [t for t in targets if t not in found]
            if unreachable:
                raise PathNotFoundError(
                    f"No tunnel path from {source!r} to {unreachable[0]!r}.",
                    context={"source": source, "unreachable": unreachable},
                )
            matrix.add(Valve(source, source_graph.flow_rate(source), found))

        logger.info(
            "Built %dx%d distance matrix with %s strategy",
            len(ids),
            len(ids),
            self.strategy.name,
        )
        return matrix
