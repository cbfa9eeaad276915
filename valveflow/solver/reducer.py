"""
GraphReducer: inlines zero-flow "pass-through" valves until none remain
adjacent to a retained valve, then drops them from the graph.

Inlining a pass-through valve M into a retained valve N replaces the
tunnel N→M with tunnels N→P for each neighbour P of M, costed
cost(N, M) + cost(M, P).  An existing direct tunnel N→P always wins over
an inlined path, so reduced edge weights are upper bounds, not shortest
distances.  DistanceMatrixBuilder recomputes exact distances.
"""

from __future__ import annotations

import logging
from collections import defaultdict, deque

from valveflow.core.errors import GraphConsistencyError
from valveflow.core.valve import NodeId, Valve, ValveGraph

logger = logging.getLogger(__name__)


class GraphReducer:
    """
    Collapses a valve graph down to the start valve plus every valve with a
    positive flow rate.  The input graph is never mutated.
    """

    def __init__(self, start: NodeId) -> None:
        self.start = start

    # ── Public API ─────────────────────────────────────────────────

    def reduce(self, graph: ValveGraph) -> ValveGraph:
        """
        Repeat inlining passes to a fixpoint and return the reduced copy.

        Raises GraphConsistencyError if the start valve is missing or if a
        surviving tunnel points at a removed valve.
        """
        if self.start not in graph:
            raise GraphConsistencyError(
                f"Start valve {self.start!r} is not in the graph.",
                context={"start": self.start},
            )

        reduced = graph.copy()
        # Valves already inlined into a given valve; never re-added to it.
        absorbed: dict[NodeId, set[NodeId]] = defaultdict(set)
        to_remove: set[NodeId] = set()

        passes = 0
        while True:
            passes += 1
            inline_count = 0
            for valve_id in self._visit_order(reduced):
                valve = reduced.get(valve_id)
                if self._is_pass_through(valve):
                    to_remove.add(valve_id)
                    continue
                inline_count += self._inline_neighbours(
                    valve, reduced, absorbed[valve_id]
                )

            logger.debug("Reduction pass %d: %d inlinings", passes, inline_count)
            if inline_count == 0:
                break

        for valve_id in to_remove:
            reduced.remove(valve_id)

        self._check_consistency(reduced)

        logger.info(
            "Reduced graph from %d to %d valves in %d passes",
            len(graph),
            len(reduced),
            passes,
        )
        return reduced

    # ── Inlining ───────────────────────────────────────────────────

    def _inline_neighbours(
        self, valve: Valve, graph: ValveGraph, absorbed: set[NodeId]
    ) -> int:
        """
        Rewrite *valve*'s tunnels, replacing each pass-through neighbour by
        that neighbour's own tunnels.  Returns the number of inlinings.
        """
        updated: dict[NodeId, int] = {}
        inlined = 0

        for neighbour_id in sorted(valve.tunnels):
            cost = valve.tunnels[neighbour_id]
            neighbour = graph.get(neighbour_id)
            if not self._is_pass_through(neighbour):
                updated[neighbour_id] = cost
                continue

            for next_id in sorted(neighbour.tunnels):
                if (
                    next_id == valve.valve_id
                    or next_id in valve.tunnels
                    or next_id in absorbed
                    or next_id in updated
                ):
                    continue
                updated[next_id] = cost + neighbour.tunnels[next_id]

            absorbed.add(neighbour_id)
            inlined += 1

        valve.tunnels = updated
        return inlined

    def _is_pass_through(self, valve: Valve) -> bool:
        return valve.flow_rate == 0 and valve.valve_id != self.start

    def _visit_order(self, graph: ValveGraph) -> list[NodeId]:
        """
        Breadth-first order from the start valve, followed by any valves
        not reachable from it (sorted), so every component is visited.
        """
        order: list[NodeId] = []
        seen: set[NodeId] = {self.start}
        queue: deque[NodeId] = deque([self.start])

        while queue:
            valve_id = queue.popleft()
            order.append(valve_id)
            for neighbour_id in sorted(graph.get(valve_id).tunnels):
                if neighbour_id not in seen and neighbour_id in graph:
                    seen.add(neighbour_id)
                    queue.append(neighbour_id)

        order.extend(vid for vid in graph.ids() if vid not in seen)
        return order

    # ── Postcondition ──────────────────────────────────────────────

    def _check_consistency(self, graph: ValveGraph) -> None:
        dangling = graph.dangling_edges()
        if dangling:
            raise GraphConsistencyError(
                f"Reduction left {len(dangling)} tunnel(s) to removed valves.",
                context={"dangling_edges": dangling},
            )
        leftover = [v.valve_id for v in graph if self._is_pass_through(v)]
        if leftover:
            raise GraphConsistencyError(
                "Reduction kept zero-flow valves.",
                context={"valves": sorted(leftover)},
            )
