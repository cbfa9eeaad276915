"""
GraphBuilder: turns raw valve records into a ValveGraph with unit-cost
tunnels.
"""

from __future__ import annotations

import logging
from typing import Iterable

from valveflow.core.errors import MalformedRecordError
from valveflow.core.parser import ValveRecord
from valveflow.core.valve import Valve, ValveGraph

logger = logging.getLogger(__name__)

TUNNEL_COST = 1


class GraphBuilder:
    """
    Builds the pre-reduction graph.

    Every record must name at least one neighbour, and every neighbour must
    be defined by some record and list the first valve back.  Violations
    raise MalformedRecordError.
    """

    def build(self, records: Iterable[ValveRecord]) -> ValveGraph:
        graph = ValveGraph()

        for valve_id, flow_rate, neighbours in records:
            if valve_id in graph:
                raise MalformedRecordError(
                    f"Valve {valve_id!r} is defined more than once.",
                    context={"valve": valve_id},
                )
            if flow_rate < 0:
                raise MalformedRecordError(
                    f"Valve {valve_id!r} has negative flow rate {flow_rate}.",
                    context={"valve": valve_id},
                )
            if not neighbours:
                raise MalformedRecordError(
                    f"Valve {valve_id!r} has no tunnels.",
                    context={"valve": valve_id},
                )
            if valve_id in neighbours:
                raise MalformedRecordError(
                    f"Valve {valve_id!r} has a tunnel to itself.",
                    context={"valve": valve_id},
                )
            graph.add(
                Valve(
                    valve_id,
                    flow_rate,
                    {neighbour: TUNNEL_COST for neighbour in neighbours},
                )
            )

        dangling = graph.dangling_edges()
        if dangling:
            source, target = dangling[0]
            raise MalformedRecordError(
                f"Valve {source!r} references undefined valve {target!r}.",
                context={"dangling_edges": dangling},
            )

        # Tunnels are bidirectional.
        one_way = graph.one_way_edges()
        if one_way:
            source, target = one_way[0]
            raise MalformedRecordError(
                f"Tunnel {source!r} -> {target!r} has no matching tunnel back.",
                context={"one_way_edges": one_way},
            )

        logger.info(
            "Built valve graph: %d valves, %d tunnel entries",
            len(graph),
            graph.edge_count(),
        )
        return graph
