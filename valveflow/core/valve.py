"""
Valve model: a valve with a flow rate and weighted tunnel adjacency,
and ValveGraph, the id-keyed container every pipeline stage works on.

Valves never hold references to each other; every relation is a lookup
by two-character valve id into the owning ValveGraph.
"""

from __future__ import annotations

from typing import Iterator

import networkx as nx

NodeId = str


class Valve:
    """
    A single valve.

    Attributes
    ----------
    valve_id : str
        Two-character identifier (e.g. "AA").
    flow_rate : int
        Pressure released per time unit once opened.
    tunnels : dict[str, int]
        Neighbouring valve id → traversal cost.
    """

    def __init__(
        self,
        valve_id: NodeId,
        flow_rate: int,
        tunnels: dict[NodeId, int] | None = None,
    ) -> None:
        self.valve_id = valve_id
        self.flow_rate = flow_rate
        self.tunnels: dict[NodeId, int] = dict(tunnels) if tunnels else {}

    def copy(self) -> "Valve":
        return Valve(self.valve_id, self.flow_rate, self.tunnels)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Valve):
            return NotImplemented
        return (
            self.valve_id == other.valve_id
            and self.flow_rate == other.flow_rate
            and self.tunnels == other.tunnels
        )

    def __repr__(self) -> str:
        tunnels = ", ".join(f"{k}({v})" for k, v in sorted(self.tunnels.items()))
        return f"<Valve id={self.valve_id!r} flow_rate={self.flow_rate} tunnels=[{tunnels}]>"


class ValveGraph:
    """
    A dictionary-like container mapping valve ids to Valve records.
    """

    def __init__(self, valves: dict[NodeId, Valve] | None = None) -> None:
        self._valves: dict[NodeId, Valve] = dict(valves) if valves else {}

    # ── Read / Write ───────────────────────────────────────────────

    def get(self, valve_id: NodeId) -> Valve:
        """Return the valve for *valve_id*. Raises KeyError if missing."""
        return self._valves[valve_id]

    def add(self, valve: Valve) -> None:
        self._valves[valve.valve_id] = valve

    def remove(self, valve_id: NodeId) -> None:
        self._valves.pop(valve_id, None)

    def flow_rate(self, valve_id: NodeId) -> int:
        return self._valves[valve_id].flow_rate

    def cost(self, source: NodeId, target: NodeId) -> int:
        """Edge cost from *source* to *target*. Raises KeyError if no edge."""
        return self._valves[source].tunnels[target]

    def ids(self) -> list[NodeId]:
        """Valve ids in sorted order."""
        return sorted(self._valves)

    # ── Bulk operations ────────────────────────────────────────────

    def copy(self) -> "ValveGraph":
        """Deep copy: valves and their tunnel dicts are duplicated."""
        return ValveGraph({vid: v.copy() for vid, v in self._valves.items()})

    def edge_count(self) -> int:
        """Number of directed adjacency entries."""
        return sum(len(v.tunnels) for v in self._valves.values())

    def is_symmetric(self) -> bool:
        return not self.one_way_edges()

    def one_way_edges(self) -> list[tuple[NodeId, NodeId]]:
        """Edges with no reverse edge of the same cost."""
        return [
            (vid, target)
            for vid, valve in sorted(self._valves.items())
            for target, cost in sorted(valve.tunnels.items())
            if target not in self._valves
            or self._valves[target].tunnels.get(vid) != cost
        ]

    def dangling_edges(self) -> list[tuple[NodeId, NodeId]]:
        """Edges whose target valve is not present in the graph."""
        return [
            (vid, target)
            for vid, valve in sorted(self._valves.items())
            for target in sorted(valve.tunnels)
            if target not in self._valves
        ]

    def to_networkx(self) -> nx.DiGraph:
        """Build a weighted NetworkX DiGraph (one arc per adjacency entry)."""
        g = nx.DiGraph()
        for vid, valve in self._valves.items():
            g.add_node(vid, flow_rate=valve.flow_rate)
        for vid, valve in self._valves.items():
            for target, cost in valve.tunnels.items():
                g.add_edge(vid, target, weight=cost)
        return g

    def to_dict(self) -> dict[NodeId, dict]:
        """Plain-dict form suitable for serialization."""
        return {
            vid: {
                "flow_rate": self._valves[vid].flow_rate,
                "tunnels": dict(sorted(self._valves[vid].tunnels.items())),
            }
            for vid in self.ids()
        }

    # ── Dunder helpers ─────────────────────────────────────────────

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ValveGraph):
            return NotImplemented
        return self._valves == other._valves

    def __iter__(self) -> Iterator[Valve]:
        return iter(self._valves.values())

    def __len__(self) -> int:
        return len(self._valves)

    def __contains__(self, valve_id: object) -> bool:
        return valve_id in self._valves

    def __repr__(self) -> str:
        return f"ValveGraph({', '.join(self.ids())})"
