"""
Shortest-path strategy interface.

Design: Strategy pattern.  DistanceMatrixBuilder delegates to whichever
ShortestPathStrategy is configured, so the exhaustive DFS search and the
NetworkX Dijkstra search are interchangeable.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from valveflow.core.valve import NodeId, ValveGraph


class ShortestPathStrategy(ABC):
    """
    Abstract strategy that computes tunnel distances from one valve.
    """

    name: str = ""

    @abstractmethod
    def distances_from(
        self,
        graph: ValveGraph,
        source: NodeId,
        targets: list[NodeId],
    ) -> dict[NodeId, int]:
        """
        Compute the minimum traversal cost from *source* to each target.

        Parameters
        ----------
        graph : the ValveGraph to search
        source : valve id to start from
        targets : valve ids to measure (never includes *source*)

        Returns
        -------
        dict mapping target id → cost.  A target with no path is left out;
        the caller decides whether that is fatal.
        """
        ...
