"""
Simple undirected graph with matching operations.
"""

from __future__ import annotations

from collections.abc import Hashable, Iterable
from typing import Optional

from .algorithm import (is_connected,
                        maximal_matching,
                        maximum_cardinality_matching,
                        mcm_stage)
from .matching import Matching


class Graph:
    """Simple undirected graph.

    Vertices may be any hashable values.
    There is at most one edge between any pair of vertices,
    and no vertex has an edge to itself.

    Vertices, edges and neighbours are enumerated in insertion order.
    """

    def __init__(self) -> None:
        """Initialize an empty graph."""

        # "_adjacent[v]" maps each neighbour of vertex "v" to None.
        # A dict is used as an insertion-ordered set.
        self._adjacent: dict[Hashable, dict[Hashable, None]] = {}

        # List of edges "(x, y)" in insertion order.
        self._edges: list[tuple[Hashable, Hashable]] = []

    @classmethod
    def from_flat(cls, values: Iterable[Hashable]) -> Graph:
        """Build a graph from a flat sequence of vertices taken pairwise
        as edges.

        For example "Graph.from_flat([1,2, 1,3, 2,3])" builds a triangle
        on vertices 1, 2, 3.

        Raises:
            ValueError: If the sequence has odd length or describes
                a self-edge.
        """
        values = list(values)
        if len(values) % 2 != 0:
            raise ValueError(
                "Expecting an even number of vertices to pair into edges")
        graph = cls()
        for i in range(0, len(values), 2):
            graph.add_edge(values[i], values[i+1])
        return graph

    def add_vertex(self, v: Hashable) -> None:
        """Add vertex "v". Nothing happens if the vertex already exists."""
        if v not in self._adjacent:
            self._adjacent[v] = {}

    def add_edge(self, x: Hashable, y: Hashable) -> None:
        """Add an edge between vertices "x" and "y".

        Missing vertices are added to the graph.
        Nothing happens if the edge already exists.

        Raises:
            ValueError: If "x" and "y" are the same vertex.
        """
        if x == y:
            raise ValueError("Self-edges are not supported")
        self.add_vertex(x)
        self.add_vertex(y)
        if y not in self._adjacent[x]:
            self._adjacent[x][y] = None
            self._adjacent[y][x] = None
            self._edges.append((x, y))

    def vertices(self) -> list[Hashable]:
        """Return the list of vertices."""
        return list(self._adjacent)

    def edges(self) -> list[tuple[Hashable, Hashable]]:
        """Return the list of edges."""
        return list(self._edges)

    def neighbors(self, v: Hashable) -> list[Hashable]:
        """Return the list of neighbours of vertex "v".

        Raises:
            KeyError: If "v" is not a vertex of the graph.
        """
        return list(self._adjacent[v])

    def has_vertex(self, v: Hashable) -> bool:
        return v in self._adjacent

    def has_edge(self, x: Hashable, y: Hashable) -> bool:
        return (x in self._adjacent) and (y in self._adjacent[x])

    @property
    def num_vertex(self) -> int:
        return len(self._adjacent)

    @property
    def num_edge(self) -> int:
        return len(self._edges)

    def __len__(self) -> int:
        return len(self._adjacent)

    def __contains__(self, v: object) -> bool:
        return v in self._adjacent

    def __repr__(self) -> str:
        return (f"Graph(num_vertex={self.num_vertex},"
                f" num_edge={self.num_edge})")

    def is_connected(self) -> bool:
        """Return True if the graph is connected.

        Graphs with zero or one vertex are connected.
        """
        return is_connected(self)

    def maximal_matching(self) -> Matching:
        """Return a greedy maximal matching of the graph."""
        return maximal_matching(self)

    def maximum_cardinality_matching(
            self,
            initial_matching: Optional[Matching] = None
            ) -> Matching:
        """Return a maximum-cardinality matching of the graph.

        Raises:
            DisconnectedGraphError: If the graph is not connected.
        """
        return maximum_cardinality_matching(self, initial_matching)

    def mcm_stage(
            self,
            matching: Matching,
            root: Optional[Hashable] = None
            ) -> Matching:
        """Run a single augmenting path search on "matching".

        See "graph_matching.algorithm.mcm_stage()".
        """
        return mcm_stage(self, matching, root)
