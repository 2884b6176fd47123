"""
Representation of a matching in an undirected graph.
"""

from __future__ import annotations

from collections.abc import Hashable, Iterable, Iterator, Mapping
from typing import Any, Optional


class Matching:
    """A set of edges such that no vertex occurs in more than one edge.

    Each matched edge is stored as a tuple "(x, y)" of its two vertices.
    Edges keep the order in which they were passed to the constructor.

    A Matching is an immutable value. It does not refer to the graph
    from which it was computed. The matching algorithms return a new
    instance instead of modifying an existing one.
    """

    def __init__(self, edges: Iterable[Any] = ()) -> None:
        """Build a matching from a sequence of vertex pairs.

        This function takes time O(k), where "k" is the number of edges.

        Parameters:
            edges: Sequence of matched edges, each edge specified as
                a tuple or list "(x, y)" of two distinct vertices.

        Raises:
            TypeError: If an edge is not a pair of vertices.
            ValueError: If an edge is a self-edge, or if two edges
                share a vertex.
        """

        self._edges: list[tuple[Hashable, Hashable]] = []

        # "_mate[x] = y" if vertex "x" is matched to vertex "y".
        self._mate: dict[Hashable, Hashable] = {}

        for e in edges:
            if (not isinstance(e, (tuple, list))) or (len(e) != 2):
                raise TypeError("Each matched edge must be a pair of vertices")

            (x, y) = e

            if x == y:
                raise ValueError("Self-edges are not supported")

            for v in (x, y):
                if v in self._mate:
                    raise ValueError(
                        f"Vertex {v!r} is covered by more than one edge")

            self._mate[x] = y
            self._mate[y] = x
            self._edges.append((x, y))

    @classmethod
    def from_mates(cls, mates: Mapping[Hashable, Hashable]) -> Matching:
        """Build a matching from a mapping of vertices to their mates.

        The mapping must be symmetric: "mates[x] == y" implies
        "mates[y] == x". Each pair is included once, oriented the way
        it is first encountered.

        Raises:
            ValueError: If the mapping is not symmetric.
        """
        edges: list[tuple[Hashable, Hashable]] = []
        seen: set[Hashable] = set()
        for (x, y) in mates.items():
            if mates.get(y) != x:
                raise ValueError(
                    f"Asymmetric match of vertex {x!r} and {y!r}")
            if x not in seen:
                seen.add(x)
                seen.add(y)
                edges.append((x, y))
        return cls(edges)

    @property
    def size(self) -> int:
        """Number of matched edges."""
        return len(self._edges)

    def __len__(self) -> int:
        return len(self._edges)

    def __iter__(self) -> Iterator[tuple[Hashable, Hashable]]:
        return iter(self._edges)

    def is_empty(self) -> bool:
        """Return True if the matching contains no edges."""
        return not self._edges

    def to_list(self) -> list[tuple[Hashable, Hashable]]:
        """Return the list of matched edges in insertion order."""
        return list(self._edges)

    def vertices(self) -> set[Hashable]:
        """Return the set of vertices covered by the matching."""
        return set(self._mate)

    def covers(self, v: Hashable) -> bool:
        """Return True if vertex "v" is matched."""
        return v in self._mate

    def mate(self, v: Hashable) -> Optional[Hashable]:
        """Return the vertex matched to "v", or None if "v" is exposed."""
        return self._mate.get(v)

    def __eq__(self, other: object) -> bool:
        # Matchings are equal if they contain the same set of
        # unordered vertex pairs, regardless of edge order.
        if not isinstance(other, Matching):
            return NotImplemented
        return self._mate == other._mate

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Matching({self._edges!r})"
