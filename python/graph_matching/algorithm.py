"""
Algorithms for finding maximal and maximum-cardinality matchings
in general undirected graphs.
"""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Hashable, Iterable
from typing import NamedTuple, Optional, Protocol

from .matching import Matching


LOGGER = logging.getLogger(__name__)


class DisconnectedGraphError(ValueError):
    """Raised when a maximum-cardinality matching is requested for
    a graph that is not connected."""


class MatchingError(Exception):
    """Raised when verification of the matching fails.

    This can only happen if there is a bug in the algorithm.
    """


class GraphLike(Protocol):
    """Minimal set of graph operations used by the matching algorithms.

    Vertices may be any hashable values. The iteration order of
    "vertices()", "edges()" and "neighbors()" must be deterministic;
    it determines which matching is found when several exist.
    """

    def vertices(self) -> Iterable[Hashable]:
        ...

    def edges(self) -> Iterable[tuple[Hashable, Hashable]]:
        ...

    def neighbors(self, v: Hashable) -> Iterable[Hashable]:
        ...

    def add_vertex(self, v: Hashable) -> None:
        ...

    def add_edge(self, x: Hashable, y: Hashable) -> None:
        ...


def is_connected(graph: GraphLike) -> bool:
    """Return True if every vertex can be reached from every other vertex.

    Graphs with zero or one vertex are connected.

    This function takes time O(n + m).
    """

    vertices = list(graph.vertices())
    if len(vertices) <= 1:
        return True

    # Breadth-first search from an arbitrary vertex.
    start = vertices[0]
    seen = {start}
    queue = deque([start])
    while queue:
        v = queue.popleft()
        for w in graph.neighbors(v):
            if w not in seen:
                seen.add(w)
                queue.append(w)

    return len(seen) == len(vertices)


def maximal_matching(graph: GraphLike) -> Matching:
    """Compute a maximal matching by greedy selection of edges.

    Edges are considered in the enumeration order of the graph.
    An edge is added to the matching if both of its vertices are still
    unmatched. The result can not be extended by adding any edge of
    the graph, but it is not necessarily a maximum matching.

    The graph may be non-connected and may contain isolated vertices.

    This function takes time O(n + m).

    Returns:
        Maximal matching of the graph.
    """
    covered: set[Hashable] = set()
    pairs: list[tuple[Hashable, Hashable]] = []

    for (x, y) in graph.edges():
        if (x not in covered) and (y not in covered):
            pairs.append((x, y))
            covered.add(x)
            covered.add(y)

    return Matching(pairs)


def maximum_cardinality_matching(
        graph: GraphLike,
        initial_matching: Optional[Matching] = None
        ) -> Matching:
    """Compute a maximum-cardinality matching in the general undirected
    graph "graph".

    The search starts from "initial_matching", or from a greedy maximal
    matching if no initial matching is specified. Each stage of the
    algorithm searches for an augmenting path from all unmatched vertices
    at once and augments the matching along that path. When a stage does
    not find an augmenting path, the matching is maximum.

    The graph must be connected. Use this function separately on each
    connected component to handle non-connected graphs.

    This function takes time O(n * n * m), where "n" is the number of
    vertices and "m" is the number of edges.

    Parameters:
        graph: Connected graph.
        initial_matching: Optional matching in the graph to start from.

    Returns:
        Maximum-cardinality matching.

    Raises:
        DisconnectedGraphError: If the graph is not connected.
        ValueError: If the initial matching is not a matching in the graph.
        MatchingError: If the matching algorithm fails.
            This can only happen if there is a bug in the algorithm.
    """

    # Refuse to work on a non-connected graph before doing anything else.
    if not is_connected(graph):
        raise DisconnectedGraphError(
            "Maximum-cardinality matching requires a connected graph")

    if initial_matching is None:
        initial_matching = maximal_matching(graph)

    # Initialize graph representation.
    graph_info = _GraphInfo(graph)
    vertex_mate = graph_info.vertex_mate_from_matching(initial_matching)

    LOGGER.debug("Starting from matching with %d edges",
                 len(initial_matching))

    # Improve the solution until no further improvement is possible.
    #
    # Each successful pass through this loop increases the number
    # of matched edges by 1.
    #
    # This loop runs through at most (n/2 + 1) iterations.
    # Each iteration takes time O(n * m).
    num_stage = 0
    while True:
        num_stage += 1
        ctx = _SearchContext(graph_info, vertex_mate)
        if not ctx.run_stage():
            break
        vertex_mate = ctx.vertex_mate

    matching = graph_info.matching_from_vertex_mate(vertex_mate)

    LOGGER.debug("Found maximum matching with %d edges after %d stages",
                 len(matching), num_stage)

    # Verify that the matching is maximum.
    # The labels of the final (unsuccessful) stage provide a Tutte-Berge
    # certificate. If the matching algorithm is correct, verification
    # will always pass.
    verify_maximum(graph, matching, ctx.odd_vertices())

    return matching


def mcm_stage(
        graph: GraphLike,
        matching: Matching,
        root: Optional[Hashable] = None
        ) -> Matching:
    """Run a single stage of the maximum-cardinality matching algorithm.

    The stage searches for an augmenting path with respect to "matching".
    If "root" is specified, the search considers only augmenting paths
    that start in vertex "root". Otherwise the search starts from all
    unmatched vertices at once.

    If an augmenting path is found, the matching is augmented along this
    path and the new matching is returned. Otherwise the input matching
    is returned unchanged.

    This function does not check whether the graph is connected.

    This function takes time O(n * m).

    Parameters:
        graph: Graph to search.
        matching: Current matching in the graph.
        root: Optional unmatched vertex to start the search from.

    Returns:
        Matching with either the same number of edges as the input
        matching, or exactly one more edge.

    Raises:
        ValueError: If "matching" is not a matching in the graph,
            or if "root" is not an unmatched vertex of the graph.
    """

    graph_info = _GraphInfo(graph)
    vertex_mate = graph_info.vertex_mate_from_matching(matching)

    root_index: Optional[int] = None
    if root is not None:
        root_index = graph_info.vertex_index.get(root)
        if root_index is None:
            raise ValueError(f"Root {root!r} is not a vertex of the graph")
        if vertex_mate[root_index] != -1:
            raise ValueError(f"Root {root!r} is not an unmatched vertex")

    ctx = _SearchContext(graph_info, vertex_mate)
    if ctx.run_stage(root_index):
        return graph_info.matching_from_vertex_mate(ctx.vertex_mate)
    else:
        return matching


class _GraphInfo:
    """Representation of the input graph.

    These data remain unchanged while the algorithm runs.
    """

    def __init__(self, graph: GraphLike) -> None:
        """Initialize the graph representation and prepare an adjacency list.

        This function takes time O(n + m).
        """

        # Vertices are indexed by integers in range 0 .. n-1,
        # in the enumeration order of the graph.
        #
        # "vertices[x]" is the vertex with index "x".
        # "vertex_index[v]" is the index of vertex "v".
        self.vertices: list[Hashable] = list(graph.vertices())
        self.vertex_index: dict[Hashable, int] = {
            v: x for (x, v) in enumerate(self.vertices)}

        # num_vertex = the number of vertices.
        self.num_vertex = len(self.vertices)

        # "edges[e] = (x, y)" where "x" and "y" are vertex indices,
        # in the enumeration order and orientation of the graph.
        self.edges: list[tuple[int, int]] = [
            (self.vertex_index[p], self.vertex_index[q])
            for (p, q) in graph.edges()]

        # "adjacent[x]" is the list of vertex indices of the neighbours
        # of vertex "x", in the enumeration order of the graph.
        self.adjacent: list[list[int]] = [
            [self.vertex_index[w] for w in graph.neighbors(v)]
            for v in self.vertices]

    def vertex_mate_from_matching(self, matching: Matching) -> list[int]:
        """Convert a matching to a list of vertex mates.

        This function takes time O(n + m).

        Raises:
            ValueError: If the matching contains a vertex or an edge
                that does not exist in the graph.
        """

        vertex_mate = self.num_vertex * [-1]

        for (p, q) in matching:
            x = self.vertex_index.get(p)
            y = self.vertex_index.get(q)
            if (x is None) or (y is None):
                raise ValueError(
                    f"Matched edge ({p!r}, {q!r}) has a vertex"
                    " that is not in the graph")
            if y not in self.adjacent[x]:
                raise ValueError(
                    f"Matched edge ({p!r}, {q!r}) is not an edge of the graph")
            vertex_mate[x] = y
            vertex_mate[y] = x

        return vertex_mate

    def matching_from_vertex_mate(self, vertex_mate: list[int]) -> Matching:
        """Convert a list of vertex mates to a Matching.

        Matched edges are listed in the enumeration order of the graph.
        """
        return Matching([(self.vertices[x], self.vertices[y])
                         for (x, y) in self.edges
                         if vertex_mate[x] == y])


# Each vertex may be labeled "S" (even, outer) or "T" (odd, inner)
# or be unlabeled.
_LABEL_NONE = 0
_LABEL_S = 1
_LABEL_T = 2


class _Blossom:
    """Represents a blossom in a partially matched graph.

    A blossom is an odd-length alternating cycle over sub-blossoms.
    An alternating path consists of alternating matched and unmatched edges.
    An alternating cycle is an alternating path that starts and ends in
    the same sub-blossom.

    A single vertex by itself is also a blossom: a "trivial blossom".

    An instance of this class represents either a trivial blossom,
    or a non-trivial blossom which consists of multiple sub-blossoms.

    Each blossom contains exactly one vertex that is not matched to another
    vertex in the same blossom. This is the "base vertex" of the blossom.
    """

    def __init__(self, base_vertex: int) -> None:
        """Initialize a new blossom."""

        # If this is not a top-level blossom,
        # "parent" is the blossom in which this blossom is a sub-blossom.
        #
        # If this is a top-level blossom,
        # "parent = None".
        self.parent: Optional[_NonTrivialBlossom] = None

        # "base_vertex" is the vertex index of the base of the blossom.
        self.base_vertex: int = base_vertex

        # A top-level blossom that is part of an alternating tree,
        # has label S or T. Unlabeled top-level blossoms are not (yet)
        # part of any alternating tree.
        self.label: int = _LABEL_NONE

        # Labeled top-level blossoms keep track of the edge through which
        # they are attached to an alternating tree.
        #
        # "tree_edge = (x, y)" if the blossom is attached to an alternating
        # tree via edge "(x, y)" and vertex "y" is contained in the blossom.
        #
        # "tree_edge = None" if the blossom is the root of an alternating tree.
        self.tree_edge: Optional[tuple[int, int]] = None

        # "marker" is a temporary variable used to discover common
        # ancestors in the alternating tree. It is normally False, except
        # when used by "trace_alternating_paths()".
        self.marker: bool = False

    def vertices(self) -> list[int]:
        """Return a list of vertex indices contained in the blossom."""
        return [self.base_vertex]


class _NonTrivialBlossom(_Blossom):
    """Represents a non-trivial blossom in a partially matched graph.

    A non-trivial blossom contains at least 3 sub-blossoms. It keeps
    the list of its sub-blossoms and the edges between them.

    Non-trivial blossoms only exist during a single stage of the algorithm.
    They are created when the search finds an odd alternating cycle,
    and discarded together with the rest of the search state at the end
    of the stage.
    """

    def __init__(
            self,
            subblossoms: list[_Blossom],
            edges: list[tuple[int, int]]
            ) -> None:
        """Initialize a new blossom."""

        super().__init__(subblossoms[0].base_vertex)

        # Sanity check.
        n = len(subblossoms)
        assert len(edges) == n
        assert n >= 3
        assert n % 2 == 1

        # "subblossoms" is a list of the sub-blossoms of the blossom,
        # ordered by their appearance in the alternating cycle.
        #
        # "subblossoms[0]" is the start and end of the alternating cycle.
        # "subblossoms[0]" contains the base vertex of the blossom.
        self.subblossoms: list[_Blossom] = subblossoms

        # "edges" is a list of edges linking the sub-blossoms.
        #
        # "edges[0] = (x, y)" where vertex "x" in "subblossoms[0]" is
        # adjacent to vertex "y" in "subblossoms[1]", etc.
        self.edges: list[tuple[int, int]] = edges

    def vertices(self) -> list[int]:
        """Return a list of vertex indices contained in the blossom."""

        # Use an explicit stack to avoid deep recursion.
        stack: list[_NonTrivialBlossom] = [self]
        nodes: list[int] = []

        while stack:
            b = stack.pop()
            for sub in b.subblossoms:
                if isinstance(sub, _NonTrivialBlossom):
                    stack.append(sub)
                else:
                    nodes.append(sub.base_vertex)

        return nodes


class _AlternatingPath(NamedTuple):
    """Represents a list of edges forming an alternating path or an
    alternating cycle."""
    edges: list[tuple[int, int]]


class _SearchContext:
    """Holds all data used by a single stage of the matching algorithm.

    A new context is created for every stage. Labels, alternating trees
    and blossoms are local to the context and disappear with it.
    """

    def __init__(self, graph: _GraphInfo, vertex_mate: list[int]) -> None:
        """Set up the initial state of a stage."""

        num_vertex = graph.num_vertex

        # Reference to the input graph.
        # The graph does not change while the algorithm runs.
        self.graph = graph

        # Each vertex is either single (unmatched) or matched to
        # another vertex.
        #
        # If vertex "x" is matched to vertex "y",
        # "vertex_mate[x] == y" and "vertex_mate[y] == x".
        #
        # If vertex "x" is unmatched, "vertex_mate[x] == -1".
        #
        # The list is copied so the caller's state is not modified.
        self.vertex_mate: list[int] = list(vertex_mate)

        # "trivial_blossom[x]" is the trivial blossom that contains only
        # vertex "x".
        self.trivial_blossom: list[_Blossom] = [_Blossom(x)
                                                for x in range(num_vertex)]

        # Non-trivial blossoms created during this stage.
        self.nontrivial_blossom: list[_NonTrivialBlossom] = []

        # "vertex_top_blossom[x]" is the top-level blossom that contains
        # vertex "x".
        #
        # Initially all vertices are trivial top-level blossoms.
        self.vertex_top_blossom: list[_Blossom] = self.trivial_blossom.copy()

        # "queue" is a list of S-vertices that must be scanned.
        # We call it a queue, but it is actually a stack.
        self.queue: list[int] = []

    def odd_vertices(self) -> list[Hashable]:
        """Return the vertices that are labeled T."""
        return [self.graph.vertices[x]
                for x in range(self.graph.num_vertex)
                if self.vertex_top_blossom[x].label == _LABEL_T]

    def trace_alternating_paths(self, x: int, y: int) -> _AlternatingPath:
        """Follow the tree edges upward from S-vertices "x" and "y".

        The edge (x, y) joins two S-blossoms. When both blossoms hang in
        the same alternating tree, the two upward walks meet at their
        nearest common ancestor and the result is an odd cycle that starts
        and ends in that ancestor. When they hang in different trees, both
        walks end at a root and the result is an augmenting path between
        the two roots.

        The cycle case costs O(k) for a cycle of "k" sub-blossoms.
        The augmenting case costs O(n).

        Returns:
            Ordered list of edges between top-level blossoms.
        """

        visited: list[_Blossom] = []

        # Edges collected on the walk from "x" and on the walk from "y".
        # Both walks begin with the joining edge, seen from their own side.
        xedges: list[tuple[int, int]] = [(x, y)]
        yedges: list[tuple[int, int]] = [(y, x)]

        # Blossom where the two walks meet, if they meet at all.
        meeting: Optional[_Blossom] = None

        # Take one step on each side in turn, so a small cycle is found
        # without walking all the way up a deep tree.
        while x != -1 or y != -1:

            bx = self.vertex_top_blossom[x]
            if bx.marker:
                # The other walk already passed through here.
                meeting = bx
                break

            bx.marker = True
            visited.append(bx)

            if bx.tree_edge is None:
                # Tree root; this walk is finished.
                x = -1
            else:
                xedges.append(bx.tree_edge)
                x = bx.tree_edge[0]

            # Hand the turn to the other walk while it is still active.
            if y != -1:
                (x, y) = (y, x)
                (xedges, yedges) = (yedges, xedges)

        for b in visited:
            b.marker = False

        # Cut the other walk back to the meeting point.
        if meeting is not None:
            assert self.vertex_top_blossom[xedges[-1][0]] is meeting
            while self.vertex_top_blossom[yedges[-1][0]] is not meeting:
                yedges.pop()

        # Join the walks into a single path: reverse the first walk and
        # turn around each edge of the second walk. The joining edge
        # occurs in both walks and is kept only once.
        path_edges = xedges[::-1] + [(q, p) for (p, q) in yedges[1:]]

        # A path between two S-blossoms always has an odd number of edges.
        assert len(path_edges) % 2 == 1

        return _AlternatingPath(path_edges)

    def make_blossom(self, path: _AlternatingPath) -> None:
        """Create a new blossom from an alternating cycle.

        Assign label S to the new blossom.
        Relabel all T-sub-blossoms as S and add their vertices to the queue.

        This function takes time O(n).
        """

        # Check that the path is odd-length.
        assert len(path.edges) % 2 == 1
        assert len(path.edges) >= 3

        # Construct the list of sub-blossoms (current top-level blossoms).
        subblossoms = [self.vertex_top_blossom[x] for (x, y) in path.edges]

        # Check that the path is cyclic.
        # Note the path may not start and end with the same _vertex_,
        # but it must start and end in the same _blossom_.
        subblossoms_next = [self.vertex_top_blossom[y]
                            for (x, y) in path.edges]
        assert subblossoms[0] is subblossoms_next[-1]
        assert subblossoms[1:] == subblossoms_next[:-1]

        blossom = _NonTrivialBlossom(subblossoms, path.edges)
        self.nontrivial_blossom.append(blossom)

        # Link the subblossoms to the their new parent.
        for sub in subblossoms:
            sub.parent = blossom

        # Update blossom-membership of all vertices in the new blossom.
        for x in blossom.vertices():
            self.vertex_top_blossom[x] = blossom

        # Assign label S to the new blossom.
        # It takes over the place of its base in the alternating tree.
        assert subblossoms[0].label == _LABEL_S
        blossom.label = _LABEL_S
        blossom.tree_edge = subblossoms[0].tree_edge

        # Former T-vertices which are part of this blossom now become
        # S-vertices. Add them to the queue.
        for sub in subblossoms:
            if sub.label == _LABEL_T:
                self.queue.extend(sub.vertices())

        LOGGER.debug("Created blossom with %d sub-blossoms, base %r",
                     len(subblossoms),
                     self.graph.vertices[blossom.base_vertex])

    def find_path_through_blossom(
            self,
            blossom: _NonTrivialBlossom,
            sub: _Blossom
            ) -> tuple[list[_Blossom], list[tuple[int, int]]]:
        """Return the even-length alternating path inside "blossom" that
        leads from sub-blossom "sub" to the sub-blossom holding the base.

        Returns:
            Tuple (nodes, edges). "edges[i]" links "nodes[i]" to
            "nodes[i+1]" and is oriented along the path.
        """

        nodes: list[_Blossom] = [sub]
        edges: list[tuple[int, int]] = []

        # In the cycle, "edges[k]" joins sub-blossom k to sub-blossom k+1.
        # Edges at odd positions are matched. A path that must start with
        # a matched edge therefore runs backwards from an even position
        # and forwards from an odd position.
        p = blossom.subblossoms.index(sub)
        nsub = len(blossom.subblossoms)
        while p != 0:
            if p % 2 == 0:
                # Backwards: (p-2) --- (p-1) === (p), walked from right
                # to left, so each edge is turned around.
                edges.append(blossom.edges[p-1][::-1])
                nodes.append(blossom.subblossoms[p-1])
                edges.append(blossom.edges[p-2][::-1])
                nodes.append(blossom.subblossoms[p-2])
                p -= 2
            else:
                # Forwards: (p) === (p+1) --- (p+2), wrapping to 0 at the
                # end of the cycle.
                edges.append(blossom.edges[p])
                nodes.append(blossom.subblossoms[p+1])
                edges.append(blossom.edges[p+1])
                nodes.append(blossom.subblossoms[(p+2) % nsub])
                p = (p + 2) % nsub

        return (nodes, edges)

    def augment_blossom_rec(
            self,
            blossom: _NonTrivialBlossom,
            sub: _Blossom,
            stack: list[tuple[_NonTrivialBlossom, _Blossom]]
            ) -> None:
        """Flip the matched and unmatched edges on the path from "sub"
        to the base of "blossom", then make "sub" the new base.

        Sub-blossom "sub" itself has been handled by the caller.
        Other non-trivial sub-blossoms touched by a newly matched edge
        are pushed on "stack" for the caller to process.
        """

        (path_nodes, path_edges) = self.find_path_through_blossom(blossom,
                                                                  sub)

        # The path alternates matched, unmatched, matched, ...
        # Every unmatched edge (odd position) becomes matched. The matched
        # edges at even positions need no explicit change, since both of
        # their vertices receive a new mate here.
        for p in range(1, len(path_edges), 2):
            (x, y) = path_edges[p]
            self.vertex_mate[x] = y
            self.vertex_mate[y] = x

            # A non-trivial sub-blossom whose entry vertex changed must
            # get its own internal path flipped as well.
            bx = path_nodes[p]
            if isinstance(bx, _NonTrivialBlossom):
                stack.append((bx, self.trivial_blossom[x]))

            by = path_nodes[p+1]
            if isinstance(by, _NonTrivialBlossom):
                stack.append((by, self.trivial_blossom[y]))

        # Rotate the cycle so that "sub" comes first and holds the base.
        p = blossom.subblossoms.index(sub)
        blossom.subblossoms = (
            blossom.subblossoms[p:] + blossom.subblossoms[:p])
        blossom.edges = blossom.edges[p:] + blossom.edges[:p]
        blossom.base_vertex = sub.base_vertex

    def augment_blossom(
            self,
            blossom: _NonTrivialBlossom,
            sub: _Blossom
            ) -> None:
        """Augment along an alternating path through the specified blossom,
        from sub-blossom "sub" to the base vertex of the blossom.

        Recursively augment any sub-blossoms on the alternating path.

        This function takes time O(n).
        """

        # Use an explicit stack to avoid deep recursion.
        stack = [(blossom, sub)]

        while stack:
            (outer_blossom, sub) = stack.pop()
            assert sub.parent is not None
            blossom = sub.parent

            if blossom is not outer_blossom:
                # Sub-blossom "sub" is an indirect (nested) child of
                # the "outer_blossom" we are supposed to be augmenting.
                #
                # "blossom" is the direct parent of "sub".
                # Let's first augment "blossom" from "sub" to its base vertex.
                # Then continue by augmenting the parent of "blossom",
                # from "blossom" to its base vertex, and so on until we
                # get to the "outer_blossom".
                stack.append((outer_blossom, blossom))

            # Augment "blossom" from "sub" to the base vertex.
            self.augment_blossom_rec(blossom, sub, stack)

    def augment_matching(self, path: _AlternatingPath) -> None:
        """Augment the matching through the specified augmenting path.

        This function takes time O(n).
        """

        # Check that the augmenting path starts and ends in
        # an unmatched vertex or a blossom with unmatched base.
        assert len(path.edges) % 2 == 1
        for x in (path.edges[0][0], path.edges[-1][1]):
            b = self.vertex_top_blossom[x]
            assert self.vertex_mate[b.base_vertex] == -1

        # The augmenting path looks like this:
        #
        #   (unmatched) ---- (B) ==== (B) ---- (B) ==== (B) ---- (unmatched)
        #
        # The first and last vertex (or blossom) of the path are unmatched
        # (or have unmatched base vertex). After augmenting, those vertices
        # will be matched. All matched edges on the path become unmatched,
        # and unmatched edges become matched.
        #
        # This loop walks along the edges of this path that were not matched
        # before augmenting.
        for (x, y) in path.edges[0::2]:

            # Augment the non-trivial blossoms on either side of this edge.
            # No action is necessary for trivial blossoms.
            bx = self.vertex_top_blossom[x]
            if isinstance(bx, _NonTrivialBlossom):
                self.augment_blossom(bx, self.trivial_blossom[x])

            by = self.vertex_top_blossom[y]
            if isinstance(by, _NonTrivialBlossom):
                self.augment_blossom(by, self.trivial_blossom[y])

            # Pull the edge into the matching.
            self.vertex_mate[x] = y
            self.vertex_mate[y] = x

        LOGGER.debug("Augmented matching along path of %d edges",
                     len(path.edges))

    #
    # Labeling and alternating tree expansion:
    #

    def assign_label_s(self, x: int) -> None:
        """Assign label S to the unlabeled blossom that contains vertex "x".

        If vertex "x" is matched, it is attached to the alternating tree
        via its matched edge. If vertex "x" is unmatched, it becomes the root
        of an alternating tree.

        All vertices in the newly labeled blossom are added to the scan queue.

        Precondition:
            "x" is an unlabeled vertex, either unmatched or matched to
            a T-vertex.
        """

        # Assign label S to the blossom that contains vertex "x".
        bx = self.vertex_top_blossom[x]
        assert bx.label == _LABEL_NONE
        bx.label = _LABEL_S

        y = self.vertex_mate[x]
        if y == -1:
            # Vertex "x" is unmatched.
            # It must be either a top-level vertex or the base vertex of
            # a top-level blossom.
            assert bx.base_vertex == x

            # Mark the blossom as root of an alternating tree.
            bx.tree_edge = None

        else:
            # Vertex "x" is matched to T-vertex "y".
            by = self.vertex_top_blossom[y]
            assert by.label == _LABEL_T

            # Attach the blossom that contains "x" to the alternating tree.
            bx.tree_edge = (y, x)

        # Add all vertices inside the newly labeled S-blossom to the queue.
        self.queue.extend(bx.vertices())

    def assign_label_t(self, x: int, y: int) -> None:
        """Assign label T to the unlabeled blossom that contains vertex "y".

        Attach it to the alternating tree via edge (x, y).
        Then immediately assign label S to the mate of vertex "y".

        Preconditions:
         - "x" is an S-vertex.
         - "y" is an unlabeled, matched vertex.
        """
        assert self.vertex_top_blossom[x].label == _LABEL_S

        # Assign label T to the unlabeled blossom.
        by = self.vertex_top_blossom[y]
        assert by.label == _LABEL_NONE
        by.label = _LABEL_T
        by.tree_edge = (x, y)

        # Assign label S to the blossom that contains the mate of vertex "y".
        z = self.vertex_mate[by.base_vertex]
        assert z != -1
        self.assign_label_s(z)

    def add_s_to_s_edge(self, x: int, y: int) -> Optional[_AlternatingPath]:
        """Add the edge between S-vertices "x" and "y".

        If the edge connects blossoms that are part of the same alternating
        tree, this function creates a new S-blossom and returns None.

        If the edge connects two different alternating trees, an augmenting
        path has been discovered. In this case the function changes nothing
        and returns the augmenting path.

        Returns:
            Augmenting path if found; otherwise None.
        """

        # Trace back through the alternating trees from "x" and "y".
        path = self.trace_alternating_paths(x, y)

        # If the path is a cycle, create a new blossom.
        # Otherwise the path is an augmenting path.
        # Note that an alternating cycle starts and ends in the same blossom,
        # but not necessarily in the same vertex within that blossom.
        p = path.edges[0][0]
        q = path.edges[-1][1]
        if self.vertex_top_blossom[p] is self.vertex_top_blossom[q]:
            self.make_blossom(path)
            return None
        else:
            return path

    def scan(self) -> Optional[_AlternatingPath]:
        """Scan queued S-vertices to expand the alternating trees.

        The scan proceeds until either an augmenting path is found,
        or the queue of S-vertices becomes empty.

        New blossoms may be created during the scan.

        Returns:
            Augmenting path if found; otherwise None.
        """

        adjacent = self.graph.adjacent

        # Process S-vertices waiting to be scanned.
        # This loop runs through O(n) iterations per stage.
        while self.queue:

            # Take a vertex from the queue.
            x = self.queue.pop()

            # Double-check that "x" is an S-vertex.
            bx = self.vertex_top_blossom[x]
            assert bx.label == _LABEL_S

            # Scan the edges that are incident on "x".
            # This loop runs through O(m) iterations per stage.
            for y in adjacent[x]:

                # Note: blossom index of vertex "x" may change during
                # this loop, so we need to refresh it here.
                bx = self.vertex_top_blossom[x]
                by = self.vertex_top_blossom[y]

                # Ignore edges that are internal to a blossom.
                if bx is by:
                    continue

                ylabel = by.label

                if ylabel == _LABEL_NONE:
                    if self.vertex_mate[y] != -1:
                        # Assign label T to "y" and label S to its mate.
                        self.assign_label_t(x, y)
                    else:
                        # Vertex "y" is unmatched but not the root of an
                        # alternating tree. This only happens when the
                        # search started from a single root.
                        # Make "y" the root of its own tree; the edge
                        # then links two trees into an augmenting path.
                        self.assign_label_s(y)
                        alternating_path = self.add_s_to_s_edge(x, y)
                        assert alternating_path is not None
                        return alternating_path

                elif ylabel == _LABEL_S:
                    # This edge connects two S-blossoms. Use it to find
                    # either a new blossom or an augmenting path.
                    alternating_path = self.add_s_to_s_edge(x, y)
                    if alternating_path is not None:
                        return alternating_path

                # Edges from S-vertices to T-vertices are ignored.

        # No further S vertices to scan, and no augmenting path found.
        return None

    def run_stage(self, root: Optional[int] = None) -> bool:
        """Run one stage of the matching algorithm.

        The stage searches an augmenting path, starting from vertex "root",
        or from all unmatched vertices if "root" is None.
        If this path is found, it is used to augment the matching,
        thereby increasing the number of matched edges by 1.
        If no such path is found, the matching must already be maximum
        (or, for a single root, no augmenting path starts at that root).

        This function takes time O(n * m).

        Returns:
            True if the matching was successfully augmented.
            False if no further improvement is possible.
        """

        # Assign label S to the root(s) and put them in the queue.
        if root is None:
            for x in range(self.graph.num_vertex):
                if self.vertex_mate[x] == -1:
                    self.assign_label_s(x)
        else:
            assert self.vertex_mate[root] == -1
            self.assign_label_s(root)

        LOGGER.debug("Stage starts with %d unmatched root vertices",
                     len(self.queue))

        # Stop if all vertices are matched.
        # No further improvement is possible in that case.
        if not self.queue:
            return False

        augmenting_path = self.scan()

        LOGGER.debug("Stage formed %d blossoms, largest has %d vertices",
                     len(self.nontrivial_blossom),
                     max((len(b.vertices()) for b in self.nontrivial_blossom),
                         default=0))

        if augmenting_path is None:
            return False

        self.augment_matching(augmenting_path)
        return True


def verify_maximum(
        graph: GraphLike,
        matching: Matching,
        odd_vertices: Iterable[Hashable]
        ) -> None:
    """Verify that "matching" is a maximum-cardinality matching.

    The set "odd_vertices" is used as a Tutte-Berge barrier "U".
    For any vertex set "U", no matching can have more than
    "(n + |U| - odd(G - U)) / 2" edges, where "odd(G - U)" is the number
    of connected components with an odd number of vertices that remain
    after deleting "U" from the graph.
    A matching that attains this bound is maximum.

    The T-labeled vertices of a search stage that failed to find an
    augmenting path from all unmatched vertices form such a barrier.

    This function takes time O(n + m).

    Raises:
        MatchingError: If the matching is invalid or does not attain
            the bound.
    """

    vertices = list(graph.vertices())
    vertex_set = set(vertices)

    # Check that each matched edge actually exists in the graph.
    for (x, y) in matching:
        if (x not in vertex_set) or (y not in vertex_set):
            raise MatchingError(
                f"Verification failed: matched edge ({x!r}, {y!r})"
                " has a vertex that is not in the graph")
        if y not in graph.neighbors(x):
            raise MatchingError(
                f"Verification failed: matched edge ({x!r}, {y!r})"
                " is not an edge of the graph")

    barrier = set(odd_vertices)
    if not barrier <= vertex_set:
        raise MatchingError(
            "Verification failed: barrier contains unknown vertices")

    # Count odd components of the graph with the barrier removed.
    seen = set(barrier)
    num_odd = 0
    for v in vertices:
        if v in seen:
            continue
        seen.add(v)
        stack = [v]
        component_size = 0
        while stack:
            u = stack.pop()
            component_size += 1
            for w in graph.neighbors(u):
                if w not in seen:
                    seen.add(w)
                    stack.append(w)
        if component_size % 2 == 1:
            num_odd += 1

    # "bound_2x" is 2 times the Tutte-Berge upper bound.
    bound_2x = len(vertices) + len(barrier) - num_odd
    if 2 * len(matching) != bound_2x:
        raise MatchingError(
            f"Verification failed: matching has {len(matching)} edges"
            f" but barrier of {len(barrier)} vertices allows"
            f" {bound_2x / 2:g}")

    # Maximum matching confirmed.
