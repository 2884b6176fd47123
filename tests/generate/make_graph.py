#!/usr/bin/env python3

r"""
Generate unweighted test graphs in DIMACS edge format.

Graph classes:

  random K M        Random graph with N vertices and M edges.
                    With --connected, the first N-1 edges form a random
                    spanning path so that the graph is connected.

  triangles K C     Chain of K triangles, connected either at 1 corner
                    (C = 1) or at 3 corners (C = 3).
                    N = 3*K, M = 3*K + C*(K-1).

                       [1]-------[4]       [7]
                        | \       | \       | \
                        |  [3]    |  [6]    |  [9]---
                        | /       | /       | /
                       [2]       [5]-------[8]

  hardcard K        Worst case graph described by Gabow: vertices
                    1 .. 4*K form a complete subgraph, and vertex (2*I-1)
                    is joined to vertex (4*K+I) for 1 <= I <= 2*K.
                    N = 6*K, M = 8*K*K.

The triangle and hardcard classes follow the Fortran generators
"t.f", "tt.f" and "hardcard.f" from the DIMACS archive.

Reference: H. N. Gabow, "An efficient implementation of Edmonds'
           algorithm for maximum matching on graphs", JACM 23
           (1976), pp. 221-234.

Output to stdout. Vertices are numbered from 1.
"""

from __future__ import annotations

import sys
import argparse
import random
from typing import TextIO


def write_dimacs_graph(
        f: TextIO,
        num_vertex: int,
        edges: list[tuple[int, int]]
        ) -> None:
    """Write a graph in DIMACS edge list format."""

    print(f"p edge {num_vertex} {len(edges)}", file=f)

    for (x, y) in edges:
        print(f"e {x} {y}", file=f)


def make_random_graph(
        n: int,
        m: int,
        connected: bool,
        rng: random.Random
        ) -> list[tuple[int, int]]:
    """Generate a random graph on vertices 1 .. n."""

    edge_set: set[tuple[int, int]] = set()

    if connected:
        # Link all vertices along a random spanning path.
        order = list(range(1, n + 1))
        rng.shuffle(order)
        for i in range(n - 1):
            (x, y) = (order[i], order[i+1])
            edge_set.add((min(x, y), max(x, y)))

    if 3 * m < n * (n - 2) // 2:
        # Simply add random edges until we have enough.
        while len(edge_set) < m:
            x = rng.randint(1, n - 1)
            y = rng.randint(x + 1, n)
            edge_set.add((x, y))

    else:
        # We need a very dense graph.
        # Generate all edge candidates and choose a random subset.
        edge_candidates = [(x, y)
                           for x in range(1, n)
                           for y in range(x + 1, n + 1)
                           if (x, y) not in edge_set]
        rng.shuffle(edge_candidates)
        edge_set.update(edge_candidates[:m-len(edge_set)])

    return sorted(edge_set)


def make_triangles(k: int, c: int) -> list[tuple[int, int]]:
    """Generate a chain of "k" triangles connected at "c" corners."""

    edges: list[tuple[int, int]] = []

    for i in range(k):
        x = 3 * i + 1
        edges.extend([(x, x + 1), (x, x + 2), (x + 1, x + 2)])

    if c == 1:
        for i in range(k - 1):
            x = 3 * i + i % 3 + 1
            edges.append((x, x + 3))

    else:
        for x in range(1, 3 * k - 2):
            edges.append((x, x + 3))

    return edges


def make_hardcard(k: int) -> list[tuple[int, int]]:
    """Generate Gabow's worst case graph with size parameter "k"."""

    edges: list[tuple[int, int]] = []

    for i in range(1, 4*k):
        for j in range(i + 1, 4*k + 1):
            edges.append((i, j))
        if i % 2 == 1:
            edges.append((i, 4 * k + (i + 1) // 2))

    return edges


def main() -> int:
    """Main program."""

    parser = argparse.ArgumentParser()
    parser.description = "Generate unweighted graphs in DIMACS format."

    subparsers = parser.add_subparsers(dest="kind", required=True)

    parser_random = subparsers.add_parser("random",
                                          help="random graph")
    parser_random.add_argument("--seed",
                               action="store",
                               type=int,
                               help="random seed")
    parser_random.add_argument("--connected",
                               action="store_true",
                               help="force the graph to be connected")
    parser_random.add_argument("n",
                               action="store",
                               type=int,
                               help="number of vertices")
    parser_random.add_argument("m",
                               action="store",
                               type=int,
                               help="number of edges")

    parser_triangles = subparsers.add_parser("triangles",
                                             help="chain of triangles")
    parser_triangles.add_argument("k",
                                  action="store",
                                  type=int,
                                  help="number of triangles")
    parser_triangles.add_argument("c",
                                  action="store",
                                  type=int,
                                  choices=(1, 3),
                                  help="number of corners to connect")

    parser_hardcard = subparsers.add_parser("hardcard",
                                            help="Gabow's worst case graph")
    parser_hardcard.add_argument("k",
                                 action="store",
                                 type=int,
                                 help="size parameter; N = 6*K, M = 8*K*K")

    args = parser.parse_args()

    if args.kind == "random":

        if args.n < 2:
            print("ERROR: Number of vertices must be >= 2", file=sys.stderr)
            return 1

        if args.m < 1:
            print("ERROR: Number of edges must be >= 1", file=sys.stderr)
            return 1

        if args.m > args.n * (args.n - 1) // 2:
            print("ERROR: Too many edges", file=sys.stderr)
            return 1

        if args.connected and args.m < args.n - 1:
            print("ERROR: Connected graph needs at least N-1 edges",
                  file=sys.stderr)
            return 1

        if args.seed is None:
            rng = random.Random()
        else:
            rng = random.Random(args.seed)

        n = args.n
        edges = make_random_graph(n, args.m, args.connected, rng)

    else:

        if args.k < 1:
            print("ERROR: K must be at least 1", file=sys.stderr)
            return 1

        if args.kind == "triangles":
            n = 3 * args.k
            edges = make_triangles(args.k, args.c)
        else:
            n = 6 * args.k
            edges = make_hardcard(args.k)

    write_dimacs_graph(sys.stdout, n, edges)

    return 0


if __name__ == "__main__":
    sys.exit(main())
