"""Bipartition of a connected graph by 2-coloring during breadth-first search."""

from __future__ import annotations

from typing import Set, Tuple

import networkx as nx

from gmatch.graph.undirected_graph import Vertex, ensure_undirected_graph
from gmatch.logging import get_logger

logger = get_logger(__name__)


class NotBipartiteError(ValueError):
    """Raised when a graph cannot be split into two classes U and V.

    Signalled for graphs with an odd cycle and, as a documented limitation,
    for disconnected graphs.
    """


def partition(graph: nx.Graph) -> Tuple[Set[Vertex], Set[Vertex]]:
    """Split the vertices of a connected graph into two disjoint classes.

    A breadth-first traversal starts at the smallest vertex id. Every
    examined edge ``(from, to)`` puts ``to`` in the class opposite to
    ``from``; the first edge seeds ``from`` into U and ``to`` into V.

    Disconnected graphs are rejected even when each component is bipartite.

    Args:
        graph: A simple undirected graph with integer vertex ids. Plain
            networkx graphs are copied into an `UndirectedGraph` first.

    Returns:
        Tuple[Set[Vertex], Set[Vertex]]: The classes (U, V). Both are empty for
        an empty graph. A graph made of a single vertex yields ``({v}, set())``.

    Raises:
        NotBipartiteError: If the graph is disconnected or has an odd cycle.
    """
    graph = ensure_undirected_graph(graph)
    u: Set[Vertex] = set()
    v: Set[Vertex] = set()
    if graph.is_empty():
        return u, v
    if not graph.is_connected():
        raise NotBipartiteError("Graph is not connected.")

    start = min(graph.nodes)
    for from_vertex, to_vertex in graph.bfs_edges(start):
        _examine_edge(from_vertex, to_vertex, u, v)

    if not u and not v:
        u.add(start)

    # Sanity check
    if not u.isdisjoint(v):
        raise RuntimeError(f"Expected sets to be disjoint: {sorted(u & v)}")

    logger.debug("partitions: %s %s", sorted(u), sorted(v))
    return u, v


def _examine_edge(
    from_vertex: Vertex, to_vertex: Vertex, u: Set[Vertex], v: Set[Vertex]
) -> None:
    if from_vertex in u:
        _add_to_set(v, to_vertex, fail_if_in=u)
    elif from_vertex in v:
        _add_to_set(u, to_vertex, fail_if_in=v)
    else:
        u.add(from_vertex)
        v.add(to_vertex)


def _add_to_set(target: Set[Vertex], vertex: Vertex, fail_if_in: Set[Vertex]) -> None:
    if vertex in fail_if_in:
        raise NotBipartiteError(f"Odd cycle through vertex {vertex}.")
    target.add(vertex)
