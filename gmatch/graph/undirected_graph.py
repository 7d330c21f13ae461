"""Strict simple undirected graph over integer vertex ids.

`UndirectedGraph` extends `networkx.Graph` to enforce explicit vertex
management and predictable error handling, and exposes the small traversal
surface the matching algorithms rely on: adjacency enumeration, a
connectivity check, and a breadth-first sequence of examined edges.
"""

from __future__ import annotations

from pickle import dumps, loads
from typing import Any, Iterable, Iterator, List, Optional, Tuple

import networkx as nx

Vertex = int
Edge = Tuple[Vertex, Vertex]


def ensure_undirected_graph(graph: nx.Graph) -> UndirectedGraph:
    """Return ``graph`` itself if already strict, otherwise a strict copy."""
    if isinstance(graph, UndirectedGraph):
        return graph
    return UndirectedGraph.from_networkx(graph)


class UndirectedGraph(nx.Graph):
    """A simple undirected graph with strict rules.

    This class enforces:
      - Vertex ids are non-negative integers.
      - No automatic creation of missing vertices when adding an edge.
      - No duplicate vertices or edges (raises ValueError on duplicates).
      - No self-loops.
      - Removing non-existent vertices or edges raises ValueError.

    Inherits from:
        networkx.Graph
    """

    @classmethod
    def from_edges(
        cls, edges: Iterable[Edge], num_vertexes: Optional[int] = None
    ) -> UndirectedGraph:
        """Build a graph from an edge list.

        Vertices are ``0 .. num_vertexes - 1``. When ``num_vertexes`` is not
        given, only the vertices that appear in some edge are created.

        Args:
            edges: Iterable of ``(i, j)`` pairs.
            num_vertexes: Optional vertex count, to include isolated vertices.

        Returns:
            UndirectedGraph: The new graph.
        """
        edges = list(edges)
        g = cls()
        if num_vertexes is not None:
            vertexes = set(range(num_vertexes))
        else:
            vertexes = {v for edge in edges for v in edge}
        for v in sorted(vertexes):
            g.add_node(v)
        for i, j in edges:
            g.add_edge(i, j)
        return g

    @classmethod
    def from_networkx(cls, graph: nx.Graph) -> UndirectedGraph:
        """Copy a networkx graph with integer node ids into a strict graph.

        Args:
            graph: An undirected networkx graph.

        Returns:
            UndirectedGraph: A strict copy (attributes are not carried over).

        Raises:
            ValueError: If the graph is directed or a multigraph, or violates
                the strict rules (self-loops, non-integer vertices).
        """
        if graph.is_directed():
            raise ValueError("Directed graphs are not supported.")
        if graph.is_multigraph():
            raise ValueError("Multigraphs are not supported.")
        g = cls()
        for v in graph.nodes:
            g.add_node(v)
        for i, j in graph.edges:
            g.add_edge(i, j)
        return g

    def copy(self, as_view: bool = False, pickle: bool = True) -> UndirectedGraph:
        """Create a copy of this graph.

        By default, use pickle-based deep copying. If ``pickle=False``,
        call the parent class's copy, which supports views.
        """
        if not pickle:
            return super().copy(as_view=as_view)  # type: ignore[return-value]
        return loads(dumps(self))

    #
    # Vertex management
    #
    def add_node(self, node_for_adding: Vertex, **attr: Any) -> None:
        """Add a single vertex, disallowing duplicates.

        Raises:
            ValueError: If the id is not a non-negative integer or already exists.
        """
        if (
            not isinstance(node_for_adding, int)
            or isinstance(node_for_adding, bool)
            or node_for_adding < 0
        ):
            raise ValueError(
                f"Vertex id must be a non-negative integer, got {node_for_adding!r}."
            )
        if node_for_adding in self:
            raise ValueError(f"Vertex '{node_for_adding}' already exists in this graph.")
        super().add_node(node_for_adding, **attr)

    def remove_node(self, n: Vertex) -> None:
        """Remove a vertex and all incident edges.

        Raises:
            ValueError: If the vertex does not exist.
        """
        if n not in self:
            raise ValueError(f"Vertex '{n}' does not exist.")
        super().remove_node(n)

    #
    # Edge management
    #
    def add_edge(self, u_of_edge: Vertex, v_of_edge: Vertex, **attr: Any) -> None:
        """Add an undirected edge between two existing vertices.

        Raises:
            ValueError: If either vertex is missing, the edge is a self-loop,
                or the edge already exists.
        """
        if u_of_edge not in self:
            raise ValueError(f"Vertex '{u_of_edge}' does not exist.")
        if v_of_edge not in self:
            raise ValueError(f"Vertex '{v_of_edge}' does not exist.")
        if u_of_edge == v_of_edge:
            raise ValueError(f"Self-loop on vertex '{u_of_edge}' is not allowed.")
        if self.has_edge(u_of_edge, v_of_edge):
            raise ValueError(f"Edge ({u_of_edge}, {v_of_edge}) already exists.")
        super().add_edge(u_of_edge, v_of_edge, **attr)

    def remove_edge(self, u: Vertex, v: Vertex) -> None:
        """Remove the edge between ``u`` and ``v``.

        Raises:
            ValueError: If the edge does not exist.
        """
        if not self.has_edge(u, v):
            raise ValueError(f"No edge ({u}, {v}) to remove.")
        super().remove_edge(u, v)

    #
    # Traversal surface used by the matching algorithms
    #
    def is_empty(self) -> bool:
        return self.number_of_nodes() == 0

    def vertexes(self) -> List[Vertex]:
        """Return vertex ids in ascending order."""
        return sorted(self.nodes)

    def adjacent_vertices(self, v: Vertex) -> List[Vertex]:
        """Return the neighbours of ``v`` in ascending order."""
        return sorted(self.adj[v])

    def is_connected(self) -> bool:
        """Return True if every vertex is reachable from every other.

        The empty graph is treated as connected.
        """
        if self.is_empty():
            return True
        return nx.is_connected(self)

    def bfs_edges(self, source: Vertex) -> Iterator[Edge]:
        """Yield every edge examined by a breadth-first traversal.

        Unlike a BFS tree, this includes non-tree edges, each reported once
        as ``(from, to)`` where ``from`` is the vertex being expanded.

        Args:
            source: Vertex to start the traversal from.

        Returns:
            Iterator[Edge]: Lazy, one-shot sequence of examined edges.
        """
        for edge in nx.edge_bfs(self, source):
            yield edge[0], edge[1]

    #
    # Matching
    #
    def partition(self) -> Tuple[set, set]:
        """Return the bipartition (U, V); see `gmatch.algorithms.partition`."""
        # Import here to avoid circular import
        from gmatch.algorithms.partition import partition

        return partition(self)

    def maximum_cardinality_matching(self, config=None):
        """Return a maximum matching; see `gmatch.algorithms.bipartite`."""
        from gmatch.algorithms.bipartite import maximum_cardinality_matching

        return maximum_cardinality_matching(self, config=config)
