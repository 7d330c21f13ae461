"""Graph primitives.

This package provides the strict simple undirected graph type
`UndirectedGraph`, built on `networkx.Graph`.
"""

from gmatch.graph.undirected_graph import (
    Edge,
    UndirectedGraph,
    Vertex,
    ensure_undirected_graph,
)

__all__ = ["Edge", "UndirectedGraph", "Vertex", "ensure_undirected_graph"]
