"""gmatch: maximum-cardinality matching for bipartite graphs.

Primary API:
    maximum_cardinality_matching() - Compute a maximum matching
    partition() - Split a connected bipartite graph into its classes (U, V)
    Matching - Symmetric pairing of integer vertex ids
    UndirectedGraph - Strict simple graph built on networkx.Graph
    MatchingConfig - Matcher settings (vertex selection, validation)

Example:
    from gmatch import UndirectedGraph, maximum_cardinality_matching

    g = UndirectedGraph.from_edges([(0, 3), (0, 4), (1, 3), (2, 4)])
    m = maximum_cardinality_matching(g)
    assert m.size == 2
"""

from __future__ import annotations

from gmatch import logging
from gmatch._version import __version__
from gmatch.algorithms import (
    BipartiteMatcher,
    NotBipartiteError,
    find_augmenting_path,
    maximum_cardinality_matching,
    partition,
)
from gmatch.config import MATCHING_CONFIG, MatchingConfig
from gmatch.graph import UndirectedGraph
from gmatch.matching import Matching, MatchingInvariantError

__all__ = [
    # Version
    "__version__",
    # Data structures
    "Matching",
    "UndirectedGraph",
    # Algorithms
    "maximum_cardinality_matching",
    "find_augmenting_path",
    "partition",
    "BipartiteMatcher",
    # Configuration
    "MatchingConfig",
    "MATCHING_CONFIG",
    # Errors
    "NotBipartiteError",
    "MatchingInvariantError",
    # Utilities
    "logging",
]
