"""Matching algorithms: bipartition and augmenting-path search."""

from gmatch.algorithms.bipartite import (
    BipartiteMatcher,
    LabelState,
    find_augmenting_path,
    maximum_cardinality_matching,
)
from gmatch.algorithms.partition import NotBipartiteError, partition

__all__ = [
    "BipartiteMatcher",
    "LabelState",
    "NotBipartiteError",
    "find_augmenting_path",
    "maximum_cardinality_matching",
    "partition",
]
