"""Matching: a symmetric pairing of integer vertex identifiers.

`Matching` stores, for every matched vertex, the vertex it is paired with. The
mapping is kept symmetric by construction: ``add((i, j))`` records both
``i -> j`` and ``j -> i``. It carries no knowledge of the graph it was computed
on; the matcher in `gmatch.algorithms.bipartite` is the only code that needs
both.
"""

from __future__ import annotations

from collections import Counter
from typing import Dict, Iterator, List, Optional, Sequence, Set, Tuple

Vertex = int
Edge = Tuple[Vertex, Vertex]


class MatchingInvariantError(RuntimeError):
    """Raised when a matching is found to be asymmetric or double-matched."""


class Matching:
    """A set of vertex-disjoint edges over integer vertex ids.

    ``add`` and ``delete`` never validate their input: adding an edge whose
    endpoints are already matched elsewhere silently overwrites their partners.
    Callers that need the invariants checked use ``assert_valid()``.
    """

    def __init__(self) -> None:
        self._mate: Dict[Vertex, Vertex] = {}

    @classmethod
    def from_edges(cls, *edges: Edge) -> Matching:
        """Build a matching containing the given edges."""
        m = cls()
        for edge in edges:
            m.add(edge)
        return m

    @classmethod
    def from_mate_array(cls, mate: Sequence[Optional[Vertex]]) -> Matching:
        """Build a matching from a mate array.

        The array holds one slot per vertex with the id of the paired vertex,
        or ``None`` (or a negative value such as ``-1``) when unmatched. Each
        pair is added once, from its lower-indexed slot; slots whose partner
        does not point back are ignored.

        Args:
            mate: Sequence indexed by vertex id.

        Returns:
            Matching: A new matching with every mutually-paired slot.
        """
        m = cls()
        for ix, n1 in enumerate(mate):
            if n1 is None or n1 < 0 or n1 <= ix or n1 >= len(mate):
                continue
            if mate[n1] == ix:
                m.add((ix, n1))
        return m

    def __getitem__(self, v: Vertex) -> Optional[Vertex]:
        """Return the partner of ``v`` or None if ``v`` is unmatched."""
        return self._mate.get(v)

    def __len__(self) -> int:
        return self.size

    def __bool__(self) -> bool:
        return bool(self._mate)

    def __iter__(self) -> Iterator[Edge]:
        return iter(self.to_list())

    def __contains__(self, edge: object) -> bool:
        if not isinstance(edge, tuple) or len(edge) != 2:
            return False
        return self.has_edge(edge)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matching):
            return NotImplemented
        return self._mate == other._mate

    def __repr__(self) -> str:
        return f"Matching({self.to_list()!r})"

    #
    # Mutation
    #
    def add(self, edge: Edge) -> None:
        """Pair both endpoints of ``edge`` with each other."""
        i, j = edge
        self._mate[i] = j
        self._mate[j] = i

    def delete(self, edge: Edge) -> None:
        """Mark both endpoints of ``edge`` as unmatched."""
        i, j = edge
        self._mate.pop(i, None)
        self._mate.pop(j, None)

    def augment(self, path: Sequence[Vertex]) -> None:
        """Apply an augmenting path, growing the matching by one edge.

        The path alternates unmatched and matched edges and starts and ends at
        unmatched vertices, so it has an odd number of edges. Edges at even
        positions (counting from 0) join the matching, the ones between them
        leave it. Matched edges are removed before the new ones are added so
        that overwrites cannot clear a freshly added partner.

        Args:
            path: Vertex sequence of the augmenting path.

        Raises:
            ValueError: If the path does not have an odd number of edges.
        """
        edges = list(zip(path, path[1:]))
        if len(edges) % 2 == 0:
            raise ValueError(
                f"Augmenting path must have an odd number of edges, got {len(edges)}."
            )
        for edge in edges[1::2]:
            self.delete(edge)
        for edge in edges[0::2]:
            self.add(edge)

    #
    # Queries
    #
    def is_matched(self, edge: Edge) -> bool:
        """Return True if the first endpoint's partner is the second endpoint."""
        i, j = edge
        return self._mate.get(i) == j

    def has_edge(self, edge: Edge) -> bool:
        """Return True if ``edge`` is in the matching in both directions."""
        i, j = edge
        return self._mate.get(i) == j and self._mate.get(j) == i

    def has_vertex(self, v: Vertex) -> bool:
        """Return True if ``v`` is the partner of some vertex."""
        return v in self._mate.values()

    def is_empty(self) -> bool:
        return not self._mate

    @property
    def size(self) -> int:
        """Number of matched pairs."""
        return len(self._mate) // 2

    def to_list(self) -> List[Edge]:
        """Return matched edges, each exactly once, ordered by first endpoint.

        Returns:
            List[Edge]: ``(i, partner)`` for the lower-ordered endpoint ``i``.
        """
        result: List[Edge] = []
        seen: Set[Vertex] = set()
        for i in sorted(self._mate):
            if i in seen:
                continue
            j = self._mate[i]
            result.append((i, j))
            seen.add(j)
        return result

    def vertexes(self) -> Set[Vertex]:
        """Return the set of matched vertex ids."""
        return set(self._mate.values())

    def to_mate_array(self, n: int) -> List[Optional[Vertex]]:
        """Return a mate array of length ``n`` (``None`` for unmatched slots)."""
        return [self._mate.get(v) for v in range(n)]

    def assert_valid(self) -> None:
        """Check that the matching is symmetric and no vertex is paired twice.

        Raises:
            MatchingInvariantError: If either invariant is violated.
        """
        counts = Counter(self._mate.values())
        doubled = sorted(v for v, count in counts.items() if count > 1)
        if doubled:
            raise MatchingInvariantError(
                f"Vertexes matched more than once: {doubled}"
            )
        for i, j in self._mate.items():
            if i == j:
                raise MatchingInvariantError(f"Vertex {i} is matched to itself.")
            if self._mate.get(j) != i:
                raise MatchingInvariantError(
                    f"Asymmetric matching: {i} -> {j} but {j} -> {self._mate.get(j)}"
                )
