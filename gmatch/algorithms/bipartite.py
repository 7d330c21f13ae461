"""Maximum-cardinality matching in bipartite graphs via augmenting paths.

Each stage grows an alternating forest rooted at the unmatched vertices of U.
Vertices of U reached by the forest carry an R-label, vertices of V carry a
T-label, and every labeled vertex remembers the vertex that labeled it. When
the forest reaches an unmatched vertex of V, the predecessor chain back to the
root is an augmenting path and the matching grows by one edge. A stage that
exhausts the forest without reaching one proves the matching is maximum
(Berge's theorem), so at most ``min(|U|, |V|) + 1`` stages run.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional, Set

import networkx as nx

from gmatch.algorithms.partition import partition
from gmatch.config import MATCHING_CONFIG, MatchingConfig
from gmatch.graph.undirected_graph import (
    UndirectedGraph,
    Vertex,
    ensure_undirected_graph,
)
from gmatch.logging import get_logger
from gmatch.matching import Matching

logger = get_logger(__name__)

# Picks the next unmarked R-labeled vertex to expand
VertexSelector = Callable[[Set[Vertex]], Vertex]


@dataclass
class LabelState:
    """Labels, marks and predecessors of one stage's alternating forest."""

    label_r: Set[Vertex] = field(default_factory=set)
    label_t: Set[Vertex] = field(default_factory=set)
    mark_r: Set[Vertex] = field(default_factory=set)
    predecessors: Dict[Vertex, Vertex] = field(default_factory=dict)

    def unmarked_r(self) -> Set[Vertex]:
        return self.label_r - self.mark_r

    def backtrack_from(self, end_vertex: Vertex) -> List[Vertex]:
        """Follow predecessors from ``end_vertex`` up to the root of its tree."""
        path = [end_vertex]
        while path[-1] in self.predecessors:
            path.append(self.predecessors[path[-1]])
        logger.debug("    augmenting path: %s", path)
        return path


def make_selector(config: MatchingConfig) -> VertexSelector:
    """Return the vertex selection strategy described by ``config``."""
    if config.selection == "random":
        rng = config.make_rng()
        return lambda candidates: rng.choice(sorted(candidates))
    return min


def find_augmenting_path(
    graph: UndirectedGraph,
    u: Iterable[Vertex],
    matching: Matching,
    select: VertexSelector = min,
) -> Optional[List[Vertex]]:
    """Search for one augmenting path with respect to ``matching``.

    Args:
        graph: Bipartite graph.
        u: The U class of the graph's partition.
        matching: Current matching; not modified.
        select: Chooses which unmarked R-labeled vertex to expand next.

    Returns:
        Optional[List[Vertex]]: The path, starting at an unmatched vertex of V
        and ending at an unmatched root in U, or None if no augmenting path
        exists (the matching is maximum).
    """
    state = LabelState()

    # Unmatched vertexes of U are the roots of the alternating forest
    for ui in u:
        if matching[ui] is None:
            state.label_r.add(ui)
    logger.debug("label r: %s", sorted(state.label_r))

    augmenting_path: Optional[List[Vertex]] = None
    unmarked_r = state.unmarked_r()
    while augmenting_path is None and unmarked_r:
        start = select(unmarked_r)
        state.mark_r.add(start)
        logger.debug("r-mark: %s", start)

        for vi in _unmatched_unlabeled_adjacent_to(graph, start, matching, state):
            logger.debug("  t-label: %s", vi)
            state.label_t.add(vi)
            state.predecessors[vi] = start

            adjacent_to_vi = [x for x in graph.adjacent_vertices(vi) if x != start]
            if not adjacent_to_vi:
                # A leaf reached by an unmatched edge is itself unmatched
                logger.debug("  %s has no other adjacent vertexes", vi)
                augmenting_path = state.backtrack_from(vi)
            else:
                matched_edge_found = False
                for ui in adjacent_to_vi:
                    if matching.is_matched((ui, vi)):
                        logger.debug("    r-label: %s", ui)
                        state.label_r.add(ui)
                        state.predecessors[ui] = vi
                        matched_edge_found = True

                if not matched_edge_found:
                    logger.debug("    found augmenting path. backtracking ..")
                    augmenting_path = state.backtrack_from(vi)

            if augmenting_path is not None:
                break

        unmarked_r = state.unmarked_r()

    return augmenting_path


def _unmatched_unlabeled_adjacent_to(
    graph: UndirectedGraph, vertex: Vertex, matching: Matching, state: LabelState
) -> List[Vertex]:
    return [
        a
        for a in graph.adjacent_vertices(vertex)
        if not matching.is_matched((vertex, a)) and a not in state.label_t
    ]


class BipartiteMatcher:
    """Runs augmenting-path stages on a bipartite graph until none remains.

    Attributes:
        graph: The strict graph the matcher works on.
        config: Selection and validation settings.
    """

    def __init__(
        self, graph: nx.Graph, config: Optional[MatchingConfig] = None
    ) -> None:
        self.graph = ensure_undirected_graph(graph)
        self.config = config if config is not None else MATCHING_CONFIG
        self._select = make_selector(self.config)

    def run(self) -> Matching:
        """Compute a maximum-cardinality matching.

        Raises:
            NotBipartiteError: If the graph is disconnected or has an odd cycle.
            MatchingInvariantError: If the result fails the validity check.
        """
        m = Matching()
        u, _v = partition(self.graph)

        stage = 0
        while True:
            stage += 1
            logger.debug("begin stage %d: %r", stage, m)
            augmenting_path = find_augmenting_path(
                self.graph, sorted(u), m, select=self._select
            )
            if augmenting_path is None:
                logger.debug("Unable to find an augmenting path. We're done!")
                break
            m.augment(augmenting_path)

        if self.config.validate_result:
            m.assert_valid()

        logger.debug("matching of size %d found in %d stages", m.size, stage)
        return m


def maximum_cardinality_matching(
    graph: nx.Graph, config: Optional[MatchingConfig] = None
) -> Matching:
    """Return a maximum-cardinality matching of a connected bipartite graph.

    Uses the augmenting path algorithm. With the default ``"lowest"``
    selection the resulting edge set is reproducible; otherwise only its size
    is guaranteed.

    Args:
        graph: Connected bipartite graph with integer vertex ids.
        config: Optional matcher configuration (defaults to ``MATCHING_CONFIG``).

    Returns:
        Matching: A matching of maximum cardinality.

    Raises:
        NotBipartiteError: If the graph is disconnected or has an odd cycle.
    """
    return BipartiteMatcher(graph, config=config).run()
