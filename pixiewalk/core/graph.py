"""
pixiewalk.core.graph — Undirected graph with a weighted random walk.
"""
from __future__ import annotations
from typing import Any, Callable, Dict, Hashable, List, Optional, Set
import numpy as np
from pixiewalk.core.sampling import weighted_sample

WeightFn = Callable[[Any, Any], float]


class Graph:
    """
    Undirected graph over hashable nodes.

    Adjacency is kept symmetric: linking ``a`` to ``b`` also links ``b`` to
    ``a``. Neighbors are stored in insertion order, which fixes the order in
    which the sampler enumerates candidates. ``max_degree`` is a running
    maximum and never decreases (there is no removal).
    """

    def __init__(self):
        self._adj: Dict[Hashable, Dict[Hashable, None]] = {}
        self._max_degree = 0

    def add_node(self, node: Hashable) -> None:
        self._adj.setdefault(node, {})

    def add_edge(self, a: Hashable, b: Hashable) -> None:
        self._adj.setdefault(a, {})[b] = None
        self._adj.setdefault(b, {})[a] = None
        self._max_degree = max(self._max_degree, len(self._adj[a]), len(self._adj[b]))

    def successors(self, node: Hashable) -> Set[Hashable]:
        return set(self._adj.get(node, ()))

    def degree(self, node: Hashable) -> int:
        return len(self._adj.get(node, ()))

    def max_degree(self) -> int:
        return self._max_degree

    def nodes(self) -> List[Hashable]:
        return list(self._adj)

    def num_edges(self) -> int:
        # Self-edges appear once in their own adjacency, every other edge twice.
        loops = sum(1 for n, nbrs in self._adj.items() if n in nbrs)
        return (sum(len(nbrs) for nbrs in self._adj.values()) - loops) // 2 + loops

    def random_walk(
        self,
        start: Hashable,
        max_hops: int,
        weight_fn: WeightFn,
        rng: Optional[np.random.Generator] = None,
    ) -> List[Hashable]:
        """
        Biased random walk of at most ``max_hops`` visits from ``start``.

        The next node is drawn among the current node's neighbors with
        probability proportional to ``weight_fn(current, neighbor)``. The walk
        stops early at a dead end (no neighbor with positive weight). Nodes are
        returned in visit order, ``start`` first; an unknown ``start`` gives an
        empty walk.
        """
        if start not in self._adj:
            return []
        if rng is None:
            rng = np.random.default_rng()

        visited: List[Hashable] = []
        current = start
        for _ in range(max_hops):
            visited.append(current)
            candidates = list(self._adj[current])
            nxt = weighted_sample(candidates, lambda c: weight_fn(current, c), rng)
            if nxt is None:
                break
            current = nxt
        return visited

    def __contains__(self, node: Hashable) -> bool:
        return node in self._adj

    def __len__(self) -> int:
        return len(self._adj)

    def __repr__(self) -> str:
        return f"Graph(nodes={len(self._adj)}, edges={self.num_edges()}, max_degree={self._max_degree})"
