"""
pixiewalk.recommenders.pixie — Random-walk recommendations over objects and tags.

Budgets walks across seed nodes by degree, tallies visits per seed and
merges the tallies into a single ranking.
"""
from __future__ import annotations
import logging
import math
import numbers
from collections import Counter
from typing import Any, Callable, Dict, Hashable, List, Optional, Sequence, Tuple
import numpy as np
from pixiewalk.core.graph import Graph
from pixiewalk.nodes import Object, RecommenderNode, Tag, node_key

logger = logging.getLogger(__name__)

ObjectToTagWeight = Callable[[Any, str], float]
TagToObjectWeight = Callable[[str, Any], float]


def _constant_weight(*_) -> float:
    return 1.0


def check_walk_params(depth: int, max_total_steps: int):
    for name, value in (("depth", depth), ("max_total_steps", max_total_steps)):
        if isinstance(value, bool) or not isinstance(value, numbers.Integral):
            raise ValueError(f"{name} must be an integer, got {value!r}")
        if value < 0: raise ValueError(f"{name} must be non-negative")


class Recommender:
    """
    Pixie-style recommender over a graph of objects and tags.

    Objects are linked to tags with ``tag_object``. Queries issue many short
    biased random walks from the seed nodes and rank every other node by how
    often the walks visit it.
    """

    def __init__(self, seed: Optional[int] = None):
        self._graph = Graph()
        self.rng = np.random.default_rng(seed)

    @property
    def graph(self) -> Graph:
        return self._graph

    def add_object(self, value: Hashable) -> None:
        self._graph.add_node(Object(value))

    def add_tag(self, label: str) -> None:
        self._graph.add_node(Tag(str(label)))

    def tag_object(self, value: Hashable, label: str) -> None:
        self._graph.add_edge(Object(value), Tag(str(label)))

    def objects(self) -> List[Any]:
        return [n.value for n in self._graph.nodes() if isinstance(n, Object)]

    def tags(self) -> List[str]:
        return [n.label for n in self._graph.nodes() if isinstance(n, Tag)]

    def tags_of(self, value: Hashable) -> List[str]:
        return sorted(n.label for n in self._graph.successors(Object(value)) if isinstance(n, Tag))

    def objects_tagged(self, label: str) -> List[Any]:
        nodes = [n for n in self._graph.successors(Tag(str(label))) if isinstance(n, Object)]
        return [n.value for n in sorted(nodes, key=node_key)]

    def _scaling_factor(self, query: RecommenderNode) -> float:
        degree = self._graph.degree(query)
        if degree == 0:
            return 0.0
        return degree * (self._graph.max_degree() - math.log2(degree))

    def step_budgets(self, queries: Sequence[RecommenderNode], max_total_steps: int) -> List[int]:
        """Split ``max_total_steps`` across seeds in proportion to their scaling factor."""
        factors = [self._scaling_factor(q) for q in queries]
        total = sum(factors)
        if total <= 0:
            return [0] * len(queries)
        return [int(max_total_steps * s / total) for s in factors]

    def recommendations_map(
        self,
        query: RecommenderNode,
        depth: int,
        max_steps: int,
        weight_fn: Callable[[RecommenderNode, RecommenderNode], float],
    ) -> Counter:
        """Visit counts from repeated walks out of ``query`` until ``max_steps`` visits are tallied."""
        counts: Counter = Counter()
        steps = 0
        while steps < max_steps:
            walk = self._graph.random_walk(query, depth, weight_fn, self.rng)
            if not walk:
                logger.debug("Walk from %r came back empty after %d steps", query, steps)
                break
            counts.update(walk)
            steps += len(walk)
        return counts

    @staticmethod
    def _dispatch_weight(object_to_tag_weight: ObjectToTagWeight, tag_to_object_weight: TagToObjectWeight):
        def weight(src: RecommenderNode, dst: RecommenderNode) -> float:
            if isinstance(src, Object) and isinstance(dst, Tag):
                return object_to_tag_weight(src.value, dst.label)
            if isinstance(src, Tag) and isinstance(dst, Object):
                return tag_to_object_weight(src.label, dst.value)
            return 0.0
        return weight

    def scored_recommendations(
        self,
        queries: Sequence[RecommenderNode],
        depth: int,
        max_total_steps: int,
        object_to_tag_weight: ObjectToTagWeight = _constant_weight,
        tag_to_object_weight: TagToObjectWeight = _constant_weight,
    ) -> List[Tuple[RecommenderNode, int]]:
        """
        Rank nodes related to ``queries`` and return ``(node, score)`` pairs, best first.

        Each seed gets a share of ``max_total_steps`` proportional to
        ``degree * (max_degree - log2(degree))``; seeds with no edges get
        nothing. Per-seed visit counts are combined as the square of the sum
        of their square roots, so nodes reached from several seeds are
        favoured over nodes one seed hammers on. Query nodes never appear in
        the result; ties are broken by ``node_key``.
        """
        check_walk_params(depth, max_total_steps)
        queries = list(queries)
        if not queries:
            return []

        weight_fn = self._dispatch_weight(object_to_tag_weight, tag_to_object_weight)
        budgets = self.step_budgets(queries, max_total_steps)

        combined: Dict[RecommenderNode, float] = {}
        for query, budget in zip(queries, budgets):
            logger.debug("Seed %r: degree=%d budget=%d", query, self._graph.degree(query), budget)
            for node, count in self.recommendations_map(query, depth, budget, weight_fn).items():
                combined[node] = combined.get(node, 0.0) + math.sqrt(count)

        excluded = set(queries)
        scored = [(node, int(total * total)) for node, total in combined.items() if node not in excluded]
        scored.sort(key=lambda item: (-item[1], node_key(item[0])))
        return scored

    def recommendations(
        self,
        queries: Sequence[RecommenderNode],
        depth: int,
        max_total_steps: int,
        object_to_tag_weight: ObjectToTagWeight = _constant_weight,
        tag_to_object_weight: TagToObjectWeight = _constant_weight,
    ) -> List[RecommenderNode]:
        """
        Ordered recommendations (best first) for a mix of ``Tag`` and ``Object`` seeds.

        The result holds both tags and objects; filter it to what you need or
        use ``object_recommendations``.
        """
        scored = self.scored_recommendations(
            queries, depth, max_total_steps, object_to_tag_weight, tag_to_object_weight
        )
        return [node for node, _ in scored]

    def object_recommendations(
        self,
        values: Sequence[Hashable],
        depth: int,
        max_total_steps: int,
        object_to_tag_weight: ObjectToTagWeight = _constant_weight,
        tag_to_object_weight: TagToObjectWeight = _constant_weight,
    ) -> List[Any]:
        nodes = self.recommendations(
            [Object(v) for v in values], depth, max_total_steps, object_to_tag_weight, tag_to_object_weight
        )
        return [n.value for n in nodes if isinstance(n, Object)]

    def simple_recommendations(self, query: RecommenderNode, max_total_steps: int, depth: int = 10) -> List[RecommenderNode]:
        return self.recommendations([query], depth, max_total_steps)

    def __repr__(self) -> str:
        return f"Recommender({self._graph!r})"
