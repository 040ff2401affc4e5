"""
pixiewalk.api — The PixieWalk engine facade.

Stages tagging data in DuckDB, mirrors it as an object/tag graph and returns
random-walk recommendations as Arrow tables.
"""
from __future__ import annotations
from pathlib import Path
from typing import Any, Callable, List, Optional, Union
import pyarrow as pa
from pixiewalk.core.connection import DuckDBConnection
from pixiewalk.core.ingestion import build_recommender, load_taggings, load_tag_matrix
from pixiewalk.nodes import Object, Tag, node_kind, node_label
from pixiewalk.recommenders.pixie import Recommender, check_walk_params

KINDS = ("object", "tag", "all")

RESULT_SCHEMA = pa.schema([
    ("node", pa.string()), ("kind", pa.string()), ("score", pa.int64()), ("rank", pa.int32()),
])


class PixieWalk:
    """Unified engine: stage tagging data, build the object/tag graph, rank by random walks."""

    def __init__(
        self,
        database: Union[str, Path] = ":memory:",
        memory_limit: Optional[str] = None,
        threads: Optional[int] = None,
        seed: Optional[int] = None,
        depth: int = 10,
        max_total_steps: int = 1000,
    ) -> None:
        check_walk_params(depth, max_total_steps)
        self.conn = DuckDBConnection(database=database, memory_limit=memory_limit, threads=threads)
        self.table_name = "taggings"
        self.seed = seed
        self.recommender = Recommender(seed=seed)
        self.depth, self.max_total_steps = depth, max_total_steps

    def load(self, data: Any, **kwargs) -> PixieWalk:
        self.load_taggings(data, **kwargs)
        return self

    def _sync_graph(self, append: bool):
        # Without append the table was replaced, and so is the graph; manual
        # registrations made before the load are dropped with it.
        if not append:
            self.recommender = Recommender(seed=self.seed)
        build_recommender(self.conn, self.recommender, table_name=self.table_name)

    def load_taggings(self, source: Any, object_col: str = "object_id", tag_col: str = "tag", append: bool = False) -> int:
        count = load_taggings(self.conn, source, object_col=object_col, tag_col=tag_col, table_name=self.table_name, append=append)
        self._sync_graph(append)
        return count

    def load_tag_matrix(self, df: Any, append: bool = False) -> int:
        count = load_tag_matrix(self.conn, df, append=append, table_name=self.table_name)
        self._sync_graph(append)
        return count

    def add_object(self, value: Any) -> PixieWalk:
        self.recommender.add_object(value)
        return self

    def add_tag(self, label: str) -> PixieWalk:
        self.recommender.add_tag(label)
        return self

    def tag_object(self, value: Any, label: str) -> PixieWalk:
        self.recommender.tag_object(value, label)
        return self

    def recommend(
        self,
        seed_items: Optional[List[Any]] = None,
        seed_tags: Optional[List[str]] = None,
        n: int = 10,
        kind: str = "object",
        depth: Optional[int] = None,
        max_total_steps: Optional[int] = None,
        object_to_tag_weight: Optional[Callable[[Any, str], float]] = None,
        tag_to_object_weight: Optional[Callable[[str, Any], float]] = None,
    ) -> pa.Table:
        if kind not in KINDS: raise ValueError(f"kind must be one of {KINDS}")
        queries = [Object(v) for v in seed_items or []] + [Tag(str(t)) for t in seed_tags or []]
        if not queries:
            return pa.Table.from_pylist([], schema=RESULT_SCHEMA)

        weights = {}
        if object_to_tag_weight is not None: weights["object_to_tag_weight"] = object_to_tag_weight
        if tag_to_object_weight is not None: weights["tag_to_object_weight"] = tag_to_object_weight
        scored = self.recommender.scored_recommendations(
            queries,
            self.depth if depth is None else depth,
            self.max_total_steps if max_total_steps is None else max_total_steps,
            **weights,
        )

        rows = []
        for node, score in scored:
            if len(rows) >= n: break
            if kind != "all" and node_kind(node) != kind: continue
            rows.append({"node": node_label(node), "kind": node_kind(node), "score": score, "rank": len(rows) + 1})
        return pa.Table.from_pylist(rows, schema=RESULT_SCHEMA)

    def sql(self, query: str) -> pa.Table: return self.conn.query(query)
    def close(self): self.conn.close()
    def __enter__(self): return self
    def __exit__(self, *_): self.close()
    def __repr__(self) -> str: return f"PixieWalk(database={self.conn._database!r}, graph={self.recommender.graph!r})"
