"""
pixiewalk.core.connection — DuckDB connection used to stage tagging data.
"""
from __future__ import annotations
import duckdb
from pathlib import Path
from typing import Any, Iterator, Optional, Tuple, Union
import pyarrow as pa


class DuckDBConnection:
    """DuckDB staging area for tagging data before it is turned into a graph."""
    def __init__(
        self,
        database: Union[str, Path] = ":memory:",
        memory_limit: Optional[str] = None,
        threads: Optional[int] = None,
    ):
        self._database = str(database)
        self.conn = duckdb.connect(self._database)

        if memory_limit:
            self.conn.execute(f"SET memory_limit='{memory_limit}'")
        if threads:
            self.conn.execute(f"SET threads={threads}")

    def execute(self, query: str, params: Optional[Union[list, dict]] = None) -> duckdb.DuckDBPyConnection:
        return self.conn.execute(query, params)

    def query(self, query: str, params: Optional[Union[list, dict]] = None) -> pa.Table:
        table = self.execute(query, params).arrow()
        # Newer duckdb returns a RecordBatchReader here
        if hasattr(table, "read_all"):
            return table.read_all()
        return table

    def table_exists(self, table_name: str) -> bool:
        row = self.conn.execute(
            "SELECT COUNT(*) FROM duckdb_tables() WHERE table_name = ?", [table_name]
        ).fetchone()
        if row[0]:
            return True
        row = self.conn.execute(
            "SELECT COUNT(*) FROM duckdb_views() WHERE view_name = ?", [table_name]
        ).fetchone()
        return bool(row[0])

    def iter_pairs(self, query: str, batch_size: int = 10_000) -> Iterator[Tuple[Any, Any]]:
        """Yield two-column rows of ``query`` without materializing the whole result."""
        cur = self.conn.execute(query)
        while True:
            rows = cur.fetchmany(batch_size)
            if not rows: break
            for a, b in rows:
                yield a, b

    def register(self, name: str, df: Any):
        self.conn.register(name, df)

    def unregister(self, name: str):
        self.conn.unregister(name)

    def close(self):
        self.conn.close()

    def __enter__(self):
        return self

    def __exit__(self, *_):
        self.close()

    def __repr__(self) -> str:
        return f"DuckDBConnection(database={self._database!r})"
