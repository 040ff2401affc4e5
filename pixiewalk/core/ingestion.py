"""
pixiewalk.core.ingestion — Tagging ingestion and graph building.
"""
from __future__ import annotations
import logging
from pathlib import Path
from typing import Any
import narwhals as nw
from pixiewalk.core.connection import DuckDBConnection

logger = logging.getLogger(__name__)

_STAGE = "_tmp_taggings"


def _create_empty_stage(conn: DuckDBConnection):
    conn.execute(f"CREATE OR REPLACE TEMP TABLE {_STAGE} (object_id VARCHAR, tag VARCHAR)")


def _prepare_file_source(conn: DuckDBConnection, source, object_col: str, tag_col: str):
    p = str(source)
    if p.endswith(".csv"): reader = f"read_csv_auto('{p}')"
    elif p.endswith(".parquet"): reader = f"read_parquet('{p}')"
    else: raise ValueError("Unsupported file type")
    conn.execute(f"CREATE OR REPLACE TEMP TABLE _tmp_raw AS SELECT * FROM {reader}")
    cols = conn.query("SELECT * FROM _tmp_raw LIMIT 0").column_names
    if object_col not in cols or tag_col not in cols: raise ValueError("Missing columns")
    conn.execute(f"""
        CREATE OR REPLACE TEMP TABLE {_STAGE} AS
        SELECT "{object_col}"::VARCHAR AS object_id, "{tag_col}"::VARCHAR AS tag
        FROM _tmp_raw WHERE "{object_col}" IS NOT NULL AND "{tag_col}" IS NOT NULL
    """)
    conn.execute("DROP TABLE IF EXISTS _tmp_raw")


def _prepare_df_source(conn: DuckDBConnection, source, object_col: str, tag_col: str):
    df = nw.from_native(source)
    if isinstance(df, nw.LazyFrame): df = df.collect()
    names = list(df.columns)
    if not names: return _create_empty_stage(conn)
    if object_col not in names or tag_col not in names: raise ValueError("Missing columns")
    df = (
        df.select(nw.col(object_col).alias("object_id"), nw.col(tag_col).alias("tag"))
        .drop_nulls(subset=["object_id", "tag"])
    )
    if len(df) == 0: return _create_empty_stage(conn)
    conn.register("_tmp_frame", df.to_arrow())
    conn.execute(f"""
        CREATE OR REPLACE TEMP TABLE {_STAGE} AS
        SELECT object_id::VARCHAR AS object_id, tag::VARCHAR AS tag FROM _tmp_frame
    """)
    conn.unregister("_tmp_frame")


def load_taggings(
    conn: DuckDBConnection,
    source: Any,
    object_col: str = "object_id",
    tag_col: str = "tag",
    table_name: str = "taggings",
    append: bool = False,
) -> int:
    """
    Stage tagging rows (one object, one tag per row) into ``table_name``.

    ``source`` is a pandas / polars / pyarrow frame (anything narwhals accepts)
    or a path to a ``.csv`` / ``.parquet`` file. Columns are normalised to
    ``object_id`` and ``tag`` as text and rows with a missing side are dropped.
    Returns the row count of the table.
    """
    if isinstance(source, (str, Path)): _prepare_file_source(conn, source, object_col, tag_col)
    else: _prepare_df_source(conn, source, object_col, tag_col)

    if append and conn.table_exists(table_name):
        conn.execute(f"INSERT INTO {table_name} SELECT object_id, tag FROM {_STAGE}")
    else:
        conn.execute(f"CREATE OR REPLACE TABLE {table_name} AS SELECT object_id, tag FROM {_STAGE}")
    count = conn.execute(f"SELECT COUNT(*) FROM {table_name}").fetchone()[0]
    logger.info("Staged %d tagging rows into %s", count, table_name)
    return count


def _resolve_object_col(df: Any) -> Any:
    nw_df = nw.from_native(df, eager_only=True)
    if "object_id" in nw_df.columns:
        return nw_df
    if not hasattr(df, "index"):
        raise ValueError("Input DataFrame must have an 'object_id' column or index")
    native = df.copy()
    native.index.name = "object_id"
    return nw.from_native(native.reset_index(), eager_only=True)


def load_tag_matrix(
    conn: DuckDBConnection,
    df: Any,
    table_name: str = "taggings",
    append: bool = False,
) -> int:
    """
    Stage a wide object x tag matrix: one row per object, one column per tag,
    a positive cell meaning the object carries the tag.
    """
    nw_df = _resolve_object_col(df)
    long = (
        nw_df.unpivot(index=["object_id"], variable_name="tag", value_name="val")
        .filter(nw.col("val") > 0)
        .drop("val")
    )
    return load_taggings(conn, long.to_native(), table_name=table_name, append=append)


def build_recommender(conn: DuckDBConnection, recommender, table_name: str = "taggings") -> int:
    """Add every distinct tagging of ``table_name`` to ``recommender`` as an edge."""
    edges = 0
    for object_id, tag in conn.iter_pairs(
        f"SELECT DISTINCT object_id, tag FROM {table_name} ORDER BY object_id, tag"
    ):
        recommender.tag_object(object_id, tag)
        edges += 1
    logger.info("Built %d tagging edges from %s", edges, table_name)
    return edges
