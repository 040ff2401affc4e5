"""Tests for tagging ingestion."""

import pytest
import pandas as pd
import pyarrow as pa

from pixiewalk.core.ingestion import build_recommender, load_tag_matrix, load_taggings
from pixiewalk.nodes import Object, Tag
from pixiewalk.recommenders.pixie import Recommender


class TestLoadTaggings:

    def test_basic_load_drops_nulls(self, conn, taggings_df):
        count = load_taggings(conn, taggings_df, object_col="movie", tag_col="genre")
        assert count == len(taggings_df) - 2

    def test_column_names_normalised(self, conn, taggings_df):
        load_taggings(conn, taggings_df, object_col="movie", tag_col="genre")
        assert conn.query("SELECT * FROM taggings LIMIT 0").column_names == ["object_id", "tag"]

    def test_values_are_text(self, conn):
        df = pd.DataFrame({"object_id": [1, 2], "tag": ["a", "b"]})
        load_taggings(conn, df)
        rows = conn.query("SELECT object_id FROM taggings ORDER BY 1").column("object_id").to_pylist()
        assert rows == ["1", "2"]

    def test_polars_source(self, conn, taggings_polars):
        assert load_taggings(conn, taggings_polars, object_col="movie", tag_col="genre") == 4

    def test_polars_lazy_source(self, conn, taggings_polars):
        assert load_taggings(conn, taggings_polars.lazy(), object_col="movie", tag_col="genre") == 4

    def test_arrow_source(self, conn):
        table = pa.table({"object_id": ["a", "b"], "tag": ["t", "t"]})
        assert load_taggings(conn, table) == 2

    def test_missing_columns(self, conn, taggings_df):
        with pytest.raises(ValueError, match="Missing columns"):
            load_taggings(conn, taggings_df)

    def test_empty_frame(self, conn):
        assert load_taggings(conn, pd.DataFrame()) == 0
        assert conn.table_exists("taggings")

    def test_append(self, conn):
        load_taggings(conn, pd.DataFrame({"object_id": ["a"], "tag": ["t"]}))
        count = load_taggings(conn, pd.DataFrame({"object_id": ["b"], "tag": ["t"]}), append=True)
        assert count == 2

    def test_replace_without_append(self, conn):
        load_taggings(conn, pd.DataFrame({"object_id": ["a"], "tag": ["t"]}))
        count = load_taggings(conn, pd.DataFrame({"object_id": ["b"], "tag": ["t"]}))
        assert count == 1

    def test_csv_and_parquet(self, tmp_path, conn):
        df = pd.DataFrame({"movie": ["Rocky", "Rocky"], "genre": ["Action", "Drama"]})
        csv_file = tmp_path / "tags.csv"
        df.to_csv(csv_file, index=False)
        assert load_taggings(conn, csv_file, object_col="movie", tag_col="genre", table_name="csv_tags") == 2

        pq_file = tmp_path / "tags.parquet"
        df.to_parquet(pq_file)
        assert load_taggings(conn, pq_file, object_col="movie", tag_col="genre", table_name="pq_tags") == 2

    def test_csv_missing_columns(self, tmp_path, conn):
        csv_file = tmp_path / "tags.csv"
        pd.DataFrame({"a": ["x"], "b": ["y"]}).to_csv(csv_file, index=False)
        with pytest.raises(ValueError, match="Missing columns"):
            load_taggings(conn, csv_file)

    def test_unsupported_file(self, tmp_path, conn):
        with pytest.raises(ValueError, match="Unsupported file type"):
            load_taggings(conn, tmp_path / "tags.txt")


class TestLoadTagMatrix:

    def test_index_matrix(self, conn):
        matrix = pd.DataFrame({
            "Action": [1, 1, 0],
            "Drama":  [0, 1, 0],
            "Comedy": [0, 0, 1],
        }, index=["The Raid", "Rocky", "Monty Python"])
        assert load_tag_matrix(conn, matrix) == 4
        rows = conn.query("SELECT tag FROM taggings WHERE object_id = 'Rocky' ORDER BY 1").column("tag").to_pylist()
        assert rows == ["Action", "Drama"]

    def test_column_matrix(self, conn):
        matrix = pd.DataFrame({"object_id": ["a", "b"], "t1": [1, 0], "t2": [1, 1]})
        assert load_tag_matrix(conn, matrix) == 3

    def test_no_object_column_or_index(self, conn):
        import polars as pl
        with pytest.raises(ValueError, match="object_id"):
            load_tag_matrix(conn, pl.DataFrame({"t1": [1]}))


class TestBuildRecommender:

    def test_edges_built(self, conn, taggings_df):
        load_taggings(conn, taggings_df, object_col="movie", tag_col="genre")
        rec = Recommender()
        assert build_recommender(conn, rec) == 8
        assert rec.tags_of("Aliens") == ["Action", "Sci-fi"]
        assert rec.graph.max_degree() == 3  # Action: Raid, Rocky, Aliens

    def test_duplicates_collapse(self, conn):
        df = pd.DataFrame({"object_id": ["a", "a"], "tag": ["t", "t"]})
        load_taggings(conn, df)
        rec = Recommender()
        assert build_recommender(conn, rec) == 1
        assert rec.graph.successors(Object("a")) == {Tag("t")}
