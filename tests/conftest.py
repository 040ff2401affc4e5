# ---------------------------------------------------------------------------
# Tests configuration
# ---------------------------------------------------------------------------

import pytest
import pandas as pd

from pixiewalk.core.connection import DuckDBConnection
from pixiewalk.recommenders.pixie import Recommender


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

RAID = "The Raid"
ROCKY = "Rocky"
PYTHON = "Monty Python and The Holy Grail"


@pytest.fixture
def conn():
    """In-memory DuckDB connection for each test."""
    db = DuckDBConnection()  # :memory:
    yield db
    db.close()


@pytest.fixture
def movies():
    """Recommender with three movies and three genres."""
    # The Raid -- Action -- Rocky -- Drama
    # Monty Python -- Comedy
    rec = Recommender(seed=7)
    for movie in (RAID, ROCKY, PYTHON):
        rec.add_object(movie)
    for genre in ("Action", "Comedy", "Drama"):
        rec.add_tag(genre)
    rec.tag_object(RAID, "Action")
    rec.tag_object(ROCKY, "Action")
    rec.tag_object(ROCKY, "Drama")
    rec.tag_object(PYTHON, "Comedy")
    return rec


@pytest.fixture
def taggings_df():
    """Tagging rows with renamed columns and a couple of nulls."""
    data = [
        ("The Raid", "Action"),
        ("Rocky", "Action"),
        ("Rocky", "Drama"),
        ("Monty Python and The Holy Grail", "Comedy"),
        ("Alien", "Sci-fi"),
        ("Alien", "Horror"),
        ("Aliens", "Sci-fi"),
        ("Aliens", "Action"),
        (None, "Drama"),
        ("Heat", None),
    ]
    return pd.DataFrame(data, columns=["movie", "genre"])


@pytest.fixture
def taggings_polars():
    """Polars version of the clean tagging rows."""
    import polars as pl
    data = [
        ("The Raid", "Action"),
        ("Rocky", "Action"),
        ("Rocky", "Drama"),
        ("Monty Python and The Holy Grail", "Comedy"),
    ]
    return pl.DataFrame(data, schema=["movie", "genre"], orient="row")
