"""
pixiewalk.datasets.movies — Movie / genre tagging generators.

Small hand-written catalogs with known neighbourhoods, plus a scalable random
catalog for benchmarking walks on larger graphs.
"""
from __future__ import annotations
import numpy as np
import pandas as pd
from typing import Optional


def generate_movie_tags() -> pd.DataFrame:
    """
    Generate the three-movie, three-genre catalog.

    Structure:
    - **The Raid** and **Rocky** share the *Action* tag.
    - **Rocky** is also *Drama*.
    - **Monty Python and The Holy Grail** is the only *Comedy* and shares
      nothing with the others, so walks from The Raid never reach it.

    Columns: ``object_id``, ``tag``

    Returns
    -------
    pd.DataFrame
        4 rows.

    Example
    -------
    >>> from pixiewalk.datasets import generate_movie_tags
    >>> df = generate_movie_tags()
    >>> sorted(df["tag"].unique())
    ['Action', 'Comedy', 'Drama']
    """
    data = [
        ("The Raid", "Action"),
        ("Rocky", "Action"),
        ("Rocky", "Drama"),
        ("Monty Python and The Holy Grail", "Comedy"),
    ]
    return pd.DataFrame(data, columns=["object_id", "tag"])


def generate_tagged_catalog(
    n_objects: int = 10_000,
    n_tags: int = 200,
    tags_per_object: int = 3,
    seed: Optional[int] = 42,
) -> pd.DataFrame:
    """
    Generate a random object catalog with power-law tag popularity.

    80% of tag assignments land on the top 20% of tags, producing a few hub
    tags and a long tail, which is the shape the degree-based budget
    allocation is meant to handle.

    Columns: ``object_id``, ``tag``

    Parameters
    ----------
    n_objects : int
        Number of objects.
    n_tags : int
        Size of the tag vocabulary.
    tags_per_object : int
        Tags drawn per object (duplicates collapse to a single row).
    seed : int, optional
        Random seed for reproducibility.

    Returns
    -------
    pd.DataFrame
        At most n_objects × tags_per_object rows.
    """
    rng = np.random.default_rng(seed)

    n_popular = max(1, int(n_tags * 0.2))
    p_popular = 0.8 / n_popular
    p_other = 0.2 / max(1, n_tags - n_popular)
    probs = np.array([p_popular] * n_popular + [p_other] * (n_tags - n_popular))
    probs /= probs.sum()

    object_ids = np.repeat(np.arange(n_objects), tags_per_object)
    tag_indices = rng.choice(n_tags, size=len(object_ids), p=probs)

    df = pd.DataFrame({
        "object_id": [f"O{oid}" for oid in object_ids],
        "tag": [f"T{tid}" for tid in tag_indices],
    })
    return df.drop_duplicates().reset_index(drop=True)
