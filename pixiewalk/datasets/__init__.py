"""
pixiewalk.datasets — Synthetic tagging datasets.

Each generator returns a ``pd.DataFrame`` with ``object_id`` and ``tag``
columns, ready for ``PixieWalk.load_taggings``.
"""

from .movies import generate_movie_tags, generate_tagged_catalog

__all__ = [
    "generate_movie_tags",
    "generate_tagged_catalog",
]
