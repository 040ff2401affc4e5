from .api import PixieWalk
from .core.connection import DuckDBConnection
from .core.graph import Graph
from .core.sampling import weighted_sample, clamp_weight
from .core.ingestion import load_taggings, load_tag_matrix, build_recommender
from .nodes import Tag, Object, RecommenderNode, node_key
from .recommenders.pixie import Recommender
from .datasets import generate_movie_tags, generate_tagged_catalog

def load(data, **kwargs) -> PixieWalk:
    engine = PixieWalk()
    engine.load(data, **kwargs)
    return engine

def connect(database=":memory:", **kwargs) -> PixieWalk:
    return PixieWalk(database=database, **kwargs)

__all__ = [
    "PixieWalk",
    "load",
    "connect",
    "DuckDBConnection",
    "Graph",
    "weighted_sample",
    "clamp_weight",
    "load_taggings",
    "load_tag_matrix",
    "build_recommender",
    "Tag",
    "Object",
    "RecommenderNode",
    "node_key",
    "Recommender",
    # Datasets
    "generate_movie_tags",
    "generate_tagged_catalog",
]
