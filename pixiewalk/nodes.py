"""
pixiewalk.nodes — Vertex types of the recommendation graph.

A vertex is either a ``Tag`` (a category, a genre) or an ``Object`` (a
product, a movie). The two are distinct value types, so ``Tag("x")`` never
equals ``Object("x")``.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Hashable, Tuple, Union


@dataclass(frozen=True)
class Tag:
    label: str

    def __repr__(self) -> str:
        return f"Tag({self.label!r})"


@dataclass(frozen=True)
class Object:
    value: Hashable

    def __repr__(self) -> str:
        return f"Object({self.value!r})"


RecommenderNode = Union[Tag, Object]


def is_tag(node: Any) -> bool:
    return isinstance(node, Tag)


def is_object(node: Any) -> bool:
    return isinstance(node, Object)


def node_key(node: Any) -> Tuple[int, str]:
    """Canonical ordering key: tags first, then objects, then by rendered value."""
    if isinstance(node, Tag): return (0, node.label)
    if isinstance(node, Object): return (1, repr(node.value))
    return (2, repr(node))


def node_label(node: RecommenderNode) -> str:
    return node.label if isinstance(node, Tag) else str(node.value)


def node_kind(node: RecommenderNode) -> str:
    return "tag" if isinstance(node, Tag) else "object"
