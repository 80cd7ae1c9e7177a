from __future__ import annotations

from typing import Callable, TypeVar

from .lazy import LazyTree


B = TypeVar("B")
V = TypeVar("V")


def map_values(tree: LazyTree[B], score: Callable[[B], V]) -> LazyTree[V]:
    """Apply `score` to every payload, keeping shape and laziness.

    Mapped payloads are deferred as well, so `score` only runs for nodes whose
    value is actually read. Minimax reads payloads at leaves only.
    """
    return LazyTree.deferred(
        lambda: score(tree.payload()),
        lambda: [map_values(c, score) for c in tree.children()],
    )
