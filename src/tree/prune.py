from __future__ import annotations

from typing import TypeVar

from .lazy import LazyTree
from ..search.errors import check_depth


T = TypeVar("T")


def prune(tree: LazyTree[T], depth: int) -> LazyTree[T]:
    """Bound `tree` to `depth` plies (edges) below the root.

    Nodes at the limit become leaves and nothing below them is ever forced.
    Raises `InvalidDepth` for a negative depth before doing any work.
    """
    return _prune(tree, check_depth(depth))


def _prune(tree: LazyTree[T], depth: int) -> LazyTree[T]:
    if depth == 0:
        return LazyTree.deferred(tree.payload)
    return LazyTree.deferred(
        tree.payload, lambda: [_prune(c, depth - 1) for c in tree.children()]
    )
