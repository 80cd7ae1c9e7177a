from __future__ import annotations

from typing import Callable, Sequence, TypeVar

from .lazy import LazyTree


B = TypeVar("B")

SuccessorFn = Callable[[B], Sequence[B]]


def generate_tree(start: B, successors_of: SuccessorFn[B]) -> LazyTree[B]:
    """Return the (possibly infinite) game tree rooted at `start`.

    Children are `successors_of(board)` in the order returned, expanded only
    when a traversal asks for them. An empty sequence marks a terminal board.
    `successors_of` must be a pure function of its argument.
    """

    def expand() -> list[LazyTree[B]]:
        return [generate_tree(nxt, successors_of) for nxt in successors_of(start)]

    return LazyTree(start, expand)
