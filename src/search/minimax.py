from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Protocol, Tuple, TypeVar

from ..tree.lazy import LazyTree
from .errors import DepthExceeded


class Comparable(Protocol):
    def __lt__(self, other: Any) -> bool: ...


V = TypeVar("V", bound=Comparable)

# Ceiling for trees nobody pruned; callers that pruned to a deeper bound raise it
MAX_PLIES = 200

_UNSET: Any = object()


@dataclass
class SearchStats:
    nodes: int = 0
    leaves: int = 0
    seldepth: int = 0
    cut_short: bool = False


def maximize(
    node: LazyTree[V], *, stats: Optional[SearchStats] = None, max_plies: int = MAX_PLIES
) -> V:
    """Value of `node` for the side to move, which maximizes."""
    return evaluate(node, True, stats=stats, max_plies=max_plies)


def minimize(
    node: LazyTree[V], *, stats: Optional[SearchStats] = None, max_plies: int = MAX_PLIES
) -> V:
    """Value of `node` when the opponent of the root side is to move."""
    return evaluate(node, False, stats=stats, max_plies=max_plies)


@dataclass
class _Frame:
    children: Tuple[LazyTree[Any], ...]
    maximizing: bool
    ply: int
    idx: int = 0
    best: Any = _UNSET


def evaluate(
    node: LazyTree[V],
    maximizing: bool,
    *,
    stats: Optional[SearchStats] = None,
    max_plies: int = MAX_PLIES,
    ply: int = 0,
) -> V:
    """Back up leaf values through alternating max/min levels.

    A leaf returns its own payload. An inner node returns the max (or min) of
    its children evaluated with the opposite role. A child replaces the running
    best only on a strict improvement, so ties resolve to the leftmost one.

    Maximize and minimize alternate on an explicit stack of frames rather than
    through recursion, so tree depth is not limited by the interpreter stack.

    Raises `DepthExceeded` when a node lies deeper than `max_plies`.
    """
    frames: List[_Frame] = []
    pending: Optional[LazyTree[Any]] = node
    role, depth = maximizing, ply
    value: Any = None
    while True:
        if pending is not None:
            if depth > max_plies:
                raise DepthExceeded(max_plies)
            if stats is not None:
                stats.nodes += 1
                if depth > stats.seldepth:
                    stats.seldepth = depth
            children = pending.children()
            if children:
                frames.append(_Frame(children, role, depth))
                pending, role, depth = children[0], not role, depth + 1
                continue
            if stats is not None:
                stats.leaves += 1
            value = pending.payload()
            pending = None

        # Fold `value` into the parent frames until one has a child left to visit
        while frames:
            top = frames[-1]
            if top.best is _UNSET or (top.best < value if top.maximizing else value < top.best):
                top.best = value
            top.idx += 1
            if top.idx < len(top.children):
                pending = top.children[top.idx]
                role, depth = not top.maximizing, top.ply + 1
                break
            frames.pop()
            value = top.best
        if pending is None:
            return value


def select_best(
    root: LazyTree[V],
    *,
    stats: Optional[SearchStats] = None,
    max_plies: int = MAX_PLIES,
    should_stop: Optional[Callable[[], bool]] = None,
) -> Tuple[Optional[int], V]:
    """Return `(index, value)` of the first root child realizing `maximize(root)`.

    A terminal root returns `(None, root.payload())`. Each child is evaluated
    once; the scan keeps the earliest child on ties.

    `should_stop` is polled before every child after the first. Once it returns
    True the remaining children are left unforced, the best so far is returned
    and `stats.cut_short` is set.
    """
    children = root.children()
    if stats is not None:
        stats.nodes += 1
    if not children:
        if stats is not None:
            stats.leaves += 1
        return None, root.payload()
    best_idx = 0
    best_val = evaluate(children[0], False, stats=stats, max_plies=max_plies, ply=1)
    for idx, child in enumerate(children[1:], start=1):
        if should_stop is not None and should_stop():
            if stats is not None:
                stats.cut_short = True
            break
        val = evaluate(child, False, stats=stats, max_plies=max_plies, ply=1)
        if best_val < val:
            best_idx, best_val = idx, val
    return best_idx, best_val
