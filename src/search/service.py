from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Generic, Optional, Sequence, Tuple, TypeVar

from ..tree.generate import generate_tree
from ..tree.mapping import map_values
from ..tree.prune import prune
from .errors import check_depth
from .minimax import MAX_PLIES, SearchStats, select_best


logger = logging.getLogger(__name__)

B = TypeVar("B")
V = TypeVar("V")


@dataclass
class SearchResult(Generic[B, V]):
    best_move: Optional[B]
    value: V
    depth: int
    nodes: int
    leaves: int
    seldepth: int
    time_ms: int
    complete: bool


class SearchService:
    """Plain minimax over a lazily generated, depth-bounded game tree.

    Pipeline: board -> generate_tree -> prune(depth) -> map_values(score) ->
    select_best. The root children of the value tree and of the pruned board
    tree are built from the same memoized sequence, so index `i` in one names
    the same position as index `i` in the other.

    The root side maximizes. `score` must rate positions from that side's
    point of view and return a totally ordered value.
    """

    def __init__(self, max_plies: int = MAX_PLIES) -> None:
        self.max_plies = max_plies

    def search(
        self,
        board: B,
        depth: int,
        successors_of: Callable[[B], Sequence[B]],
        score: Callable[[B], V],
        *,
        movetime_ms: Optional[int] = None,
    ) -> SearchResult[B, V]:
        depth = check_depth(depth)
        start = time.perf_counter()

        def out_of_time() -> bool:
            if movetime_ms is None:
                return False
            return (time.perf_counter() - start) * 1000 >= movetime_ms

        bounded = prune(generate_tree(board, successors_of), depth)
        valued = map_values(bounded, score)
        stats = SearchStats()
        idx, value = select_best(
            valued,
            stats=stats,
            # Already pruned to `depth`; the ceiling only guards unpruned trees
            max_plies=max(self.max_plies, depth),
            should_stop=out_of_time,
        )
        best = bounded.children()[idx].payload() if idx is not None else None
        time_ms = int((time.perf_counter() - start) * 1000)

        if stats.cut_short:
            logger.warning(
                "search stopped early after %d ms (movetime_ms=%s)", time_ms, movetime_ms
            )
        logger.debug(
            "search depth=%d nodes=%d leaves=%d value=%r time_ms=%d",
            depth,
            stats.nodes,
            stats.leaves,
            value,
            time_ms,
        )
        return SearchResult(
            best_move=best,
            value=value,
            depth=depth,
            nodes=stats.nodes,
            leaves=stats.leaves,
            seldepth=stats.seldepth,
            time_ms=time_ms,
            complete=not stats.cut_short,
        )


def best_move(
    board: B,
    depth: int,
    successors_of: Callable[[B], Sequence[B]],
    score: Callable[[B], V],
) -> Tuple[Optional[B], V]:
    """Return `(chosen_board, value)`; `chosen_board` is None when no move applies."""
    res = SearchService().search(board, depth, successors_of, score)
    return res.best_move, res.value
