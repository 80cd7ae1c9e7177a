from __future__ import annotations


class SearchError(Exception):
    """Base class for precondition failures raised by the search engine."""


class InvalidDepth(SearchError, ValueError):
    """Raised when a pruning/search depth is negative or not an integer."""

    def __init__(self, depth: object) -> None:
        super().__init__(f"depth must be a non-negative integer, got {depth!r}")
        self.depth = depth


class DepthExceeded(SearchError, RecursionError):
    """Evaluation descended past the hard ply ceiling.

    This almost always means an unbounded tree was evaluated without pruning.
    """

    def __init__(self, limit: int) -> None:
        super().__init__(
            f"evaluation exceeded {limit} plies; prune the tree before evaluating it"
        )
        self.limit = limit


def check_depth(depth: object) -> int:
    # bool is an int subclass but never a meaningful depth
    if isinstance(depth, bool) or not isinstance(depth, int) or depth < 0:
        raise InvalidDepth(depth)
    return depth
