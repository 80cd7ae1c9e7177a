from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Tuple


FIRST = "A"
SECOND = "B"


@dataclass(frozen=True)
class Nim:
    """Normal-play Nim: take any positive number from one heap; last taker wins."""

    heaps: Tuple[int, ...]
    to_move: str = FIRST

    def __post_init__(self) -> None:
        if not self.heaps or any(h < 0 for h in self.heaps):
            raise ValueError("nim needs at least one heap and no negative heaps")
        if self.to_move not in (FIRST, SECOND):
            raise ValueError("side to move must be 'A' or 'B'")

    def take(self, heap: int, count: int) -> "Nim":
        if not 1 <= count <= self.heaps[heap]:
            raise ValueError(f"cannot take {count} from heap {heap}")
        heaps = list(self.heaps)
        heaps[heap] -= count
        return Nim(tuple(heaps), other(self.to_move))


def other(side: str) -> str:
    return SECOND if side == FIRST else FIRST


def is_terminal(board: Nim) -> bool:
    return not any(board.heaps)


def successors(board: Nim) -> List[Nim]:
    # Heap order first, then smallest take first
    return [
        board.take(i, n) for i, h in enumerate(board.heaps) for n in range(1, h + 1)
    ]


def nim_sum(board: Nim) -> int:
    acc = 0
    for h in board.heaps:
        acc ^= h
    return acc


def scorer(side: str) -> Callable[[Nim], int]:
    """+1 once `side` has taken the last object, -1 once the opponent has, else 0."""

    def score(board: Nim) -> int:
        if not is_terminal(board):
            return 0
        # The side to move at an empty table is the one that lost
        return -1 if board.to_move == side else 1

    return score


def parse(text: str) -> Nim:
    """Parse `"3,4,5"` with an optional trailing side, e.g. `"3,4,5 b"`."""
    parts = text.split()
    if not parts or len(parts) > 2:
        raise ValueError(f"invalid nim position: {text!r}")
    try:
        heaps = tuple(int(h) for h in parts[0].split(","))
    except ValueError:
        raise ValueError(f"invalid nim heaps: {parts[0]!r}")
    to_move = parts[1].upper() if len(parts) == 2 else FIRST
    return Nim(heaps, to_move)


def render(board: Nim) -> str:
    return ",".join(str(h) for h in board.heaps) + " " + board.to_move.lower()
