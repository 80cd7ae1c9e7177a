from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple


EMPTY = "."
X = "X"
O = "O"

LINES: Tuple[Tuple[int, int, int], ...] = (
    (0, 1, 2),
    (3, 4, 5),
    (6, 7, 8),
    (0, 3, 6),
    (1, 4, 7),
    (2, 5, 8),
    (0, 4, 8),
    (2, 4, 6),
)

WIN_SCORE = 100


@dataclass(frozen=True)
class TicTacToe:
    """Immutable 3x3 position; cells are indexed 0..8 row by row."""

    cells: Tuple[str, ...] = (EMPTY,) * 9
    to_move: str = X

    def __post_init__(self) -> None:
        if len(self.cells) != 9 or any(c not in (EMPTY, X, O) for c in self.cells):
            raise ValueError("tic-tac-toe board needs 9 cells of 'X', 'O' or '.'")
        if self.to_move not in (X, O):
            raise ValueError("side to move must be 'X' or 'O'")

    def play(self, idx: int) -> "TicTacToe":
        if self.cells[idx] != EMPTY:
            raise ValueError(f"cell {idx} is occupied")
        cells = list(self.cells)
        cells[idx] = self.to_move
        return TicTacToe(tuple(cells), other(self.to_move))


def other(side: str) -> str:
    return O if side == X else X


def winner(board: TicTacToe) -> Optional[str]:
    for a, b, c in LINES:
        v = board.cells[a]
        if v != EMPTY and v == board.cells[b] == board.cells[c]:
            return v
    return None


def is_terminal(board: TicTacToe) -> bool:
    return winner(board) is not None or EMPTY not in board.cells


def successors(board: TicTacToe) -> List[TicTacToe]:
    if is_terminal(board):
        return []
    return [board.play(i) for i, c in enumerate(board.cells) if c == EMPTY]


def scorer(side: str) -> Callable[[TicTacToe], int]:
    """Static evaluation from `side`'s point of view.

    Wins/losses score +/-WIN_SCORE. Other positions count lines still open for
    `side` minus lines still open for the opponent.
    """
    opp = other(side)

    def score(board: TicTacToe) -> int:
        w = winner(board)
        if w == side:
            return WIN_SCORE
        if w == opp:
            return -WIN_SCORE
        if EMPTY not in board.cells:
            return 0
        mine = theirs = 0
        for line in LINES:
            vals = {board.cells[i] for i in line}
            if opp not in vals:
                mine += 1
            if side not in vals:
                theirs += 1
        return mine - theirs

    return score


def parse(text: str) -> TicTacToe:
    """Parse `"X.O......"` with an optional trailing side, e.g. `"X.O...... o"`.

    Without an explicit side, X moves when both have played equally often.
    """
    parts = text.split()
    if not parts or len(parts) > 2:
        raise ValueError(f"invalid tic-tac-toe position: {text!r}")
    cells = tuple(ch.upper() if ch.lower() in ("x", "o") else ch for ch in parts[0])
    if len(parts) == 2:
        to_move = parts[1].upper()
    else:
        to_move = X if cells.count(X) <= cells.count(O) else O
    return TicTacToe(cells, to_move)


def render(board: TicTacToe) -> str:
    return "".join(board.cells) + " " + board.to_move.lower()
