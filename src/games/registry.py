from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Sequence

from . import nim, tictactoe


@dataclass(frozen=True)
class GameRules:
    """The caller-side collaborators the search needs for one game."""

    name: str
    initial: Callable[[], Any]
    parse: Callable[[str], Any]
    render: Callable[[Any], str]
    successors: Callable[[Any], Sequence[Any]]
    scorer: Callable[[str], Callable[[Any], Any]]

    def side_to_move(self, board: Any) -> str:
        return board.to_move

    def score_for_root(self, board: Any) -> Callable[[Any], Any]:
        """Static evaluation seen from the side to move at `board`."""
        return self.scorer(self.side_to_move(board))


_RULES: Dict[str, GameRules] = {
    "tictactoe": GameRules(
        name="tictactoe",
        initial=tictactoe.TicTacToe,
        parse=tictactoe.parse,
        render=tictactoe.render,
        successors=tictactoe.successors,
        scorer=tictactoe.scorer,
    ),
    "nim": GameRules(
        name="nim",
        initial=lambda: nim.Nim((3, 4, 5)),
        parse=nim.parse,
        render=nim.render,
        successors=nim.successors,
        scorer=nim.scorer,
    ),
}


def available() -> List[str]:
    return sorted(_RULES)


def get_rules(name: str) -> GameRules:
    try:
        return _RULES[name.lower()]
    except KeyError:
        raise KeyError(f"unknown game: {name}") from None
