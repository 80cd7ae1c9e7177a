from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional

from .registry import GameRules, get_rules
from ..search.service import SearchResult, SearchService


DEFAULT_DEPTH = 4


@dataclass
class Match:
    """A game in progress: rules, the current position and the positions before it.

    Moves are named by the rendered position they lead to, so any game plugs in
    without its own move notation.
    """

    rules: GameRules
    position: Any
    history: List[Any] = field(default_factory=list)

    @classmethod
    def new(cls, kind: str, position: Optional[str] = None) -> "Match":
        rules = get_rules(kind)
        board = rules.parse(position) if position else rules.initial()
        return cls(rules=rules, position=board)

    def render(self) -> str:
        return self.rules.render(self.position)

    def set_position(self, text: str) -> None:
        self.position = self.rules.parse(text)
        self.history.clear()

    def legal_moves(self) -> List[str]:
        return [self.rules.render(b) for b in self.rules.successors(self.position)]

    def is_terminal(self) -> bool:
        return not self.rules.successors(self.position)

    def apply(self, move: str) -> None:
        """Play the successor whose rendered board (side suffix ignored) is `move`."""
        key = _board_key(move)
        for nxt in self.rules.successors(self.position):
            if _board_key(self.rules.render(nxt)) == key:
                self.history.append(self.position)
                self.position = nxt
                return
        raise ValueError("illegal move")

    def undo(self) -> None:
        if not self.history:
            raise ValueError("no moves to undo")
        self.position = self.history.pop()

    def search(
        self,
        depth: int = DEFAULT_DEPTH,
        movetime_ms: Optional[int] = None,
        service: Optional[SearchService] = None,
    ) -> SearchResult:
        service = service or SearchService()
        return service.search(
            self.position,
            depth,
            self.rules.successors,
            self.rules.score_for_root(self.position),
            movetime_ms=movetime_ms,
        )


def _board_key(text: str) -> str:
    parts = text.strip().lower().split()
    return parts[0] if parts else ""
