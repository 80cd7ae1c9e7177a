from __future__ import annotations

import pytest

from src.games.match import Match
from src.games.registry import available, get_rules


def test_registry_lists_games() -> None:
    assert available() == ["nim", "tictactoe"]
    assert get_rules("TicTacToe").name == "tictactoe"
    with pytest.raises(KeyError):
        get_rules("chess")


def test_apply_and_undo() -> None:
    m = Match.new("tictactoe")
    m.apply("....X....")
    assert m.render() == "....X.... o"
    assert len(m.history) == 1
    m.undo()
    assert m.render() == "......... x"
    with pytest.raises(ValueError):
        m.undo()


def test_apply_rejects_unreachable_position() -> None:
    m = Match.new("nim", "1,2")
    with pytest.raises(ValueError, match="illegal move"):
        m.apply("0,0")
    m.apply("1,1")
    assert m.render() == "1,1 b"


def test_search_from_root_side_perspective() -> None:
    m = Match.new("nim", "1,1,1 b")
    res = m.search(depth=3)
    # Three single heaps: the side to move takes the last one
    assert res.value == 1
    assert m.rules.render(res.best_move) == "0,1,1 a"


def test_terminal_match_has_no_moves() -> None:
    m = Match.new("tictactoe", "XXXOO.... o")
    assert m.is_terminal()
    assert m.legal_moves() == []
    assert m.search(depth=2).best_move is None
