from __future__ import annotations

from typing import List

from src.protocol.text.loop import TextEngine


def capture_writer(buf: List[str]):
    def _w(line: str) -> None:
        buf.append(line)

    return _w


def test_basic_handshake() -> None:
    out: List[str] = []
    TextEngine().cmd_hello(capture_writer(out))
    assert any(line.startswith("id name ") for line in out)
    assert out[-1] == "hellook"


def test_isready_and_games() -> None:
    eng = TextEngine()
    out: List[str] = []
    eng.cmd_isready(capture_writer(out))
    eng.cmd_games(capture_writer(out))
    assert out == ["readyok", "games nim tictactoe"]


def test_position_with_moves_and_go_depth() -> None:
    eng = TextEngine()
    eng.cmd_position(["tictactoe", "moves", "X........", "X...O...."])
    assert eng.match.render() == "X...O.... x"

    out: List[str] = []
    eng.cmd_go(["depth", "2"], capture_writer(out))
    assert out[0].startswith("info depth 2 ")
    assert out[-1].startswith("bestmove X")


def test_position_state_for_nim() -> None:
    eng = TextEngine()
    eng.cmd_position(["nim", "state", "1,2", "b"])
    assert eng.match.render() == "1,2 b"
    out: List[str] = []
    eng.cmd_go(["depth", "3"], capture_writer(out))
    assert out[-1] == "bestmove 1,1 a"
    assert "value 1" in out[0]


def test_invalid_position_keeps_previous() -> None:
    eng = TextEngine("nim")
    before = eng.match.render()
    eng.cmd_position(["chess"])
    eng.cmd_position(["nim", "state", "x"])
    assert eng.match.render() == before


def test_illegal_move_stops_move_list() -> None:
    eng = TextEngine()
    eng.cmd_position(["tictactoe", "moves", "X........", "XX.......", "X...O...."])
    assert eng.match.render() == "X........ o"


def test_go_terminal_reports_none() -> None:
    eng = TextEngine()
    eng.cmd_position(["tictactoe", "state", "XXXOO....", "o"])
    out: List[str] = []
    eng.cmd_go(["depth", "4"], capture_writer(out))
    assert out[-1] == "bestmove (none)"


def test_negative_depth_is_reported() -> None:
    eng = TextEngine()
    out: List[str] = []
    eng.cmd_go(["depth", "-1"], capture_writer(out))
    assert out[0].startswith("info string depth must be")
    assert out[-1] == "bestmove (none)"


def test_setoption_depth_used_by_go() -> None:
    eng = TextEngine()
    eng.cmd_setoption(["name", "Depth", "value", "1"])
    assert eng.default_depth == 1
    out: List[str] = []
    eng.cmd_go([], capture_writer(out))
    assert out[0].startswith("info depth 1 ")


def test_newgame_switches_game_and_ignores_unknown() -> None:
    eng = TextEngine()
    eng.cmd_newgame(["nim"])
    assert eng.match.render() == "3,4,5 a"
    eng.cmd_newgame(["chess"])
    assert eng.match.rules.name == "nim"
